"""
Convert an uncompressed 8-bit BMP file to a raw image file for ZX Spectrum Next

The RGB888 colors of the BMP palette are converted to RGB333 colors. The raw
palette is prepended to the raw image file (default), written to a separate
.nxp file, or left out. Raw pixels are 8-bit or 4-bit indexes laid out in
rows (top to bottom) or columns (left to right).
"""

import os
import sys

from Constants import *
from utils import *
from Errors import *
from bmp_parser import create_bmp_parser
from raw_converter import (create_raw_palette, convert_image, palette_size_for_depth,
                           raw_image_width, select_repack_mode)

# =============================================================================
# OPTIONS
# =============================================================================

class ConversionOptions:
    """
    Conversion choices supplied by the caller

    Args:
        palette_option: PaletteOption, where the raw palette goes
        bit_depth: 8 (256 colors, one pixel per byte) or 4 (16 colors, two pixels per byte)
        layout: Layout.ROW or Layout.COLUMN
        legacy: Restrict to the reduced legacy surface (8-bit, row layout)
    """

    def __init__(self, palette_option=PaletteOption.EMBEDDED, bit_depth=8,
                 layout=Layout.ROW, legacy=False):
        self.palette_option = palette_option
        self.bit_depth = bit_depth
        self.layout = layout
        self.legacy = legacy

    def validate(self):
        if not isinstance(self.palette_option, PaletteOption):
            raise ArgumentError(f"Invalid palette option: {self.palette_option!r}")
        if not isinstance(self.layout, Layout):
            raise ArgumentError(f"Invalid layout: {self.layout!r}")

        depths = LEGACY_OUTPUT_DEPTHS if self.legacy else SUPPORTED_OUTPUT_DEPTHS
        if self.bit_depth not in depths:
            raise ArgumentError(f"Unsupported bit depth: {self.bit_depth} (supported: {depths})")

        if self.legacy and self.layout not in LEGACY_LAYOUTS:
            raise ArgumentError(f"Layout {self.layout.value} is not available in legacy mode")
        return True

    def __repr__(self):
        return (f"ConversionOptions(palette_option={self.palette_option}, bit_depth={self.bit_depth}, "
                f"layout={self.layout}, legacy={self.legacy})")


# =============================================================================
# CONVERSION WORKFLOW
# =============================================================================

class RawImageConverter:
    """
    Converts BMP files to raw palette and raw image data
    """

    def __init__(self, verbose=False):
        """
        Initialize converter

        Args:
            verbose: Whether to print progress information
        """
        self.verbose = verbose

    def _log(self, message):
        """Log message if verbose mode is enabled"""
        if self.verbose:
            print(f"{LOG_PREFIX} {message}")

    def convert(self, parser, options):
        """
        Convert a parsed BMP to raw data without touching the filesystem

        Args:
            parser: BMPParser for the source image
            options: ConversionOptions

        Returns:
            Tuple: (raw_palette or None, raw_image)
        """
        options.validate()

        raw_palette = None
        if options.palette_option != PaletteOption.NONE:
            num_colors = palette_size_for_depth(options.bit_depth)
            self._log(f"Converting {num_colors} palette colors to RGB333")
            raw_palette = create_raw_palette(parser.get_palette_bytes(), num_colors)

        mode = select_repack_mode(options.bit_depth, options.layout)
        self._log(f"Repacking {parser.width} x {parser.height} pixels ({mode.value})")
        raw_image = convert_image(parser.iter_rows(), parser.width, parser.height, mode)

        return raw_palette, raw_image

    def convert_file(self, input_bmp, output_file=None, options=None):
        """
        Convert a BMP file and write the raw image file (and palette file)

        Args:
            input_bmp: Path to the source BMP file
            output_file: Path for the raw image file, defaults to input with .nxi extension
            options: ConversionOptions, defaults to embedded palette, 8-bit, rows

        Returns:
            Dictionary describing the written files
        """
        if options is None:
            options = ConversionOptions()
        options.validate()

        output_file, palette_file = resolve_output_filenames(input_bmp, output_file, options.palette_option)
        self._log(f"Starting conversion: {input_bmp} -> {output_file}")

        parser = create_bmp_parser(input_bmp)
        if self.verbose:
            parser.print_info()

        raw_palette, raw_image = self.convert(parser, options)

        # Everything is built before any file is written
        if options.palette_option == PaletteOption.EMBEDDED:
            write_file_bytes(output_file, raw_palette + raw_image)
        else:
            if options.palette_option == PaletteOption.SEPARATE:
                self._log(f"Writing raw palette: {palette_file}")
                write_file_bytes(palette_file, raw_palette)
            write_file_bytes(output_file, raw_image)

        result = {
            'output_file': output_file,
            'palette_file': palette_file,
            'width': parser.width,
            'height': parser.height,
            'raw_image_width': raw_image_width(parser.width, options.bit_depth),
            'raw_image_size': len(raw_image),
            'raw_palette_size': len(raw_palette) if raw_palette is not None else 0,
        }
        self._log(f"Wrote {result['raw_image_size']} image bytes, "
                  f"{result['raw_palette_size']} palette bytes ({options.palette_option.value})")
        return result


def resolve_output_filenames(input_bmp, output_file, palette_option):
    """
    Work out the raw image and raw palette file names

    Returns:
        Tuple: (output_file, palette_file or None)
    """
    if output_file is None:
        output_file = create_filename(input_bmp, RAW_IMAGE_EXTENSION)

    if os.path.abspath(output_file) == os.path.abspath(input_bmp):
        raise ArgumentError("BMP file and raw image file cannot have the same name")

    palette_file = None
    if palette_option == PaletteOption.SEPARATE:
        palette_file = create_filename(output_file, RAW_PALETTE_EXTENSION)
        if os.path.abspath(palette_file) == os.path.abspath(input_bmp):
            raise ArgumentError("BMP file and raw palette file cannot have the same name")

    return output_file, palette_file


# =============================================================================
# COMMAND LINE INTERFACE
# =============================================================================

def build_arg_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog='nextraw',
        description='Convert an uncompressed 8-bit BMP file to a raw image file for ZX Spectrum Next. '
                    'If no destination raw image file is specified, the same basename as the source '
                    'BMP file is used but with the extension ".nxi".')
    parser.add_argument('input', help='Source BMP file')
    parser.add_argument('output', nargs='?', help='Destination raw image file (optional)')

    palette = parser.add_mutually_exclusive_group()
    palette.add_argument('--embed-palette', dest='palette_option', action='store_const',
                         const=PaletteOption.EMBEDDED, help='Prepend the raw palette to the raw image file (default)')
    palette.add_argument('--sep-palette', dest='palette_option', action='store_const',
                         const=PaletteOption.SEPARATE,
                         help='Write the raw palette to a separate file with the extension ".nxp"')
    palette.add_argument('--no-palette', dest='palette_option', action='store_const',
                         const=PaletteOption.NONE, help='Do not create a raw palette')
    parser.set_defaults(palette_option=PaletteOption.EMBEDDED)

    parser.add_argument('--4bit', dest='use_4bit', action='store_true',
                        help='Use 4 bits per pixel (16 colors). Default is 8 bits per pixel (256 colors)')
    parser.add_argument('--columns', action='store_true',
                        help='Use column based memory layout. Default is row based memory layout')
    parser.add_argument('--legacy', action='store_true',
                        help='Only allow the legacy options (8 bits per pixel, row layout)')
    output = parser.add_mutually_exclusive_group()
    output.add_argument('-q', '--quiet', action='store_true', help='Quiet mode (no output on success)')
    output.add_argument('-v', '--verbose', action='store_true', help='Verbose mode')
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    options = ConversionOptions(
        palette_option=args.palette_option,
        bit_depth=4 if args.use_4bit else 8,
        layout=Layout.COLUMN if args.columns else Layout.ROW,
        legacy=args.legacy,
    )

    converter = RawImageConverter(verbose=args.verbose)
    try:
        result = converter.convert_file(args.input, args.output, options)
    except NextRawError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"✅ Raw image saved to: {result['output_file']}")
        if result['palette_file']:
            print(f"✅ Raw palette saved to: {result['palette_file']}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
