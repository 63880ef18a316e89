"""
BMP Parser for uncompressed 8-bit indexed BMP files
"""

from Constants import *
from utils import read_u16, read_u32, read_i32, padded_row_width
from Errors import *

class BMPParser:
    """Parse and validate an 8-bit BMP file held in memory"""

    def __init__(self, file_bytes, filename="<memory>"):
        self.file_bytes = file_bytes
        self.filename = filename
        self.file_size = 0
        self.width = 0
        self.height = 0
        self.is_top_down = False
        self.bit_depth = 0
        self.compression = 0
        self.pixel_data_offset = 0
        self.palette_offset = 0
        self.dib_header_size = 0
        self.padded_row_width = 0

        self.parse()

    def parse(self):
        """Validate the file and DIB headers in order, failing on the first problem"""
        data = self.file_bytes

        # 1. Whole header must be present
        if len(data) < BMP_HEADER_SIZE:
            raise TruncatedHeaderError(self.filename)

        # 2. Check signature
        if data[SIGNATURE_OFFSET:SIGNATURE_OFFSET + 2] != BMP_SIGNATURE:
            raise NotABmpFileError(self.filename)

        # 3. Declared file size must hold headers and a full palette
        self.file_size = read_u32(data, FILE_SIZE_OFFSET)
        if self.file_size < MIN_BMP_FILE_SIZE:
            raise FileTooSmallError(self.filename)

        # 4. Pixel data must start inside the file
        self.pixel_data_offset = read_u32(data, PIXEL_OFFSET_OFFSET)
        if self.pixel_data_offset >= self.file_size:
            raise InvalidHeaderError(self.filename)

        # 5. At least a BITMAPINFOHEADER is required
        self.dib_header_size = read_u32(data, DIB_HEADER_SIZE_OFFSET)
        if self.dib_header_size < MIN_DIB_HEADER_SIZE:
            raise UnsupportedHeaderError(self.filename)

        # 6. The color table follows the DIB header
        self.palette_offset = FILE_HEADER_SIZE + self.dib_header_size

        # 7. Width
        width = read_i32(data, WIDTH_OFFSET)
        if width == 0:
            raise InvalidWidthError(self.filename)
        self.width = abs(width)

        # 8. Height, negative means rows are stored top-down
        height = read_i32(data, HEIGHT_OFFSET)
        if height == 0:
            raise InvalidHeightError(self.filename)
        self.is_top_down = height < 0
        self.height = abs(height)

        # 9. Pixel data can't be larger than the file
        if self.width * self.height >= self.file_size:
            raise InvalidImageSizeError(self.filename)

        # 10. Bit depth
        self.bit_depth = read_u16(data, BIT_DEPTH_OFFSET)
        if self.bit_depth != SUPPORTED_BIT_DEPTH:
            raise UnsupportedBitDepthError(self.filename, self.bit_depth)

        # 11. Compression
        self.compression = read_u32(data, COMPRESSION_OFFSET)
        if self.compression != 0:
            raise UnsupportedCompressionError(self.filename, self.compression)

        self.padded_row_width = padded_row_width(self.width)

    def get_palette_bytes(self):
        """Return the 1024-byte BGRA color table"""
        start = self.palette_offset
        palette = self.file_bytes[start:start + PALETTE_SIZE]
        if len(palette) != PALETTE_SIZE:
            raise FileReadError(self.filename, "Can't read the BMP palette")
        return palette

    def get_palette_entries(self, count=PALETTE_COLORS_8BIT):
        """
        Return the first count palette entries

        Returns:
            List of (blue, green, red, reserved) tuples in file order
        """
        palette = self.get_palette_bytes()
        return [tuple(palette[i * 4:i * 4 + 4]) for i in range(count)]

    def get_pixel_data(self):
        """Return the raw pixel block, rows padded and in storage order"""
        size = self.padded_row_width * self.height
        start = self.pixel_data_offset
        pixel_data = self.file_bytes[start:start + size]
        if len(pixel_data) != size:
            raise FileReadError(self.filename, "Can't read the BMP image data")
        return pixel_data

    def iter_rows(self):
        """
        Yield the meaningful bytes of each row in display order (top row first)
        Padding bytes at the end of each stored row are skipped.
        """
        pixel_data = self.get_pixel_data()
        stride = self.padded_row_width

        for y in range(self.height):
            if self.is_top_down:
                row_index = y
            else:
                # Bottom-up: the first stored row is the bottom one
                row_index = self.height - 1 - y

            row_offset = row_index * stride
            yield pixel_data[row_offset:row_offset + self.width]

    def get_dimensions(self):
        """Return (width, height)"""
        return (self.width, self.height)

    def get_image_info(self):
        """Get image information"""
        return {
            'width': self.width,
            'height': self.height,
            'bit_depth': self.bit_depth,
            'file_size': self.file_size,
            'dib_header_size': self.dib_header_size,
            'palette_offset': self.palette_offset,
            'pixel_data_offset': self.pixel_data_offset,
            'padded_row_width': self.padded_row_width,
            'row_padding': self.padded_row_width - self.width,
            'is_top_down': self.is_top_down,
        }

    def print_info(self):
        """Print image information"""
        info = self.get_image_info()

        print("=" * 50)
        print("BMP Image Information")
        print("=" * 50)
        print(f"File: {self.filename}")
        print(f"Dimensions: {info['width']} x {info['height']}")
        print(f"Bit depth: {info['bit_depth']}-bit")
        print(f"DIB header: {info['dib_header_size']} bytes")
        print(f"Palette offset: {info['palette_offset']}")
        print(f"Pixel data offset: {info['pixel_data_offset']}")
        print(f"Row padding: {info['row_padding']} bytes")
        print(f"Orientation: {'Top-down' if info['is_top_down'] else 'Bottom-up'}")
        print("=" * 50)


# Helper function to create parser from file
def create_bmp_parser(filename):
    """
    Create BMPParser from file; read failures raise FileReadError
    """
    from utils import read_file_bytes

    file_bytes = read_file_bytes(filename)
    return BMPParser(file_bytes, filename)
