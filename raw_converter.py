"""
Core conversion algorithms for ZX Spectrum Next raw images
Palette RGB888 -> RGB333 conversion and pixel repacking
"""

import math
from enum import Enum

from Constants import *

# =============================================================================
# PALETTE CONVERSION
# =============================================================================

def c8_to_c3(c8):
    """
    Convert an 8-bit color channel to a 3-bit channel

    Rounds half away from zero, which for non-negative input is floor(x + 0.5).
    """
    return math.floor(c8 * 7.0 / 255.0 + 0.5)


def convert_color(red, green, blue):
    """
    Convert an RGB888 color to the raw RGB333 palette entry

    Args:
        red, green, blue: 8-bit channel values

    Returns:
        Tuple (rgb332, b1) where b1 is the blue LSB dropped from rgb332
    """
    rgb333 = (c8_to_c3(red) << 6) | (c8_to_c3(green) << 3) | c8_to_c3(blue)
    return (rgb333 >> 1, rgb333 & 0x01)


def palette_size_for_depth(bit_depth):
    return PALETTE_COLORS_4BIT if bit_depth == 4 else PALETTE_COLORS_8BIT


def create_raw_palette(palette_bytes, num_colors):
    """
    Create the raw palette from a BMP color table

    Args:
        palette_bytes: BMP color table, 4 bytes per entry in B, G, R, reserved order
        num_colors: Number of entries to convert (16 or 256)

    Returns:
        bytes of length num_colors * 2
    """
    if len(palette_bytes) < num_colors * 4:
        raise ValueError(f"Palette has {len(palette_bytes) // 4} entries, need {num_colors}")

    raw_palette = bytearray(num_colors * RAW_PALETTE_ENTRY_SIZE)
    for i in range(num_colors):
        blue = palette_bytes[i * 4 + 0]
        green = palette_bytes[i * 4 + 1]
        red = palette_bytes[i * 4 + 2]

        rgb332, b1 = convert_color(red, green, blue)
        raw_palette[i * 2 + 0] = rgb332
        raw_palette[i * 2 + 1] = b1

    return bytes(raw_palette)


# =============================================================================
# PIXEL REPACKING
# =============================================================================

class RepackMode(Enum):
    ROW_8BIT = 'row8'       # 256x192 layer 2 and 8-bit sprite sheets
    COLUMN_8BIT = 'col8'    # 320x256 layer 2
    ROW_4BIT = 'row4'       # 4-bit sprite sheets
    COLUMN_4BIT = 'col4'    # 640x256 layer 2


def select_repack_mode(bit_depth, layout):
    if bit_depth not in SUPPORTED_OUTPUT_DEPTHS:
        raise ValueError(f"Unsupported output bit depth: {bit_depth}")

    if layout == Layout.COLUMN:
        return RepackMode.COLUMN_4BIT if bit_depth == 4 else RepackMode.COLUMN_8BIT
    return RepackMode.ROW_4BIT if bit_depth == 4 else RepackMode.ROW_8BIT


def raw_image_width(width, bit_depth):
    """Bytes per raw row: one pixel per byte, or two in 4-bit mode"""
    if bit_depth == 4:
        return (width + width % 2) // 2
    return width


def merge_pixel_pair(left, right):
    """Left pixel in the high nibble, right pixel in the low nibble"""
    return ((left & 0x0F) << 4) | (right & 0x0F)


def _pair_row(row, width):
    # An odd width leaves the last pair without a right pixel
    pairs = bytearray((width + 1) // 2)
    for x in range(0, width, 2):
        right = row[x + 1] if x + 1 < width else 0
        pairs[x // 2] = merge_pixel_pair(row[x], right)
    return pairs


def _repack_row_8bit(rows, width, height):
    raw_image = bytearray()
    for row in rows:
        raw_image.extend(row[:width])
    return raw_image


def _repack_column_8bit(rows, width, height):
    raw_image = bytearray(width * height)
    for y, row in enumerate(rows):
        for x in range(width):
            raw_image[y + x * height] = row[x]
    return raw_image


def _repack_row_4bit(rows, width, height):
    raw_image = bytearray()
    for row in rows:
        raw_image += _pair_row(row, width)
    return raw_image


def _repack_column_4bit(rows, width, height):
    raw_width = raw_image_width(width, 4)
    raw_image = bytearray(raw_width * height)
    for y, row in enumerate(rows):
        for x, pair in enumerate(_pair_row(row, width)):
            raw_image[y + x * height] = pair
    return raw_image


REPACK_STRATEGIES = {
    RepackMode.ROW_8BIT: _repack_row_8bit,
    RepackMode.COLUMN_8BIT: _repack_column_8bit,
    RepackMode.ROW_4BIT: _repack_row_4bit,
    RepackMode.COLUMN_4BIT: _repack_column_4bit,
}


def convert_image(rows, width, height, mode):
    """
    Repack 8-bit pixel indexes into the raw image layout

    Args:
        rows: Iterable of pixel rows in display order, each at least width bytes
        width: Image width in pixels
        height: Number of rows
        mode: RepackMode

    Returns:
        bytes of length raw_image_width(width, depth) * height
    """
    rows = list(rows)
    if len(rows) != height:
        raise ValueError(f"Expected {height} rows, got {len(rows)}")

    for y, row in enumerate(rows):
        if len(row) < width:
            raise ValueError(f"Row {y} has {len(row)} pixels, need {width}")

    return bytes(REPACK_STRATEGIES[mode](rows, width, height))
