### Constants ###
from enum import Enum

BMP_SIGNATURE = b'BM' # to identify bmp files this also spells 'BM' in ASCII
FILE_HEADER_SIZE = 14 # the BMP file header, the DIB header follows it
MIN_DIB_HEADER_SIZE = 40 # a BITMAPINFOHEADER is the smallest header with width/height/bpp/compression
BMP_HEADER_SIZE = FILE_HEADER_SIZE + MIN_DIB_HEADER_SIZE # 54 bytes read up front
PALETTE_SIZE = 1024 # 256 BGRA entries, always read in full
MIN_BMP_FILE_SIZE = BMP_HEADER_SIZE + PALETTE_SIZE + 4 # smallest 8-bit BMP with a full palette
SUPPORTED_BIT_DEPTH = 8
ROW_ALIGNMENT = 4 # BMP rows are padded to a multiple of 4 bytes

# Header field offsets
SIGNATURE_OFFSET = 0
FILE_SIZE_OFFSET = 2
PIXEL_OFFSET_OFFSET = 10
DIB_HEADER_SIZE_OFFSET = 14
WIDTH_OFFSET = 18
HEIGHT_OFFSET = 22
BIT_DEPTH_OFFSET = 28
COMPRESSION_OFFSET = 30

# Raw palette
PALETTE_COLORS_8BIT = 256
PALETTE_COLORS_4BIT = 16
RAW_PALETTE_ENTRY_SIZE = 2 # RGB332 byte + blue LSB byte

# File extensions
RAW_IMAGE_EXTENSION = '.nxi'
RAW_PALETTE_EXTENSION = '.nxp'

LOG_PREFIX = '[NEXTRAW]'


class PaletteOption(Enum):
    EMBEDDED = 'embedded' # raw palette is prepended to the raw image file
    SEPARATE = 'separate' # raw palette goes to a .nxp file
    NONE = 'none'


class Layout(Enum):
    ROW = 'row'
    COLUMN = 'column'


SUPPORTED_OUTPUT_DEPTHS = [4, 8]
LEGACY_OUTPUT_DEPTHS = [8]
LEGACY_LAYOUTS = [Layout.ROW]
