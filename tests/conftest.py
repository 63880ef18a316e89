import struct

import pytest


def make_palette():
    """256 distinct (red, green, blue) colors"""
    return [(i, 255 - i, (i * 7) % 256) for i in range(256)]


def build_bmp(rows, top_down=False, palette=None, dib_header_size=40, pad_byte=0xEE):
    """
    Build an 8-bit BMP file by hand

    Args:
        rows: Pixel rows in display order (top row first)
        top_down: Store rows top to bottom with a negative height
        palette: 256 (red, green, blue) tuples, defaults to make_palette()
        pad_byte: Value for row padding bytes
    """
    height = len(rows)
    width = len(rows[0])
    padded = (width + 3) & ~3
    palette = palette or make_palette()

    stored = rows if top_down else list(reversed(rows))
    pixel_data = b''.join(bytes(row) + bytes([pad_byte]) * (padded - width) for row in stored)

    color_table = b''.join(bytes([b, g, r, 0]) for (r, g, b) in palette)
    dib_extra = b'\x00' * (dib_header_size - 40)
    pixel_offset = 14 + dib_header_size + len(color_table)
    file_size = pixel_offset + len(pixel_data)

    file_header = struct.pack('<2sIHHI', b'BM', file_size, 0, 0, pixel_offset)
    dib_header = struct.pack('<IiiHHIIiiII', dib_header_size, width, -height if top_down else height,
                             1, 8, 0, len(pixel_data), 2835, 2835, 256, 0)
    return file_header + dib_header + dib_extra + color_table + pixel_data


def patch(data, fmt, offset, value):
    """Return a copy of data with one header field overwritten"""
    patched = bytearray(data)
    struct.pack_into(fmt, patched, offset, value)
    return bytes(patched)


SAMPLE_ROWS = [
    [1, 2, 3, 4],
    [5, 6, 7, 8],
    [9, 10, 11, 12],
]


@pytest.fixture
def sample_bmp():
    return build_bmp(SAMPLE_ROWS)


@pytest.fixture
def sample_bmp_file(tmp_path, sample_bmp):
    path = tmp_path / 'sample.bmp'
    path.write_bytes(sample_bmp)
    return path


@pytest.fixture
def pillow_bmp_file(tmp_path):
    """A bottom-up 8-bit BMP written by Pillow, 5 x 3 so rows carry padding"""
    Image = pytest.importorskip('PIL.Image')

    rows = [
        [0, 1, 2, 3, 4],
        [10, 20, 30, 40, 50],
        [255, 254, 253, 252, 251],
    ]
    img = Image.new('P', (5, 3))
    img.putpalette([c for color in make_palette() for c in color])
    img.putdata([p for row in rows for p in row])

    path = tmp_path / 'pillow.bmp'
    img.save(path, format='BMP')
    return path, rows
