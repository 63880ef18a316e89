import pytest

from bmp_parser import BMPParser, create_bmp_parser
from Errors import *
from conftest import SAMPLE_ROWS, build_bmp, make_palette, patch


def test_parses_geometry(sample_bmp):
    parser = BMPParser(sample_bmp, 'sample.bmp')

    assert parser.get_dimensions() == (4, 3)
    assert parser.padded_row_width == 4
    assert parser.palette_offset == 54
    assert parser.pixel_data_offset == 54 + 1024
    assert parser.file_size == len(sample_bmp)
    assert not parser.is_top_down


def test_rows_come_out_in_display_order(sample_bmp):
    parser = BMPParser(sample_bmp)
    assert [list(row) for row in parser.iter_rows()] == SAMPLE_ROWS


def test_top_down_rows_come_out_in_display_order():
    parser = BMPParser(build_bmp(SAMPLE_ROWS, top_down=True))

    assert parser.is_top_down
    assert parser.height == 3
    assert [list(row) for row in parser.iter_rows()] == SAMPLE_ROWS


def test_row_padding_is_skipped():
    rows = [[1, 2, 3, 4, 5], [6, 7, 8, 9, 10]]
    parser = BMPParser(build_bmp(rows, pad_byte=0xAB))

    assert parser.padded_row_width == 8
    assert parser.get_image_info()['row_padding'] == 3
    assert [list(row) for row in parser.iter_rows()] == rows


def test_palette_entries_are_bgra():
    parser = BMPParser(build_bmp(SAMPLE_ROWS))
    entries = parser.get_palette_entries(16)

    assert len(entries) == 16
    red, green, blue = make_palette()[5]
    assert entries[5] == (blue, green, red, 0)
    assert len(parser.get_palette_bytes()) == 1024


def test_larger_dib_header_moves_palette():
    parser = BMPParser(build_bmp(SAMPLE_ROWS, dib_header_size=124))

    assert parser.palette_offset == 14 + 124
    red, green, blue = make_palette()[0]
    assert parser.get_palette_entries(1) == [(blue, green, red, 0)]
    assert [list(row) for row in parser.iter_rows()] == SAMPLE_ROWS


def test_negative_width_uses_magnitude(sample_bmp):
    parser = BMPParser(patch(sample_bmp, '<i', 18, -4))
    assert parser.width == 4


@pytest.mark.parametrize('fmt, offset, value, error', [
    ('<I', 2, 1081, FileTooSmallError),
    ('<I', 10, 1090, InvalidHeaderError),
    ('<I', 14, 12, UnsupportedHeaderError),
    ('<i', 18, 0, InvalidWidthError),
    ('<i', 22, 0, InvalidHeightError),
    ('<i', 18, 1000, InvalidImageSizeError),
    ('<i', 22, -1000, InvalidImageSizeError),
    ('<H', 28, 24, UnsupportedBitDepthError),
    ('<I', 30, 1, UnsupportedCompressionError),
])
def test_invalid_header_fields(sample_bmp, fmt, offset, value, error):
    with pytest.raises(error) as excinfo:
        BMPParser(patch(sample_bmp, fmt, offset, value), 'bad.bmp')

    assert excinfo.value.filename == 'bad.bmp'
    assert 'bad.bmp' in str(excinfo.value)


def test_truncated_header(sample_bmp):
    with pytest.raises(TruncatedHeaderError):
        BMPParser(sample_bmp[:53])


def test_bad_signature(sample_bmp):
    with pytest.raises(NotABmpFileError):
        BMPParser(b'XY' + sample_bmp[2:])


def test_errors_share_a_base_class(sample_bmp):
    with pytest.raises(BMPFormatError):
        BMPParser(patch(sample_bmp, '<H', 28, 24))
    with pytest.raises(NextRawError):
        BMPParser(b'XY' + sample_bmp[2:])


def test_checks_run_in_order(sample_bmp):
    # Zero width is reported before the unsupported bit depth
    data = patch(patch(sample_bmp, '<H', 28, 24), '<i', 18, 0)
    with pytest.raises(InvalidWidthError):
        BMPParser(data)


def test_unsupported_bit_depth_carries_depth(sample_bmp):
    with pytest.raises(UnsupportedBitDepthError) as excinfo:
        BMPParser(patch(sample_bmp, '<H', 28, 24))
    assert excinfo.value.bit_depth == 24


def test_short_pixel_data_is_a_read_error(sample_bmp):
    parser = BMPParser(sample_bmp[:-4], 'short.bmp')

    with pytest.raises(FileReadError) as excinfo:
        list(parser.iter_rows())
    assert excinfo.value.filename == 'short.bmp'


def test_short_palette_is_a_read_error(sample_bmp):
    parser = BMPParser(patch(sample_bmp, '<I', 14, 1000))

    with pytest.raises(FileReadError):
        parser.get_palette_bytes()


def test_create_bmp_parser_reads_file(sample_bmp_file):
    parser = create_bmp_parser(str(sample_bmp_file))

    assert parser.filename == str(sample_bmp_file)
    assert [list(row) for row in parser.iter_rows()] == SAMPLE_ROWS


def test_create_bmp_parser_missing_file(tmp_path):
    missing = str(tmp_path / 'missing.bmp')

    with pytest.raises(FileReadError) as excinfo:
        create_bmp_parser(missing)
    assert excinfo.value.filename == missing


def test_parses_pillow_written_bmp(pillow_bmp_file):
    path, rows = pillow_bmp_file
    parser = create_bmp_parser(str(path))

    assert parser.get_dimensions() == (5, 3)
    assert not parser.is_top_down
    assert [list(row) for row in parser.iter_rows()] == rows

    red, green, blue = make_palette()[200]
    assert parser.get_palette_entries()[200][:3] == (blue, green, red)


def test_print_info(sample_bmp, capsys):
    BMPParser(sample_bmp, 'sample.bmp').print_info()

    out = capsys.readouterr().out
    assert 'Dimensions: 4 x 3' in out
    assert 'Orientation: Bottom-up' in out
