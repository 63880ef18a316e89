import os
import tempfile

from Constants import *
from Errors import FileReadError, FileWriteError


### File Operations ###
def read_file_bytes(filename):
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except FileNotFoundError:
        raise FileReadError(filename, "File not found")
    except PermissionError:
        raise FileReadError(filename, "Permission denied")
    except OSError as e:
        raise FileReadError(filename, f"Can't open file ({e.strerror})")


def write_file_bytes(filename, data):
    """
    Write data to filename via a unique temporary sibling file that is
    renamed into place, so a failed write never leaves a partial file behind.
    """
    tmp_filename = None
    try:
        fd, tmp_filename = tempfile.mkstemp(dir=os.path.dirname(filename) or '.', suffix='.tmp')
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_filename, filename)
        return True
    except OSError as e:
        if tmp_filename is not None:
            _remove_quietly(tmp_filename)
        raise FileWriteError(filename, f"Can't write file ({e.strerror})")


def _remove_quietly(filename):
    try:
        os.remove(filename)
    except OSError:
        pass


def create_filename(filename, extension):
    """Replace the extension of filename, or append one if it has none."""
    root, _ = os.path.splitext(filename)
    return root + extension


###Binary/Integer Conversions###
def bytes_to_int(byte_array, start, length, signed=False):
    """Little-endian field read with a bounds check."""
    if start < 0 or start + length > len(byte_array):
        raise ValueError(f"Requested bytes {start}..{start + length} beyond array length {len(byte_array)}")

    result = 0
    for i in range(length):
        result |= byte_array[start + i] << (i * 8)

    if signed and result & (1 << (length * 8 - 1)):
        result -= 1 << (length * 8)
    return result


def read_u16(data, offset):
    return bytes_to_int(data, offset, 2)

def read_u32(data, offset):
    return bytes_to_int(data, offset, 4)

def read_i32(data, offset):
    return bytes_to_int(data, offset, 4, signed=True)


def padded_row_width(width):
    # BMP rows occupy a multiple of 4 bytes
    return (width + ROW_ALIGNMENT - 1) & ~(ROW_ALIGNMENT - 1)
