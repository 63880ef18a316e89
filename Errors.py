### Conversion Exception classes ###
class NextRawError(Exception):
    """Base class for BMP to raw conversion exceptions."""
    pass


class BMPFormatError(NextRawError):
    """Raised when a BMP file is malformed or uses an unsupported format."""
    default_message = "Not a valid or supported BMP file"

    def __init__(self, filename, message=""):
        self.filename = filename
        self.message = message or self.default_message
        super().__init__(f"{self.message}: {filename}")


class TruncatedHeaderError(BMPFormatError):
    default_message = "Can't read the BMP header"


class NotABmpFileError(BMPFormatError):
    default_message = "Not a BMP file"


class FileTooSmallError(BMPFormatError):
    default_message = "Invalid size of BMP file"


class InvalidHeaderError(BMPFormatError):
    default_message = "Invalid header of BMP file"


class UnsupportedHeaderError(BMPFormatError):
    default_message = "Invalid/unsupported header of BMP file"


class InvalidWidthError(BMPFormatError):
    default_message = "Invalid image width in BMP file"


class InvalidHeightError(BMPFormatError):
    default_message = "Invalid image height in BMP file"


class InvalidImageSizeError(BMPFormatError):
    default_message = "Invalid image size in BMP file"


class UnsupportedBitDepthError(BMPFormatError):
    """Only 8-bit BMP files are supported"""
    def __init__(self, filename, bit_depth):
        self.bit_depth = bit_depth
        super().__init__(filename, f"Not an 8-bit BMP file ({bit_depth}-bit)")


class UnsupportedCompressionError(BMPFormatError):
    """Only uncompressed BMP files are supported"""
    def __init__(self, filename, compression):
        self.compression = compression
        super().__init__(filename, f"Not an uncompressed BMP file (compression {compression})")


class ConversionIOError(NextRawError):
    """Open, read or write failure, including short reads"""
    def __init__(self, filename, message):
        self.filename = filename
        self.message = message
        super().__init__(f"{message}: {filename}")


class FileReadError(ConversionIOError):
    pass


class FileWriteError(ConversionIOError):
    pass


class ArgumentError(NextRawError):
    """Invalid conversion options or file names"""
    pass
