from vdr_lite.exceptions import VdrError


class ExtractionError(VdrError):
    """Raised when a document's text cannot be extracted."""


class UnsupportedFileTypeError(ExtractionError):
    """Raised when a file's sniffed or declared type is not one of the supported formats."""
