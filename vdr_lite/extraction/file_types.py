"""Content sniffing by magic bytes, with the filename extension as fallback."""

import io
import zipfile
from pathlib import PurePosixPath

from vdr_lite.config import constants
from vdr_lite.extraction.exceptions import UnsupportedFileTypeError

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"%PDF", "pdf"),
    (b"MZ", "exe"),
    (b"\x7fELF", "elf"),
    (b"\xcf\xfa\xed\xfe", "macho"),
    (b"\xce\xfa\xed\xfe", "macho"),
    (b"\xfe\xed\xfa\xcf", "macho"),
    (b"\xfe\xed\xfa\xce", "macho"),
    (b"\x89PNG\r\n\x1a\n", "png"),
    (b"\xff\xd8\xff", "jpg"),
    (b"GIF87a", "gif"),
    (b"GIF89a", "gif"),
    (b"\x1f\x8b", "gz"),
    (b"Rar!\x1a\x07", "rar"),
    (b"7z\xbc\xaf\x27\x1c", "7z"),
    (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", "cfb"),
)
_ZIP_SIGNATURE = b"PK\x03\x04"
_OOXML_PREFIXES: tuple[tuple[str, str], ...] = (("word/", "docx"), ("xl/", "xlsx"))


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot, or '' when there is none."""
    return PurePosixPath(filename).suffix.lower().lstrip(".")


def detect_file_type(data: bytes) -> str | None:
    """Identify a buffer by its leading bytes.

    Returns None when the content is not recognised, which is always the
    case for plain text and CSV.
    """
    if data.startswith(_ZIP_SIGNATURE):
        return _detect_zip_container(data)
    for signature, file_type in _SIGNATURES:
        if data.startswith(signature):
            return file_type
    return None


def _detect_zip_container(data: bytes) -> str:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            names = archive.namelist()
    except zipfile.BadZipFile:
        return "zip"
    for prefix, file_type in _OOXML_PREFIXES:
        if any(name.startswith(prefix) for name in names):
            return file_type
    return "zip"


def resolve_file_type(filename: str, data: bytes) -> str:
    """Pick the format used for extraction.

    A sniffed supported type wins over the extension. A sniffed type that is
    known but unsupported (an executable, an image) is rejected. Undetectable
    content falls through to the declared extension.

    Raises:
        UnsupportedFileTypeError: if neither the content nor the extension is supported.
    """
    declared = file_extension(filename)
    detected = detect_file_type(data)
    if detected is not None:
        if detected in constants.SUPPORTED_FILE_TYPES:
            return detected
        raise UnsupportedFileTypeError(f"Unsupported file type: {detected}")
    if declared in constants.SUPPORTED_FILE_TYPES:
        return declared
    raise UnsupportedFileTypeError(f"Unsupported file type: {declared or 'unknown'}")
