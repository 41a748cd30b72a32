"""Reads document entries out of an uploaded ZIP archive.

The unpacker is a coarse gate: it only filters on entry kind, size and
count. Whether an entry is a supported document is decided per file later
in the pipeline.
"""

import io
import zipfile
import zlib
from pathlib import PurePosixPath

from vdr_lite.archive.exceptions import ArchiveError, ArchiveUploadError
from vdr_lite.archive.models import RawEntry, UnpackResult
from vdr_lite.config import constants
from vdr_lite.logging.logger import Log

_RESOURCE_FORK_DIR = "__MACOSX"


def validate_archive_upload(
    filename: str,
    size: int,
    max_size: int = constants.MAX_FILE_SIZE_BYTES,
) -> None:
    """Check an uploaded archive before it reaches the unpacker.

    Raises:
        ArchiveUploadError: if the file is not a .zip, is empty, or is too large.
    """
    if not filename.lower().endswith(".zip"):
        raise ArchiveUploadError(
            f"File type not supported. Only .zip files are allowed (got '{filename}')"
        )
    if size == 0:
        raise ArchiveUploadError(f"File is empty: {filename}")
    if size > max_size:
        raise ArchiveUploadError(
            f"File size {size} bytes exceeds maximum allowed size of {max_size} bytes"
        )


def is_hidden_entry(name: str) -> bool:
    """True for dot-files, entries inside dot-directories and macOS resource forks."""
    parts = PurePosixPath(name).parts
    return any(part.startswith(".") or part == _RESOURCE_FORK_DIR for part in parts)


class ArchiveUnpacker:
    """Turns a ZIP byte buffer into RawEntry objects under size/count ceilings."""

    def __init__(
        self,
        max_file_size: int = constants.MAX_FILE_SIZE_BYTES,
        max_files: int = constants.MAX_FILES,
    ) -> None:
        self._max_file_size = max_file_size
        self._max_files = max_files

    def unpack(self, archive_bytes: bytes) -> UnpackResult:
        """Read every eligible entry into memory.

        Raises:
            ArchiveError: if the archive cannot be opened, or no eligible
                entries remain, or too many entries were admitted.
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(archive_bytes))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as exc:
            raise ArchiveError(f"ZIP extraction failed: {exc}") from exc

        entries: list[RawEntry] = []
        skipped: list[str] = []
        with archive:
            for info in archive.infolist():
                if info.is_dir() or is_hidden_entry(info.filename):
                    continue
                if info.file_size > self._max_file_size:
                    skipped.append(
                        f"File {info.filename} exceeds size limit ({info.file_size} bytes)"
                    )
                    continue
                if len(entries) >= self._max_files:
                    skipped.append(
                        f"Skipped {info.filename}: too many files in ZIP "
                        f"(limit: {self._max_files})"
                    )
                    continue
                entry = self._read_entry(archive, info, skipped)
                if entry is not None:
                    entries.append(entry)

        self._validate(entries)
        result = UnpackResult(entries=entries, skipped=skipped)
        Log.info(
            f"Unpacked {len(entries)} entries ({result.total_size} bytes)",
            skipped=len(skipped),
        )
        return result

    @staticmethod
    def _read_entry(
        archive: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        skipped: list[str],
    ) -> RawEntry | None:
        try:
            data = archive.read(info)
        except (
            zipfile.BadZipFile,
            zlib.error,
            EOFError,
            RuntimeError,
            OSError,
            NotImplementedError,
        ) as exc:
            # RuntimeError covers encrypted entries, NotImplementedError unknown compression,
            # zlib.error and EOFError a damaged or cut-off member stream
            skipped.append(f"Failed to read {info.filename}: {exc}")
            return None
        return RawEntry(name=info.filename, data=data, size=len(data))

    def _validate(self, entries: list[RawEntry]) -> None:
        if not entries:
            raise ArchiveError("No files found in ZIP archive")
        if len(entries) > self._max_files:
            raise ArchiveError(
                f"Too many files in ZIP archive. Maximum {self._max_files} files allowed"
            )
