from vdr_lite.exceptions import VdrError


class StorageError(VdrError):
    """Base exception for analysis storage errors."""


class AnalysisNotFoundError(StorageError):
    """Raised when no analysis is stored under the requested identifier."""


class CorruptAnalysisError(StorageError):
    """Raised when a stored analysis cannot be decoded."""
