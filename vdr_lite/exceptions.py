from enum import Enum


class ErrorKind(str, Enum):
    """Closed classification attached to errors where they are raised."""

    TRANSIENT = "transient"
    PERMANENT = "permanent"
    INVALID_OUTPUT = "invalid_output"
    CONFIGURATION = "configuration"


class VdrError(Exception):
    """Base exception for all pipeline errors.

    Subclasses set `kind` so retry decisions never need to re-parse messages.
    """

    kind: ErrorKind = ErrorKind.PERMANENT

    def __init__(self, message: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class FatalPipelineError(VdrError):
    """Aborts the whole run; never recorded as a per-file error."""
