from vdr_lite.exceptions import FatalPipelineError, VdrError


class ProcessorError(VdrError):
    """Base exception for all processor-related errors."""


class RunTimeoutError(FatalPipelineError):
    """Raised when a whole run exceeds its wall-clock budget."""
