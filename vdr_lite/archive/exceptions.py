from vdr_lite.exceptions import FatalPipelineError, VdrError


class ArchiveError(FatalPipelineError):
    """Raised when the archive is unreadable or yields no eligible entries."""


class ArchiveUploadError(VdrError):
    """Raised by the ingress gate when the uploaded archive itself is rejected."""
