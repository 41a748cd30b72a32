from vdr_lite.exceptions import ErrorKind, FatalPipelineError, VdrError


class ModelError(VdrError):
    """Raised when a language-model call fails."""


class ModelNetworkError(ModelError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""

    kind = ErrorKind.TRANSIENT


class ModelTimeoutError(ModelNetworkError):
    """Raised when a single model call exceeds its own timeout."""


class ModelRequestError(ModelError):
    """Raised when the provider rejects the request (credentials, model, payload)."""


class ModelResponseError(ModelError):
    """Raised when the provider answers without usable content."""

    kind = ErrorKind.TRANSIENT


class InvalidModelOutputError(ModelError):
    """Raised when the model reply is not valid JSON or breaks the finding schema."""

    kind = ErrorKind.INVALID_OUTPUT


class FindingValidationError(InvalidModelOutputError):
    """Raised when parsed JSON fails the DocumentFinding invariants."""


class PromptLoadError(ModelError):
    """Raised when a prompt asset cannot be read or rendered."""

    kind = ErrorKind.CONFIGURATION


class MissingCredentialError(FatalPipelineError):
    """Raised when no model credential is configured."""

    kind = ErrorKind.CONFIGURATION
