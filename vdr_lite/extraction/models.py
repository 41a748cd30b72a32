from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawText:
    """Unnormalized text read from a document plus format-specific details."""

    text: str
    metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized, length-bounded text ready for classification and analysis."""

    text: str
    truncated: bool
    original_length: int
    format_metadata: dict[str, object] = field(default_factory=dict)
