"""Whitespace normalization and word-aware truncation for extracted text."""

import re

from vdr_lite.config import constants
from vdr_lite.extraction.models import ExtractionResult

ELLIPSIS = "..."
_WORD_BOUNDARY_WINDOW = 0.8

_HORIZONTAL_WS_RE = re.compile(r"[^\S\n]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def normalize_text(text: str) -> str:
    """Strip NULs, unify line endings, collapse spaces and cap blank lines."""
    text = text.replace("\x00", "")
    text = text.replace("\r\n", "\n")
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def truncate_text(
    text: str,
    max_length: int = constants.MAX_TEXT_LENGTH,
    metadata: dict[str, object] | None = None,
) -> ExtractionResult:
    """Normalize text and cut it to at most `max_length` characters.

    When cutting, the ellipsis is counted inside the budget and the cut moves
    back to the last space if that space lies in the final 20% of the budget.
    """
    normalized = normalize_text(text)
    format_metadata = dict(metadata or {})
    if len(normalized) <= max_length:
        return ExtractionResult(
            text=normalized,
            truncated=False,
            original_length=len(text),
            format_metadata=format_metadata,
        )

    available = max_length - len(ELLIPSIS)
    head = normalized[:available]
    last_space = head.rfind(" ")
    if last_space > available * _WORD_BOUNDARY_WINDOW:
        head = head[:last_space]
    return ExtractionResult(
        text=head + ELLIPSIS,
        truncated=True,
        original_length=len(text),
        format_metadata=format_metadata,
    )
