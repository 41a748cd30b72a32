from abc import ABC, abstractmethod
from typing import ClassVar

from vdr_lite.config import constants
from vdr_lite.extraction.models import ExtractionResult, RawText
from vdr_lite.extraction.text_normalizer import truncate_text


class BaseTextExtractor(ABC):
    """Contract for all per-format text extraction adapters."""

    file_type: ClassVar[str]

    def __init__(self, max_text_length: int = constants.MAX_TEXT_LENGTH) -> None:
        self._max_text_length = max_text_length

    @abstractmethod
    def read(self, data: bytes) -> RawText:
        """Read plain text from a raw document buffer.

        Args:
            data: Raw file content.

        Returns:
            RawText with unnormalized text and format metadata.

        Raises:
            ExtractionError: if extraction fails for any reason.
        """

    def extract(self, data: bytes) -> ExtractionResult:
        """Read the document and apply the shared normalize/truncate step."""
        raw = self.read(data)
        return truncate_text(raw.text, self._max_text_length, raw.metadata)
