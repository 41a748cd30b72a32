from vdr_lite.extraction.base import BaseTextExtractor
from vdr_lite.extraction.exceptions import UnsupportedFileTypeError
from vdr_lite.extraction.models import ExtractionResult


class ExtractorRegistry:
    """Dispatches a buffer to the extractor registered for its file type."""

    def __init__(self, extractors: list[BaseTextExtractor]) -> None:
        self._extractors = {extractor.file_type: extractor for extractor in extractors}

    @property
    def file_types(self) -> list[str]:
        return sorted(self._extractors)

    def get(self, file_type: str) -> BaseTextExtractor:
        extractor = self._extractors.get(file_type.lower())
        if extractor is None:
            raise UnsupportedFileTypeError(
                f"Unsupported file type for extraction: {file_type}"
            )
        return extractor

    def extract(self, data: bytes, file_type: str) -> ExtractionResult:
        """Extract normalized text from `data` using the `file_type` adapter.

        Raises:
            UnsupportedFileTypeError: if no extractor handles `file_type`.
            ExtractionError: if the adapter fails.
        """
        return self.get(file_type).extract(data)
