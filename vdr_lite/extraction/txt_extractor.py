from vdr_lite.extraction.base import BaseTextExtractor
from vdr_lite.extraction.models import RawText


class TxtExtractor(BaseTextExtractor):
    """Decodes plain text as UTF-8; undecodable bytes become replacement characters."""

    file_type = "txt"

    def read(self, data: bytes) -> RawText:
        return RawText(text=data.decode("utf-8", errors="replace"))
