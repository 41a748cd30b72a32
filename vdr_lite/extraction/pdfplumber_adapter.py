import io

import pdfplumber

from vdr_lite.extraction.base import BaseTextExtractor
from vdr_lite.extraction.exceptions import ExtractionError
from vdr_lite.extraction.models import RawText


class PdfPlumberAdapter(BaseTextExtractor):
    """Extracts the text layer of a PDF using pdfplumber."""

    file_type = "pdf"

    def read(self, data: bytes) -> RawText:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise ExtractionError(f"PDF extraction failed: {exc}") from exc
        return RawText(text="\n".join(pages), metadata={"pages": len(pages)})
