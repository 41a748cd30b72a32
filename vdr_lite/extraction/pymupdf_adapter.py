import pymupdf

from vdr_lite.extraction.base import BaseTextExtractor
from vdr_lite.extraction.exceptions import ExtractionError
from vdr_lite.extraction.models import RawText


class PyMuPdfAdapter(BaseTextExtractor):
    """Extracts the text layer of a PDF using PyMuPDF."""

    file_type = "pdf"

    def read(self, data: bytes) -> RawText:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise ExtractionError(f"PDF extraction failed: {exc}") from exc
        return RawText(text="\n".join(pages), metadata={"pages": len(pages)})
