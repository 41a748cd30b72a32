import io

from docx import Document

from vdr_lite.extraction.base import BaseTextExtractor
from vdr_lite.extraction.exceptions import ExtractionError
from vdr_lite.extraction.models import RawText


class DocxExtractor(BaseTextExtractor):
    """Extracts raw paragraph and table text from a Word document, dropping styling."""

    file_type = "docx"

    def read(self, data: bytes) -> RawText:
        try:
            document = Document(io.BytesIO(data))
            blocks = [paragraph.text for paragraph in document.paragraphs]
            for table in document.tables:
                for row in table.rows:
                    blocks.append("\t".join(cell.text for cell in row.cells))
        except Exception as exc:
            raise ExtractionError(f"DOCX extraction failed: {exc}") from exc
        return RawText(
            text="\n\n".join(blocks),
            metadata={"paragraphs": len(document.paragraphs), "tables": len(document.tables)},
        )
