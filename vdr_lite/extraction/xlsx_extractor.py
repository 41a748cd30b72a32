import io

import openpyxl

from vdr_lite.config import constants
from vdr_lite.extraction.base import BaseTextExtractor
from vdr_lite.extraction.exceptions import ExtractionError
from vdr_lite.extraction.models import RawText


def _cell_to_text(value: object) -> str:
    return "" if value is None else str(value)


class XlsxExtractor(BaseTextExtractor):
    """Flattens workbook sheets into tab-separated rows.

    Rows are counted across all sheets; reading stops once the row ceiling is hit.
    """

    file_type = "xlsx"

    def __init__(
        self,
        max_text_length: int = constants.MAX_TEXT_LENGTH,
        max_rows: int = constants.MAX_TABULAR_ROWS,
    ) -> None:
        super().__init__(max_text_length)
        self._max_rows = max_rows

    def read(self, data: bytes) -> RawText:
        try:
            workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except Exception as exc:
            raise ExtractionError(f"XLSX extraction failed: {exc}") from exc

        sections: list[str] = []
        total_rows = 0
        try:
            sheet_names = list(workbook.sheetnames)
            for worksheet in workbook.worksheets:
                lines: list[str] = []
                for row in worksheet.iter_rows(values_only=True):
                    if total_rows >= self._max_rows:
                        break
                    lines.append("\t".join(_cell_to_text(value) for value in row))
                    total_rows += 1
                sections.append(f"Sheet: {worksheet.title}\n" + "\n".join(lines))
                if total_rows >= self._max_rows:
                    break
        except Exception as exc:
            raise ExtractionError(f"XLSX extraction failed: {exc}") from exc
        finally:
            workbook.close()

        return RawText(
            text="\n\n".join(sections),
            metadata={"rows": total_rows, "sheets": len(sheet_names), "sheet_names": sheet_names},
        )
