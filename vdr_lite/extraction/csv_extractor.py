import csv
import io

from vdr_lite.config import constants
from vdr_lite.extraction.base import BaseTextExtractor
from vdr_lite.extraction.exceptions import ExtractionError
from vdr_lite.extraction.models import RawText


class CsvExtractor(BaseTextExtractor):
    """Reads a delimited file with a header row and flattens data rows to tab-joined text."""

    file_type = "csv"

    def __init__(
        self,
        max_text_length: int = constants.MAX_TEXT_LENGTH,
        max_rows: int = constants.MAX_TABULAR_ROWS,
    ) -> None:
        super().__init__(max_text_length)
        self._max_rows = max_rows

    def read(self, data: bytes) -> RawText:
        try:
            reader = csv.reader(io.StringIO(data.decode("utf-8-sig", errors="replace")))
            columns = next(reader, [])
            rows: list[list[str]] = []
            for row in reader:
                if len(rows) >= self._max_rows:
                    break
                rows.append(row)
        except csv.Error as exc:
            raise ExtractionError(f"CSV parsing failed: {exc}") from exc

        text = "\n".join("\t".join(row) for row in rows)
        return RawText(text=text, metadata={"rows": len(rows), "columns": columns})
