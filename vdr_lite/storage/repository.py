import json
import re
from abc import ABC, abstractmethod
from pathlib import Path

from vdr_lite.logging.logger import Log
from vdr_lite.processor.models import AnalysisResult
from vdr_lite.storage.exceptions import AnalysisNotFoundError, CorruptAnalysisError
from vdr_lite.storage.serialization import result_from_dict, result_to_dict

_ANALYSIS_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class AnalysisRepository(ABC):
    """Stores analysis results and their rendered reports by identifier."""

    @abstractmethod
    def save_analysis(self, analysis_id: str, result: AnalysisResult) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_analysis(self, analysis_id: str) -> AnalysisResult:
        """Raises AnalysisNotFoundError if nothing is stored under `analysis_id`."""
        raise NotImplementedError

    @abstractmethod
    def get_rendered(self, analysis_id: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def save_rendered(self, analysis_id: str, markdown: str) -> None:
        raise NotImplementedError


class LocalAnalysisRepository(AnalysisRepository):
    """File-system repository: `<output_dir>/<id>.json` and `<output_dir>/<id>.md`."""

    def __init__(self, output_dir: Path | str) -> None:
        self._output_dir = Path(output_dir)

    def save_analysis(self, analysis_id: str, result: AnalysisResult) -> None:
        path = self._path(analysis_id, ".json")
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(result_to_dict(result), indent=2), encoding="utf-8")
        Log.info(f"Saved analysis {analysis_id}", path=str(path))

    def get_analysis(self, analysis_id: str) -> AnalysisResult:
        path = self._path(analysis_id, ".json")
        if not path.exists():
            raise AnalysisNotFoundError(f"Analysis not found: {analysis_id}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CorruptAnalysisError(
                f"Stored analysis {analysis_id} is not valid JSON: {exc}"
            ) from exc
        return result_from_dict(data)

    def get_rendered(self, analysis_id: str) -> str | None:
        path = self._path(analysis_id, ".md")
        if not path.exists():
            return None
        return path.read_bytes().decode("utf-8")

    def save_rendered(self, analysis_id: str, markdown: str) -> None:
        path = self._path(analysis_id, ".md")
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path.write_bytes(markdown.encode("utf-8"))
        Log.info(f"Saved rendered report for analysis {analysis_id}", path=str(path))

    def _path(self, analysis_id: str, suffix: str) -> Path:
        if not _ANALYSIS_ID_RE.match(analysis_id):
            raise AnalysisNotFoundError(f"Analysis not found: {analysis_id}")
        return self._output_dir / f"{analysis_id}{suffix}"
