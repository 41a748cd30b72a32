import uuid
from collections.abc import Callable

from vdr_lite.logging.logger import Log
from vdr_lite.processor.models import AnalysisResult
from vdr_lite.processor.processor import Processor
from vdr_lite.report.markdown_renderer import render_markdown
from vdr_lite.storage.repository import AnalysisRepository

Renderer = Callable[[AnalysisResult], str]


class AnalysisService:
    """Runs analyses, stores them by identifier and exports them as markdown."""

    def __init__(
        self,
        processor: Processor,
        repository: AnalysisRepository,
        renderer: Renderer = render_markdown,
    ) -> None:
        self._processor = processor
        self._repository = repository
        self._renderer = renderer

    async def analyse(self, archive_bytes: bytes) -> tuple[str, AnalysisResult]:
        """Run the pipeline and persist the result under a fresh identifier."""
        analysis_id = uuid.uuid4().hex
        Log.info(f"Starting analysis {analysis_id}", archive_bytes=len(archive_bytes))
        result = await self._processor.run(archive_bytes)
        self._repository.save_analysis(analysis_id, result)
        return analysis_id, result

    def export(self, analysis_id: str) -> str:
        """Return the rendered report, rendering it at most once per identifier.

        Raises:
            AnalysisNotFoundError: if no analysis is stored under `analysis_id`.
        """
        cached = self._repository.get_rendered(analysis_id)
        if cached is not None:
            Log.info(f"Returning cached report for analysis {analysis_id}")
            return cached

        result = self._repository.get_analysis(analysis_id)
        markdown = self._renderer(result)
        self._repository.save_rendered(analysis_id, markdown)
        return markdown
