import asyncio

from vdr_lite.analysis.models import DocumentFinding


class ResultCollector:
    """Shared sink for findings and error notes written by concurrent per-file tasks."""

    def __init__(self, errors: list[str] | None = None) -> None:
        self._lock = asyncio.Lock()
        self._docs: list[DocumentFinding] = []
        self._errors: list[str] = list(errors or [])

    async def add_finding(self, finding: DocumentFinding) -> None:
        async with self._lock:
            self._docs.append(finding)

    async def add_error(self, error: str) -> None:
        async with self._lock:
            self._errors.append(error)

    @property
    def docs(self) -> list[DocumentFinding]:
        return list(self._docs)

    @property
    def errors(self) -> list[str]:
        return list(self._errors)
