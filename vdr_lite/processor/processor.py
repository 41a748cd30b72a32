import asyncio

from vdr_lite.analysis.factory import GatewayFactory
from vdr_lite.analysis.gateway import LanguageModelGateway
from vdr_lite.archive.models import RawEntry
from vdr_lite.archive.unpacker import ArchiveUnpacker
from vdr_lite.config import constants
from vdr_lite.config.settings import Settings
from vdr_lite.exceptions import FatalPipelineError
from vdr_lite.extraction.factory import ExtractorFactory
from vdr_lite.logging.logger import Log
from vdr_lite.processor.aggregator import aggregate_findings
from vdr_lite.processor.collector import ResultCollector
from vdr_lite.processor.exceptions import RunTimeoutError
from vdr_lite.processor.models import AnalysisResult, PipelineState, ProcessedFile
from vdr_lite.processor.pipeline import PipelineStep
from vdr_lite.processor.steps import (
    AnalyzeStep,
    ClassifyStep,
    ExtractTextStep,
    ResolveFileTypeStep,
)
from vdr_lite.processor.worker_pool import BoundedWorkerPool
from vdr_lite.retry.policy import RetryPolicy


class Processor:
    """Orchestrates one analysis run over an uploaded archive.

    Pipeline: unpack -> per file (resolve type -> extract -> classify ->
    analyze) -> aggregate -> narrative. Per-file failures become entries in
    `errors`; FatalPipelineError subclasses abort the run.
    """

    def __init__(
        self,
        *,
        unpacker: ArchiveUnpacker,
        steps: list[PipelineStep],
        gateway: LanguageModelGateway,
        retry_policy: RetryPolicy,
        max_concurrent_files: int = constants.MAX_CONCURRENT_FILES,
        total_timeout_seconds: float = constants.TOTAL_TIMEOUT_SECONDS,
    ) -> None:
        self._unpacker = unpacker
        self._steps = steps
        self._gateway = gateway
        self._retry_policy = retry_policy
        self._max_concurrent_files = max_concurrent_files
        self._total_timeout = total_timeout_seconds
        self._state = PipelineState.IDLE

    @property
    def state(self) -> PipelineState:
        return self._state

    async def run(self, archive_bytes: bytes) -> AnalysisResult:
        """Run the full pipeline for one archive.

        Raises:
            ArchiveError: if the archive is unreadable or has no eligible entries.
            RunTimeoutError: if the run exceeds its wall-clock budget.
        """
        try:
            return await asyncio.wait_for(
                self._run(archive_bytes), timeout=self._total_timeout
            )
        except asyncio.TimeoutError as exc:
            self._set_state(PipelineState.FAILED)
            raise RunTimeoutError(
                f"Analysis exceeded the overall time limit of {self._total_timeout}s"
            ) from exc
        except FatalPipelineError as exc:
            self._set_state(PipelineState.FAILED)
            Log.error(f"Analysis run failed: {exc}", kind=exc.kind.value)
            raise
        except Exception as exc:
            self._set_state(PipelineState.FAILED)
            Log.error(f"Analysis run failed unexpectedly: {exc}")
            raise

    async def _run(self, archive_bytes: bytes) -> AnalysisResult:
        self._set_state(PipelineState.UNPACKING)
        unpacked = await asyncio.to_thread(self._unpacker.unpack, archive_bytes)

        self._set_state(PipelineState.PER_FILE_PROCESSING)
        collector = ResultCollector(errors=unpacked.skipped)
        pool = BoundedWorkerPool(self._max_concurrent_files)
        await pool.map(
            lambda entry: self._process_entry(entry, collector), unpacked.entries
        )

        self._set_state(PipelineState.AGGREGATING)
        docs = collector.docs
        errors = collector.errors
        aggregate = aggregate_findings(docs)
        summary_text = ""
        if docs:
            try:
                summary_text = await self._retry_policy.call(
                    lambda: self._gateway.synthesize_narrative(docs),
                    label="summary generation",
                )
            except FatalPipelineError:
                raise
            except Exception as exc:
                Log.warning(f"Summary generation failed, continuing without summary: {exc}")
                errors.append(f"Summary generation failed: {exc}")

        self._set_state(PipelineState.DONE)
        Log.info(
            f"Analysis complete: {len(docs)} documents analyzed",
            errors=len(errors),
            files=len(unpacked.entries),
        )
        return AnalysisResult(
            docs=docs,
            aggregate=aggregate,
            summary_text=summary_text,
            errors=errors,
        )

    async def _process_entry(
        self, entry: RawEntry, collector: ResultCollector
    ) -> ProcessedFile:
        context = ProcessedFile(entry=entry)
        try:
            for step in self._steps:
                context = await step.run(context)
        except FatalPipelineError:
            raise
        except Exception as exc:
            context.error = f"Failed to process {entry.name}: {exc}"
            Log.error(context.error)
            await collector.add_error(context.error)
            return context

        if context.finding is not None:
            await collector.add_finding(context.finding)
        return context

    def _set_state(self, state: PipelineState) -> None:
        self._state = state
        Log.debug(f"Processor state: {state.value}")


def build_processor(
    settings: Settings,
    gateway: LanguageModelGateway | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    gateway = gateway if gateway is not None else GatewayFactory.create(settings)
    retry_policy = RetryPolicy(
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_base_delay_seconds,
        max_delay=settings.retry_max_delay_seconds,
    )
    registry = ExtractorFactory.create(settings)
    return Processor(
        unpacker=ArchiveUnpacker(
            max_file_size=settings.max_file_size_bytes,
            max_files=settings.max_files,
        ),
        steps=[
            ResolveFileTypeStep(),
            ExtractTextStep(registry),
            ClassifyStep(),
            AnalyzeStep(gateway, retry_policy),
        ],
        gateway=gateway,
        retry_policy=retry_policy,
        max_concurrent_files=settings.max_concurrent_files,
        total_timeout_seconds=settings.total_timeout_seconds,
    )
