import asyncio

from vdr_lite.analysis.gateway import LanguageModelGateway
from vdr_lite.classification.classifier import classify_document
from vdr_lite.extraction.file_types import resolve_file_type
from vdr_lite.extraction.registry import ExtractorRegistry
from vdr_lite.logging.logger import Log
from vdr_lite.processor.exceptions import ProcessorError
from vdr_lite.processor.models import ProcessedFile
from vdr_lite.processor.pipeline import PipelineStep
from vdr_lite.retry.policy import RetryPolicy


class ResolveFileTypeStep(PipelineStep):
    async def run(self, context: ProcessedFile) -> ProcessedFile:
        context.file_type = resolve_file_type(context.entry.name, context.entry.data)
        Log.debug(f"Resolved {context.entry.name} as {context.file_type}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, registry: ExtractorRegistry) -> None:
        self._registry = registry

    async def run(self, context: ProcessedFile) -> ProcessedFile:
        if not context.file_type:
            raise ProcessorError("ProcessedFile.file_type must be set before extraction")
        context.extraction = await asyncio.to_thread(
            self._registry.extract, context.entry.data, context.file_type
        )
        Log.info(
            f"Extracted {len(context.extraction.text)} chars from {context.entry.name}",
            original_length=context.extraction.original_length,
            truncated=context.extraction.truncated,
        )
        return context


class ClassifyStep(PipelineStep):
    async def run(self, context: ProcessedFile) -> ProcessedFile:
        if context.extraction is None:
            raise ProcessorError("ProcessedFile.extraction must be set before classification")
        context.category = classify_document(context.entry.name, context.extraction.text)
        Log.info(f"Advisory category for {context.entry.name}: {context.category.value}")
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, gateway: LanguageModelGateway, retry_policy: RetryPolicy) -> None:
        self._gateway = gateway
        self._retry_policy = retry_policy

    async def run(self, context: ProcessedFile) -> ProcessedFile:
        if context.extraction is None:
            raise ProcessorError("ProcessedFile.extraction must be set before analysis")
        extraction = context.extraction
        context.finding = await self._retry_policy.call(
            lambda: self._gateway.analyze_document(
                context.entry.name, context.category, extraction.text
            ),
            label=f"analysis of {context.entry.name}",
        )
        Log.info(
            f"Analyzed {context.entry.name}: {len(context.finding.facts)} facts, "
            f"{len(context.finding.red_flags)} red flags",
            category=context.finding.category.value,
        )
        return context
