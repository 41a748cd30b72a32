from dataclasses import dataclass, field
from enum import Enum

from vdr_lite.analysis.models import DocumentFinding
from vdr_lite.archive.models import RawEntry
from vdr_lite.classification.models import Category
from vdr_lite.extraction.models import ExtractionResult


class PipelineState(str, Enum):
    """Run-level state of the processor."""

    IDLE = "idle"
    UNPACKING = "unpacking"
    PER_FILE_PROCESSING = "per_file_processing"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class AggregateCounts:
    facts: int = 0
    red_flags: int = 0


Aggregate = dict[Category, AggregateCounts]


@dataclass(frozen=True)
class AnalysisResult:
    """Terminal artifact of one pipeline run."""

    docs: list[DocumentFinding]
    aggregate: Aggregate
    summary_text: str
    errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ProcessedFile:
    """Accumulates data as one archive entry moves through the per-file steps."""

    entry: RawEntry
    file_type: str = ""
    extraction: ExtractionResult | None = None
    category: Category = Category.OTHER
    finding: DocumentFinding | None = None
    error: str = ""
