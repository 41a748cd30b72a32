from collections.abc import Iterable

from vdr_lite.analysis.models import DocumentFinding
from vdr_lite.classification.models import Category
from vdr_lite.processor.models import Aggregate, AggregateCounts


def create_empty_aggregate() -> Aggregate:
    """Zeroed counts for every category."""
    return {category: AggregateCounts() for category in Category}


def aggregate_findings(findings: Iterable[DocumentFinding]) -> Aggregate:
    """Sum fact and red-flag counts per the category each finding reports."""
    aggregate = create_empty_aggregate()
    for finding in findings:
        current = aggregate[finding.category]
        aggregate[finding.category] = AggregateCounts(
            facts=current.facts + len(finding.facts),
            red_flags=current.red_flags + len(finding.red_flags),
        )
    return aggregate
