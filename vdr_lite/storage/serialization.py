"""Wire format of a stored AnalysisResult.

Keys are camelCase (`docs`, `aggregate`, `summaryText`, `errors`); finding
and count fields keep their snake_case names.
"""

from typing import Any

from vdr_lite.analysis.models import DocumentFinding
from vdr_lite.classification.models import Category
from vdr_lite.processor.aggregator import create_empty_aggregate
from vdr_lite.processor.models import AggregateCounts, AnalysisResult
from vdr_lite.storage.exceptions import CorruptAnalysisError


def result_to_dict(result: AnalysisResult) -> dict[str, Any]:
    return {
        "docs": [finding.to_dict() for finding in result.docs],
        "aggregate": {
            category.value: {"facts": counts.facts, "red_flags": counts.red_flags}
            for category, counts in result.aggregate.items()
        },
        "summaryText": result.summary_text,
        "errors": list(result.errors),
    }


def result_from_dict(data: dict[str, Any]) -> AnalysisResult:
    """Rebuild an AnalysisResult from its stored form.

    Raises:
        CorruptAnalysisError: if a required key is missing or malformed.
    """
    try:
        docs = [
            DocumentFinding(
                doc=str(item["doc"]),
                category=Category(item["category"]),
                facts=[str(fact) for fact in item["facts"]],
                red_flags=[str(flag) for flag in item["red_flags"]],
            )
            for item in data["docs"]
        ]
        aggregate = create_empty_aggregate()
        for key, counts in data["aggregate"].items():
            aggregate[Category(key)] = AggregateCounts(
                facts=int(counts["facts"]),
                red_flags=int(counts["red_flags"]),
            )
        return AnalysisResult(
            docs=docs,
            aggregate=aggregate,
            summary_text=str(data["summaryText"]),
            errors=[str(error) for error in data["errors"]],
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise CorruptAnalysisError(f"Stored analysis is malformed: {exc}") from exc
