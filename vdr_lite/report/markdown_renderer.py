"""Markdown rendering of a finished AnalysisResult."""

from datetime import date

from vdr_lite.analysis.models import DocumentFinding
from vdr_lite.classification.models import Category
from vdr_lite.processor.models import Aggregate, AnalysisResult

SUMMARY_WORD_CEILING = 550

# Display order differs from the classifier's priority order.
TABLE_ORDER: tuple[Category, ...] = (
    Category.FINANCIAL,
    Category.LEGAL,
    Category.OPERATIONS,
    Category.COMMERCIAL,
    Category.OTHER,
)


def render_markdown(result: AnalysisResult, today: date | None = None) -> str:
    """Render the diligence report. Pure: no I/O, no mutation of `result`."""
    sections = [
        _render_header(today or date.today()),
        _render_summary(result.summary_text),
        _render_aggregate_table(result.aggregate),
        _render_documents(result.docs),
        _render_needs_review(result.errors),
    ]
    return "\n\n".join(sections) + "\n"


def _render_header(today: date) -> str:
    return f"# VDR Lite - Diligence Summary\n_Date: {today.isoformat()}_"


def _render_summary(summary_text: str) -> str:
    words = summary_text.split()
    if len(words) > SUMMARY_WORD_CEILING:
        summary = " ".join(words[:SUMMARY_WORD_CEILING])
    else:
        summary = summary_text.strip()
    return f"## Summary\n\n{summary}"


def _render_aggregate_table(aggregate: Aggregate) -> str:
    rows = [
        "| Category | Facts | Red flags |",
        "|----------|------:|----------:|",
    ]
    for category in TABLE_ORDER:
        counts = aggregate.get(category)
        facts = counts.facts if counts else 0
        red_flags = counts.red_flags if counts else 0
        rows.append(f"| {category.value.capitalize()} | {facts} | {red_flags} |")
    return "## Aggregate\n\n" + "\n".join(rows)


def _render_documents(docs: list[DocumentFinding]) -> str:
    if not docs:
        return "## Documents\n\n_No documents analyzed._"

    sections = []
    for index, doc in enumerate(docs, start=1):
        facts = _bullets(doc.facts, "_No facts identified._")
        red_flags = _bullets(doc.red_flags, "_No red flags identified._")
        sections.append(
            f"### {index}) {doc.doc} _({doc.category.value})_\n"
            f"**Facts**\n{facts}\n\n"
            f"**Red flags**\n{red_flags}"
        )
    return "## Documents\n\n" + "\n\n".join(sections)


def _render_needs_review(errors: list[str]) -> str:
    if not errors:
        return "## Needs review\n\n_All documents processed successfully._"
    return "## Needs review\n\n" + _bullets(errors, "")


def _bullets(items: list[str], placeholder: str) -> str:
    if not items:
        return placeholder
    return "\n".join(f"- {item}" for item in items)
