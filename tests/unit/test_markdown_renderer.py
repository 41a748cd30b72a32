from datetime import date

from vdr_lite.analysis.models import DocumentFinding
from vdr_lite.classification.models import Category
from vdr_lite.processor.aggregator import aggregate_findings
from vdr_lite.processor.models import AnalysisResult
from vdr_lite.report.markdown_renderer import SUMMARY_WORD_CEILING, render_markdown

TODAY = date(2026, 3, 14)


def _result(
    docs: list[DocumentFinding] | None = None,
    summary_text: str = "Short summary.",
    errors: list[str] | None = None,
) -> AnalysisResult:
    docs = docs or []
    return AnalysisResult(
        docs=docs,
        aggregate=aggregate_findings(docs),
        summary_text=summary_text,
        errors=errors or [],
    )


class TestRenderMarkdown:
    def test_header_uses_given_date(self) -> None:
        output = render_markdown(_result(), today=TODAY)
        assert output.startswith("# VDR Lite - Diligence Summary\n_Date: 2026-03-14_\n")

    def test_sections_in_order(self) -> None:
        output = render_markdown(_result(), today=TODAY)
        positions = [
            output.index(heading)
            for heading in ("## Summary", "## Aggregate", "## Documents", "## Needs review")
        ]
        assert positions == sorted(positions)
        assert output.endswith("\n")

    def test_aggregate_table_order_and_counts(self) -> None:
        docs = [
            DocumentFinding(
                doc="a.pdf", category=Category.LEGAL, facts=["f1", "f2"], red_flags=["r"]
            ),
            DocumentFinding(doc="b.pdf", category=Category.OTHER, facts=["f"], red_flags=[]),
        ]
        output = render_markdown(_result(docs), today=TODAY)
        rows = [line for line in output.splitlines() if line.startswith("| ") and "Category" not in line]
        assert rows == [
            "| Financial | 0 | 0 |",
            "| Legal | 2 | 1 |",
            "| Operations | 0 | 0 |",
            "| Commercial | 0 | 0 |",
            "| Other | 1 | 0 |",
        ]

    def test_documents_are_numbered_with_placeholders(self) -> None:
        docs = [
            DocumentFinding(doc="nda.docx", category=Category.LEGAL, facts=["Signed 2021"]),
            DocumentFinding(
                doc="p&l.xlsx", category=Category.FINANCIAL, red_flags=["Losses in Q4"]
            ),
        ]
        output = render_markdown(_result(docs), today=TODAY)
        assert "### 1) nda.docx _(legal)_\n**Facts**\n- Signed 2021\n\n**Red flags**\n_No red flags identified._" in output
        assert "### 2) p&l.xlsx _(financial)_\n**Facts**\n_No facts identified._\n\n**Red flags**\n- Losses in Q4" in output

    def test_no_documents_placeholder(self) -> None:
        output = render_markdown(_result(), today=TODAY)
        assert "## Documents\n\n_No documents analyzed._" in output

    def test_needs_review_lists_errors(self) -> None:
        output = render_markdown(
            _result(errors=["Failed to process x.exe: Unsupported file type: exe"]), today=TODAY
        )
        assert output.endswith(
            "## Needs review\n\n- Failed to process x.exe: Unsupported file type: exe\n"
        )

    def test_needs_review_placeholder(self) -> None:
        output = render_markdown(_result(), today=TODAY)
        assert output.endswith("## Needs review\n\n_All documents processed successfully._\n")

    def test_long_summary_is_truncated(self) -> None:
        summary = " ".join(f"w{i}" for i in range(SUMMARY_WORD_CEILING + 100))
        output = render_markdown(_result(summary_text=summary), today=TODAY)
        summary_section = output.split("## Summary\n\n", 1)[1].split("\n\n## Aggregate", 1)[0]
        assert len(summary_section.split()) == SUMMARY_WORD_CEILING
        assert summary_section.endswith(f"w{SUMMARY_WORD_CEILING - 1}")

    def test_summary_within_ceiling_is_kept(self) -> None:
        output = render_markdown(_result(summary_text="  Kept as is.  "), today=TODAY)
        assert "## Summary\n\nKept as is.\n\n## Aggregate" in output

    def test_is_deterministic(self) -> None:
        docs = [DocumentFinding(doc="a.txt", category=Category.OTHER, facts=["f"])]
        result = _result(docs, errors=["e"])
        assert render_markdown(result, today=TODAY) == render_markdown(result, today=TODAY)

    def test_does_not_mutate_result(self) -> None:
        docs = [DocumentFinding(doc="a.txt", category=Category.OTHER, facts=["f"])]
        result = _result(docs, errors=["e"])
        render_markdown(result, today=TODAY)
        assert result.docs[0].facts == ["f"]
        assert result.errors == ["e"]
