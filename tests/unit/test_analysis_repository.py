import json
from pathlib import Path

import pytest

from vdr_lite.analysis.models import DocumentFinding
from vdr_lite.classification.models import Category
from vdr_lite.processor.aggregator import aggregate_findings
from vdr_lite.processor.models import AggregateCounts, AnalysisResult
from vdr_lite.storage.exceptions import AnalysisNotFoundError, CorruptAnalysisError
from vdr_lite.storage.repository import LocalAnalysisRepository
from vdr_lite.storage.serialization import result_from_dict, result_to_dict


def _result() -> AnalysisResult:
    docs = [
        DocumentFinding(
            doc="contracts/nda.pdf",
            category=Category.LEGAL,
            facts=["Mutual NDA"],
            red_flags=["Expired in 2022"],
        ),
    ]
    return AnalysisResult(
        docs=docs,
        aggregate=aggregate_findings(docs),
        summary_text="Overall fine.",
        errors=["Failed to process x.exe: Unsupported file type: exe"],
    )


class TestSerialization:
    def test_uses_camel_case_top_level_keys(self) -> None:
        data = result_to_dict(_result())
        assert set(data) == {"docs", "aggregate", "summaryText", "errors"}
        assert data["aggregate"]["legal"] == {"facts": 1, "red_flags": 1}
        assert data["docs"][0]["red_flags"] == ["Expired in 2022"]

    def test_round_trip(self) -> None:
        result = _result()
        assert result_from_dict(result_to_dict(result)) == result

    def test_missing_key_is_corrupt(self) -> None:
        data = result_to_dict(_result())
        del data["summaryText"]
        with pytest.raises(CorruptAnalysisError):
            result_from_dict(data)

    def test_unknown_category_is_corrupt(self) -> None:
        data = result_to_dict(_result())
        data["docs"][0]["category"] = "hr"
        with pytest.raises(CorruptAnalysisError):
            result_from_dict(data)

    def test_missing_aggregate_categories_default_to_zero(self) -> None:
        data = result_to_dict(_result())
        data["aggregate"] = {"legal": {"facts": 1, "red_flags": 1}}
        restored = result_from_dict(data)
        assert restored.aggregate[Category.FINANCIAL] == AggregateCounts()


class TestLocalAnalysisRepository:
    def test_save_and_get(self, tmp_path: Path) -> None:
        repository = LocalAnalysisRepository(tmp_path)
        repository.save_analysis("abc123", _result())
        assert repository.get_analysis("abc123") == _result()

    def test_writes_readable_json(self, tmp_path: Path) -> None:
        repository = LocalAnalysisRepository(tmp_path / "nested")
        repository.save_analysis("abc123", _result())
        data = json.loads((tmp_path / "nested" / "abc123.json").read_text(encoding="utf-8"))
        assert data["summaryText"] == "Overall fine."

    def test_unknown_id(self, tmp_path: Path) -> None:
        with pytest.raises(AnalysisNotFoundError):
            LocalAnalysisRepository(tmp_path).get_analysis("missing")

    @pytest.mark.parametrize("analysis_id", ["../escape", "a/b", "", "id.json"])
    def test_rejects_unsafe_ids(self, tmp_path: Path, analysis_id: str) -> None:
        with pytest.raises(AnalysisNotFoundError):
            LocalAnalysisRepository(tmp_path).get_analysis(analysis_id)

    def test_corrupt_file(self, tmp_path: Path) -> None:
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptAnalysisError):
            LocalAnalysisRepository(tmp_path).get_analysis("broken")

    def test_rendered_cache(self, tmp_path: Path) -> None:
        repository = LocalAnalysisRepository(tmp_path)
        assert repository.get_rendered("abc123") is None
        repository.save_rendered("abc123", "# Report\n")
        assert repository.get_rendered("abc123") == "# Report\n"
        assert (tmp_path / "abc123.md").read_bytes() == b"# Report\n"
