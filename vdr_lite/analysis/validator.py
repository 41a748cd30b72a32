"""Validates parsed model JSON against the DocumentFinding invariants."""

from typing import Any

from vdr_lite.analysis.exceptions import FindingValidationError
from vdr_lite.analysis.models import DocumentFinding
from vdr_lite.classification.models import Category

MAX_FACTS = 5
MIN_FACTS = 1
MAX_RED_FLAGS = 5
MAX_ITEM_LENGTH = 300
_VALID_CATEGORIES = frozenset(category.value for category in Category)


def validate_finding(data: dict[str, Any]) -> DocumentFinding:
    """Validate raw parsed JSON and build a DocumentFinding.

    Raises:
        FindingValidationError: on any validation failure.
    """
    _require_fields(data)
    doc = _build_doc(data["doc"])
    category = _build_category(data["category"])
    facts = _build_items(data["facts"], "facts", MIN_FACTS, MAX_FACTS)
    red_flags = _build_items(data["red_flags"], "red_flags", 0, MAX_RED_FLAGS)
    return DocumentFinding(doc=doc, category=category, facts=facts, red_flags=red_flags)


def _require_fields(data: dict[str, Any]) -> None:
    for field in ("doc", "category", "facts", "red_flags"):
        if field not in data:
            raise FindingValidationError(f"Missing required field: {field}")


def _build_doc(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise FindingValidationError("'doc' must be a non-empty string")
    return raw


def _build_category(raw: Any) -> Category:
    if not isinstance(raw, str) or raw not in _VALID_CATEGORIES:
        raise FindingValidationError(
            f"'category' must be one of {sorted(_VALID_CATEGORIES)}, got {raw!r}"
        )
    return Category(raw)


def _build_items(raw: Any, name: str, min_items: int, max_items: int) -> list[str]:
    if not isinstance(raw, list):
        raise FindingValidationError(f"'{name}' must be a list")
    if len(raw) < min_items:
        raise FindingValidationError(
            f"'{name}' needs at least {min_items} item(s), got {len(raw)}"
        )
    if len(raw) > max_items:
        raise FindingValidationError(
            f"Too many {name}: {len(raw)} (max {max_items})"
        )
    items: list[str] = []
    for i, item in enumerate(raw):
        if not isinstance(item, str) or not item.strip():
            raise FindingValidationError(f"'{name}' item {i} must be a non-empty string")
        if len(item) > MAX_ITEM_LENGTH:
            raise FindingValidationError(
                f"'{name}' item {i} is {len(item)} chars (max {MAX_ITEM_LENGTH})"
            )
        items.append(item)
    return items
