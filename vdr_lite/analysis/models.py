from dataclasses import dataclass, field

from vdr_lite.classification.models import Category


@dataclass(frozen=True)
class DocumentFinding:
    """Facts and red flags the model distilled from one document."""

    doc: str
    category: Category
    facts: list[str] = field(default_factory=list)
    red_flags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "doc": self.doc,
            "category": self.category.value,
            "facts": list(self.facts),
            "red_flags": list(self.red_flags),
        }
