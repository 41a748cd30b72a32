from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawEntry:
    """One file read out of the uploaded archive."""

    name: str
    data: bytes
    size: int


@dataclass(frozen=True)
class UnpackResult:
    """Entries admitted by the unpacker plus reasons for every skipped entry."""

    entries: list[RawEntry] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def total_size(self) -> int:
        return sum(entry.size for entry in self.entries)
