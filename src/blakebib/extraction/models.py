"""Canonical data structures shared by the extraction and fallback stages."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from blakebib.taxonomy.parts import CANONICAL_PARTS, initial_subheadings


@dataclass(frozen=True, slots=True)
class Record:
    """One bibliographic entry emitted by the pipeline."""

    id: str
    title: str
    authors: str
    year: str
    publication: str
    content: str
    category: str
    chapter: str | None = None
    subheading: str | None = None

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.title, self.authors, self.year)

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)


@dataclass(slots=True)
class RawFields:
    """Field values produced by one extraction rule before normalization."""

    author: str
    title: str
    publication: str = ""
    year: str | None = None


@dataclass(slots=True)
class Section:
    """Contiguous text span awaiting extraction, with its inferred owner part."""

    text: str
    part: str
    index: int
    start: int = 0


class SubheadingMap:
    """Ordered, duplicate-free subheading labels per canonical part.

    Every canonical part is present from construction on. Labels are only
    ever appended (``add``/``merge`` are idempotent); ``freeze`` hands out an
    immutable snapshot once the pipeline is done with the map.
    """

    def __init__(self, initial: dict[str, tuple[str, ...] | list[str]] | None = None) -> None:
        self._labels: dict[str, list[str]] = {part: [] for part in CANONICAL_PARTS}
        for part, labels in (initial or {}).items():
            for label in labels:
                if label not in self._labels.setdefault(part, []):
                    self._labels[part].append(label)
        self._revision = 0

    @classmethod
    def from_taxonomy(cls) -> "SubheadingMap":
        return cls({part: initial_subheadings(part) for part in CANONICAL_PARTS})

    @property
    def revision(self) -> int:
        """Number of labels appended since construction."""

        return self._revision

    def add(self, part: str, label: str) -> bool:
        """Append *label* under *part* unless already present (exact match)."""

        labels = self._labels.setdefault(part, [])
        if label in labels:
            return False
        labels.append(label)
        self._revision += 1
        return True

    def merge(self, part: str, labels: tuple[str, ...] | list[str]) -> int:
        return sum(1 for label in labels if self.add(part, label))

    def labels(self, part: str) -> tuple[str, ...]:
        return tuple(self._labels.get(part, ()))

    def freeze(self) -> dict[str, tuple[str, ...]]:
        return {part: tuple(labels) for part, labels in self._labels.items()}


@dataclass(slots=True)
class ExtractionStats:
    """Counters describing how the final record list was assembled."""

    sections_seen: int = 0
    sections_retained: int = 0
    extracted: int = 0
    introduction: int = 0
    part_rescan: int = 0
    loose_citations: int = 0
    remaining_paragraphs: int = 0
    generated: int = 0
    fallback_path: str = "none"

    def to_dict(self) -> dict[str, int | str]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Final pipeline output: records plus the frozen subheading map."""

    entries: list[Record]
    subheadings: dict[str, tuple[str, ...]]
    stats: ExtractionStats = field(default_factory=ExtractionStats)

    def to_dict(self) -> dict[str, object]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "subheadings": {part: list(labels) for part, labels in self.subheadings.items()},
            "stats": self.stats.to_dict(),
        }
