"""Subheading discovery within a section."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re

from blakebib.extraction.models import Section, SubheadingMap
from blakebib.taxonomy.parts import first_known_subheading

logger = logging.getLogger(__name__)

# A whole line of letters, spaces and commas starting uppercase, optionally
# followed by a page number, and terminated by a line break.
LABEL_LINE_RE = re.compile(
    r"^[ \t]*([A-Z][A-Za-z ,]*?)(?:[ \t]+\d+)?[ \t]*(?=\r?\n)",
    re.MULTILINE,
)
_ROMAN_ONLY_RE = re.compile(r"^[IVXLCDM]+$")
_DIGITS_ONLY_RE = re.compile(r"^\d+$")
_EXCLUDED_TOKENS = ("PART", "APPENDIX")

MIN_LABEL_CHARS = 5
MAX_LABEL_WORDS = 8


@dataclass(slots=True)
class LabelHit:
    offset: int
    label: str


@dataclass(slots=True)
class SubheadingScan:
    """Subheading labels found in one section plus its default subheading."""

    default: str
    hits: list[LabelHit] = field(default_factory=list)

    def subheading_at(self, offset: int) -> str:
        """Nearest label line at or before *offset*, else the section default."""

        current = self.default
        for hit in self.hits:
            if hit.offset > offset:
                break
            current = hit.label
        return current


def is_subheading_candidate(label: str) -> bool:
    if len(label) < MIN_LABEL_CHARS:
        return False
    if len(label.split()) > MAX_LABEL_WORDS:
        return False
    if any(token in label for token in _EXCLUDED_TOKENS):
        return False
    if _ROMAN_ONLY_RE.match(label) or _DIGITS_ONLY_RE.match(label):
        return False
    return True


def find_label_lines(text: str) -> list[LabelHit]:
    hits: list[LabelHit] = []
    for match in LABEL_LINE_RE.finditer(text):
        label = match.group(1).strip().rstrip(",").strip()
        if is_subheading_candidate(label):
            hits.append(LabelHit(offset=match.start(1), label=label))
    return hits


def choose_default_subheading(section_text: str, part: str, subheadings: SubheadingMap) -> str:
    """First subheading of *part* that occurs in the section, else the part's first known one."""

    for label in subheadings.labels(part):
        if label in section_text:
            return label
    return first_known_subheading(part)


def discover_subheadings(section: Section, subheadings: SubheadingMap) -> SubheadingScan:
    """Merge the section's label lines into *subheadings* and pick its default.

    The map is updated in place (append-if-absent).
    """
    hits = find_label_lines(section.text)
    added = 0
    for hit in hits:
        if subheadings.add(section.part, hit.label):
            added += 1

    if added:
        logger.debug("Section %d (%s): %d new subheadings", section.index, section.part, added)

    default = choose_default_subheading(section.text, section.part, subheadings)
    return SubheadingScan(default=default, hits=hits)
