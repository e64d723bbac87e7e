"""Split raw bibliography text into part-owned sections."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from blakebib.extraction.models import Section
from blakebib.taxonomy.parts import DEFAULT_BODY_PART, NUMBERED_PARTS, resolve_part_marker

logger = logging.getLogger(__name__)

MIN_SECTION_CHARS = 100

# "PART IV. BIOGRAPHIES" at the start of a line; the title must end on a word
# boundary so a following mixed-case subheading is not swallowed.
PART_MARKER_RE = re.compile(
    r"^[ \t]*(PART[ \t]+[IVX]+\.[ \t]+[A-Z][A-Z ,'’]*[A-Z'’](?![A-Za-z]))",
    re.MULTILINE,
)


@dataclass(slots=True)
class Fragment:
    """Piece of the raw text between (or at) part markers."""

    text: str
    start: int
    is_header: bool
    header_part: str | None = None


@dataclass(slots=True)
class Segmentation:
    sections: list[Section]
    fragments_seen: int


def iter_fragments(text: str) -> list[Fragment]:
    """Cut *text* at every part marker, keeping markers as header fragments."""

    fragments: list[Fragment] = []
    cursor = 0

    for match in PART_MARKER_RE.finditer(text):
        if match.start() > cursor:
            fragments.append(Fragment(text=text[cursor : match.start()], start=cursor, is_header=False))
        marker = match.group(1).strip()
        fragments.append(
            Fragment(
                text=marker,
                start=match.start(1),
                is_header=True,
                header_part=resolve_part_marker(marker),
            )
        )
        cursor = match.end()

    if cursor < len(text):
        fragments.append(Fragment(text=text[cursor:], start=cursor, is_header=False))
    return fragments


def explicit_part(text: str) -> str | None:
    """Return the first numbered part whose full name appears verbatim in *text*."""

    for part in NUMBERED_PARTS:
        if part in text:
            return part
    return None


def infer_part(text: str, previous_part: str | None) -> str:
    """Owning part for a body fragment: explicit name, then predecessor, then default."""

    return explicit_part(text) or previous_part or DEFAULT_BODY_PART


def segment(text: str, *, min_chars: int = MIN_SECTION_CHARS) -> Segmentation:
    """Split *text* into body sections, each tagged with its owning part.

    Header fragments only carry their part forward to the next body fragment.
    Body fragments shorter than *min_chars* are dropped outright.
    """
    sections: list[Section] = []
    fragments = iter_fragments(text)
    previous_part: str | None = None

    for fragment in fragments:
        if fragment.is_header:
            if fragment.header_part is not None:
                previous_part = fragment.header_part
            continue

        if len(fragment.text.strip()) < min_chars:
            logger.debug("Skipping short fragment at offset %d (%d chars)", fragment.start, len(fragment.text.strip()))
            continue

        part = infer_part(fragment.text, previous_part)
        sections.append(Section(text=fragment.text, part=part, index=len(sections), start=fragment.start))
        previous_part = part

    return Segmentation(sections=sections, fragments_seen=len(fragments))


def part_at_offset(text: str, offset: int) -> str:
    """Return the part owning the raw-text position *offset*."""

    owner = DEFAULT_BODY_PART
    for match in PART_MARKER_RE.finditer(text):
        if match.start(1) > offset:
            break
        resolved = resolve_part_marker(match.group(1))
        if resolved is not None:
            owner = resolved
    return owner
