"""Static catalog of bibliography parts and their curated subheadings.

The part order mirrors the document structure of the printed bibliography and
is therefore semantic: callers iterate ``CANONICAL_PARTS`` whenever an ordered
walk over the document is needed.
"""

from __future__ import annotations

import re

INTRODUCTION = "INTRODUCTION"

CANONICAL_PARTS: tuple[str, ...] = (
    INTRODUCTION,
    "PART I. TEACHING WILLIAM BLAKE",
    "PART II. GENERAL INTRODUCTIONS, HANDBOOKS, GLOSSARIES, AND CLASSIC STUDIES",
    "PART III. EDITIONS OF BLAKE'S WRITING",
    "PART IV. BIOGRAPHIES",
    "PART V. BIBLIOGRAPHIES",
    "PART VI. CATALOGUES",
    "PART VII. STUDIES OF BLAKE ARRANGED BY SUBJECT",
    "PART VIII. SPECIFIC WORKS BY BLAKE",
    "PART IX. COLLECTIONS OF ESSAYS ON BLAKE PUBLISHED",
    "PART X. APPENDICES",
)

# Body text never belongs to the introduction pseudo-part.
NUMBERED_PARTS: tuple[str, ...] = CANONICAL_PARTS[1:]
DEFAULT_BODY_PART = NUMBERED_PARTS[0]
DEFAULT_SUBHEADING = "General"

INTRODUCTION_SUBHEADINGS: tuple[str, ...] = (
    "Prefatory Material",
    "Table of Contents",
    "Guidelines",
    "Digital Resources",
    "Citations, Annotations, and Links",
    "Different Blake Journals",
)

KNOWN_SUBHEADINGS: dict[str, tuple[str, ...]] = {
    "PART I. TEACHING WILLIAM BLAKE": (
        "Citations, Annotations, and Links",
        "A Note on Specialized Terms for Researchers New to William Blake",
        "Different Blake Journals",
    ),
    "PART II. GENERAL INTRODUCTIONS, HANDBOOKS, GLOSSARIES, AND CLASSIC STUDIES": (
        "General Introductions, Handbooks, and Glossaries",
        "Classic Studies Published Before 2000",
    ),
    "PART III. EDITIONS OF BLAKE'S WRITING": (
        "Standard Editions",
        "Annotated Editions of Collected or Selected Writings",
        "Facsimiles and Reproductions of the Illuminated Books",
        "Digital Editions",
    ),
    "PART IV. BIOGRAPHIES": (
        "Brief Introductions",
        "Portraits",
        "Standard Biographies",
        "Books, Chapters, and Articles with Substantial Biographical Information",
        "Historic Biographies",
        "Popular Biographies",
        "Catherine Blake",
        "On Writing Blake's Biography",
        "Blake and Members of His Circle",
    ),
    "PART V. BIBLIOGRAPHIES": (
        "Standard Bibliographies",
        "Books and Essays with Substantial Bibliographic Content",
        "Bibliographies of Exhibitions",
        "Bibliographies of Musical Settings",
        "Annotated Bibliographies",
        "Historic Bibliographies",
    ),
    "PART VI. CATALOGUES": (
        "Standard Catalogues",
        "Historic Standard Catalogues",
        "Current Collections: Digital Collections, Collection Catalogues",
        "Major Exhibition and Sale Catalogues",
    ),
    "PART VII. STUDIES OF BLAKE ARRANGED BY SUBJECT": (
        "Bible and Religion",
        "History and Politics",
        "Philosophy",
        "Science and Medicine",
        "Aesthetics",
        "Gender and Sexuality",
        "Race and Empire",
        "Art Criticism and Art History",
        "Literary Criticism and Poetics",
        "Myth and Symbolism",
    ),
    "PART VIII. SPECIFIC WORKS BY BLAKE": (
        "Songs of Innocence and of Experience",
        "The Marriage of Heaven and Hell",
        "The Four Zoas",
        "Milton",
        "Jerusalem",
    ),
}

_PART_NUMERAL_RE = re.compile(r"^PART\s+([IVX]+)\.")

_PARTS_BY_NUMERAL: dict[str, str] = {}
for _part in NUMBERED_PARTS:
    _match = _PART_NUMERAL_RE.match(_part)
    if _match:
        _PARTS_BY_NUMERAL[_match.group(1)] = _part


def initial_subheadings(part: str) -> tuple[str, ...]:
    """Return the subheadings a part starts with before any discovery."""

    if part == INTRODUCTION:
        return INTRODUCTION_SUBHEADINGS
    return ()


def known_subheadings(part: str) -> tuple[str, ...]:
    """Return the hand-curated subheading supplement for *part* (may be empty)."""

    return KNOWN_SUBHEADINGS.get(part, ())


def first_known_subheading(part: str) -> str:
    if part == INTRODUCTION:
        return INTRODUCTION_SUBHEADINGS[0]
    known = KNOWN_SUBHEADINGS.get(part)
    return known[0] if known else DEFAULT_SUBHEADING


def part_for_numeral(numeral: str) -> str | None:
    """Map a Roman numeral such as ``"IV"`` to its canonical part name."""

    return _PARTS_BY_NUMERAL.get(numeral.strip().upper())


def resolve_part_marker(marker: str) -> str | None:
    """Resolve a raw ``PART <numeral>. TITLE`` marker to a canonical part name."""

    match = _PART_NUMERAL_RE.match(marker.strip())
    if not match:
        return None
    return part_for_numeral(match.group(1))


def is_canonical_part(name: str) -> bool:
    return name in CANONICAL_PARTS
