"""Citation-shape rules used by the entry extractor.

Each rule pairs a compiled pattern with the function that maps a match to
raw record fields. Rules are tried in the order of ``CITATION_RULES``; the
order encodes specificity (most structured shapes first), not preference
between overlapping matches, which are left to the deduplicator.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable

from blakebib.extraction.models import RawFields
from blakebib.extraction.normalization import scan_year

_YEAR = r"(?:1[6-9]|20)\d{2}"
_OPEN_QUOTE = "\"“"
_CLOSE_QUOTE = "\"”"
_ANY_QUOTE = "\"“”"

FieldMapper = Callable[[re.Match[str]], "RawFields | None"]


@dataclass(frozen=True, slots=True)
class CitationRule:
    name: str
    pattern: re.Pattern[str]
    mapper: FieldMapper


def _group(match: re.Match[str], name: str) -> str:
    try:
        value = match.group(name)
    except IndexError:
        return ""
    return (value or "").strip()


def map_citation_code(match: re.Match[str]) -> RawFields | None:
    """``Author <BBS 123> Title``: the bracketed code is the publication."""

    return RawFields(
        author=_group(match, "author") or "Unknown",
        title=_group(match, "title") or "Unknown",
        publication=_group(match, "code"),
        year=scan_year(match.group(0)),
    )


def map_quoted_title(match: re.Match[str]) -> RawFields | None:
    """Quoted text is the title; the lead-in is the author, the tail the publication.

    When nothing precedes the quotes (``"Title". Author. Place, Year.``) the
    first sentence of the tail names the author instead.
    """
    title = _group(match, "title")
    lead = _group(match, "lead").strip(" .,;:")
    tail = _group(match, "tail").strip(" .,;:")

    author = lead
    publication = tail
    if not author and tail:
        head, separator, rest = tail.partition(". ")
        author = head.strip(" .,;:")
        publication = rest.strip(" .,;:") if separator else ""

    return RawFields(
        author=author or "Unknown Author",
        title=title or "Unknown",
        publication=publication,
        year=scan_year(match.group(0)),
    )


def map_positional(match: re.Match[str]) -> RawFields | None:
    """Group 1 is the author, group 2 the title, group 3 the publication.

    A year is only taken from the publication group; without one the record
    falls back to the current-year placeholder.
    """
    groups = match.groups()
    author = (groups[0] or "").strip() if len(groups) > 0 else ""
    title = (groups[1] or "").strip() if len(groups) > 1 else ""
    publication = (groups[2] or "").strip() if len(groups) > 2 else ""

    return RawFields(
        author=author or "Unknown",
        title=title or "Unknown",
        publication=publication,
        year=scan_year(publication) if publication else None,
    )


def map_year_leading(match: re.Match[str]) -> RawFields | None:
    return RawFields(
        author=_group(match, "author") or "Unknown",
        title=_group(match, "title") or "Unknown",
        publication="",
        year=_group(match, "year") or None,
    )


# Smith, J. and R. Jones. Title of Work. London: Publisher, 1990.
AUTHOR_YEAR_RE = re.compile(
    r"([A-Z][a-z]+(?:,?\s+[A-Z]\.(?:\s*[A-Z]\.)*|\s+[A-Z][a-z]+)"
    r"(?:,\s|\sand\s|,\sand\s|\s&\s)[A-Za-z\s,.]+?)"
    rf"(?:\.\s+|\s+)[{_OPEN_QUOTE}]?([^{_ANY_QUOTE}.\n]+)[{_CLOSE_QUOTE}]?\."
    rf"([^.]+{_YEAR}[^.]*\.)"
)

# Frye, Northrop. "Fearful Symmetry." Princeton, 1947.   /   "Title". Author. Place, 1947.
QUOTED_TITLE_RE = re.compile(
    rf"(?P<lead>[^{_ANY_QUOTE}\n]{{0,120}}?)[{_OPEN_QUOTE}](?P<title>[^{_ANY_QUOTE}\n]{{2,200}})[{_CLOSE_QUOTE}]"
    rf"(?P<tail>[^{_ANY_QUOTE}\n]*?\b{_YEAR}\b\.?)"
)

# Bentley <BB 123> Blake Books
CITATION_CODE_RE = re.compile(r"(?P<author>[^\n<.]{1,200}?)\s*<(?P<code>[A-Z]+\s*[^>]+)>(?P<title>[^\n<]+)")

# Erdman, Prophet Against Empire 1954
BARE_AUTHOR_YEAR_RE = re.compile(rf"([A-Z][a-z]+)(?:,\s|\s)([A-Za-z\s,.]+?)(?:\.\s+|\s+)({_YEAR})\b")

# 1969. Bloom, H. "Blake's Apocalypse"
YEAR_LEADING_RE = re.compile(
    rf"(?P<year>{_YEAR})\.?\s+(?P<author>[A-Z][a-z]+(?:,?\s+[A-Z]\.|\s+and\s+[A-Z][a-z]+))\.?\s+"
    rf"[{_OPEN_QUOTE}]?(?P<title>[^{_ANY_QUOTE}.\n]+)[{_CLOSE_QUOTE}]?"
)

# ed. David Erdman. The Complete Poetry and Prose
EDITOR_RE = re.compile(
    r"(?:\bed\.|\bedited by)\s+([A-Z][a-z]+(?:,?\s+[A-Z]\.|\s+[A-Z][a-z]+))\.?\s+"
    rf"[{_OPEN_QUOTE}]?([^{_ANY_QUOTE}.\n]+)[{_CLOSE_QUOTE}]?"
)

# Blake's Jerusalem. A commentary on the plates. London, 1964
WORK_POSSESSIVE_RE = re.compile(rf"Blake['’]?s\s+([A-Za-z\s]+?)(?:\.\s+|\s+)([^.\n]+)\.([^.\n]+{_YEAR})")


CITATION_RULES: tuple[CitationRule, ...] = (
    CitationRule("author-year", AUTHOR_YEAR_RE, map_positional),
    CitationRule("quoted-title", QUOTED_TITLE_RE, map_quoted_title),
    CitationRule("citation-code", CITATION_CODE_RE, map_citation_code),
    CitationRule("bare-author-year", BARE_AUTHOR_YEAR_RE, map_positional),
    CitationRule("year-leading", YEAR_LEADING_RE, map_year_leading),
    CitationRule("editor", EDITOR_RE, map_positional),
    CitationRule("work-possessive", WORK_POSSESSIVE_RE, map_positional),
)
