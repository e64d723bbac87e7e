"""Synthesis stages that lift a sparse extraction up to the record threshold.

Stages run in order and each stops as soon as the registry reaches the
target: sparse-part rescan, loose citation mining, remaining-paragraph mining
and, last, template top-up. Every candidate passes through the shared
registry, so synthesis never re-emits something already accepted.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
import logging
import re
from typing import Callable

from blakebib.extraction.dedupe import RecordRegistry
from blakebib.extraction.models import RawFields, Record, SubheadingMap
from blakebib.extraction.normalization import (
    Paragraph,
    clean_author,
    clean_title,
    content_window,
    scan_year,
    short_heading,
    slugify_prefix,
    split_paragraphs,
)
from blakebib.extraction.patterns import QUOTED_TITLE_RE, map_quoted_title
from blakebib.extraction.segmenter import part_at_offset
from blakebib.fallback.templates import TemplateGenerator
from blakebib.taxonomy.classifier import CategoryRules, classify_text
from blakebib.taxonomy.parts import DEFAULT_SUBHEADING, NUMBERED_PARTS

logger = logging.getLogger(__name__)

PER_PART_MINIMUM = 10
MAX_RECORDS_PER_PART = 20
PART_WINDOW_CHARS = 10_000
MIN_RESCAN_PARAGRAPH_CHARS = 100
MIN_REMAINING_PARAGRAPH_CHARS = 50

_YEAR = r"(?:1[6-9]|20)\d{2}"
_CAPITALIZED_WORD_RE = re.compile(r"\b[A-Z][a-z]+\b")
_BLAKE_KEYWORDS = (
    "blake",
    "innocence",
    "experience",
    "jerusalem",
    "milton",
    "urizen",
    "albion",
    "zoas",
    "thel",
    "illuminated",
    "prophetic",
    "prophecy",
    "engraving",
    "heaven and hell",
)


@dataclass(frozen=True, slots=True)
class LooseRule:
    name: str
    pattern: re.Pattern[str]
    mapper: Callable[[re.Match[str]], RawFields | None]


def _map_labelled_study(match: re.Match[str]) -> RawFields | None:
    """``Studies of Jerusalem. Paley, Morton. Oxford, 1983`` style candidates."""

    label = match.group("label").strip()
    return RawFields(
        author=match.group("author").strip() or "Unknown Author",
        title=f"{label} {match.group('subject').strip()}",
        publication=match.group("publication").strip(),
        year=scan_year(match.group("publication")),
    )


def _map_author_title_publication(match: re.Match[str]) -> RawFields | None:
    return RawFields(
        author=match.group("author").strip() or "Unknown Author",
        title=match.group("title").strip() or "Unknown Title",
        publication=match.group("publication").strip(),
        year=match.group("year"),
    )


def _labelled(label: str) -> re.Pattern[str]:
    return re.compile(
        rf"(?P<label>{label})\s+(?P<subject>[A-Za-z\s]+?)(?:\.\s+|\s+)"
        rf"(?P<author>[^.]+)\.(?P<publication>[^.]+{_YEAR})"
    )


BLAKE_SPECIFIC_RULES: tuple[LooseRule, ...] = (
    LooseRule("edition-of", _labelled(r"Editions?\s+of"), _map_labelled_study),
    LooseRule("studies-of", _labelled(r"Studies\s+of"), _map_labelled_study),
    LooseRule("influence-on", _labelled(r"Blake['’]?s\s+Influence\s+on"), _map_labelled_study),
    LooseRule("commentary-on", _labelled(r"Commentary\s+on"), _map_labelled_study),
)

GENERIC_RULES: tuple[LooseRule, ...] = (
    LooseRule(
        "author-title-publication-year",
        re.compile(
            r"(?P<author>[A-Z][a-z]+(?:,?\s+[A-Z][a-z]*\.?)*)\.\s+(?P<title>[^.\n]{4,}?)\.\s+"
            rf"(?P<publication>[^.\n]+?)[.,]\s*(?P<year>{_YEAR})"
        ),
        _map_author_title_publication,
    ),
    LooseRule("quoted-title", QUOTED_TITLE_RE, map_quoted_title),
)

LOOSE_TIERS: tuple[tuple[LooseRule, ...], ...] = (BLAKE_SPECIFIC_RULES, GENERIC_RULES)


def looks_like_citation(text: str) -> bool:
    """A 4-digit year, a capitalized word and at least one Blake keyword."""

    if scan_year(text) is None or not _CAPITALIZED_WORD_RE.search(text):
        return False
    lowered = text.lower()
    return any(keyword in lowered for keyword in _BLAKE_KEYWORDS)


def part_window(text: str, part: str, *, max_chars: int = PART_WINDOW_CHARS) -> str | None:
    """Text following *part*'s marker up to the next ``PART `` occurrence."""

    anchored = re.search(rf"^[ \t]*{re.escape(part)}", text, re.MULTILINE)
    if anchored:
        start = anchored.start()
    else:
        start = text.find(part)
        if start < 0:
            return None

    window = text[start : start + max_chars]
    next_part = window.find("PART ", len(part))
    if next_part > 0:
        window = window[:next_part]
    return window


class FallbackSynthesizer:
    """Run the synthesis stages against one pipeline pass's registry."""

    def __init__(
        self,
        registry: RecordRegistry,
        category_rules: CategoryRules,
        subheadings: SubheadingMap,
        generator: TemplateGenerator,
        *,
        current_year: str,
    ) -> None:
        self._registry = registry
        self._category_rules = category_rules
        self._subheadings = subheadings
        self._generator = generator
        self._current_year = current_year

    def _part_subheading(self, part: str) -> str:
        labels = self._subheadings.labels(part)
        return labels[0] if labels else DEFAULT_SUBHEADING

    def _accept(self, record: Record) -> Record | None:
        decision = self._registry.accept(record)
        return None if decision.is_duplicate else decision.record

    def _paragraph_record(self, paragraph: str, part: str, record_id: str, fallback_title: str) -> Record:
        title = short_heading(paragraph) or fallback_title
        content = content_window(paragraph)
        return Record(
            id=record_id,
            title=title,
            authors=f"Extracted from {part}",
            year=self._current_year,
            publication="",
            content=content,
            category=classify_text(title, content, self._category_rules),
            chapter=part,
            subheading=self._part_subheading(part),
        )

    def rescan_sparse_parts(self, text: str, target: int) -> list[Record]:
        """Pull paragraphs near the marker of every part holding too few records."""

        accepted: list[Record] = []
        per_part = Counter(record.chapter for record in self._registry.records)

        for part in NUMBERED_PARTS:
            if len(self._registry) >= target:
                break
            if per_part[part] >= PER_PART_MINIMUM:
                continue
            window = part_window(text, part)
            if window is None:
                continue

            paragraphs = [
                paragraph.text.strip()
                for paragraph in split_paragraphs(window)
                if len(paragraph.text.strip()) > MIN_RESCAN_PARAGRAPH_CHARS
            ]
            for index, paragraph in enumerate(paragraphs[:MAX_RECORDS_PER_PART]):
                if len(self._registry) >= target:
                    break
                record = self._paragraph_record(
                    paragraph,
                    part,
                    record_id=f"pdf_{self._registry.next_serial}_{slugify_prefix(part)}_{index}",
                    fallback_title=f"{part} Entry {index + 1}",
                )
                stored = self._accept(record)
                if stored is not None:
                    accepted.append(stored)

        logger.info("Sparse-part rescan added %d records", len(accepted))
        return accepted

    def _loose_fields(self, paragraph: str) -> RawFields | None:
        for tier in LOOSE_TIERS:
            for rule in tier:
                match = rule.pattern.search(paragraph)
                if match is None:
                    continue
                fields = rule.mapper(match)
                if fields is not None:
                    logger.debug("Loose rule %s matched %r", rule.name, match.group(0)[:80])
                    return fields
        return None

    def mine_loose_citations(self, text: str, target: int) -> list[Record]:
        """Mine paragraphs that merely look like citations with the looser rule tiers."""

        accepted: list[Record] = []
        for paragraph in split_paragraphs(text):
            if len(self._registry) >= target:
                break
            if not looks_like_citation(paragraph.text):
                continue
            fields = self._loose_fields(paragraph.text)
            if fields is None:
                continue

            record = self._loose_record(fields, paragraph, text)
            if record is None:
                continue
            stored = self._accept(record)
            if stored is not None:
                accepted.append(stored)

        logger.info("Loose citation mining added %d records", len(accepted))
        return accepted

    def _loose_record(self, fields: RawFields, paragraph: Paragraph, text: str) -> Record | None:
        title = clean_title(fields.title)
        author = clean_author(fields.author)
        content = content_window(paragraph.text)
        if not title or not (author or content):
            return None

        part = part_at_offset(text, paragraph.start)
        return Record(
            id=f"loose_{self._registry.next_serial}",
            title=title,
            authors=author,
            year=fields.year or scan_year(paragraph.text) or self._current_year,
            publication=fields.publication,
            content=content,
            category=classify_text(title, content, self._category_rules),
            chapter=part,
            subheading=self._part_subheading(part),
        )

    def mine_remaining_paragraphs(self, text: str, target: int) -> list[Record]:
        """Turn every not-yet-used paragraph into a loosely structured record."""

        accepted: list[Record] = []
        for paragraph in split_paragraphs(text):
            if len(self._registry) >= target:
                break
            stripped = paragraph.text.strip()
            if len(stripped) < MIN_REMAINING_PARAGRAPH_CHARS:
                continue

            part = part_at_offset(text, paragraph.start)
            serial = self._registry.next_serial
            record = self._paragraph_record(
                stripped,
                part,
                record_id=f"rem_{serial}",
                fallback_title=f"{part} Entry {serial}",
            )
            stored = self._accept(record)
            if stored is not None:
                accepted.append(stored)

        logger.info("Remaining-paragraph mining added %d records", len(accepted))
        return accepted

    def top_up(self, target: int) -> list[Record]:
        accepted = self._generator.fill(self._registry, target)
        if accepted:
            logger.info("Template top-up added %d records", len(accepted))
        return accepted
