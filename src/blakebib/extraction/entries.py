"""Cascade extraction of bibliographic records from section paragraphs."""

from __future__ import annotations

import logging
import re

from blakebib.extraction.dedupe import RecordRegistry
from blakebib.extraction.models import RawFields, Record, Section
from blakebib.extraction.normalization import (
    clean_author,
    clean_title,
    content_window,
    slugify_prefix,
    split_paragraphs,
)
from blakebib.extraction.patterns import CITATION_RULES, CitationRule
from blakebib.extraction.subheadings import SubheadingScan
from blakebib.taxonomy.classifier import CategoryRules, classify_text

logger = logging.getLogger(__name__)

MIN_PARAGRAPH_CHARS = 50


class EntryExtractor:
    """Apply the citation rule cascade to every paragraph of a section.

    Accepted records go straight into the shared registry so that later
    sections and synthesis stages see them.
    """

    def __init__(
        self,
        registry: RecordRegistry,
        category_rules: CategoryRules,
        *,
        current_year: str,
        rules: tuple[CitationRule, ...] = CITATION_RULES,
        min_paragraph_chars: int = MIN_PARAGRAPH_CHARS,
    ) -> None:
        self._registry = registry
        self._category_rules = category_rules
        self._current_year = current_year
        self._rules = rules
        self._min_paragraph_chars = min_paragraph_chars

    def extract_section(self, section: Section, scan: SubheadingScan) -> list[Record]:
        accepted: list[Record] = []

        for paragraph in split_paragraphs(section.text):
            if len(paragraph.text.strip()) < self._min_paragraph_chars:
                continue

            subheading = scan.subheading_at(paragraph.start)
            for rule in self._rules:
                for match in rule.pattern.finditer(paragraph.text):
                    fields = rule.mapper(match)
                    if fields is None:
                        continue
                    record = self.build_record(
                        fields,
                        match,
                        paragraph.text,
                        chapter=section.part,
                        subheading=subheading,
                    )
                    if record is None:
                        continue
                    decision = self._registry.accept(record)
                    if not decision.is_duplicate:
                        accepted.append(decision.record)

        logger.debug("Section %d (%s) yielded %d records", section.index, section.part, len(accepted))
        return accepted

    def build_record(
        self,
        fields: RawFields,
        match: re.Match[str],
        paragraph: str,
        *,
        chapter: str,
        subheading: str,
    ) -> Record | None:
        """Normalize one rule match into a record, or ``None`` when unusable."""

        title = clean_title(fields.title)
        author = clean_author(fields.author)
        content = content_window(paragraph[match.end() :]) or content_window(match.group(0))

        if not title or not (author or content):
            return None

        return Record(
            id=f"pdf_{self._registry.next_serial}_{slugify_prefix(author)}",
            title=title,
            authors=author,
            year=fields.year or self._current_year,
            publication=fields.publication,
            content=content,
            category=classify_text(title, content, self._category_rules),
            chapter=chapter,
            subheading=subheading,
        )
