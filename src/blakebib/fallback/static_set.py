"""Fully deterministic record set returned when extraction fails outright."""

from __future__ import annotations

import logging

from blakebib.extraction.dedupe import RecordRegistry
from blakebib.extraction.introduction import bibliography_record
from blakebib.extraction.models import Record
from blakebib.fallback.templates import TemplateGenerator
from blakebib.taxonomy.classifier import CategoryRules, classify_text

logger = logging.getLogger(__name__)

FALLBACK_INTRO_ID = "intro_fallback"

# (id, title, authors, year, publication, content, chapter, subheading)
CANONICAL_RECORDS: tuple[tuple[str, str, str, str, str, str, str, str], ...] = (
    (
        "fallback1",
        "William Blake: The Critical Heritage",
        "G. E. Bentley, Jr.",
        "1975",
        "London: Routledge",
        "Comprehensive collection of contemporary responses to Blake's work from 1757 to 1863, "
        "including reviews, letters, and biographical accounts.",
        "PART IV. BIOGRAPHIES",
        "Standard Biographies",
    ),
    (
        "fallback2",
        "Blake Books",
        "G. E. Bentley, Jr.",
        "1977",
        "Oxford: Clarendon Press",
        "Detailed bibliographical descriptions of Blake's writings with information about their "
        "production, printing, and contemporary reception.",
        "PART V. BIBLIOGRAPHIES",
        "Standard Bibliographies",
    ),
    (
        "fallback3",
        "Blake Books Supplement",
        "G. E. Bentley, Jr.",
        "1995",
        "Oxford: Clarendon Press",
        "Supplementary volume to Blake Books with new information and corrections to the "
        "original bibliography.",
        "PART V. BIBLIOGRAPHIES",
        "Standard Bibliographies",
    ),
    (
        "fallback4",
        "The Life of William Blake",
        "Alexander Gilchrist",
        "1863",
        "London: Macmillan",
        "The first full-length biography of Blake, which helped revive interest in his work. "
        "Includes accounts from Blake's friends and contemporaries.",
        "PART IV. BIOGRAPHIES",
        "Historic Biographies",
    ),
    (
        "fallback5",
        "William Blake: His Life and Work",
        "Jack Lindsay",
        "1978",
        "London: Constable",
        "A biographical study that places Blake's work in the context of the revolutionary "
        "politics of his time.",
        "PART IV. BIOGRAPHIES",
        "Standard Biographies",
    ),
)


def fixed_records(year: str, category_rules: CategoryRules) -> list[Record]:
    """The introduction record followed by the hand-authored canonical records."""

    records = [bibliography_record(FALLBACK_INTRO_ID, year)]
    for record_id, title, authors, record_year, publication, content, chapter, subheading in CANONICAL_RECORDS:
        records.append(
            Record(
                id=record_id,
                title=title,
                authors=authors,
                year=record_year,
                publication=publication,
                content=content,
                category=classify_text(title, content, category_rules),
                chapter=chapter,
                subheading=subheading,
            )
        )
    return records


def build_static_fallback(
    count: int,
    registry: RecordRegistry,
    generator: TemplateGenerator,
    *,
    year: str,
    category_rules: CategoryRules,
) -> list[Record]:
    """Accept the fixed records and enough template records to total *count*."""

    if count < 1:
        raise ValueError("count must be positive")

    accepted: list[Record] = []
    for record in fixed_records(year, category_rules):
        decision = registry.accept(record)
        if not decision.is_duplicate:
            accepted.append(decision.record)

    remaining = count - len(accepted)
    if remaining > 0:
        accepted.extend(generator.fill_count(registry, remaining))

    logger.info("Static fallback set holds %d records (%d generated)", len(accepted), max(remaining, 0))
    return accepted
