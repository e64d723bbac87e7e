"""Orchestrate one extraction pass from raw text to the final record list."""

from __future__ import annotations

import logging

from blakebib.extraction.config import ExtractionOptions
from blakebib.extraction.dedupe import RecordRegistry
from blakebib.extraction.entries import EntryExtractor
from blakebib.extraction.introduction import build_introduction_records
from blakebib.extraction.models import ExtractionResult, ExtractionStats, Record, SubheadingMap
from blakebib.extraction.segmenter import segment
from blakebib.extraction.subheadings import discover_subheadings
from blakebib.fallback.static_set import build_static_fallback
from blakebib.fallback.synthesizer import FallbackSynthesizer
from blakebib.fallback.templates import TemplateGenerator
from blakebib.taxonomy.classifier import CategoryRules, load_category_rules
from blakebib.taxonomy.parts import CANONICAL_PARTS, known_subheadings

logger = logging.getLogger(__name__)

STATIC_FALLBACK_FLOOR = 50


def _accept_all(registry: RecordRegistry, records: list[Record]) -> int:
    return sum(1 for record in records if not registry.accept(record).is_duplicate)


def _static_fallback_size(extracted: int, threshold: int | None) -> int | None:
    """Size of the static set to return instead of the extraction, if any."""

    if threshold is None:
        return STATIC_FALLBACK_FLOOR if extracted < STATIC_FALLBACK_FLOOR else None
    return threshold if extracted < threshold / 2 else None


def _synthesize(
    body_text: str,
    registry: RecordRegistry,
    subheadings: SubheadingMap,
    category_rules: CategoryRules,
    options: ExtractionOptions,
    *,
    year: str,
    threshold: int,
    stats: ExtractionStats,
) -> None:
    generator = TemplateGenerator(seed=options.seed, current_year=year, category_rules=category_rules)
    synthesizer = FallbackSynthesizer(registry, category_rules, subheadings, generator, current_year=year)

    stats.part_rescan = len(synthesizer.rescan_sparse_parts(body_text, threshold))
    if options.force_full_extraction and len(registry) < threshold:
        stats.loose_citations = len(synthesizer.mine_loose_citations(body_text, threshold))
        stats.remaining_paragraphs = len(synthesizer.mine_remaining_paragraphs(body_text, threshold))
    stats.generated = len(synthesizer.top_up(threshold))
    stats.fallback_path = "synthesized"


def extract(
    body_text: str,
    intro_text: str = "",
    options: ExtractionOptions | None = None,
) -> ExtractionResult:
    """Extract bibliography records from *body_text* and *intro_text*.

    Introduction records come first, then body records in document order.
    The pass never fails on content: too few records trigger synthesis or the
    static fallback set, so the result always satisfies the threshold.
    """
    options = options or ExtractionOptions()
    year = options.resolved_year()
    category_rules = load_category_rules()
    subheadings = SubheadingMap.from_taxonomy()
    stats = ExtractionStats()

    registry = RecordRegistry()
    intro_records = build_introduction_records(intro_text, year=year, limit=options.max_intro_records)
    stats.introduction = _accept_all(registry, intro_records)

    segmentation = segment(body_text or "")
    stats.sections_seen = segmentation.fragments_seen
    stats.sections_retained = len(segmentation.sections)

    extractor = EntryExtractor(registry, category_rules, current_year=year)
    for section in segmentation.sections:
        scan = discover_subheadings(section, subheadings)
        extractor.extract_section(section, scan)

    for part in CANONICAL_PARTS:
        subheadings.merge(part, known_subheadings(part))

    stats.extracted = len(registry) - stats.introduction
    logger.info(
        "Extracted %d records from %d of %d sections",
        stats.extracted,
        stats.sections_retained,
        stats.sections_seen,
    )

    threshold = options.min_entries_threshold
    static_size = _static_fallback_size(stats.extracted, threshold)
    if static_size is not None:
        logger.info("Extraction yielded %d records, returning static fallback set of %d", stats.extracted, static_size)
        registry = RecordRegistry()
        _accept_all(
            registry,
            build_introduction_records(intro_text, year=year, limit=options.max_intro_records, include_lead=False),
        )
        generator = TemplateGenerator(seed=options.seed, current_year=year, category_rules=category_rules)
        build_static_fallback(static_size, registry, generator, year=year, category_rules=category_rules)
        stats.generated = generator.generated
        stats.fallback_path = "static"
    elif threshold is not None and len(registry) < threshold:
        _synthesize(
            body_text,
            registry,
            subheadings,
            category_rules,
            options,
            year=year,
            threshold=threshold,
            stats=stats,
        )

    entries = registry.records
    logger.info("Returning %d records (fallback path: %s)", len(entries), stats.fallback_path)
    return ExtractionResult(entries=entries, subheadings=subheadings.freeze(), stats=stats)
