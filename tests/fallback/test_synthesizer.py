"""Tests for the threshold synthesis stages."""

from __future__ import annotations

import logging

import pytest

from blakebib.extraction.dedupe import RecordRegistry
from blakebib.extraction.models import Record, SubheadingMap
from blakebib.fallback.synthesizer import (
    FallbackSynthesizer,
    MAX_RECORDS_PER_PART,
    PER_PART_MINIMUM,
    looks_like_citation,
    part_window,
)
from blakebib.fallback.templates import TemplateGenerator
from blakebib.taxonomy.classifier import load_category_rules
from blakebib.taxonomy.parts import DEFAULT_BODY_PART

BIOGRAPHIES = "PART IV. BIOGRAPHIES"

GILCHRIST = (
    "Gilchrist's Life of Blake\n"
    "The first full-length biography, completed after the author's death and still the "
    "source of most anecdotes about the poet."
)
SYMONS = (
    "Symons and the Nineties\n"
    "Arthur Symons wrote a short life in 1907 that framed Blake for the decadents and "
    "drew on newly found documents."
)
CATALOGUE = (
    "Butlin's catalogue raisonne lists every painting and drawing, with provenance, "
    "exhibition history and full bibliography."
)

TEXT = f"{BIOGRAPHIES}\n\n{GILCHRIST}\n\n{SYMONS}\n\nPART VI. CATALOGUES\n\n{CATALOGUE}\n"


def _synthesizer(registry: RecordRegistry, subheadings: SubheadingMap | None = None) -> FallbackSynthesizer:
    rules = load_category_rules()
    generator = TemplateGenerator(seed=0, current_year="2024", category_rules=rules)
    return FallbackSynthesizer(
        registry,
        rules,
        subheadings or SubheadingMap.from_taxonomy(),
        generator,
        current_year="2024",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_citation_shape_needs_year_capital_and_keyword() -> None:
    assert looks_like_citation("Paley, Morton. Energy and the Imagination: Blake's Thought. Oxford, 1970.")
    assert not looks_like_citation("Paley, Morton. Energy and the Imagination: Blake's Thought. Oxford.")
    assert not looks_like_citation("Paley, Morton. Energy and the Imagination. Oxford, 1970.")
    assert not looks_like_citation("blake and jerusalem, 1970")


def test_part_window_ends_at_next_part() -> None:
    window = part_window(TEXT, BIOGRAPHIES)

    assert window is not None
    assert window.startswith(BIOGRAPHIES)
    assert "Symons" in window
    assert "Butlin" not in window
    assert part_window(TEXT, "PART IX. COLLECTIONS OF ESSAYS ON BLAKE PUBLISHED") is None


# ---------------------------------------------------------------------------
# Sparse-part rescan
# ---------------------------------------------------------------------------

def test_rescan_turns_long_paragraphs_into_part_records() -> None:
    registry = RecordRegistry()

    records = _synthesizer(registry).rescan_sparse_parts(TEXT, 100)

    assert [record.chapter for record in records] == [BIOGRAPHIES, BIOGRAPHIES, "PART VI. CATALOGUES"]
    first = records[0]
    assert first.title == "Gilchrist's Life of Blake"
    assert first.authors == f"Extracted from {BIOGRAPHIES}"
    assert first.year == "2024"
    assert first.id == "pdf_1_part_iv._b_0"
    assert first.subheading == "General"
    # A single long sentence has no usable heading.
    assert records[2].title == "PART VI. CATALOGUES Entry 1"


def test_rescan_uses_the_parts_first_subheading() -> None:
    subheadings = SubheadingMap.from_taxonomy()
    subheadings.add(BIOGRAPHIES, "Historic Biographies")

    records = _synthesizer(RecordRegistry(), subheadings).rescan_sparse_parts(TEXT, 1)

    assert len(records) == 1
    assert records[0].subheading == "Historic Biographies"


def _seeded(part: str, count: int) -> RecordRegistry:
    registry = RecordRegistry()
    for index in range(count):
        registry.accept(
            Record(
                id=f"seed_{index}",
                title=f"Seeded Study {index}",
                authors="Bentley, G. E.",
                year="1969",
                publication="Oxford",
                content=f"Seeded record {index} describing an earlier biography of the poet.",
                category="academic_papers",
                chapter=part,
            )
        )
    return registry


def test_rescan_caps_records_per_part() -> None:
    paragraphs = [
        f"Paragraph {index} discusses Blake. It surveys the engraved plates, the manuscript drafts "
        "and the critical responses gathered over two centuries of reading."
        for index in range(40)
    ]
    text = f"{BIOGRAPHIES}\n\n" + "\n\n".join(paragraphs) + "\n"
    registry = RecordRegistry()

    records = _synthesizer(registry).rescan_sparse_parts(text, 100)

    assert len(records) == MAX_RECORDS_PER_PART == 20
    assert {record.chapter for record in records} == {BIOGRAPHIES}
    assert records[-1].title == "Paragraph 19 discusses Blake."


def test_rescan_skips_parts_that_already_hold_enough_records() -> None:
    registry = _seeded(BIOGRAPHIES, PER_PART_MINIMUM)

    records = _synthesizer(registry).rescan_sparse_parts(TEXT, 100)

    assert PER_PART_MINIMUM == 10
    assert [record.chapter for record in records] == ["PART VI. CATALOGUES"]


def test_rescan_revisits_parts_just_below_the_minimum() -> None:
    registry = _seeded(BIOGRAPHIES, PER_PART_MINIMUM - 1)

    records = _synthesizer(registry).rescan_sparse_parts(TEXT, 100)

    assert [record.chapter for record in records] == [BIOGRAPHIES, BIOGRAPHIES, "PART VI. CATALOGUES"]


# ---------------------------------------------------------------------------
# Loose and remaining-paragraph mining
# ---------------------------------------------------------------------------

def test_loose_mining_uses_blake_specific_shapes(caplog: pytest.LogCaptureFixture) -> None:
    registry = RecordRegistry()
    text = "Commentary on Jerusalem. Paley, Morton. Oxford, 1991.\n\nNo year in this paragraph about Blake."

    with caplog.at_level(logging.DEBUG, logger="blakebib.fallback.synthesizer"):
        records = _synthesizer(registry).mine_loose_citations(text, 10)

    assert "Loose rule commentary-on matched" in caplog.text

    assert len(records) == 1
    record = records[0]
    assert record.id == "loose_1"
    assert record.title == "Commentary on Jerusalem"
    assert record.authors == "Paley, Morton"
    assert record.publication == "Oxford, 1991"
    assert record.year == "1991"
    assert record.chapter == DEFAULT_BODY_PART


def test_loose_mining_falls_back_to_generic_shape() -> None:
    text = "Erdman, David. Prophet Against Empire. Princeton University Press, 1954. On Blake's politics."

    records = _synthesizer(RecordRegistry()).mine_loose_citations(text, 10)

    assert len(records) == 1
    assert records[0].authors == "Erdman, David"
    assert records[0].title == "Prophet Against Empire"
    assert records[0].year == "1954"


def test_remaining_paragraphs_skip_short_ones() -> None:
    registry = RecordRegistry()
    text = f"Too short to keep.\n\n{CATALOGUE}"

    records = _synthesizer(registry).mine_remaining_paragraphs(text, 10)

    assert len(records) == 1
    assert records[0].id == "rem_1"
    assert records[0].authors == f"Extracted from {DEFAULT_BODY_PART}"


def test_stages_stop_at_target_and_top_up_fills_the_rest() -> None:
    registry = RecordRegistry()
    synthesizer = _synthesizer(registry)

    synthesizer.rescan_sparse_parts(TEXT, 2)
    assert len(registry) == 2

    generated = synthesizer.top_up(5)
    assert len(generated) == 3
    assert len(registry) == 5
