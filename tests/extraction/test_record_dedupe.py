from __future__ import annotations

import logging

import pytest

from blakebib.extraction.dedupe import RecordRegistry
from blakebib.extraction.models import Record

_ANNOTATION = (
    "Gilchrist's biography, completed by Anne Gilchrist and the Rossettis, "
    "revived interest in Blake in the 1860s and remains indispensable."
)


def _record(record_id: str, *, title: str = "Life of William Blake", authors: str = "Gilchrist, Alexander",
            year: str = "1863", content: str = _ANNOTATION) -> Record:
    return Record(
        id=record_id,
        title=title,
        authors=authors,
        year=year,
        publication="London: Macmillan",
        content=content,
        category="academic_papers",
        chapter="PART IV. BIOGRAPHIES",
        subheading="Historic Biographies",
    )


def test_first_record_is_accepted() -> None:
    registry = RecordRegistry()
    decision = registry.accept(_record("pdf_1"))

    assert decision.is_duplicate is False
    assert decision.reason is None
    assert len(registry) == 1
    assert registry.next_serial == 2


def test_exact_triple_is_a_duplicate() -> None:
    registry = RecordRegistry()
    registry.accept(_record("pdf_1"))

    decision = registry.accept(_record("pdf_2", content="An unrelated annotation about the later reception."))

    assert decision.is_duplicate is True
    assert decision.reason == "exact-match"
    assert len(registry) == 1
    assert registry.next_serial == 2


def test_candidate_containing_accepted_prefix_is_a_duplicate() -> None:
    registry = RecordRegistry()
    registry.accept(_record("pdf_1"))

    decision = registry.evaluate(_record("pdf_2", title="Gilchrist", content=f"Reprinted. {_ANNOTATION}"))

    assert decision.is_duplicate is True
    assert decision.reason == "content-prefix-match"


def test_candidate_whose_prefix_is_contained_is_a_duplicate() -> None:
    registry = RecordRegistry()
    registry.accept(_record("pdf_1"))

    decision = registry.evaluate(_record("pdf_2", title="Gilchrist", content=_ANNOTATION[:60]))

    assert decision.is_duplicate is True
    assert decision.reason == "content-prefix-match"


def test_short_contents_are_not_compared_by_prefix() -> None:
    registry = RecordRegistry()
    registry.accept(_record("pdf_1", content="See above."))

    decision = registry.accept(_record("pdf_2", title="Blake Records", content="See above."))

    assert decision.is_duplicate is False
    assert len(registry) == 2


def test_colliding_id_is_renamed_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    registry = RecordRegistry()
    registry.accept(_record("pdf_1"))

    with caplog.at_level(logging.WARNING, logger="blakebib.extraction.dedupe"):
        decision = registry.accept(_record("pdf_1", title="Blake Records", content="Documents of the life, 1725-1841."))

    assert decision.record.id == "pdf_1_2"
    assert [record.id for record in registry.records] == ["pdf_1", "pdf_1_2"]
    assert "collision" in caplog.text


def test_invalid_prefix_settings_are_rejected() -> None:
    with pytest.raises(ValueError):
        RecordRegistry(prefix_chars=0)
    with pytest.raises(ValueError):
        RecordRegistry(prefix_chars=10, min_prefix_chars=20)
