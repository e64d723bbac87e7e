"""Tests for the keyword-based record classifier."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from blakebib.taxonomy.classifier import (
    CATEGORY_VALUES,
    DEFAULT_CATEGORY,
    load_category_rules,
    classify_text,
)


# ---------------------------------------------------------------------------
# Thesaurus loading
# ---------------------------------------------------------------------------

def test_bundled_thesaurus_keeps_priority_order() -> None:
    rules = load_category_rules()

    assert [rule.category_id for rule in rules.rules] == [
        "methodology",
        "digital",
        "humanities",
        "history",
        "open_access",
        "social",
    ]
    assert rules.default == DEFAULT_CATEGORY


def test_bundled_thesaurus_keywords() -> None:
    rules = load_category_rules()

    assert {rule.category_id: rule.keywords for rule in rules.rules} == {
        "methodology": ("methodology", "standard"),
        "digital": ("digital", "software", "technology", "ai"),
        "humanities": ("humanities",),
        "history": ("history", "historical"),
        "open_access": ("open access", "sharing"),
        "social": ("social", "society"),
    }


def test_unknown_category_in_thesaurus_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "categories.json"
    path.write_text(
        json.dumps({"categories": [{"id": "poetry", "keywords": ["verse"]}]}),
        encoding="utf-8",
    )

    with pytest.raises(ValueError, match="poetry"):
        load_category_rules(path)


def test_unknown_default_category_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "categories.json"
    path.write_text(json.dumps({"default": "misc", "categories": []}), encoding="utf-8")

    with pytest.raises(ValueError, match="misc"):
        load_category_rules(path)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def test_title_keyword_selects_category() -> None:
    rules = load_category_rules()
    assert classify_text("A Methodology for Reading Blake", "", rules) == "methodology"


def test_content_keyword_selects_category_case_insensitively() -> None:
    rules = load_category_rules()
    assert classify_text("Blake in London", "A HISTORY of the engraver's workshop.", rules) == "history"


def test_earlier_category_wins_when_several_match() -> None:
    rules = load_category_rules()
    assert classify_text("The Digital Blake Archive", "A history of the project.", rules) == "digital"


def test_unmatched_record_falls_back_to_default() -> None:
    rules = load_category_rules()
    assert classify_text("Fearful Symmetry", "A reading of the prophetic books.", rules) == DEFAULT_CATEGORY


def test_every_result_is_a_known_category() -> None:
    rules = load_category_rules()
    samples = [
        ("Open Access Editions", ""),
        ("Blake and Society", ""),
        ("Blake in the Humanities", ""),
        ("", ""),
    ]
    for title, content in samples:
        assert classify_text(title, content, rules) in CATEGORY_VALUES


def test_only_thesaurus_keywords_trigger_a_category() -> None:
    rules = load_category_rules()

    assert classify_text("Blake online", "", rules) == DEFAULT_CATEGORY
    assert classify_text("Plates free to download", "", rules) == DEFAULT_CATEGORY
    assert classify_text("Blake and AI", "", rules) == "digital"
