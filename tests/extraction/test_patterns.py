"""Tests for the citation rule cascade and its field mappers."""

from __future__ import annotations

import time

from blakebib.extraction.patterns import (
    AUTHOR_YEAR_RE,
    BARE_AUTHOR_YEAR_RE,
    CITATION_CODE_RE,
    CITATION_RULES,
    EDITOR_RE,
    QUOTED_TITLE_RE,
    WORK_POSSESSIVE_RE,
    YEAR_LEADING_RE,
    map_citation_code,
    map_positional,
    map_quoted_title,
    map_year_leading,
)


def test_rules_run_from_most_to_least_structured() -> None:
    assert [rule.name for rule in CITATION_RULES] == [
        "author-year",
        "quoted-title",
        "citation-code",
        "bare-author-year",
        "year-leading",
        "editor",
        "work-possessive",
    ]


def test_author_year_lead_in() -> None:
    match = AUTHOR_YEAR_RE.search("Smith, J. and R. Jones. Title of Work. London: Publisher, 1990.")

    assert match is not None
    fields = map_positional(match)
    assert fields.author == "Smith, J. and R. Jones"
    assert fields.title == "Title of Work"
    assert fields.publication == "London: Publisher, 1990."
    assert fields.year == "1990"


def test_quoted_title_without_lead_takes_author_from_tail() -> None:
    match = QUOTED_TITLE_RE.search('"Fearful Symmetry". Frye, Northrop. Princeton, 1947.')

    assert match is not None
    fields = map_quoted_title(match)
    assert fields.title == "Fearful Symmetry"
    assert fields.author == "Frye, Northrop"
    assert fields.publication == "Princeton, 1947"
    assert fields.year == "1947"


def test_quoted_title_with_lead_uses_lead_as_author() -> None:
    match = QUOTED_TITLE_RE.search('Bloom, Harold. "Blake\'s Apocalypse" Garden City, 1963.')

    assert match is not None
    fields = map_quoted_title(match)
    assert fields.author == "Bloom, Harold"
    assert fields.title == "Blake's Apocalypse"
    assert fields.publication == "Garden City, 1963"
    assert fields.year == "1963"


def test_quoted_title_requires_a_year_after_the_quotes() -> None:
    assert QUOTED_TITLE_RE.search('Bloom, Harold. "Blake\'s Apocalypse" Garden City.') is None


def test_citation_code_becomes_publication() -> None:
    match = CITATION_CODE_RE.search("Bentley <BB 123> Blake Books 1977")

    assert match is not None
    fields = map_citation_code(match)
    assert fields.author == "Bentley"
    assert fields.publication == "BB 123"
    assert fields.title == "Blake Books 1977"
    assert fields.year == "1977"


def test_citation_code_without_year_leaves_year_unset() -> None:
    match = CITATION_CODE_RE.search("Bentley <BB 123> Blake Books")

    assert match is not None
    assert map_citation_code(match).year is None


def test_citation_code_author_is_bounded() -> None:
    match = CITATION_CODE_RE.search("x" * 300 + " <BB 1> Blake Books")

    assert match is not None
    assert len(match.group("author")) <= 200
    assert match.group("title") == " Blake Books"


def test_citation_code_scans_long_lines_without_a_code_quickly() -> None:
    line = "Blake engraved the plates of the illuminated books over many years " * 360

    started = time.perf_counter()
    assert CITATION_CODE_RE.search(line) is None
    assert time.perf_counter() - started < 2.0


def test_bare_author_year() -> None:
    match = BARE_AUTHOR_YEAR_RE.search("Erdman, Prophet Against Empire 1954")

    assert match is not None
    fields = map_positional(match)
    assert fields.author == "Erdman"
    assert fields.title == "Prophet Against Empire"
    assert fields.year == "1954"


def test_year_leading() -> None:
    match = YEAR_LEADING_RE.search('1969. Bloom, H. "Blake\'s Apocalypse"')

    assert match is not None
    fields = map_year_leading(match)
    assert fields.year == "1969"
    assert fields.author == "Bloom, H."
    assert fields.title == "Blake's Apocalypse"


def test_editor_lead_in_has_no_year() -> None:
    match = EDITOR_RE.search("ed. David Erdman. The Complete Poetry and Prose")

    assert match is not None
    fields = map_positional(match)
    assert fields.author == "David Erdman"
    assert fields.title == "The Complete Poetry and Prose"
    assert fields.publication == ""
    assert fields.year is None


def test_work_possessive_scans_year_from_publication() -> None:
    match = WORK_POSSESSIVE_RE.search("Blake's Jerusalem. A commentary on the plates. London, 1964")

    assert match is not None
    fields = map_positional(match)
    assert fields.title == "A commentary on the plates"
    assert fields.publication == "London, 1964"
    assert fields.year == "1964"
