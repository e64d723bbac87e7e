"""Records derived from the bibliography's introduction text."""

from __future__ import annotations

import re

from blakebib.extraction.models import Record
from blakebib.extraction.normalization import content_window, split_paragraphs
from blakebib.taxonomy.classifier import INTRODUCTION_CATEGORY
from blakebib.taxonomy.parts import INTRODUCTION

LEAD_RECORD_ID = "intro1"
BIBLIOGRAPHY_TITLE = "William Blake: An Annotated Bibliography"
EDITORIAL_AUTHORS = "Editorial Team"
INTRODUCTION_PUBLICATION = "Introduction"
BIBLIOGRAPHY_SUMMARY = (
    "This bibliography serves as a comprehensive resource for scholars, students, and "
    "enthusiasts of William Blake. The following pages contain a carefully curated "
    "collection of bibliographic entries spanning Blake's works, critical responses, "
    "and scholarly analyses."
)

MIN_SPAN_CHARS = 50

_DIGITS_ONLY_RE = re.compile(r"^\d+$")
_CONTENTS_MARKERS = ("contents", "chapter", "section")
_GUIDELINE_MARKERS = ("guideline", "instruction", "how to")


def bibliography_record(record_id: str, year: str) -> Record:
    """The fixed record describing the bibliography itself."""

    return Record(
        id=record_id,
        title=BIBLIOGRAPHY_TITLE,
        authors=EDITORIAL_AUTHORS,
        year=year,
        publication=INTRODUCTION_PUBLICATION,
        content=BIBLIOGRAPHY_SUMMARY,
        category=INTRODUCTION_CATEGORY,
        chapter=INTRODUCTION,
        subheading="Prefatory Material",
    )


def is_paragraph_like(span: str) -> bool:
    stripped = span.strip()
    if len(stripped) <= MIN_SPAN_CHARS:
        return False
    if "Page" in span or "Table of" in span:
        return False
    return not _DIGITS_ONLY_RE.match(stripped)


def introduction_subheading(span: str) -> str:
    lowered = span.lower()
    if any(marker in lowered for marker in _CONTENTS_MARKERS):
        return "Table of Contents"
    if any(marker in lowered for marker in _GUIDELINE_MARKERS):
        return "Guidelines"
    return "Prefatory Material"


def build_introduction_records(
    intro_text: str,
    *,
    year: str,
    limit: int = 5,
    include_lead: bool = True,
) -> list[Record]:
    """Turn the first *limit* paragraph-like spans of *intro_text* into records."""

    records: list[Record] = []
    if include_lead:
        records.append(bibliography_record(LEAD_RECORD_ID, year))

    spans = [paragraph.text.strip() for paragraph in split_paragraphs(intro_text or "")]
    spans = [span for span in spans if is_paragraph_like(span)][:limit]

    # Numbering continues after the lead record even when it is omitted.
    for number, span in enumerate(spans, start=2):
        lines = span.splitlines()
        heading = lines[0].strip() if lines else ""
        if 10 < len(heading) < 100:
            title = heading
            body = span[len(lines[0]) :].strip()
        else:
            title = f"Introduction Section {number}"
            body = span

        records.append(
            Record(
                id=f"intro{number}",
                title=title,
                authors=EDITORIAL_AUTHORS,
                year=year,
                publication=INTRODUCTION_PUBLICATION,
                content=content_window(body) or content_window(span),
                category=INTRODUCTION_CATEGORY,
                chapter=INTRODUCTION,
                subheading=introduction_subheading(span),
            )
        )

    return records
