"""Text helpers shared by the extraction, dedupe and fallback stages."""

from __future__ import annotations

from dataclasses import dataclass
import re

from razdel import sentenize

_WHITESPACE_RE = re.compile(r"\s+")
_SINGLE_SPACE_RE = re.compile(r"\s")
_PARAGRAPH_BREAK_RE = re.compile(r"\r?\n(?:[ \t]*\r?\n)+")
_YEAR_RE = re.compile(r"\b(?:1[6-9]|20)\d{2}\b")
_QUOTE_CHARS = "\"'“”‘’«»"
_WINDOW_STRIP_CHARS = " \t\r\n.,;:"

CONTENT_WINDOW_CHARS = 500
ELLIPSIS = "..."


@dataclass(slots=True)
class Paragraph:
    """A blank-line delimited span with its offset in the enclosing text."""

    text: str
    start: int


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def split_paragraphs(text: str) -> list[Paragraph]:
    """Split *text* on blank lines, keeping each paragraph's start offset."""

    paragraphs: list[Paragraph] = []
    cursor = 0
    for match in _PARAGRAPH_BREAK_RE.finditer(text):
        chunk = text[cursor : match.start()]
        if chunk.strip():
            paragraphs.append(Paragraph(text=chunk, start=cursor))
        cursor = match.end()

    tail = text[cursor:]
    if tail.strip():
        paragraphs.append(Paragraph(text=tail, start=cursor))
    return paragraphs


def scan_year(text: str) -> str | None:
    """Return the first plausible publication year in *text*."""

    match = _YEAR_RE.search(text)
    return match.group(0) if match else None


def clean_title(title: str) -> str:
    return title.strip().strip(_QUOTE_CHARS).strip()


def clean_author(author: str) -> str:
    author = author.strip()
    if author.endswith("."):
        author = author[:-1]
    return author.strip()


def content_window(text: str, *, limit: int = CONTENT_WINDOW_CHARS) -> str:
    """Trim *text* to at most *limit* characters, marking truncation."""

    window = text.strip(_WINDOW_STRIP_CHARS)
    if len(window) > limit:
        return window[:limit] + ELLIPSIS
    return window


def first_line(text: str) -> str:
    for line in text.strip().splitlines():
        if line.strip():
            return line.strip()
    return ""


def first_sentence(text: str) -> str:
    for sentence in sentenize(text.strip()):
        stripped = sentence.text.strip()
        if stripped:
            return stripped
    return ""


def short_heading(text: str, *, max_chars: int = 100) -> str | None:
    """Pick a short label for a loosely structured paragraph.

    The first line wins when it is short enough, then the first sentence
    (normalized to end with a period); ``None`` when neither fits.
    """
    line = first_line(text)
    if line and len(line) < max_chars:
        return line

    sentence = normalize_whitespace(first_sentence(text))
    if sentence and len(sentence) < max_chars:
        return sentence if sentence.endswith((".", "?", "!")) else sentence + "."
    return None


def slugify_prefix(text: str, *, length: int = 10) -> str:
    return _SINGLE_SPACE_RE.sub("_", text[:length]).lower()
