"""Canonical text payload handed from acquisition to extraction."""

from __future__ import annotations

from dataclasses import dataclass, field

PAGE_SEPARATOR = "\n\n"


@dataclass(slots=True)
class SourceText:
    """Page texts of one source document, fully collected and in order."""

    source_path: str
    pages: list[str] = field(default_factory=list)
    format_name: str | None = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def text(self) -> str:
        """All pages joined with a blank line so page ends break paragraphs."""

        return PAGE_SEPARATOR.join(self.pages)

    def slice(self, start: int = 0, stop: int | None = None) -> "SourceText":
        """Return the pages ``[start:stop]`` as a new payload."""

        if start < 0 or (stop is not None and stop < start):
            raise ValueError("Invalid page range")
        return SourceText(source_path=self.source_path, pages=self.pages[start:stop], format_name=self.format_name)
