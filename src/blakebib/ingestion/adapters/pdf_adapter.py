"""PDF adapter collecting the embedded text of each page."""

from __future__ import annotations

import logging
from pathlib import Path

import pymupdf

from blakebib.ingestion.models import SourceText

logger = logging.getLogger(__name__)

_PDF_MAGIC = b"%PDF-"


class PDFAdapter:
    """Extract the text of every PDF page, keeping line breaks intact.

    Line structure matters downstream: part markers and subheading labels are
    recognised as whole lines.
    """

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        if path.suffix.lower() == ".pdf":
            return True
        if sniffed_bytes is None:
            return False
        return sniffed_bytes.startswith(_PDF_MAGIC)

    def extract(self, path: Path) -> SourceText:
        pages: list[str] = []
        with pymupdf.open(path) as doc:
            for page_index, page in enumerate(doc, start=1):
                page_text = self._page_text(page)
                if not page_text:
                    logger.debug("Page %d of %s has no embedded text", page_index, path)
                pages.append(page_text)

        logger.info("Read %d pages from %s", len(pages), path)
        return SourceText(source_path=str(path), pages=pages, format_name="pdf")

    def _page_text(self, page: pymupdf.Page) -> str:
        text = page.get_text("text")
        lines = [line.rstrip() for line in text.replace("\r\n", "\n").splitlines()]
        return "\n".join(lines).strip("\n")
