"""TXT adapter with encoding detection and form-feed page breaks."""

from __future__ import annotations

from pathlib import Path

from charset_normalizer import from_bytes

from blakebib.ingestion.models import SourceText

_PAGE_BREAK = "\f"
_FOREIGN_MAGIC = (b"%PDF-", b"PK\x03\x04", b"<?xml")


class TXTAdapter:
    """Read plain-text dumps of the bibliography, one page per form feed."""

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        if path.suffix.lower() == ".txt":
            return True
        if sniffed_bytes is None:
            return False

        if path.suffix.lower() in {".pdf", ".epub", ".zip"}:
            return False

        prefix = sniffed_bytes.lstrip()
        if prefix.startswith(_FOREIGN_MAGIC):
            return False

        return b"\x00" not in sniffed_bytes

    def extract(self, path: Path) -> SourceText:
        raw = path.read_bytes()
        encoding = self._detect_encoding(raw)
        text = raw.decode(encoding).replace("\r\n", "\n")
        pages = [page.strip("\n") for page in text.split(_PAGE_BREAK)]
        return SourceText(source_path=str(path), pages=[page for page in pages if page.strip()], format_name="txt")

    def _detect_encoding(self, raw: bytes) -> str:
        if not raw:
            return "utf-8"

        best = from_bytes(raw).best()
        if best and best.encoding:
            return best.encoding

        for fallback in ("utf-8", "cp1252"):
            try:
                raw.decode(fallback)
                return fallback
            except UnicodeDecodeError:
                continue
        raise ValueError("Could not detect TXT encoding")
