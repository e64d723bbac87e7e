from __future__ import annotations

from pathlib import Path

import pytest

from blakebib.ingestion.adapters.txt_adapter import TXTAdapter
from blakebib.ingestion.models import SourceText


def test_txt_adapter_splits_pages_on_form_feed(tmp_path: Path) -> None:
    source = tmp_path / "bibliography.txt"
    source.write_text("Preface\nfirst page\fPART IV. BIOGRAPHIES\nsecond page\f\f", encoding="utf-8")

    document = TXTAdapter().extract(source)

    assert document.format_name == "txt"
    assert document.pages == ["Preface\nfirst page", "PART IV. BIOGRAPHIES\nsecond page"]
    assert document.text == "Preface\nfirst page\n\nPART IV. BIOGRAPHIES\nsecond page"


def test_txt_adapter_normalizes_windows_line_endings(tmp_path: Path) -> None:
    source = tmp_path / "bibliography.txt"
    source.write_bytes("Standard Biographies\r\nGilchrist, 1863.\r\n".encode("utf-8"))

    document = TXTAdapter().extract(source)

    assert document.pages == ["Standard Biographies\nGilchrist, 1863."]


def test_txt_adapter_supports_plain_text_only(tmp_path: Path) -> None:
    adapter = TXTAdapter()

    assert adapter.supports(tmp_path / "a.txt")
    assert adapter.supports(tmp_path / "dump", b"PART I. TEACHING WILLIAM BLAKE")
    assert not adapter.supports(tmp_path / "dump", b"%PDF-1.7")
    assert not adapter.supports(tmp_path / "dump", b"\x00\x01binary")
    assert not adapter.supports(tmp_path / "a.pdf", b"text")
    assert not adapter.supports(tmp_path / "dump")


def test_source_text_slices_by_page() -> None:
    document = SourceText(source_path="x.txt", pages=["intro", "body one", "body two"])

    assert document.page_count == 3
    assert document.slice(0, 1).text == "intro"
    assert document.slice(1).text == "body one\n\nbody two"
    with pytest.raises(ValueError):
        document.slice(2, 1)
