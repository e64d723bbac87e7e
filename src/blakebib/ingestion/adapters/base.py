"""Shared adapter contract for per-format text readers."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from blakebib.ingestion.models import SourceText


@runtime_checkable
class IngestionAdapter(Protocol):
    """Protocol that every format adapter must implement."""

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        """Return True when this adapter can read the given file."""

    def extract(self, path: Path) -> SourceText:
        """Read every page of the document into a ``SourceText``."""
