"""Routing entrypoint for text adapters."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from blakebib.ingestion.adapters import build_default_adapters
from blakebib.ingestion.adapters.base import IngestionAdapter
from blakebib.ingestion.models import SourceText


@dataclass(slots=True)
class IngestionError(Exception):
    """Domain error for adapter routing and text acquisition failures."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"


class SourceReader:
    """Resolve the right adapter and return the document's page texts."""

    def __init__(self, sniff_bytes: int = 4096) -> None:
        self._sniff_bytes = sniff_bytes
        self._adapter_map: dict[str, IngestionAdapter] = {}

    @property
    def adapter_map(self) -> dict[str, IngestionAdapter]:
        """Registered adapters keyed by adapter name."""

        return dict(self._adapter_map)

    def register_adapter(self, name: str, adapter: IngestionAdapter) -> None:
        if not name:
            raise ValueError("Adapter name cannot be empty")
        self._adapter_map[name] = adapter

    def read(self, path: str | Path) -> SourceText:
        source = Path(path)
        sniffed = self._sniff(source)

        for adapter in self._adapter_map.values():
            if adapter.supports(source, sniffed):
                try:
                    extracted = adapter.extract(source)
                except Exception as exc:  # pragma: no cover - wrapper branch
                    raise IngestionError(source, f"Adapter extraction failed: {exc}") from exc

                if not isinstance(extracted, SourceText):
                    raise IngestionError(source, "Adapter returned non-canonical output")
                return extracted

        raise IngestionError(source, "No adapter registered for file content")

    def _sniff(self, path: Path) -> bytes:
        try:
            with path.open("rb") as handle:
                return handle.read(self._sniff_bytes)
        except OSError as exc:
            raise IngestionError(path, f"Failed to read source file: {exc}") from exc


def read_source(path: str | Path) -> SourceText:
    """Read *path* with the default adapters."""

    reader = SourceReader()
    for name, adapter in build_default_adapters().items():
        reader.register_adapter(name, adapter)
    return reader.read(path)
