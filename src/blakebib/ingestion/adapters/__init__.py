"""Text adapter implementations and contracts."""

from .base import IngestionAdapter
from .pdf_adapter import PDFAdapter
from .txt_adapter import TXTAdapter


def build_default_adapters() -> dict[str, IngestionAdapter]:
    """Return the default format adapter map; PDF is tried before plain text."""

    return {"pdf": PDFAdapter(), "txt": TXTAdapter()}


__all__ = [
    "IngestionAdapter",
    "PDFAdapter",
    "TXTAdapter",
    "build_default_adapters",
]
