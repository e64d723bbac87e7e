"""Extraction pipeline interfaces."""

from .config import ExtractionOptions
from .models import ExtractionResult, ExtractionStats, Record, SubheadingMap
from .pipeline import extract

__all__ = [
    "ExtractionOptions",
    "ExtractionResult",
    "ExtractionStats",
    "Record",
    "SubheadingMap",
    "extract",
]
