"""Text acquisition interfaces."""

from .reader import IngestionError, SourceReader, read_source

__all__ = ["IngestionError", "SourceReader", "read_source"]
