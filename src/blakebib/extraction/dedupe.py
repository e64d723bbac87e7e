"""Running duplicate filter for records produced during one pipeline pass."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging

from blakebib.extraction.models import Record

logger = logging.getLogger(__name__)

CONTENT_PREFIX_CHARS = 100
MIN_CONTENT_PREFIX_CHARS = 24


@dataclass(slots=True)
class DedupeDecision:
    """Result of duplicate evaluation for one candidate record."""

    is_duplicate: bool
    reason: str | None
    record: Record


class RecordRegistry:
    """In-memory registry of accepted records, consulted before every acceptance.

    Two records are duplicates when their (title, authors, year) triples are
    equal, or when one record's content contains the leading
    ``CONTENT_PREFIX_CHARS`` characters of the other's. The first-seen record
    always wins.
    """

    def __init__(
        self,
        *,
        prefix_chars: int = CONTENT_PREFIX_CHARS,
        min_prefix_chars: int = MIN_CONTENT_PREFIX_CHARS,
    ) -> None:
        if prefix_chars <= 0:
            raise ValueError("prefix_chars must be positive")
        if min_prefix_chars > prefix_chars:
            raise ValueError("min_prefix_chars cannot exceed prefix_chars")
        self._prefix_chars = prefix_chars
        self._min_prefix_chars = min_prefix_chars
        self._records: list[Record] = []
        self._identities: set[tuple[str, str, str]] = set()
        self._ids: set[str] = set()
        self._prefixes: list[str | None] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[Record]:
        return list(self._records)

    @property
    def next_serial(self) -> int:
        """Running number for the next record id; grows only on acceptance."""

        return len(self._records) + 1

    def _prefix(self, content: str) -> str | None:
        prefix = content[: self._prefix_chars]
        if len(prefix) < self._min_prefix_chars:
            return None
        return prefix

    def evaluate(self, record: Record) -> DedupeDecision:
        if record.identity in self._identities:
            return DedupeDecision(is_duplicate=True, reason="exact-match", record=record)

        prefix = self._prefix(record.content)
        for existing, existing_prefix in zip(self._records, self._prefixes):
            if prefix is not None and prefix in existing.content:
                return DedupeDecision(is_duplicate=True, reason="content-prefix-match", record=record)
            if existing_prefix is not None and existing_prefix in record.content:
                return DedupeDecision(is_duplicate=True, reason="content-prefix-match", record=record)

        return DedupeDecision(is_duplicate=False, reason=None, record=record)

    def accept(self, record: Record) -> DedupeDecision:
        """Store *record* unless it duplicates an accepted one."""

        decision = self.evaluate(record)
        if decision.is_duplicate:
            logger.debug("Dropped %s as %s: %r", record.id, decision.reason, record.title)
            return decision

        stored = record
        if stored.id in self._ids:
            suffix = 2
            while f"{record.id}_{suffix}" in self._ids:
                suffix += 1
            stored = replace(record, id=f"{record.id}_{suffix}")
            logger.warning("Record id collision for %s, stored as %s", record.id, stored.id)

        self._records.append(stored)
        self._identities.add(stored.identity)
        self._ids.add(stored.id)
        self._prefixes.append(self._prefix(stored.content))
        return DedupeDecision(is_duplicate=False, reason=None, record=stored)
