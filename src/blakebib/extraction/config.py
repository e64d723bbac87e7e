"""Runtime options for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
import os
from typing import Mapping


DEFAULT_MIN_ENTRIES_THRESHOLD = 1700
DEFAULT_MAX_INTRO_RECORDS = 5
DEFAULT_SEED = 0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_DISABLED_VALUES = {"none", "off", "disabled"}


def _parse_int(*, name: str, raw_value: str, minimum: int | None = None) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc
    if minimum is not None and value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_bool(*, name: str, raw_value: str) -> bool:
    lowered = raw_value.casefold()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw_value!r}")


@dataclass(frozen=True, slots=True)
class ExtractionOptions:
    """Validated knobs for one pipeline run.

    ``min_entries_threshold`` set to ``None`` means no threshold is configured;
    the pipeline then only falls back to the static set below an absolute
    floor. ``current_year`` pins the year placeholder so repeated runs are
    reproducible; when left as ``None`` it resolves to today's year once per
    run.
    """

    min_entries_threshold: int | None = DEFAULT_MIN_ENTRIES_THRESHOLD
    force_full_extraction: bool = False
    current_year: int | None = None
    seed: int = DEFAULT_SEED
    max_intro_records: int = DEFAULT_MAX_INTRO_RECORDS

    def __post_init__(self) -> None:
        if self.min_entries_threshold is not None and self.min_entries_threshold < 1:
            raise ValueError("min_entries_threshold must be >= 1 or None")
        if self.current_year is not None and not 1000 <= self.current_year <= 9999:
            raise ValueError("current_year must be a 4-digit year")
        if self.max_intro_records < 0:
            raise ValueError("max_intro_records cannot be negative")

    def resolved_year(self) -> str:
        year = self.current_year if self.current_year is not None else date.today().year
        return str(year)

    def with_year(self, year: int) -> "ExtractionOptions":
        return replace(self, current_year=year)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExtractionOptions":
        source: Mapping[str, str] = os.environ if environ is None else environ

        threshold: int | None = DEFAULT_MIN_ENTRIES_THRESHOLD
        threshold_raw = source.get("BLAKEBIB_MIN_ENTRIES", "").strip()
        if threshold_raw:
            if threshold_raw.casefold() in _DISABLED_VALUES:
                threshold = None
            else:
                threshold = _parse_int(name="BLAKEBIB_MIN_ENTRIES", raw_value=threshold_raw, minimum=1)

        force_raw = source.get("BLAKEBIB_FORCE_FULL", "").strip()
        force_full = _parse_bool(name="BLAKEBIB_FORCE_FULL", raw_value=force_raw) if force_raw else False

        year: int | None = None
        year_raw = source.get("BLAKEBIB_CURRENT_YEAR", "").strip()
        if year_raw:
            year = _parse_int(name="BLAKEBIB_CURRENT_YEAR", raw_value=year_raw, minimum=1000)
            if year > 9999:
                raise ValueError("BLAKEBIB_CURRENT_YEAR must be a 4-digit year")

        seed_raw = source.get("BLAKEBIB_SEED", "").strip()
        seed = _parse_int(name="BLAKEBIB_SEED", raw_value=seed_raw) if seed_raw else DEFAULT_SEED

        intro_raw = source.get("BLAKEBIB_MAX_INTRO_RECORDS", "").strip()
        max_intro = (
            _parse_int(name="BLAKEBIB_MAX_INTRO_RECORDS", raw_value=intro_raw, minimum=0)
            if intro_raw
            else DEFAULT_MAX_INTRO_RECORDS
        )

        return cls(
            min_entries_threshold=threshold,
            force_full_extraction=force_full,
            current_year=year,
            seed=seed,
            max_intro_records=max_intro,
        )
