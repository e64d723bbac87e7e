"""CLI for extracting bibliography records from a text or PDF dump."""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from blakebib.extraction import ExtractionOptions, extract
from blakebib.ingestion import IngestionError, read_source

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract annotated bibliography records as JSON")
    parser.add_argument("--body", required=True, help="Path to the bibliography body (.txt or .pdf)")

    intro = parser.add_mutually_exclusive_group()
    intro.add_argument("--intro", help="Path to a separate introduction text")
    intro.add_argument(
        "--intro-pages",
        type=int,
        default=None,
        help="Treat the first N pages of --body as the introduction",
    )

    threshold = parser.add_mutually_exclusive_group()
    threshold.add_argument("--min-entries", type=int, default=None, help="Minimum number of records to return")
    threshold.add_argument(
        "--no-threshold",
        action="store_true",
        help="Disable the record threshold (static fallback only below 50 records)",
    )

    parser.add_argument(
        "--force-full",
        action="store_true",
        help="Enable loose citation mining and remaining-paragraph mining",
    )
    parser.add_argument("--current-year", type=int, default=None, help="Year used when a record has none")
    parser.add_argument("--seed", type=int, default=None, help="Seed for generated filler records")
    parser.add_argument("--output", default=None, help="Write JSON to this file instead of stdout")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for stderr diagnostics (default: WARNING)",
    )
    return parser


def _resolve_options(args: argparse.Namespace) -> ExtractionOptions:
    options = ExtractionOptions.from_env()
    overrides: dict[str, object] = {}
    if args.no_threshold:
        overrides["min_entries_threshold"] = None
    elif args.min_entries is not None:
        overrides["min_entries_threshold"] = args.min_entries
    if args.force_full:
        overrides["force_full_extraction"] = True
    if args.current_year is not None:
        overrides["current_year"] = args.current_year
    if args.seed is not None:
        overrides["seed"] = args.seed
    return replace(options, **overrides) if overrides else options


def _read_texts(args: argparse.Namespace) -> tuple[str, str]:
    body = read_source(args.body)
    if args.intro:
        return body.text, read_source(args.intro).text
    if args.intro_pages:
        if args.intro_pages < 0:
            raise ValueError("--intro-pages cannot be negative")
        return body.slice(args.intro_pages).text, body.slice(0, args.intro_pages).text
    return body.text, ""


def _emit(payload: dict[str, object], output: str | None) -> None:
    rendered = json.dumps(payload, ensure_ascii=False, indent=2)
    if output:
        Path(output).write_text(rendered + "\n", encoding="utf-8")
    else:
        print(rendered)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, args.log_level))
    load_dotenv()

    try:
        options = _resolve_options(args)
        body_text, intro_text = _read_texts(args)
    except (IngestionError, ValueError) as exc:
        print(json.dumps({"error": str(exc)}, ensure_ascii=False, indent=2))
        return 1

    result = extract(body_text, intro_text, options)
    _emit(result.to_dict(), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
