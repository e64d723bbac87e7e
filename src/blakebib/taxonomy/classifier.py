"""Keyword-based record classifier using a JSON thesaurus."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

_THESAURUS_PATH = Path(__file__).parent / "categories.json"

CATEGORY_VALUES: tuple[str, ...] = (
    "methodology",
    "digital",
    "humanities",
    "history",
    "open_access",
    "social",
    "academic_papers",
    "introduction",
)
DEFAULT_CATEGORY = "academic_papers"
INTRODUCTION_CATEGORY = "introduction"


@dataclass(frozen=True, slots=True)
class CategoryRule:
    category_id: str
    keywords: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CategoryRules:
    """Ordered category rules; the first rule with a keyword hit wins."""

    rules: tuple[CategoryRule, ...]
    default: str = DEFAULT_CATEGORY


def load_category_rules(path: Path | None = None) -> CategoryRules:
    """Read the category thesaurus and validate it against the closed vocabulary."""

    source = path or _THESAURUS_PATH
    payload = json.loads(source.read_text(encoding="utf-8"))

    default = payload.get("default", DEFAULT_CATEGORY)
    if default not in CATEGORY_VALUES:
        raise ValueError(f"Unknown default category in thesaurus: {default}")

    rules: list[CategoryRule] = []
    for entry in payload["categories"]:
        category_id = entry["id"]
        if category_id not in CATEGORY_VALUES:
            raise ValueError(f"Unknown category in thesaurus: {category_id}")
        keywords = tuple(keyword.lower() for keyword in entry.get("keywords", []) if keyword)
        rules.append(CategoryRule(category_id=category_id, keywords=keywords))

    return CategoryRules(rules=tuple(rules), default=default)


def classify_text(title: str, content: str, rules: CategoryRules) -> str:
    """Return the category for a record given its title and content.

    Rules are checked in thesaurus order (methodology, digital, humanities,
    history, open_access, social); a rule matches when any of its keywords
    occurs as a case-insensitive substring of the title or the content.
    Records matching nothing fall back to ``rules.default``.
    """
    title_lower = (title or "").lower()
    content_lower = (content or "").lower()

    for rule in rules.rules:
        for keyword in rule.keywords:
            if keyword in title_lower or keyword in content_lower:
                return rule.category_id
    return rules.default
