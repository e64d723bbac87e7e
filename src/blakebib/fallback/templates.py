"""Deterministic template filler for the fallback record set.

All randomness comes from the ``random.Random`` instance owned by the
generator, seeded explicitly, so a given ``(seed, current_year)`` pair and the
same accepted-record set always produce the same records.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import random

from blakebib.extraction.dedupe import RecordRegistry
from blakebib.extraction.models import Record
from blakebib.taxonomy.classifier import CategoryRules, classify_text
from blakebib.taxonomy.parts import DEFAULT_SUBHEADING, NUMBERED_PARTS, known_subheadings

logger = logging.getLogger(__name__)

MAX_ATTEMPTS_PER_RECORD = 8
EARLIEST_YEAR = 1950

WORKS: tuple[str, ...] = (
    "Songs of Innocence and of Experience",
    "The Marriage of Heaven and Hell",
    "Jerusalem",
    "Milton",
    "The Four Zoas",
    "The Book of Urizen",
    "Visions of the Daughters of Albion",
    "America a Prophecy",
    "Europe a Prophecy",
    "The Book of Thel",
    "the Illustrations of the Book of Job",
    "the designs for Dante's Divine Comedy",
    "An Island in the Moon",
    "Poetical Sketches",
    "the Notebook",
)

THEMES: tuple[str, ...] = (
    "prophecy",
    "the imagination",
    "revolution",
    "religious dissent",
    "innocence and experience",
    "the body",
    "vision",
    "empire",
    "labour and the city",
    "gender",
    "mythmaking",
    "the sublime",
    "engraving practice",
    "textual instability",
    "political radicalism",
)

YEAR_RANGES: tuple[str, ...] = (
    "1783-1794",
    "1789-1795",
    "1790-1800",
    "1795-1804",
    "1800-1803",
    "1804-1820",
    "1818-1827",
    "1757-1827",
)

SUBJECTS: tuple[str, ...] = (
    "colour printing",
    "the London of the 1790s",
    "Swedenborgian thought",
    "Enlightenment science",
    "the Bible",
    "Milton's epic",
    "Gothic architecture",
    "the Romantic lyric",
    "Neoplatonism",
    "eighteenth-century book production",
    "the French Revolution",
    "Moravian hymnody",
)

INSTITUTIONS: tuple[str, ...] = (
    "the Tate Britain",
    "the British Museum",
    "the Fitzwilliam Museum",
    "the Huntington Library",
    "the Library of Congress",
    "the Yale Center for British Art",
    "the Morgan Library",
    "the Blake Archive",
)

JOURNALS: tuple[str, ...] = (
    "Blake/An Illustrated Quarterly",
    "Studies in Romanticism",
    "Romanticism",
    "European Romantic Review",
    "Essays in Criticism",
    "Huntington Library Quarterly",
    "Word & Image",
    "Eighteenth-Century Studies",
)

PUBLISHERS: tuple[str, ...] = (
    "Princeton: Princeton University Press",
    "Oxford: Clarendon Press",
    "Cambridge: Cambridge University Press",
    "London: Tate Publishing",
    "New Haven: Yale University Press",
    "Ithaca: Cornell University Press",
    "Berkeley: University of California Press",
    "Chicago: University of Chicago Press",
)

GIVEN_NAMES: tuple[str, ...] = (
    "Anne", "David", "Morris", "Helen", "Joseph", "Saree", "Nicholas", "Mary",
    "Robert", "Angela", "Jason", "Susan", "Thomas", "Emily", "Michael", "Sibylle",
)

SURNAMES: tuple[str, ...] = (
    "Mellor", "Viscomi", "Eaves", "Essick", "Makdisi", "Erdman", "Damon", "Bindman",
    "Paley", "Ostriker", "Williams", "Whittaker", "Connolly", "Mee", "Ackroyd", "Frye",
    "Hilton", "Larrissy", "Lussier", "Shaviro",
)

PUBLICATION_STYLES: tuple[str, ...] = ("journal", "book", "chapter")


@dataclass(frozen=True, slots=True)
class PartTemplates:
    titles: tuple[str, ...]
    contents: tuple[str, ...]


_GENERIC_TEMPLATES = PartTemplates(
    titles=(
        "Blake and {theme}: Reading {work}",
        "{work} and {subject}",
        "Reconsidering {theme} in Blake, {years}",
    ),
    contents=(
        "{author} reads {work} against {subject}, arguing that Blake's treatment of {theme} "
        "changed markedly over the years {years}.",
        "{author} offers a close study of {theme} in {work}, drawing on copies held at {institution}.",
    ),
)

PART_TEMPLATES: dict[str, PartTemplates] = {
    "PART I. TEACHING WILLIAM BLAKE": PartTemplates(
        titles=(
            "Teaching {work} in the Undergraduate Classroom",
            "Blake in the Seminar: {theme} and {subject}",
            "Approaches to Teaching {work}",
        ),
        contents=(
            "{author} describes a course unit built around {work}, using {theme} as an entry point "
            "for students new to Blake.",
            "{author} reports on classroom experiments pairing {work} with facsimiles from {institution}.",
        ),
    ),
    "PART II. GENERAL INTRODUCTIONS, HANDBOOKS, GLOSSARIES, AND CLASSIC STUDIES": PartTemplates(
        titles=(
            "A Blake Handbook: {theme}",
            "William Blake and {subject}",
            "An Introduction to Blake's Poetry, {years}",
        ),
        contents=(
            "{author} provides a general introduction to Blake's career, with chapters on {theme} "
            "and on {work}.",
            "{author} surveys Blake's life and art from {years}, glossing key terms for readers "
            "approaching {work} for the first time.",
        ),
    ),
    "PART III. EDITIONS OF BLAKE'S WRITING": PartTemplates(
        titles=(
            "{work}: An Annotated Edition",
            "{work}, edited with Commentary",
            "Selected Poems and Prophecies, {years}",
        ),
        contents=(
            "{author} edits {work} from the copy at {institution}, with annotations on {theme}.",
            "{author} presents a reading text of {work} with variants and notes on {subject}.",
        ),
    ),
    "PART IV. BIOGRAPHIES": PartTemplates(
        titles=(
            "Blake in London, {years}",
            "The Life of Blake and {subject}",
            "Blake's Circle and {theme}",
        ),
        contents=(
            "{author} reconstructs Blake's circumstances during {years}, drawing on records at "
            "{institution}.",
            "{author} gives a biographical account of the years {years} that connects {work} with "
            "{subject}.",
        ),
    ),
    "PART V. BIBLIOGRAPHIES": PartTemplates(
        titles=(
            "A Checklist of Writings on {work}",
            "Blake Scholarship on {theme}, {years}",
            "Bibliographical Notes on {subject}",
        ),
        contents=(
            "{author} lists criticism of {work} and annotates items dealing with {theme}.",
            "{author} compiles a bibliography of studies touching on {subject}, cross-referenced to "
            "holdings at {institution}.",
        ),
    ),
    "PART VI. CATALOGUES": PartTemplates(
        titles=(
            "Blake at {institution}: A Catalogue",
            "The Designs for {work}: A Descriptive Catalogue",
            "Exhibition Catalogue: Blake and {theme}",
        ),
        contents=(
            "{author} catalogues the Blake holdings of {institution}, with entries for each copy of "
            "{work}.",
            "{author} describes the designs for {work} shown in an exhibition devoted to {theme}.",
        ),
    ),
    "PART VII. STUDIES OF BLAKE ARRANGED BY SUBJECT": PartTemplates(
        titles=(
            "Blake, {theme}, and {subject}",
            "Blake and {subject}, {years}",
            "{theme}: Blake's Engagement with {subject}",
        ),
        contents=(
            "{author} situates Blake's interest in {theme} within debates about {subject} during "
            "{years}.",
            "{author} argues that {work} responds directly to {subject}.",
        ),
    ),
    "PART VIII. SPECIFIC WORKS BY BLAKE": PartTemplates(
        titles=(
            "Reading {work}",
            "{work} and {theme}",
            "The Composition of {work}, {years}",
        ),
        contents=(
            "{author} offers a plate-by-plate reading of {work}, emphasising {theme}.",
            "{author} traces the composition of {work} across {years} using the copies at {institution}.",
        ),
    ),
}


class TemplateGenerator:
    """Produce plausible filler records until a registry reaches a target size."""

    def __init__(self, *, seed: int, current_year: str, category_rules: CategoryRules) -> None:
        self._rng = random.Random(seed)
        self._current_year = int(current_year)
        self._category_rules = category_rules
        self._generated = 0

    @property
    def generated(self) -> int:
        return self._generated

    def _pick(self, pool: tuple[str, ...]) -> str:
        return pool[self._rng.randrange(len(pool))]

    def _publication(self, style: str) -> str:
        volume = self._rng.randint(1, 60)
        first_page = self._rng.randint(1, 400)
        last_page = first_page + self._rng.randint(8, 40)
        if style == "journal":
            issue = self._rng.randint(1, 4)
            return f"{self._pick(JOURNALS)}, {volume}({issue}), {first_page}-{last_page}"
        if style == "chapter":
            editor = f"{self._pick(GIVEN_NAMES)} {self._pick(SURNAMES)}"
            return (
                f"In {editor} (ed.), Blake and {self._pick(THEMES).capitalize()}. "
                f"{self._pick(PUBLISHERS)}, pp. {first_page}-{last_page}"
            )
        return self._pick(PUBLISHERS)

    def _draft(self, index: int) -> Record:
        part = NUMBERED_PARTS[(index - 1) % len(NUMBERED_PARTS)]
        templates = PART_TEMPLATES.get(part, _GENERIC_TEMPLATES)

        surname = self._pick(SURNAMES)
        given = self._pick(GIVEN_NAMES)
        fills = {
            "work": self._pick(WORKS),
            "theme": self._pick(THEMES),
            "years": self._pick(YEAR_RANGES),
            "subject": self._pick(SUBJECTS),
            "institution": self._pick(INSTITUTIONS),
            "author": f"{given} {surname}",
        }
        title = self._pick(templates.titles).format(**fills)
        content = self._pick(templates.contents).format(**fills)
        year = str(self._rng.randint(EARLIEST_YEAR, max(EARLIEST_YEAR, self._current_year)))
        publication = self._publication(self._pick(PUBLICATION_STYLES))

        subheadings = known_subheadings(part)
        subheading = self._pick(subheadings) if subheadings else DEFAULT_SUBHEADING

        return Record(
            id=f"generated_{index}",
            title=title[:1].upper() + title[1:],
            authors=f"{surname}, {given}",
            year=year,
            publication=publication,
            content=content,
            category=classify_text(title, content, self._category_rules),
            chapter=part,
            subheading=subheading,
        )

    def _forced(self, draft: Record, index: int) -> Record:
        """Variant of *draft* that cannot collide with anything accepted so far."""

        return Record(
            id=draft.id,
            title=f"{draft.title} (Supplement {index})",
            authors=draft.authors,
            year=draft.year,
            publication=draft.publication,
            content=(
                f"Supplementary record {index} filed under {draft.chapter}, {draft.subheading}: "
                f"{draft.authors}, {draft.title} ({draft.year})."
            ),
            category=draft.category,
            chapter=draft.chapter,
            subheading=draft.subheading,
        )

    def fill(self, registry: RecordRegistry, target: int) -> list[Record]:
        """Accept generated records into *registry* until it holds *target* records."""

        return self.fill_count(registry, max(0, target - len(registry)))

    def fill_count(self, registry: RecordRegistry, count: int) -> list[Record]:
        """Accept exactly *count* generated records into *registry*."""

        if count < 0:
            raise ValueError("count cannot be negative")

        accepted: list[Record] = []
        budget = count * (MAX_ATTEMPTS_PER_RECORD + 2) + 100

        while len(accepted) < count and budget > 0:
            self._generated += 1
            index = self._generated
            stored = None
            for _ in range(MAX_ATTEMPTS_PER_RECORD):
                budget -= 1
                decision = registry.accept(self._draft(index))
                if not decision.is_duplicate:
                    stored = decision.record
                    break
            if stored is None:
                budget -= 1
                decision = registry.accept(self._forced(self._draft(index), index))
                if not decision.is_duplicate:
                    stored = decision.record
            if stored is not None:
                accepted.append(stored)

        if len(accepted) < count:
            logger.warning("Template generation stopped at %d of %d records", len(accepted), count)
        return accepted
