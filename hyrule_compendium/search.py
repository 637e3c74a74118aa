from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import List, Sequence

from .data import Entry


def _name_key(entry: Entry) -> str:
    # Fold accents so an accented initial sorts with its base letter.
    decomposed = unicodedata.normalize("NFKD", entry.name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def sort_entries(entries: Sequence[Entry]) -> List[Entry]:
    # sorted() is stable, so duplicate names keep their source order.
    return sorted(entries, key=_name_key)


def find_exact_match(term: str, entries: Sequence[Entry]) -> Entry | None:
    needle = term.strip().casefold()
    if not needle:
        return None
    return next((e for e in entries if e.name.casefold() == needle), None)


def find_partial_matches(term: str, entries: Sequence[Entry]) -> List[Entry]:
    needle = term.strip().casefold()
    if not needle:
        return []
    return [e for e in entries if needle in e.name.casefold()]


def find_related(entry: Entry, term: str, entries: Sequence[Entry]) -> List[Entry]:
    needle = term.strip().casefold()
    if not needle or not entry.category:
        return []
    category = entry.category.casefold()
    return [
        e
        for e in entries
        if e != entry and e.category.casefold() == category and needle in e.name.casefold()
    ]


def search_entries(term: str, entries: Sequence[Entry]) -> Entry | List[Entry] | None:
    """Blank term: every entry, sorted by name. Otherwise: the exact name match, if any."""
    if not term.strip():
        return sort_entries(entries)
    return find_exact_match(term, entries)


@dataclass(frozen=True)
class SearchOutcome:
    term: str
    exact: Entry | None = None
    matches: List[Entry] = field(default_factory=list)
    related: List[Entry] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.exact is not None or bool(self.matches)


def run_search(term: str, entries: Sequence[Entry]) -> SearchOutcome:
    term = term.strip()
    hit = search_entries(term, entries) if term else None
    exact = hit if isinstance(hit, Entry) else None
    related = find_related(exact, term, entries) if exact else []
    return SearchOutcome(
        term=term,
        exact=exact,
        matches=find_partial_matches(term, entries),
        related=related,
    )
