from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Sequence

CATEGORY_OPTIONS: Sequence[str] = (
    "creatures",
    "equipment",
    "materials",
    "monsters",
    "treasure",
)


@dataclass(frozen=True)
class Entry:
    """One compendium record as returned by the API."""

    name: str
    category: str = ""
    description: str = ""
    image: str = ""
    id: int | None = None

    @classmethod
    def from_api(cls, payload: Mapping[str, object]) -> "Entry":
        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Compendium entry without a name: {payload!r}")
        raw_id = payload.get("id")
        try:
            entry_id = int(raw_id) if raw_id is not None else None
        except (TypeError, ValueError):
            entry_id = None
        return cls(
            name=name,
            category=str(payload.get("category") or ""),
            description=str(payload.get("description") or ""),
            image=str(payload.get("image") or ""),
            id=entry_id,
        )


def entries_from_api(payload: object) -> List[Entry]:
    """Build entries from an API ``data`` list, skipping records without a name."""
    if not isinstance(payload, list):
        return []
    entries: List[Entry] = []
    for record in payload:
        if not isinstance(record, Mapping):
            continue
        try:
            entries.append(Entry.from_api(record))
        except ValueError:
            continue
    return entries


def collect_categories(entries: Iterable[Entry]) -> List[str]:
    seen: set[str] = set()
    categories: List[str] = []
    for entry in entries:
        if not entry.category:
            continue
        key = entry.category.lower()
        if key in seen:
            continue
        seen.add(key)
        categories.append(entry.category)
    return categories


def display_name(name: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split(" "))