"""Shared data models for journal_preview."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Tuple

ENTRIES_KEY = "entries"


@dataclass(frozen=True)
class Entry:
    """Single journal item as published in journal.json."""

    id: Optional[str] = None
    title: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None
    url: Optional[str] = None
    read_time: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Entry":
        """Build an entry from a decoded JSON object, leaving absent fields unset."""
        return cls(
            id=data.get("id"),
            title=data.get("title"),
            excerpt=data.get("excerpt"),
            category=data.get("category"),
            date=data.get("date"),
            url=data.get("url"),
            read_time=data.get("readTime"),
        )


@dataclass(frozen=True)
class EntryCollection:
    """Decoded payload: the ordered entries found under the ``entries`` key."""

    entries: Tuple[Entry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)
