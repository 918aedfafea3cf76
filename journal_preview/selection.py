"""Ordering and truncation of journal entries."""

from __future__ import annotations

import logging
from typing import Iterable, List

from .models import Entry

logger = logging.getLogger(__name__)

DEFAULT_MAX_CARDS = 3


def _sort_key(entry: Entry) -> str:
    # Entries without a string date sort after every dated entry.
    return entry.date if isinstance(entry.date, str) else ""


def select_recent_entries(
    entries: Iterable[Entry], limit: int = DEFAULT_MAX_CARDS
) -> List[Entry]:
    """Return the newest ``limit`` entries, newest first.

    ISO dates compare correctly as strings. ``sorted`` is stable with
    ``reverse=True`` too, so entries sharing a date keep their input order.
    """
    if limit < 0:
        raise ValueError("limit must not be negative")

    ordered = sorted(entries, key=_sort_key, reverse=True)
    selected = ordered[:limit]
    logger.info(
        "Selected %d of %d journal entries (limit %d)",
        len(selected),
        len(ordered),
        limit,
    )
    return selected
