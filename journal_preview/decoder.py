"""Decoding and shape validation for the journal payload."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from .errors import DecodeError, ValidationError
from .models import ENTRIES_KEY, Entry, EntryCollection

logger = logging.getLogger(__name__)


def decode_text(text: str) -> Any:
    """Parse raw response text as JSON."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as exc:
        raise DecodeError("Journal payload is not valid JSON") from exc


def validate_payload(payload: Any) -> EntryCollection:
    """Return the entry collection or raise ValidationError.

    Only the envelope is checked: an object with a non-empty ``entries``
    list. Individual entries are not validated; missing fields simply render
    as empty text.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Journal payload is not an object")

    raw_entries = payload.get(ENTRIES_KEY)
    if not isinstance(raw_entries, list):
        raise ValidationError(f"Journal payload has no '{ENTRIES_KEY}' list")
    if not raw_entries:
        raise ValidationError("Journal payload contains no entries")

    entries = tuple(
        Entry.from_mapping(item) if isinstance(item, Mapping) else Entry()
        for item in raw_entries
    )
    logger.debug("Decoded %d journal entries", len(entries))
    return EntryCollection(entries=entries)
