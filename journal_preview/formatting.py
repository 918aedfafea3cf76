"""Text escaping and date display helpers."""

from __future__ import annotations

import datetime
import logging
import re
from typing import Any, Optional

from babel.core import UnknownLocaleError
from babel.dates import format_date as babel_format_date
from markupsafe import Markup, escape

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
DATE_PATTERN = "d MMM y"
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_DATE_SEPARATOR = re.compile(r"[-.]")
_NUMERIC = re.compile(r"[0-9]+")


def escape_html(value: Any) -> Markup:
    """Escape ``& < > " '`` and nothing else.

    markupsafe writes the double quote as ``&#34;``; it is swapped for
    ``&quot;`` so the output uses the same entities browsers emit.
    """
    if value is None:
        return Markup("")
    return Markup(str(escape(str(value))).replace("&#34;", "&quot;"))


def parse_iso_date(value: str) -> Optional[datetime.date]:
    """Read the first three dot/dash separated numbers as year, month, day.

    Out-of-range months and days roll over into the following month or
    year (``2025-02-30`` is 2 March 2025). Dates outside the representable
    range give None.
    """
    parts = _DATE_SEPARATOR.split(value)
    if len(parts) < 3:
        return None
    if not all(_NUMERIC.fullmatch(part) for part in parts[:3]):
        return None
    year, month, day = (int(part) for part in parts[:3])
    try:
        year, month_index = divmod(year * 12 + month - 1, 12)
        first = datetime.date(year, month_index + 1, 1)
        return first + datetime.timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def manual_format_date(value: datetime.date) -> str:
    """Locale-free ``15 Feb 2025`` rendering from the fixed month table."""
    return f"{value.day} {MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def format_date(iso: Any, locale: str = DEFAULT_LOCALE) -> str:
    """Format an ISO date for display, or return it untouched if unparseable."""
    if iso is None:
        return ""
    raw = str(iso)
    parsed = parse_iso_date(raw)
    if parsed is None:
        return raw

    try:
        return babel_format_date(parsed, format=DATE_PATTERN, locale=locale)
    except (UnknownLocaleError, ValueError) as exc:
        logger.debug("Locale %r unavailable (%s); using month table", locale, exc)
        return manual_format_date(parsed)
