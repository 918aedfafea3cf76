"""Rendering helpers for preview cards and the degraded message."""

from __future__ import annotations

from typing import Iterable

from .formatting import DEFAULT_LOCALE
from .models import Entry
from .templating import get_environment

DEFAULT_LISTING_URL = "journal.html"


def build_card(entry: Entry, locale: str = DEFAULT_LOCALE) -> str:
    """Render the ``<li>`` card for a single journal entry.

    The title link doubles as the whole-card click target; the stylesheet
    stretches it over the card.
    """
    template = get_environment().get_template("card.html.j2")
    return template.render(entry=entry, locale=locale).strip()


def build_cards_html(entries: Iterable[Entry], locale: str = DEFAULT_LOCALE) -> str:
    """Render every card in the order given."""
    return "".join(build_card(entry, locale) for entry in entries)


def build_error_html(message: str, listing_url: str = DEFAULT_LISTING_URL) -> str:
    """Render the degraded message with a link to the full listing."""
    template = get_environment().get_template("fallback.html.j2")
    return template.render(message=message, listing_url=listing_url).strip()


def build_analytics_html(clarity_id: str) -> str:
    """Render the Clarity loader snippet."""
    template = get_environment().get_template("analytics.html.j2")
    return template.render(clarity_id=clarity_id).strip()
