"""High-level orchestration for the journal_preview application."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from .consent import ConsentStore, apply_consent
from .formatting import DEFAULT_LOCALE
from .navigation import mark_active_links
from .page import FALLBACK_ID, GRID_ID, PreviewPage
from .pipeline import DEFAULT_JSON_URL, JournalPreview, PreviewOutcome, PreviewSettings
from .renderers import DEFAULT_LISTING_URL
from .selection import DEFAULT_MAX_CARDS
from .transport import select_transport

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Runtime options for executing the application."""

    page_path: str
    output_path: Optional[str] = None
    base_url: Optional[str] = None
    json_url: str = DEFAULT_JSON_URL
    max_cards: int = DEFAULT_MAX_CARDS
    grid_id: str = GRID_ID
    fallback_id: str = FALLBACK_ID
    listing_url: str = DEFAULT_LISTING_URL
    transport: str = "auto"
    timeout: Optional[float] = None
    locale: str = DEFAULT_LOCALE
    current_path: Optional[str] = None
    consent_store: Optional[str] = None
    clarity_id: Optional[str] = None


@dataclass
class RunResult:
    """Returned data after executing the app."""

    output_text: str
    outcome: Optional[PreviewOutcome]
    output_path: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.outcome is not None


def resolve_json_url(base_url: Optional[str], json_url: str) -> str:
    """Resolve the journal URL the way a browser resolves it against the page."""
    if base_url:
        return urljoin(base_url, json_url)
    if not urlparse(json_url).scheme:
        raise ValueError(
            f"Journal URL '{json_url}' is relative; configure a base URL for the site."
        )
    return json_url


def _read_page(path: str) -> str:
    location = Path(path)
    try:
        return location.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise RuntimeError(f"Page not found: {location}") from exc


def _write_page(path: str, html: str) -> None:
    location = Path(path)
    if location.parent and not location.parent.exists():
        location.parent.mkdir(parents=True, exist_ok=True)
    location.write_text(html, encoding="utf-8")
    logger.info("Wrote page to %s", location)


def _run_preview(page: PreviewPage, config: RunConfig) -> PreviewOutcome:
    settings = PreviewSettings(
        json_url=resolve_json_url(config.base_url, config.json_url),
        max_cards=config.max_cards,
        listing_url=config.listing_url,
        locale=config.locale,
    )
    transport = select_transport(config.transport, timeout=config.timeout)
    return asyncio.run(JournalPreview(page, transport, settings).run())


def execute(config: RunConfig) -> RunResult:
    """Run the application logic and return the rendered page."""
    soup = BeautifulSoup(_read_page(config.page_path), "html.parser")

    outcome: Optional[PreviewOutcome] = None
    page = PreviewPage.locate(soup, config.grid_id, config.fallback_id)
    if page is None:
        logger.info("Page %s has no journal preview; leaving it as is", config.page_path)
    else:
        outcome = _run_preview(page, config)

    if config.consent_store:
        state = apply_consent(soup, ConsentStore(config.consent_store), config.clarity_id)
        logger.info("Consent decision: %s", state.value if state else "undecided")

    if config.current_path:
        mark_active_links(soup, config.current_path)

    output_text = str(soup)
    if config.output_path:
        _write_page(config.output_path, output_text)

    return RunResult(
        output_text=output_text, outcome=outcome, output_path=config.output_path
    )
