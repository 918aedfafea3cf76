"""Configuration loading for journal_preview."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from .formatting import DEFAULT_LOCALE
from .page import FALLBACK_ID, GRID_ID
from .pipeline import DEFAULT_JSON_URL
from .renderers import DEFAULT_LISTING_URL
from .selection import DEFAULT_MAX_CARDS
from .transport import TRANSPORT_CHOICES

logger = logging.getLogger(__name__)


@dataclass
class ConsentConfig:
    store: Optional[str] = None
    clarity_id: Optional[str] = None


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    page: str
    output: Optional[str] = None
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
    consent: ConsentConfig = field(default_factory=ConsentConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base config file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def _text(node: ET.Element, tag: str) -> Optional[str]:
    value = node.findtext(tag)
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_app_config(path: str) -> AppConfig:
    """Parse the main application configuration XML."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading application configuration from %s", config_path)
    tree = ET.parse(config_path)
    root = tree.getroot()

    page = _text(root, "page")
    if not page:
        raise ValueError("Config missing <page> path")

    output = _text(root, "output")

    try:
        max_cards = int(root.findtext("max-cards", str(DEFAULT_MAX_CARDS)))
    except ValueError as exc:
        raise ValueError("<max-cards> must be an integer") from exc
    if max_cards < 0:
        raise ValueError("<max-cards> must not be negative")

    transport = _text(root, "transport") or "auto"
    if transport not in TRANSPORT_CHOICES:
        raise ValueError(
            f"<transport> must be one of {', '.join(TRANSPORT_CHOICES)}, got {transport}"
        )

    timeout_text = _text(root, "timeout")
    try:
        timeout = float(timeout_text) if timeout_text else None
    except ValueError as exc:
        raise ValueError("<timeout> must be a number of seconds") from exc

    # Consent
    consent_node = root.find("consent")
    consent = ConsentConfig()
    if consent_node is not None:
        store = _text(consent_node, "store")
        if store:
            consent.store = _resolve_path(config_path, store)
        consent.clarity_id = _text(consent_node, "clarity-id")

    # Logging
    log_node = root.find("logging")
    logging_config = LoggingConfig()
    if log_node is not None:
        logging_config.level = _text(log_node, "level") or "INFO"
        log_file = _text(log_node, "file")
        if log_file:
            logging_config.file = _resolve_path(config_path, log_file)

    return AppConfig(
        page=_resolve_path(config_path, page),
        output=_resolve_path(config_path, output) if output else None,
        base_url=_text(root, "base-url"),
        json_url=_text(root, "json-url") or DEFAULT_JSON_URL,
        max_cards=max_cards,
        grid_id=_text(root, "grid-id") or GRID_ID,
        fallback_id=_text(root, "fallback-id") or FALLBACK_ID,
        listing_url=_text(root, "listing-url") or DEFAULT_LISTING_URL,
        transport=transport,
        timeout=timeout,
        locale=_text(root, "locale") or DEFAULT_LOCALE,
        current_path=_text(root, "current-path"),
        consent=consent,
        logging=logging_config,
    )
