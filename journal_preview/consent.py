"""Analytics consent storage and the deferred Clarity snippet."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from bs4 import BeautifulSoup

from .page import parse_fragment
from .renderers import build_analytics_html

logger = logging.getLogger(__name__)

STORAGE_KEY = "lrf_cookie_consent"
CLARITY_SCRIPT_ID = "ms-clarity"


class ConsentState(str, Enum):
    NECESSARY = "necessary"
    ANALYTICS = "analytics"


class ConsentStore:
    """Key/value JSON file holding the consent decision.

    Undecided is the absence of the key. Storage problems never raise: a
    broken or missing file reads as undecided and failed writes are logged.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Consent storage unreadable at %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Consent storage unavailable at %s: %s", self.path, exc)

    def get(self) -> Optional[ConsentState]:
        value = self._read().get(STORAGE_KEY)
        if value is None:
            return None
        try:
            return ConsentState(value)
        except ValueError:
            logger.debug("Ignoring unknown consent value %r", value)
            return None

    def set(self, state: ConsentState) -> None:
        data = self._read()
        data[STORAGE_KEY] = ConsentState(state).value
        self._write(data)
        logger.info("Stored consent decision: %s", data[STORAGE_KEY])

    def clear(self) -> None:
        data = self._read()
        if data.pop(STORAGE_KEY, None) is not None:
            self._write(data)
            logger.info("Cleared consent decision")


def inject_analytics(soup: BeautifulSoup, clarity_id: Optional[str]) -> bool:
    """Add the Clarity loader to the page head once. Returns True if added."""
    if not clarity_id:
        return False
    if soup.find(id=CLARITY_SCRIPT_ID) is not None:
        return False

    target = soup.head or soup
    for node in parse_fragment(build_analytics_html(clarity_id)):
        target.append(node)
    logger.debug("Injected Clarity snippet for project %s", clarity_id)
    return True


def apply_consent(
    soup: BeautifulSoup, store: ConsentStore, clarity_id: Optional[str]
) -> Optional[ConsentState]:
    """Inject analytics only when the stored decision grants it."""
    state = store.get()
    if state is ConsentState.ANALYTICS:
        inject_analytics(soup, clarity_id)
    return state
