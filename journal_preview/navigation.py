"""Active-page highlighting for the site navigation."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

NAV_ID = "site-nav"
LINK_CLASS = "site-nav__link"
ACTIVE_CLASS = "site-nav__link--active"


def _normalise(path: str) -> str:
    trimmed = path[:-1] if path.endswith("/") else path
    return trimmed.lower() or "/"


def is_active(href: str, current_path: str) -> bool:
    """Match the exact path, its basename, or the site root."""
    norm_href = _normalise(href)
    norm_current = _normalise(current_path)
    basename = norm_current.split("/")[-1]
    return (
        norm_href == norm_current
        or norm_href == basename
        or (norm_href == "/" and norm_current == "/")
    )


def mark_active_links(
    soup: BeautifulSoup, current_path: str, nav_id: str = NAV_ID
) -> int:
    """Flag the nav link for ``current_path``; return how many links matched."""
    nav = soup.find(id=nav_id)
    if nav is None:
        return 0

    matched = 0
    for link in nav.select(f".{LINK_CLASS}"):
        classes = [name for name in link.get("class", []) if name != ACTIVE_CLASS]
        if is_active(link.get("href", ""), current_path):
            link["aria-current"] = "page"
            classes.append(ACTIVE_CLASS)
            matched += 1
        elif "aria-current" in link.attrs:
            del link["aria-current"]
        link["class"] = classes

    logger.debug("Marked %d nav link(s) active for %s", matched, current_path)
    return matched
