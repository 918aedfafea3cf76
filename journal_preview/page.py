"""Access to the preview grid and placeholder inside a site page."""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

GRID_ID = "journal-preview-grid"
FALLBACK_ID = "journal-preview-fallback"


def parse_fragment(html: str) -> list:
    """Parse an HTML fragment into detached nodes ready for insertion."""
    fragment = BeautifulSoup(html, "html.parser")
    return [node.extract() for node in list(fragment.contents)]


class PreviewPage:
    """The two elements the preview touches: the card grid and its placeholder."""

    def __init__(
        self, soup: BeautifulSoup, grid: Tag, placeholder: Optional[Tag]
    ) -> None:
        self.soup = soup
        self.grid = grid
        self.placeholder = placeholder

    @classmethod
    def locate(
        cls,
        soup: BeautifulSoup,
        grid_id: str = GRID_ID,
        fallback_id: str = FALLBACK_ID,
    ) -> Optional["PreviewPage"]:
        """Find the preview elements, or return None when the page has no grid."""
        grid = soup.find(id=grid_id)
        if grid is None:
            logger.debug("No #%s on page; journal preview inactive", grid_id)
            return None
        placeholder = soup.find(id=fallback_id)
        if placeholder is None:
            logger.debug("No #%s on page; placeholder updates skipped", fallback_id)
        return cls(soup, grid, placeholder)

    @property
    def placeholder_hidden(self) -> bool:
        if self.placeholder is None:
            return False
        return "display: none" in self.placeholder.get("style", "")

    def hide_placeholder(self) -> None:
        """Suppress the placeholder with an inline style, keeping the element."""
        if self.placeholder is None:
            return
        declarations = [
            item.strip()
            for item in self.placeholder.get("style", "").split(";")
            if item.strip() and item.partition(":")[0].strip().lower() != "display"
        ]
        declarations.append("display: none")
        self.placeholder["style"] = "; ".join(declarations)

    def append_cards(self, html: str) -> int:
        """Insert the card markup at the end of the grid; return the cards added."""
        added = 0
        for node in parse_fragment(html):
            self.grid.append(node)
            if isinstance(node, Tag) and node.name == "li":
                added += 1
        return added

    def show_error(self, html: str) -> None:
        """Replace the placeholder's content. Repeated calls overwrite."""
        if self.placeholder is None:
            return
        self.placeholder.clear()
        for node in parse_fragment(html):
            self.placeholder.append(node)
