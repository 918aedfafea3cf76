from typing import Any, List, Optional

import pytest
from bs4 import BeautifulSoup

from journal_preview.page import PreviewPage
from journal_preview.transport import Transport

JOURNAL_URL = "https://lanifield.nz/assets/data/journal.json"

HOME_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><title>Lani Raukawa Field</title></head>
<body>
<nav id="site-nav">
<a class="site-nav__link" href="/">Home</a>
<a class="site-nav__link" href="about.html">About</a>
<a class="site-nav__link" href="journal.html">Journal</a>
</nav>
<section class="journal-preview">
<ul id="journal-preview-grid" class="card-grid"></ul>
<div id="journal-preview-fallback" class="journal-preview__fallback"><p>Loading journal entries…</p></div>
</section>
</body>
</html>
"""

ABOUT_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><title>About</title></head>
<body><main><h1>About</h1></main></body>
</html>
"""


def make_entry(index: int, **overrides: Any) -> dict:
    entry = {
        "id": f"entry-{index}",
        "title": f"Entry {index}",
        "excerpt": f"Excerpt {index}.",
        "category": "UX Research",
        "date": f"2025-01-0{index}",
        "readTime": "5 min read",
        "url": f"journal/entry-{index}.html",
    }
    entry.update(overrides)
    return entry


class StubTransport(Transport):
    """Transport returning a canned payload or raising a canned error."""

    name = "stub"

    def __init__(self, payload: Any = None, error: Optional[Exception] = None) -> None:
        super().__init__()
        self.payload = payload
        self.error = error
        self.calls: List[str] = []

    async def fetch_json(self, url: str) -> Any:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def home_soup():
    return BeautifulSoup(HOME_PAGE, "html.parser")


@pytest.fixture
def preview_page(home_soup):
    page = PreviewPage.locate(home_soup)
    assert page is not None
    return page


@pytest.fixture
def five_entries():
    return {"entries": [make_entry(i) for i in range(1, 6)]}
