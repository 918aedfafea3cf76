import pytest
from bs4 import BeautifulSoup

from journal_preview.navigation import ACTIVE_CLASS, is_active, mark_active_links


def _active_hrefs(soup):
    return [link["href"] for link in soup.select(f".{ACTIVE_CLASS}")]


@pytest.mark.parametrize(
    "current_path, expected",
    [
        ("/", ["/"]),
        ("", ["/"]),
        ("/about.html", ["about.html"]),
        ("/ABOUT.HTML", ["about.html"]),
        ("/journal.html/", ["journal.html"]),
        ("/contact.html", []),
    ],
)
def test_mark_active_links(home_soup, current_path, expected):
    mark_active_links(home_soup, current_path)

    assert _active_hrefs(home_soup) == expected
    current = [link["href"] for link in home_soup.find_all(attrs={"aria-current": "page"})]
    assert current == expected


def test_mark_active_links_clears_previous_marks(home_soup):
    mark_active_links(home_soup, "/about.html")
    mark_active_links(home_soup, "/journal.html")

    assert _active_hrefs(home_soup) == ["journal.html"]
    about = home_soup.find("a", href="about.html")
    assert "aria-current" not in about.attrs
    assert about["class"] == ["site-nav__link"]


def test_mark_active_links_without_nav_is_noop():
    soup = BeautifulSoup("<main></main>", "html.parser")

    assert mark_active_links(soup, "/") == 0


def test_is_active_matches_root_only_for_root():
    assert is_active("/", "/")
    assert not is_active("/", "/about.html")
