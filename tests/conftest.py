from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest

from osm_catalog.errors import TransportError
from osm_catalog.services.crawl.base import PageFetcher

BASE_URL = "https://download.geofabrik.de/"


def read_fixture(name: str) -> str:
    p = Path(__file__).parent / "fixtures" / name
    return p.read_text(encoding="utf-8")


class FakePageFetcher(PageFetcher):
    """Serves canned pages by URL; unknown or failing URLs raise TransportError."""

    def __init__(self, pages: Dict[str, str], failing: Optional[Iterable[str]] = None) -> None:
        self.pages = dict(pages)
        self.failing = set(failing or ())
        self.calls: List[str] = []

    def fetch_page(self, url: str) -> str:
        self.calls.append(url)
        if url in self.failing or url not in self.pages:
            raise TransportError(f"GET {url} failed: 503 Service Unavailable", url=url)
        return self.pages[url]

    def close(self) -> None:
        pass


@pytest.fixture
def geofabrik_pages() -> Dict[str, str]:
    return {
        BASE_URL: read_fixture("geofabrik_index.html"),
        BASE_URL + "antarctica.html": read_fixture("geofabrik_antarctica.html"),
        BASE_URL + "europe.html": read_fixture("geofabrik_europe.html"),
        BASE_URL + "north-america.html": read_fixture("geofabrik_north_america.html"),
    }


@pytest.fixture
def fake_fetcher(geofabrik_pages) -> FakePageFetcher:
    return FakePageFetcher(geofabrik_pages)


@pytest.fixture
def make_fetcher(geofabrik_pages):
    """Build a FakePageFetcher over the fixture pages, optionally overridden."""

    def _make(overrides: Optional[Dict[str, str]] = None, failing: Optional[Iterable[str]] = None) -> FakePageFetcher:
        pages = {**geofabrik_pages, **(overrides or {})}
        return FakePageFetcher(pages, failing=failing)

    return _make
