from __future__ import annotations

import logging
import threading
from typing import List, NamedTuple, Optional

import httpx

from osm_catalog.config import DEFAULT_USER_AGENT, get_settings
from osm_catalog.errors import TransportError

logger = logging.getLogger(__name__)


class ListingRecord(NamedTuple):
    """One row of a listing page, as literally captured from the markup."""

    path: str  # sub-listing page, relative to the listing page
    name: str
    file: str  # packaged .osm.pbf extract, relative to the listing page
    size: str  # raw size token, e.g. "6.9\xa0GB"


class PageFetcher:
    """Minimal fetch contract: one URL in, raw page text out.

    Implementations raise TransportError for any failure to obtain the page.
    """

    def fetch_page(self, url: str) -> str:
        raise NotImplementedError


class HttpPageFetcher(PageFetcher):
    """PageFetcher backed by a shared httpx.Client.

    httpx.Client is safe to share between the builder's worker threads.
    """

    def __init__(
        self,
        *,
        timeout: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.timeout = float(timeout)
        self._client = client or httpx.Client(
            timeout=self.timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
        )

    def fetch_page(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            r = self._client.get(url)
            r.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {url} failed: {exc}", url=url) from exc
        return r.text

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpPageFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class Spider:
    """Listing extractor contract.

    Subclasses implement parse_html() to turn one page's markup into
    ListingRecords in document order. Rows that do not match are skipped.
    """

    name: str = "base"

    def parse_html(self, html: str) -> List[ListingRecord]:
        raise NotImplementedError


_fetcher_cache: Optional[HttpPageFetcher] = None
# Sync API handlers run on a threadpool; only one shared client may be created.
_fetcher_lock = threading.Lock()


def get_page_fetcher() -> HttpPageFetcher:
    global _fetcher_cache
    with _fetcher_lock:
        if _fetcher_cache is None:
            settings = get_settings()
            _fetcher_cache = HttpPageFetcher(timeout=settings.http_timeout, user_agent=settings.user_agent)
        return _fetcher_cache


def close_page_fetcher() -> None:
    global _fetcher_cache
    with _fetcher_lock:
        if _fetcher_cache is not None:
            _fetcher_cache.close()
            _fetcher_cache = None
