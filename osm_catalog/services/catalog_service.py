"""Catalog construction for the Geofabrik mirror.

The builder fetches the root listing, then one sub-listing per region, and
assembles::

    Open Street Map
    └── Map Data
        ├── <region without sub-regions>           (Document)
        └── <region with sub-regions>              (Category)
            ├── Single File                        (Document)
            └── Sub Regions                        (Category of Documents)

Failure policy: anything that goes wrong on the root page aborts the build.
When a region's sub-listing cannot be fetched or parsed, that region is
emitted as a single Document of its own extract and recorded in the
BuildReport; other regions are unaffected.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
from urllib.parse import urljoin

from osm_catalog.config import DEFAULT_BASE_URL, Settings, get_settings
from osm_catalog.errors import CatalogError, ExtractionError
from osm_catalog.models.library import Category, Document
from osm_catalog.services.crawl.base import ListingRecord, PageFetcher, Spider
from osm_catalog.services.crawl.dedup import DEFAULT_DEDUP_RULES, DedupRules
from osm_catalog.services.crawl.sizes import parse_size
from osm_catalog.services.crawl.spiders.geofabrik_spider import GeofabrikSpider

logger = logging.getLogger(__name__)

ROOT_NAME = "Open Street Map"
MAP_DATA_NAME = "Map Data"
SINGLE_FILE_NAME = "Single File"
SUB_REGIONS_NAME = "Sub Regions"

RegionItem = Union[Category, Document]


@dataclass(frozen=True)
class DegradedRegion:
    """A region emitted without sub-regions because its sub-listing failed."""

    name: str
    url: str
    reason: str


@dataclass
class BuildReport:
    regions: int = 0
    documents: int = 0
    disabled: int = 0
    degraded: List[DegradedRegion] = field(default_factory=list)


class CatalogBuilder:
    """Build the catalog tree from an injected PageFetcher.

    Sub-listings are fetched on a bounded thread pool; results are joined in
    root listing order, so the tree does not depend on completion order.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        *,
        base_url: str = DEFAULT_BASE_URL,
        max_workers: int = 4,
        rules: DedupRules = DEFAULT_DEDUP_RULES,
        spider: Optional[Spider] = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.fetcher = fetcher
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.max_workers = int(max_workers)
        self.rules = rules
        self.spider = spider or GeofabrikSpider()

    @classmethod
    def from_settings(cls, fetcher: PageFetcher, settings: Settings) -> "CatalogBuilder":
        return cls(fetcher, base_url=settings.base_url, max_workers=settings.max_workers)

    # --- Public API ---
    def build(self) -> Category:
        root, _report = self.build_with_report()
        return root

    def build_with_report(self) -> Tuple[Category, BuildReport]:
        logger.info("Building catalog from %s", self.base_url)
        page = self.fetcher.fetch_page(self.base_url)
        records = self.spider.parse_html(page)
        if not records:
            raise ExtractionError(
                f"No regions found on {self.base_url}; the listing layout may have changed",
                url=self.base_url,
            )
        sizes = [parse_size(rec.size) for rec in records]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            results = list(executor.map(self._build_region, records, sizes))

        report = BuildReport(regions=len(records))
        regions: List[RegionItem] = []
        for item, degraded in results:
            regions.append(item)
            if degraded is not None:
                report.degraded.append(degraded)

        map_data = Category(name=MAP_DATA_NAME, children=regions, default_expanded=False)
        root = Category(name=ROOT_NAME, children=[map_data], default_expanded=False)

        docs = list(root.documents())
        report.documents = len(docs)
        report.disabled = sum(1 for d in docs if not d.enabled)
        logger.info(
            "Catalog built: %d regions, %d documents (%d disabled), %d degraded",
            report.regions,
            report.documents,
            report.disabled,
            len(report.degraded),
        )
        return root, report

    # --- Internals ---
    def _build_region(self, record: ListingRecord, size: int) -> Tuple[RegionItem, Optional[DegradedRegion]]:
        file_url = urljoin(self.base_url, record.file)
        page_url = urljoin(self.base_url, record.path)
        try:
            sub_regions = self._build_sub_regions(record.name, page_url)
        except CatalogError as exc:
            logger.warning("Sub-listing for %s unavailable, emitting single file: %s", record.name, exc)
            doc = Document(name=record.name, url=file_url, size=size)
            return doc, DegradedRegion(name=record.name, url=page_url, reason=str(exc))

        if not sub_regions:
            return Document(name=record.name, url=file_url, size=size), None

        region = Category(
            name=record.name,
            children=[
                Document(name=SINGLE_FILE_NAME, url=file_url, size=size),
                Category(name=SUB_REGIONS_NAME, children=sub_regions, default_expanded=False),
            ],
            default_expanded=True,
        )
        return region, None

    def _build_sub_regions(self, parent: str, page_url: str) -> List[Document]:
        page = self.fetcher.fetch_page(page_url)
        docs: List[Document] = []
        for rec in self.spider.parse_html(page):
            rule = self.rules.explain(rec.name, parent)
            if rule is not None:
                logger.debug("Disabling %s under %s (%s rule)", rec.name, parent, rule)
            docs.append(
                Document(
                    name=rec.name,
                    url=urljoin(page_url, rec.file),
                    size=parse_size(rec.size),
                    enabled=rule is None,
                )
            )
        return docs


def build_catalog(fetcher: PageFetcher, *, settings: Optional[Settings] = None) -> Tuple[Category, BuildReport]:
    """Build the catalog with settings-derived defaults."""
    builder = CatalogBuilder.from_settings(fetcher, settings or get_settings())
    return builder.build_with_report()
