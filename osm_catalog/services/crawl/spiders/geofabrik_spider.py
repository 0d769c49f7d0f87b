from __future__ import annotations

import logging
import re
from typing import List, Optional

from selectolax.parser import HTMLParser, Node

from ..base import ListingRecord, Spider

logger = logging.getLogger(__name__)

_SIZE_CELL_RE = re.compile(r"\((.+)\)", re.DOTALL)


class GeofabrikSpider(Spider):
    """Listing extractor for download.geofabrik.de region pages.

    A listing row looks like::

        <tr>
          <td class="subregion"><a href="europe.html">Europe</a></td>
          <td><a href="europe-latest.osm.pbf">[.osm.pbf]</a></td>
          <td>(28.5&nbsp;GB)</td>
          ...
        </tr>

    The first cell links to the region's own listing page, a later cell links
    to the packaged file, and the cell right after it holds the size. Rows of
    any other shape (headers, "special sub regions" notes, layout tables) are
    skipped.
    """

    name = "geofabrik"

    def __init__(self, *, file_label: str = "[.osm.pbf]") -> None:
        self.file_label = file_label

    def parse_html(self, html: str) -> List[ListingRecord]:
        if not html or not html.strip():
            return []
        doc = HTMLParser(html)
        records: List[ListingRecord] = []
        for row in doc.css("tr"):
            rec = self._parse_row(row)
            if rec is None:
                continue
            records.append(rec)
        logger.debug("%s: extracted %d listing records", self.name, len(records))
        return records

    # --- Internals ---
    def _parse_row(self, row: Node) -> Optional[ListingRecord]:
        cells = row.css("td")
        if len(cells) < 3:
            return None

        first = cells[0]
        if "subregion" not in (first.attributes.get("class") or "").split():
            return None
        region_link = first.css_first("a")
        if region_link is None:
            return None
        path = region_link.attributes.get("href")
        name = region_link.text(strip=True)
        if not path or not name:
            return None

        for i in range(1, len(cells) - 1):
            file_link = cells[i].css_first("a")
            if file_link is None or file_link.text(strip=True) != self.file_label:
                continue
            file = file_link.attributes.get("href")
            m = _SIZE_CELL_RE.fullmatch(cells[i + 1].text(strip=True))
            if not file or m is None:
                break
            return ListingRecord(path=path, name=name, file=file, size=m.group(1).strip())

        logger.debug("%s: skipping row for %r, no packaged file with size", self.name, name)
        return None


def extract_listing(html: str) -> List[ListingRecord]:
    """Extract listing records from one Geofabrik page, in document order."""
    return GeofabrikSpider().parse_html(html)
