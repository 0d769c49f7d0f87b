import json
import os
import tempfile

from osm_catalog.models.library import Category, Document
from osm_catalog.services.catalog_service import CatalogBuilder
from osm_catalog.services.crawl.pipeline import (
    catalog_fingerprint,
    catalog_to_dict,
    catalog_to_json,
    write_catalog_json,
)

BASE = "https://download.geofabrik.de/"


def test_catalog_to_dict_preserves_order_and_tags(fake_fetcher):
    root = CatalogBuilder(fake_fetcher, base_url=BASE).build()
    data = catalog_to_dict(root)
    assert data["name"] == "Open Street Map"
    regions = data["children"][0]["children"]
    assert [r["name"] for r in regions] == ["Antarctica", "Europe", "North America"]
    assert [r["type"] for r in regions] == ["Document", "Category", "Category"]
    us = regions[2]["children"][1]["children"][1]
    assert us == {
        "type": "Document",
        "name": "United States of America",
        "url": BASE + "north-america/us-latest.osm.pbf",
        "size": int(10.3 * 1024 ** 3),
        "download_type": "Http",
        "enabled": False,
    }


def test_catalog_to_json_keeps_non_ascii():
    doc = Document(name="Île-de-France", url="https://example.org/idf.osm.pbf", size=1)
    assert "Île-de-France" in catalog_to_json(doc)


def test_fingerprint_tracks_content():
    a = Category(name="Map Data", children=[Document(name="A", url="https://example.org/a", size=1)])
    b = Category(name="Map Data", children=[Document(name="A", url="https://example.org/a", size=1)])
    c = Category(name="Map Data", children=[Document(name="A", url="https://example.org/a", size=2)])
    assert catalog_fingerprint(a) == catalog_fingerprint(b)
    assert catalog_fingerprint(a) != catalog_fingerprint(c)


def test_write_catalog_json(fake_fetcher):
    root = CatalogBuilder(fake_fetcher, base_url=BASE).build()
    with tempfile.TemporaryDirectory() as tmpdir:
        out_dir = os.path.join(tmpdir, "nested")
        path = write_catalog_json(root, out_dir=out_dir, filename_prefix="osm-catalog")
        assert os.path.isfile(path)
        assert os.path.basename(path).startswith("osm-catalog-")
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        assert data == catalog_to_dict(root)
