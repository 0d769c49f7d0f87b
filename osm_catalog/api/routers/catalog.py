from fastapi import APIRouter, HTTPException

from osm_catalog.config import get_settings
from osm_catalog.errors import SourceFormatError, TransportError
from osm_catalog.services.catalog_service import CatalogBuilder
from osm_catalog.services.crawl.base import get_page_fetcher
from osm_catalog.services.crawl.pipeline import catalog_fingerprint, catalog_to_dict

router = APIRouter(tags=["catalog"])


def get_catalog_builder() -> CatalogBuilder:
    return CatalogBuilder.from_settings(get_page_fetcher(), get_settings())


@router.get("/health")
def api_health():
    return {"status": "ok"}


@router.get("/catalog")
def api_get_catalog():
    """Crawl the mirror and return the catalog tree.

    Both failure kinds map to 502, distinguished by ``detail.error``:
    "transport" (mirror unreachable) or "source_format" (markup changed).
    """
    builder = get_catalog_builder()
    try:
        root, report = builder.build_with_report()
    except TransportError as exc:
        raise HTTPException(status_code=502, detail={"error": "transport", "message": str(exc), "url": exc.url})
    except SourceFormatError as exc:
        raise HTTPException(status_code=502, detail={"error": "source_format", "message": str(exc)})
    return {
        "catalog": catalog_to_dict(root),
        "fingerprint": catalog_fingerprint(root),
        "regions": report.regions,
        "documents": report.documents,
        "disabled": report.disabled,
        "degraded": [{"name": d.name, "url": d.url, "reason": d.reason} for d in report.degraded],
    }
