from contextlib import asynccontextmanager
from fastapi import FastAPI
from osm_catalog.services.crawl.base import close_page_fetcher

# Routers
from osm_catalog.api.routers.catalog import router as catalog_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ensure the shared HTTP fetcher is closed on shutdown."""
    try:
        yield
    finally:
        close_page_fetcher()


app = FastAPI(title="OSM Catalog", version="0.1", lifespan=lifespan)

app.include_router(catalog_router)
