from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from typing import Optional

from osm_catalog.config import Settings
from osm_catalog.errors import SourceFormatError, TransportError
from osm_catalog.services.catalog_service import BuildReport, CatalogBuilder
from osm_catalog.services.crawl.base import HttpPageFetcher, PageFetcher
from osm_catalog.services.crawl.pipeline import catalog_fingerprint, catalog_to_json, write_catalog_json

logger = logging.getLogger(__name__)

EXIT_TRANSPORT = 2
EXIT_SOURCE_FORMAT = 3


def _print_report(report: BuildReport) -> None:
    print(
        f"regions={report.regions} documents={report.documents} "
        f"disabled={report.disabled} degraded={len(report.degraded)}",
        file=sys.stderr,
    )
    for d in report.degraded:
        print(f"  degraded: {d.name} ({d.url}): {d.reason}", file=sys.stderr)


def run_build(settings: Settings, *, out_dir: Optional[str], fetcher: Optional[PageFetcher] = None) -> int:
    """Build the catalog and write it to out_dir, or stdout when out_dir is None."""
    owned = fetcher is None
    if fetcher is None:
        fetcher = HttpPageFetcher(timeout=settings.http_timeout, user_agent=settings.user_agent)
    try:
        root, report = CatalogBuilder.from_settings(fetcher, settings).build_with_report()
    except TransportError as exc:
        print(f"Could not reach source: {exc}", file=sys.stderr)
        return EXIT_TRANSPORT
    except SourceFormatError as exc:
        print(f"Source format changed: {exc}", file=sys.stderr)
        return EXIT_SOURCE_FORMAT
    finally:
        if owned:
            fetcher.close()

    logger.info("Catalog fingerprint %s", catalog_fingerprint(root))
    _print_report(report)
    if out_dir is None:
        print(catalog_to_json(root, indent=2))
    else:
        print(write_catalog_json(root, out_dir=out_dir, filename_prefix="osm-catalog"))
    return 0


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Build the OpenStreetMap extract catalog")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    build = sub.add_parser("build", help="Crawl the mirror and emit the catalog as JSON")
    build.add_argument("--base-url", help="Root listing URL (default: OSM_CATALOG_BASE_URL)")
    build.add_argument("--workers", type=int, help="Parallel sub-listing fetches (default: OSM_CATALOG_MAX_WORKERS)")
    dest = build.add_mutually_exclusive_group()
    default_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
    dest.add_argument(
        "--out-dir",
        default=os.path.join(default_root, "data", "catalog"),
        help="Output directory for catalog JSON files",
    )
    dest.add_argument("--stdout", action="store_true", help="Print the catalog instead of writing a file")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "build":
        settings = Settings.from_env()
        if args.base_url:
            settings = replace(settings, base_url=args.base_url)
        if args.workers is not None:
            if args.workers < 1:
                parser.error("--workers must be >= 1")
            settings = replace(settings, max_workers=args.workers)
        return run_build(settings, out_dir=None if args.stdout else args.out_dir)

    parser.error("unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
