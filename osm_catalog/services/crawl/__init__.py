"""Listing crawl subsystem.

Structure:
- base.py: page fetch contract, httpx fetcher, listing record type
- sizes.py: human-readable size token -> bytes
- dedup.py: rule table for overlapping-coverage extracts
- spiders/: listing extractors per mirror layout
- pipeline.py: JSON serialization + snapshot writer
- runner.py: tiny CLI entrypoint for manual runs

Pages are fetched with httpx and parsed with selectolax.
"""

__all__ = [
    "base",
    "dedup",
    "sizes",
]
