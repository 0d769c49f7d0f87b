"""Exception taxonomy for catalog construction.

Transport failures ("could not reach source") and source format failures
("source format changed") need different remediation, so they sit on
separate branches under CatalogError.
"""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for every error raised while building a catalog."""


class TransportError(CatalogError):
    """A page could not be fetched (network, timeout, non-success status)."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class SourceFormatError(CatalogError):
    """The fetched markup no longer looks the way the extractor expects."""


class ParseError(SourceFormatError):
    """A size token is malformed or uses an unknown unit."""

    def __init__(self, message: str, *, token: Optional[str] = None) -> None:
        super().__init__(message)
        self.token = token


class ExtractionError(SourceFormatError):
    """A page that must contain listing rows yielded none."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url
