"""Exception hierarchy for telegraph_api.

Every failure surfaced by the package derives from TelegraphError, so callers
can catch the whole family at once or tell the kinds apart:

- TransportError: the request never completed, or its response could not be
  decoded at all.
- ApiError: the service answered, but reported ``ok: false``.
- HtmlParseError: HTML handed to the converter could not be parsed.
"""

from __future__ import annotations


class TelegraphError(Exception):
    """Base exception for all telegraph_api errors."""


class TransportError(TelegraphError):
    """Raised when a request could not be completed or decoded."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ApiError(TelegraphError):
    """Raised when the service rejects a request with ``ok: false``.

    Attributes:
        error: The error string exactly as returned by the service
            (e.g. ``PAGE_NOT_FOUND``)
        method: API method that produced the error, if known
    """

    def __init__(self, error: str, method: str | None = None):
        message = f"{method}: {error}" if method else error
        super().__init__(message)
        self.error = error
        self.method = method


class HtmlParseError(TelegraphError):
    """Raised when HTML cannot be parsed into a node tree."""
