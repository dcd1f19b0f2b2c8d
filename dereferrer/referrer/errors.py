"""Exceptions raised while locating or dereferencing a referrer URL.

Transport failures are not wrapped: callers receive the original
``httpx.HTTPError`` raised by the outbound request.
"""

from __future__ import annotations

ERROR_REFERRER_MISSING = "No referrer URL could be found"


class DereferrerError(Exception):
    """Base class for dereferrer errors."""


class ReferrerMissingError(DereferrerError):
    """Neither the ``Referer`` header nor the query fallback held a URL."""

    def __init__(self, message: str = ERROR_REFERRER_MISSING) -> None:
        super().__init__(message)


class UnsupportedReferrerError(DereferrerError, ValueError):
    """The referrer URL uses a scheme that must not be fetched."""

    def __init__(self, url: str, scheme: str) -> None:
        super().__init__(f"Refusing to fetch referrer with scheme {scheme!r}: {url}")
        self.url = url
        self.scheme = scheme
