"""Referrer package: locate a request's referrer URL and fetch its HTML."""

from dereferrer.referrer.errors import (
    ERROR_REFERRER_MISSING,
    DereferrerError,
    ReferrerMissingError,
    UnsupportedReferrerError,
)
from dereferrer.referrer.fetcher import get_referrer_html
from dereferrer.referrer.locator import get_referrer_url
from dereferrer.referrer.models import ReferrerPage

__all__ = [
    "ERROR_REFERRER_MISSING",
    "DereferrerError",
    "ReferrerMissingError",
    "UnsupportedReferrerError",
    "get_referrer_html",
    "get_referrer_url",
    "ReferrerPage",
]
