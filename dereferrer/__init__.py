"""dereferrer — fetch the page a request was referred from.

    from dereferrer import get_referrer_url, get_referrer_html, create_middleware
"""

from dereferrer.config import VERSION as __version__
from dereferrer.middleware import DereferrerConfig, DereferrerMiddleware, create_middleware
from dereferrer.referrer import (
    ERROR_REFERRER_MISSING,
    DereferrerError,
    ReferrerMissingError,
    ReferrerPage,
    UnsupportedReferrerError,
    get_referrer_html,
    get_referrer_url,
)

__all__ = [
    "__version__",
    "ERROR_REFERRER_MISSING",
    "DereferrerConfig",
    "DereferrerError",
    "DereferrerMiddleware",
    "ReferrerMissingError",
    "ReferrerPage",
    "UnsupportedReferrerError",
    "create_middleware",
    "get_referrer_html",
    "get_referrer_url",
]
