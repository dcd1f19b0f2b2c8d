"""Fetch the HTML of a request's referrer page."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

import httpx

from dereferrer.config import Settings
from dereferrer.config import settings as default_settings
from dereferrer.referrer.client_ip import resolve_client_ip
from dereferrer.referrer.errors import ReferrerMissingError, UnsupportedReferrerError
from dereferrer.referrer.locator import get_header, get_referrer_url
from dereferrer.referrer.models import ReferrerPage

logger = logging.getLogger(__name__)


def _check_scheme(url: str, allowed: tuple[str, ...]) -> None:
    try:
        scheme = urlsplit(url).scheme.lower()
    except ValueError:
        scheme = ""
    if scheme not in allowed:
        raise UnsupportedReferrerError(url, scheme)


def build_headers(request: Any, user_agent: str) -> dict[str, str]:
    """Return the outbound headers that impersonate the original visitor."""
    headers = {
        "User-Agent": user_agent,
        "Cookie": get_header(request, "cookie") or "",
    }
    client_ip = resolve_client_ip(request)
    if client_ip:
        headers["X-Forwarded-For"] = client_ip
    return headers


async def get_referrer_html(
    request: Any,
    referrer_url: str | None = None,
    *,
    settings: Settings | None = None,
) -> ReferrerPage:
    """GET the page at *referrer_url* and return its HTML as text.

    *referrer_url* defaults to :func:`get_referrer_url` applied to
    *request*.  Cookies from the request's ``Cookie`` header and the
    resolved client IP (as ``X-Forwarded-For``) are passed along.  Cookies
    set by the referrer are kept only for the duration of this call.

    Raises:
        ReferrerMissingError: If no referrer URL can be determined.
        UnsupportedReferrerError: If the URL is not http(s).
        httpx.HTTPError: Any transport failure, unchanged.
    """
    cfg = settings or default_settings
    referrer = referrer_url or get_referrer_url(request)
    if not referrer:
        raise ReferrerMissingError()

    _check_scheme(referrer, cfg.allowed_schemes)

    headers = build_headers(request, cfg.user_agent)
    logger.debug("Dereferencing %s", referrer)

    # A fresh client per call keeps the cookie jar scoped to this request.
    async with httpx.AsyncClient(headers=headers) as client:
        response = await client.get(referrer)

    return ReferrerPage(url=referrer, html=response.text, status_code=response.status_code)
