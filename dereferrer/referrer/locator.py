"""Find the referrer URL of an incoming request."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import parse_qs, urlsplit

DEFAULT_QUERY_NAME = "ref"


def get_header(request: Any, name: str) -> str | None:
    """Return header *name* from ``request.headers``, ignoring case.

    Works with Starlette's case-insensitive ``Headers`` as well as plain
    dicts keyed in any case.
    """
    headers: Mapping[str, str] | None = getattr(request, "headers", None)
    if not headers:
        return None
    value = headers.get(name)
    if value is None:
        wanted = name.lower()
        for key, candidate in headers.items():
            if key.lower() == wanted:
                return candidate
    return value


def _query_params(request: Any) -> dict[str, list[str]]:
    """Parse the query string of ``request.url``; malformed URLs give ``{}``."""
    raw_url = str(getattr(request, "url", None) or "")
    try:
        query = urlsplit(raw_url).query
    except ValueError:
        return {}
    return parse_qs(query)


def get_referrer_url(request: Any, query_name: str | bool | None = DEFAULT_QUERY_NAME) -> str | None:
    """Return the request's ``Referer`` header or its ``ref`` query value.

    The header always wins.  An empty header counts as missing, in which
    case the query string is searched for *query_name*.  Pass
    ``query_name=False`` to never look at the query string.

    Returns ``None`` when no referrer can be found.
    """
    referrer = get_header(request, "referer")
    if referrer:
        return referrer

    if query_name is False:
        return None

    values = _query_params(request).get(query_name or DEFAULT_QUERY_NAME)
    if values and values[0]:
        return values[0]
    return None
