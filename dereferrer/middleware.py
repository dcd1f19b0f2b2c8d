"""Middleware that dereferences the referrer of every incoming request.

Two shapes are provided:

``create_middleware(configuration)``
    Returns ``middleware(request, response, call_next)``.  ``call_next``
    is awaited exactly once per request, with the error as its only
    argument when the pipeline should fail, or with no argument to
    continue.  This is the framework-agnostic form.

``DereferrerMiddleware``
    A Starlette ``BaseHTTPMiddleware`` hosting the above, for use with
    ``app.add_middleware(DereferrerMiddleware, errors=False)``.  Errors
    end the request with a JSON ``{"detail": ...}`` response.

Results are attached to ``request.state`` (or to the request itself when
it has no ``state``):

- ``referrer_url``: the located URL, or ``None``
- ``referrer_html``: the page HTML, only when fetching succeeded
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Mapping

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from dereferrer.referrer.errors import DereferrerError, ReferrerMissingError
from dereferrer.referrer.fetcher import get_referrer_html
from dereferrer.referrer.locator import DEFAULT_QUERY_NAME, get_referrer_url
from dereferrer.referrer.models import ReferrerPage

logger = logging.getLogger(__name__)

CallNext = Callable[..., Awaitable[Any]]
Middleware = Callable[[Any, Any, CallNext], Awaitable[Any]]


@dataclass(frozen=True)
class DereferrerConfig:
    """Options for :func:`create_middleware`.

    ``query_name`` set to ``False`` disables the query-string fallback.
    ``get_referrer_url(request, query_name)`` and
    ``get_referrer_html(request, referrer_url)`` may be replaced; anything
    that is not callable falls back to the built-in implementation.
    """

    query_name: str | bool = DEFAULT_QUERY_NAME
    errors: bool = True
    get_referrer_url: Callable[..., str | None] = get_referrer_url
    get_referrer_html: Callable[..., Any] = get_referrer_html

    def __post_init__(self) -> None:
        if not callable(self.get_referrer_url):
            object.__setattr__(self, "get_referrer_url", get_referrer_url)
        if not callable(self.get_referrer_html):
            object.__setattr__(self, "get_referrer_html", get_referrer_html)


def _resolve_config(
    configuration: DereferrerConfig | Mapping[str, Any] | None,
    options: Mapping[str, Any],
) -> DereferrerConfig:
    if isinstance(configuration, DereferrerConfig):
        return replace(configuration, **options)
    merged = dict(configuration or {})
    merged.update(options)
    return DereferrerConfig(**merged)


def _attach(request: Any, name: str, value: Any) -> None:
    setattr(getattr(request, "state", request), name, value)


def create_middleware(
    configuration: DereferrerConfig | Mapping[str, Any] | None = None,
    **options: Any,
) -> Middleware:
    """Return a middleware that fetches the referrer of each request.

    *configuration* may be a :class:`DereferrerConfig` or a mapping of its
    field names; keyword *options* are merged over a mapping.
    """
    config = _resolve_config(configuration, options)

    async def dereferrer(request: Any, response: Any, call_next: CallNext) -> Any:
        referrer_url = config.get_referrer_url(request, config.query_name)
        _attach(request, "referrer_url", referrer_url)

        if not referrer_url:
            if config.errors:
                return await call_next(ReferrerMissingError())
            return await call_next()

        try:
            result = config.get_referrer_html(request, referrer_url)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            if config.errors:
                return await call_next(exc)
            logger.info("Ignoring failure to dereference %s: %s", referrer_url, exc)
            return await call_next()

        html = result.html if isinstance(result, ReferrerPage) else result
        _attach(request, "referrer_html", html)
        return await call_next()

    return dereferrer


def error_response(error: Exception) -> JSONResponse:
    """Map a dereferencing failure to an HTTP error response."""
    status_code = 400 if isinstance(error, DereferrerError) else 502
    return JSONResponse({"detail": str(error)}, status_code=status_code)


class DereferrerMiddleware(BaseHTTPMiddleware):
    """Starlette/FastAPI host for :func:`create_middleware`."""

    def __init__(
        self,
        app: ASGIApp,
        configuration: DereferrerConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> None:
        super().__init__(app)
        self._dereferrer = create_middleware(configuration, **options)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        async def proceed(error: Exception | None = None) -> Response:
            if error is not None:
                logger.warning("Dereferrer failed for %s: %r", request.url.path, error)
                return error_response(error)
            return await call_next(request)

        return await self._dereferrer(request, None, proceed)
