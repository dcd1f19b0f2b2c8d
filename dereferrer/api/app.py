"""FastAPI application factory.

The app runs every request through :class:`DereferrerMiddleware`, so
handlers can read ``request.state.referrer_url`` and
``request.state.referrer_html``.

Routers
-------
    /referrer  — echo what the middleware found for the current request
"""

from __future__ import annotations

from fastapi import FastAPI

from dereferrer.api.routers import referrer as referrer_router
from dereferrer.config import VERSION, settings
from dereferrer.middleware import DereferrerConfig, DereferrerMiddleware


def create_app(configuration: DereferrerConfig | None = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    *configuration* defaults to the one derived from :data:`settings`.
    """
    app = FastAPI(
        title="dereferrer",
        description="Fetches the HTML of the page that referred each request.",
        version=VERSION,
    )

    app.add_middleware(
        DereferrerMiddleware,
        configuration=configuration or settings.middleware_config(),
    )

    app.include_router(referrer_router.router, prefix="/referrer", tags=["referrer"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn dereferrer.api.app:app --reload
app = create_app()
