"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from dereferrer.api import app

    uvicorn dereferrer.api:app --reload
"""

from dereferrer.api.app import app

__all__ = ["app"]
