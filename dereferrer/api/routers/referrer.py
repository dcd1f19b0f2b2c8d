"""Referrer endpoint.

Routes
------
GET /referrer    → what the dereferrer middleware attached to this request
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter()


class ReferrerResponse(BaseModel):
    referrer_url: Optional[str] = None
    html: Optional[str] = None


@router.get("", response_model=ReferrerResponse)
def get_referrer(request: Request) -> dict[str, Any]:
    """Return the referrer URL and HTML found by the middleware.

    ``html`` is ``null`` when errors are silenced and the fetch failed.
    """
    return {
        "referrer_url": getattr(request.state, "referrer_url", None),
        "html": getattr(request.state, "referrer_html", None),
    }
