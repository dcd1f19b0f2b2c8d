"""Data models for dereferenced pages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ReferrerPage:
    """The raw HTML fetched from a referrer URL."""

    url: str
    html: str
    status_code: int
