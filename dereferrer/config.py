"""Centralised settings for dereferrer.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from dereferrer.middleware import DereferrerConfig

PRODUCT_NAME = "dereferrer"
VERSION = "1.0.0"

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


def _env_query_name() -> str | bool:
    raw = os.environ.get("DEREFERRER_QUERY_NAME", "ref").strip()
    if raw.lower() == "false":
        return False
    return raw or "ref"


def _env_schemes() -> tuple[str, ...]:
    raw = os.environ.get("DEREFERRER_ALLOWED_SCHEMES", "http,https")
    return tuple(s.strip().lower() for s in raw.split(",") if s.strip())


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Outbound fetch
    # ------------------------------------------------------------------
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "DEREFERRER_USER_AGENT", f"{PRODUCT_NAME}Bot/{VERSION}"
        )
    )
    allowed_schemes: tuple[str, ...] = field(default_factory=_env_schemes)

    # ------------------------------------------------------------------
    # Middleware defaults
    # ------------------------------------------------------------------
    query_name: str | bool = field(default_factory=_env_query_name)
    errors: bool = field(
        default_factory=lambda: _env_bool("DEREFERRER_ERRORS", True)
    )

    def middleware_config(self) -> DereferrerConfig:
        """Return a :class:`DereferrerConfig` built from these settings."""
        from dereferrer.middleware import DereferrerConfig  # noqa: PLC0415

        return DereferrerConfig(query_name=self.query_name, errors=self.errors)


# Module-level singleton, computed once at import time:
#   from dereferrer.config import settings
settings = Settings()
