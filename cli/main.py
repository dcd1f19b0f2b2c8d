"""dereferrer CLI — locate and fetch referrer pages from the shell.

Usage:
    python cli/main.py --help

Commands:
    locate    → print the referrer URL a request would resolve to
    fetch     → GET the referrer page and print its HTML
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from dereferrer.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from types import SimpleNamespace
from typing import Optional

import httpx
import typer

from dereferrer.config import settings
from dereferrer.referrer import DereferrerError, get_referrer_html, get_referrer_url

app = typer.Typer(
    name="dereferrer",
    help="Fetch the page a request was referred from.",
    no_args_is_help=True,
)


def _fake_request(
    referer: Optional[str],
    url: str,
    cookie: Optional[str] = None,
    client_ip: Optional[str] = None,
) -> SimpleNamespace:
    """Build a minimal request object the way an HTTP server would see it."""
    headers: dict[str, str] = {}
    if referer is not None:
        headers["referer"] = referer
    if cookie is not None:
        headers["cookie"] = cookie
    client = SimpleNamespace(host=client_ip) if client_ip else None
    return SimpleNamespace(headers=headers, url=url, client=client)


@app.command("locate")
def locate(
    referer: Optional[str] = typer.Option(None, help="Value of the Referer header."),
    url: str = typer.Option("/", help="Request path and query string."),
    query_name: Optional[str] = typer.Option(
        None, help="Fallback query parameter. Defaults to DEREFERRER_QUERY_NAME."
    ),
    no_query: bool = typer.Option(False, "--no-query", help="Never look at the query string."),
) -> None:
    """Print the referrer URL for a request, or exit 1 if there is none."""
    request = _fake_request(referer, url)
    if no_query:
        found = get_referrer_url(request, False)
    else:
        found = get_referrer_url(request, query_name or settings.query_name or "ref")
    if not found:
        typer.echo("[locate] No referrer URL could be found", err=True)
        raise typer.Exit(1)
    typer.echo(found)


@app.command("fetch")
def fetch(
    referer: Optional[str] = typer.Option(None, help="Value of the Referer header."),
    url: str = typer.Option("/", help="Request path and query string."),
    cookie: Optional[str] = typer.Option(None, help="Cookie header to forward."),
    client_ip: Optional[str] = typer.Option(None, help="Client IP to forward as X-Forwarded-For."),
) -> None:
    """Fetch the referrer page and print its HTML."""
    request = _fake_request(referer, url, cookie=cookie, client_ip=client_ip)
    try:
        page = asyncio.run(get_referrer_html(request, settings=settings))
    except (DereferrerError, httpx.HTTPError) as exc:
        typer.echo(f"[fetch] {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(page.html)


if __name__ == "__main__":
    app()
