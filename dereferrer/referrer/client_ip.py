"""Resolve the originating client address of a request with ``python-ipware``."""

from __future__ import annotations

from typing import Any

from python_ipware import IpWare

_ipware = IpWare()


def request_meta(request: Any) -> dict[str, str]:
    """Return a WSGI-style ``META`` mapping for *request*.

    Headers become ``HTTP_<NAME>`` keys and the socket peer becomes
    ``REMOTE_ADDR``, which is the shape ``IpWare.get_client_ip`` reads.
    """
    meta: dict[str, str] = {}
    headers = getattr(request, "headers", None) or {}
    for name, value in headers.items():
        meta["HTTP_" + name.upper().replace("-", "_")] = value
    host = getattr(getattr(request, "client", None), "host", None)
    if host:
        meta["REMOTE_ADDR"] = host
    return meta


def resolve_client_ip(request: Any) -> str | None:
    """Return the best guess at the client IP of *request*, or ``None``."""
    client_ip, _trusted_route = _ipware.get_client_ip(request_meta(request))
    if client_ip is None:
        return None
    return str(client_ip)
