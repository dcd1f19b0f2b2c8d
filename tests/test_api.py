"""Tests for the FastAPI app and the Starlette ``DereferrerMiddleware``.

Requests go through the TestClient; the outbound referrer fetch made by the
middleware is mocked with ``respx``.
"""

from __future__ import annotations

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from dereferrer.api.app import create_app
from dereferrer.middleware import DereferrerConfig
from dereferrer.referrer.errors import ERROR_REFERRER_MISSING

_ADDRESS = "http://referrer.test/article"
_HTML = "<html><body>Referred from here</body></html>"


@pytest.fixture()
def client():
    with TestClient(create_app(DereferrerConfig())) as c:
        yield c


@pytest.fixture()
def silent_client():
    with TestClient(create_app(DereferrerConfig(errors=False))) as c:
        yield c


class TestReferrerEndpoint:
    def test_returns_referrer_html(self, client) -> None:
        with respx.mock:
            route = respx.get(_ADDRESS).mock(return_value=httpx.Response(200, text=_HTML))
            resp = client.get(
                "/referrer",
                headers={"Referer": _ADDRESS, "Cookie": "session=abc"},
            )

        assert resp.status_code == 200
        assert resp.json() == {"referrer_url": _ADDRESS, "html": _HTML}
        assert route.calls.last.request.headers["cookie"] == "session=abc"
        assert "x-forwarded-for" not in route.calls.last.request.headers

    def test_ref_query_param(self, client) -> None:
        with respx.mock:
            respx.get(_ADDRESS).mock(return_value=httpx.Response(200, text=_HTML))
            resp = client.get("/referrer", params={"ref": _ADDRESS})

        assert resp.status_code == 200
        assert resp.json()["html"] == _HTML

    def test_missing_referrer_is_400(self, client) -> None:
        resp = client.get("/referrer")
        assert resp.status_code == 400
        assert resp.json() == {"detail": ERROR_REFERRER_MISSING}

    def test_unsupported_scheme_is_400(self, client) -> None:
        resp = client.get("/referrer", headers={"Referer": "file:///etc/passwd"})
        assert resp.status_code == 400

    def test_transport_failure_is_502(self, client) -> None:
        with respx.mock:
            respx.get(_ADDRESS).mock(side_effect=httpx.ConnectError("refused"))
            resp = client.get("/referrer", headers={"Referer": _ADDRESS})

        assert resp.status_code == 502

    def test_silent_mode_continues_without_html(self, silent_client) -> None:
        resp = silent_client.get("/referrer")
        assert resp.status_code == 200
        assert resp.json() == {"referrer_url": None, "html": None}

    def test_silent_mode_fetch_failure(self, silent_client) -> None:
        with respx.mock:
            respx.get(_ADDRESS).mock(side_effect=httpx.ConnectError("refused"))
            resp = silent_client.get("/referrer", headers={"Referer": _ADDRESS})

        assert resp.status_code == 200
        assert resp.json() == {"referrer_url": _ADDRESS, "html": None}
