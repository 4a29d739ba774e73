"""Tests for HttpxClient — request shape, timeouts, and transport error mapping."""

import logging

import httpx
import pytest

from githublogin.errors import TransportFailure
from githublogin.transport import HttpClient, HttpResponse, HttpxClient


def _client(handler) -> HttpxClient:
    return HttpxClient(transport=httpx.MockTransport(handler))


class TestHttpxClient:
    def test_satisfies_protocol(self):
        with _client(lambda r: httpx.Response(200)) as client:
            assert isinstance(client, HttpClient)

    def test_post_form(self):
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, text='{"ok": true}')

        with _client(handler) as client:
            response = client.post(
                "https://example.test/token",
                data={"a": "1", "b": "two"},
                headers={"Accept": "application/json"},
            )

        assert response == HttpResponse(status_code=200, body='{"ok": true}')
        assert captured[0].method == "POST"
        assert captured[0].headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert captured[0].content == b"a=1&b=two"

    def test_get_returns_non_200_without_raising(self):
        with _client(lambda r: httpx.Response(404, text="Not Found")) as client:
            response = client.get("https://example.test/user", headers={})
        assert response.status_code == 404
        assert response.body == "Not Found"

    def test_connect_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        with _client(handler) as client:
            with pytest.raises(TransportFailure, match="Could not contact GitHub"):
                client.get("https://example.test/user", headers={})

    def test_timeout(self):
        def handler(request):
            raise httpx.ConnectTimeout("too slow")

        with _client(handler) as client:
            with pytest.raises(TransportFailure, match="Timed out"):
                client.post("https://example.test/token", data={}, headers={})

    def test_timeout_configured(self):
        client = HttpxClient(timeout=3.5)
        try:
            assert client._client.timeout.read == 3.5
        finally:
            client.close()

    def test_query_string_not_logged(self, caplog):
        def handler(request):
            raise httpx.ConnectError("down")

        with _client(handler) as client:
            with caplog.at_level(logging.WARNING, logger="githublogin.transport"):
                with pytest.raises(TransportFailure):
                    client.get("https://example.test/user?access_token=secret", headers={})

        assert "secret" not in caplog.text
        assert "https://example.test/user" in caplog.text

    def test_non_ascii_header(self):
        calls = []

        with _client(lambda r: calls.append(r) or httpx.Response(200)) as client:
            with pytest.raises(TransportFailure, match="Invalid request"):
                client.get("https://example.test/user", headers={"User-Agent": "Café Login"})

        assert calls == []
