"""Outbound HTTP — the narrow client interface the flow talks to, and its httpx implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from githublogin.errors import TransportFailure

logger = logging.getLogger("githublogin.transport")


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status code and raw body of an outbound call."""

    status_code: int
    body: str


@runtime_checkable
class HttpClient(Protocol):
    """Performs outbound calls. Transport errors are raised as TransportFailure."""

    def post(
        self, url: str, *, data: Mapping[str, str], headers: Mapping[str, str],
    ) -> HttpResponse: ...

    def get(self, url: str, *, headers: Mapping[str, str]) -> HttpResponse: ...


class HttpxClient:
    """HttpClient backed by a shared ``httpx.Client``.

    Args:
        timeout: Per-call timeout in seconds. A timeout surfaces as TransportFailure.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def post(
        self, url: str, *, data: Mapping[str, str], headers: Mapping[str, str],
    ) -> HttpResponse:
        return self._send("POST", url, data=dict(data), headers=dict(headers))

    def get(self, url: str, *, headers: Mapping[str, str]) -> HttpResponse:
        return self._send("GET", url, headers=dict(headers))

    def _send(self, method: str, url: str, **kwargs) -> HttpResponse:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out", method, _redact(url))
            raise TransportFailure("Timed out contacting GitHub") from e
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, _redact(url), type(e).__name__)
            raise TransportFailure("Could not contact GitHub") from e
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            logger.warning("%s %s could not be sent: %s", method, _redact(url), type(e).__name__)
            raise TransportFailure("Invalid request to GitHub") from e

        logger.debug("%s %s -> %d", method, _redact(url), response.status_code)
        return HttpResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> HttpxClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _redact(url: str) -> str:
    """Drop the query string so tokens never reach the logs."""
    return url.split("?", 1)[0]
