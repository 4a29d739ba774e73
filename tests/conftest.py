"""Test fixtures for githublogin.

All tests are network-free — GitHub is replaced by an httpx MockTransport
that routes on the request path.
"""

import json
from collections.abc import Callable

import httpx
import pytest

from githublogin.config import GitHubLoginConfig
from githublogin.session import MemorySessionStore
from githublogin.transport import HttpxClient

TOKEN_PATH = "/login/oauth/access_token"
USER_PATH = "/user"

Handler = Callable[[httpx.Request], httpx.Response]


def _canned(status_code: int, text: str) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=text)

    return handler


class FakeGitHub:
    """Canned GitHub responses keyed by path, with every request captured."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._handlers: dict[str, Handler] = {}
        self.respond(TOKEN_PATH, json_data={"access_token": "abc123"})
        self.respond(USER_PATH, json_data={"login": "octocat"})

    def respond(self, path: str, status_code: int = 200, *, json_data=None, text: str = "") -> None:
        if json_data is not None:
            text = json.dumps(json_data)
        self._handlers[path] = _canned(status_code, text)

    def fail(self, path: str, exc: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self._handlers[path] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handlers[request.url.path](request)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def http_client(github: FakeGitHub):
    client = HttpxClient(transport=httpx.MockTransport(github.handler))
    yield client
    client.close()


@pytest.fixture
def config() -> GitHubLoginConfig:
    return GitHubLoginConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        app_name="test-app",
    )


@pytest.fixture
def session() -> MemorySessionStore:
    return MemorySessionStore()
