"""Tests for the GitHubLogin entry point — construction, per-request flows, lifecycle."""

from unittest.mock import MagicMock

import pytest

from githublogin import AuthorizationFlow, GitHubLogin, GitHubLoginConfig, HttpxClient
from githublogin.errors import ConfigurationError
from githublogin.session import MemorySessionStore


class TestGitHubLogin:
    def test_builds_config(self, http_client):
        login = GitHubLogin(
            "id", "secret", "app", scopes="read:user", http_timeout=4, http_client=http_client,
        )
        assert login.config == GitHubLoginConfig(
            client_id="id", client_secret="secret", app_name="app",
            scopes="read:user", http_timeout=4,
        )

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError):
            GitHubLogin("", "secret", "app")

    def test_from_config_keeps_endpoints(self, http_client):
        config = GitHubLoginConfig(
            client_id="id", client_secret="secret", app_name="app",
            token_url="https://ghe.example.com/login/oauth/access_token",
        )
        login = GitHubLogin.from_config(config, http_client=http_client)
        assert login.config == config

    def test_from_reader(self, http_client):
        values = {"client_id": "id", "client_secret": "secret", "app_name": "app"}
        login = GitHubLogin.from_reader(values.get, http_client=http_client)
        assert login.config.client_id == "id"

    def test_flow_per_request(self, http_client):
        login = GitHubLogin("id", "secret", "app", scopes="user", http_client=http_client)
        session = MemorySessionStore()

        flow = login.flow(session, {"code": "c", "state": "s"}.get)
        assert isinstance(flow, AuthorizationFlow)
        assert flow.scopes == "user"
        assert flow.config is login.config

    def test_flows_share_session_state(self, http_client):
        login = GitHubLogin("id", "secret", "app", http_client=http_client)
        session = MemorySessionStore()

        first = login.flow(session, {}.get).generate_authorization_url()
        second = login.flow(session, {}.get).generate_authorization_url()
        assert first == second

    def test_close_owned_client(self):
        login = GitHubLogin("id", "secret", "app")
        assert isinstance(login._http_client, HttpxClient)
        login.close()
        assert login._http_client._client.is_closed

    def test_close_leaves_injected_client_open(self):
        injected = MagicMock()
        login = GitHubLogin("id", "secret", "app", http_client=injected)
        login.close()
        injected.close.assert_not_called()
