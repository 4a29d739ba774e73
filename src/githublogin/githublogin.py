"""GitHubLogin — instance-based configuration and entry point."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from githublogin.config import (
    DEFAULT_SESSION_KEY,
    GITHUB_AUTHORIZE_URL,
    GITHUB_TOKEN_URL,
    GITHUB_USER_URL,
    ConfigReader,
    GitHubLoginConfig,
)
from githublogin.events import HookRegistry
from githublogin.flow import AuthorizationFlow, QueryReader
from githublogin.session import SessionStore
from githublogin.transport import HttpClient, HttpxClient

if TYPE_CHECKING:
    from fastapi import APIRouter


class GitHubLogin:
    """Main GitHubLogin instance — holds config, hooks and the outbound HTTP client.

    Args:
        client_id: OAuth app client ID.
        client_secret: OAuth app client secret.
        app_name: Sent to GitHub as the User-Agent.
        scopes: Scopes requested on the consent screen (default "" = public info).
        http_timeout: Per-call timeout for GitHub requests in seconds (default 10).
        session_key: Session key for the pending anti-forgery token.
        authorize_url: Authorization endpoint (override for GitHub Enterprise).
        token_url: Token endpoint (override for GitHub Enterprise).
        user_url: User profile endpoint (override for GitHub Enterprise).
        http_client: Custom HttpClient. If omitted, an HttpxClient is created and
            owned by this instance (released by ``close()``).
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        app_name: str,
        *,
        scopes: str = "",
        http_timeout: float = 10.0,
        session_key: str = DEFAULT_SESSION_KEY,
        authorize_url: str = GITHUB_AUTHORIZE_URL,
        token_url: str = GITHUB_TOKEN_URL,
        user_url: str = GITHUB_USER_URL,
        http_client: HttpClient | None = None,
    ) -> None:
        self._config = GitHubLoginConfig(
            client_id=client_id,
            client_secret=client_secret,
            app_name=app_name,
            scopes=scopes,
            http_timeout=http_timeout,
            session_key=session_key,
            authorize_url=authorize_url,
            token_url=token_url,
            user_url=user_url,
        )
        self._owns_http_client = http_client is None
        self._http_client = http_client or HttpxClient(timeout=http_timeout)
        self._hooks = HookRegistry()

    @classmethod
    def from_config(
        cls, config: GitHubLoginConfig, *, http_client: HttpClient | None = None,
    ) -> GitHubLogin:
        """Create an instance from an existing config object."""
        return cls(**asdict(config), http_client=http_client)

    @classmethod
    def from_reader(
        cls, read: ConfigReader, *, http_client: HttpClient | None = None,
    ) -> GitHubLogin:
        """Create an instance from a host config-value reader."""
        return cls.from_config(GitHubLoginConfig.from_reader(read), http_client=http_client)

    @property
    def config(self) -> GitHubLoginConfig:
        """Read-only access to the config."""
        return self._config

    @property
    def hooks(self) -> HookRegistry:
        """Access the hook registry."""
        return self._hooks

    # ------ Event hooks ------

    def on(self, event_name: str):
        """Decorator to register an event hook.

        Usage:
            @login.on("login")
            def handle(event):
                print(event.login)
        """
        def decorator(fn):
            self._hooks.register(event_name, fn)
            return fn
        return decorator

    def add_hook(self, event_name: str, callback) -> None:
        """Register an event hook callback programmatically."""
        self._hooks.register(event_name, callback)

    # ------ Flow ------

    def flow(self, session: SessionStore, read_query: QueryReader) -> AuthorizationFlow:
        """Build the flow for one inbound request."""
        return AuthorizationFlow(
            self._config,
            session,
            read_query,
            http_client=self._http_client,
            hooks=self._hooks,
        )

    # ------ Integrations ------

    def fastapi_router(self) -> APIRouter:
        """Get the FastAPI router with the GitHub login and callback endpoints.

        The host app must install a session middleware (e.g. Starlette's
        SessionMiddleware) so ``request.session`` is available.

        Usage:
            app.include_router(login.fastapi_router(), prefix="/auth")
        """
        from githublogin.integrations.fastapi import create_login_router

        return create_login_router(self)

    # ------ Lifecycle ------

    def close(self) -> None:
        """Release the HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http_client.close()
