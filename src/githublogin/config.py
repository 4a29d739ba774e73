"""githublogin configuration — GitHub app credentials and endpoint settings."""

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from githublogin.errors import ConfigurationError

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize/"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_USER_URL = "https://api.github.com/user"

DEFAULT_SESSION_KEY = "githublogin_state"

ConfigReader = Callable[[str], Any]


@dataclass(frozen=True, slots=True)
class GitHubLoginConfig:
    """Settings for one GitHub OAuth app.

    Built by the GitHubLogin constructor, or from a host config reader via
    ``from_reader``. Immutable once constructed.

    Args:
        client_id: OAuth app client ID.
        client_secret: OAuth app client secret.
        app_name: Sent as the User-Agent header (GitHub rejects requests without one).
        scopes: Space/comma separated scope list. Empty requests public info only.
        http_timeout: Per-call timeout in seconds for outbound requests.
        session_key: Session key holding the pending anti-forgery token.
    """

    client_id: str
    client_secret: str
    app_name: str
    scopes: str = ""
    http_timeout: float = 10.0
    authorize_url: str = GITHUB_AUTHORIZE_URL
    token_url: str = GITHUB_TOKEN_URL
    user_url: str = GITHUB_USER_URL
    session_key: str = DEFAULT_SESSION_KEY

    def __post_init__(self) -> None:
        """Validate required settings at construction time."""
        for field_name in ("client_id", "client_secret", "app_name", "session_key"):
            if not getattr(self, field_name):
                raise ConfigurationError(f"{field_name} cannot be empty")

        if not self.app_name.isascii():
            raise ConfigurationError(
                f"app_name is sent as the User-Agent header and must be ASCII, got {self.app_name!r}"
            )

        if not math.isfinite(self.http_timeout) or self.http_timeout <= 0:
            raise ConfigurationError(
                f"http_timeout must be a positive number, got {self.http_timeout}"
            )

    @classmethod
    def from_reader(cls, read: ConfigReader) -> "GitHubLoginConfig":
        """Build a config from a host config-value reader.

        Required keys: client_id, client_secret, app_name.
        Optional keys: scopes, http_timeout. A reader returning None means unset.

        Raises:
            ConfigurationError: If a required key is missing.
        """
        values: dict[str, Any] = {}
        for key in ("client_id", "client_secret", "app_name"):
            value = read(key)
            if not value:
                raise ConfigurationError(f"Missing GitHub login setting '{key}'")
            values[key] = str(value)

        scopes = read("scopes")
        if scopes is not None:
            values["scopes"] = scopes if isinstance(scopes, str) else ",".join(scopes)

        http_timeout = read("http_timeout")
        if http_timeout is not None:
            try:
                values["http_timeout"] = float(http_timeout)
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"http_timeout must be a number, got {http_timeout!r}"
                ) from None

        return cls(**values)
