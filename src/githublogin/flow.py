"""GitHub authorization code flow — redirect URL, state verification, code exchange, profile fetch.

Framework-agnostic. One AuthorizationFlow is built per inbound request; the
only state kept across requests is the anti-forgery token in the session.
"""

from __future__ import annotations

import json
import logging
import urllib.parse
from collections.abc import Callable, Mapping
from typing import Any

from githublogin.config import GitHubLoginConfig
from githublogin.errors import (
    CsrfMismatch,
    EmptyResponse,
    LoginError,
    MissingCode,
    ProviderError,
    TokenMissing,
    TransportFailure,
    UnparsableResponse,
)
from githublogin.events import AuthorizationStarted, HookRegistry, Login, LoginFailed
from githublogin.session import SessionStore
from githublogin.state import generate_state_token, state_matches
from githublogin.transport import HttpClient, HttpResponse, HttpxClient

logger = logging.getLogger("githublogin.flow")

QueryReader = Callable[[str], str | None]


class AuthorizationFlow:
    """Drives one GitHub login for one inbound request.

    Args:
        config: GitHub app settings.
        session: Per-user session holding the pending anti-forgery token.
        read_query: Reads a query parameter from the current request. ``code``
            and ``state`` are read once, at construction.
        http_client: Outbound HTTP client. If omitted, an HttpxClient with
            config.http_timeout is created and owned by this flow; release it
            with ``close()`` or by using the flow as a context manager.
        hooks: Optional hook registry for login events.
    """

    def __init__(
        self,
        config: GitHubLoginConfig,
        session: SessionStore,
        read_query: QueryReader,
        *,
        http_client: HttpClient | None = None,
        hooks: HookRegistry | None = None,
    ) -> None:
        self.config = config
        self.scopes = config.scopes
        self.access_token: str | None = None
        self._session = session
        self._owns_http_client = http_client is None
        self._http = http_client or HttpxClient(timeout=config.http_timeout)
        self._hooks = hooks
        self._code_received = read_query("code")
        self._state_received = read_query("state")

    # ------ Redirect ------

    def generate_authorization_url(self) -> str:
        """Build the GitHub authorize URL, storing a state token if none is pending.

        Repeated calls before the callback reuse the same state.
        """
        state = self._session.get(self.config.session_key)
        reused = bool(state)
        if not reused:
            state = generate_state_token()
            self._session.set(self.config.session_key, state)
            logger.debug("Stored new anti-forgery token")

        params = {
            "client_id": self.config.client_id,
            "state": state,
            "scope": self.scopes,
        }
        self._emit("authorization_started", AuthorizationStarted(state_reused=reused))
        return f"{self.config.authorize_url}?{urllib.parse.urlencode(params)}"

    # ------ Callback ------

    def complete_authorization(self) -> dict[str, Any]:
        """Verify the callback and return the authenticated user's GitHub profile.

        Raises:
            CsrfMismatch: No pending token, or it differs from the received state.
            MissingCode: The callback carried no code.
            ProviderError: GitHub returned an error field.
            TokenMissing: The token response had no access token.
            TransportFailure: Transport error or non-200 status.
            EmptyResponse: Empty response body.
            UnparsableResponse: Body was not a JSON object.
        """
        try:
            profile = self._complete()
        except LoginError as e:
            logger.warning("GitHub login failed (%s): %s", e.code, e.message)
            self._emit("login_failed", LoginFailed(reason=e.code, message=e.message))
            raise

        self._emit("login", Login(login=profile.get("login"), user_id=profile.get("id")))
        return profile

    def _complete(self) -> dict[str, Any]:
        stored = self._session.get(self.config.session_key)
        if not state_matches(stored, self._state_received):
            raise CsrfMismatch(
                "The received state doesn't match the one that was initially sent"
            )

        if not self._code_received:
            raise MissingCode("Invalid code received")

        # One-time use: the next redirect gets a fresh token
        self._session.delete(self.config.session_key)

        self.access_token = self._exchange_code(self._code_received)
        return self._fetch_profile(self.access_token)

    def _exchange_code(self, code: str) -> str:
        """POST the code to the token endpoint and return the access token."""
        response = self._http.post(
            self.config.token_url,
            data={
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "code": code,
            },
            headers=self._headers(),
        )
        data = parse_response(response)
        _raise_for_provider_error(data)

        access_token = data.get("access_token")
        if not access_token:
            raise TokenMissing("GitHub error: Authorization token missing")

        logger.debug("Exchanged authorization code for access token")
        return access_token

    def _fetch_profile(self, access_token: str) -> dict[str, Any]:
        """GET the public profile of the token's owner."""
        query = urllib.parse.urlencode({"access_token": access_token})
        response = self._http.get(
            f"{self.config.user_url}?{query}", headers=self._headers(),
        )
        data = parse_response(response)
        _raise_for_provider_error(data)
        return data

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "User-Agent": self.config.app_name}

    def _emit(self, event_name: str, event) -> None:
        if self._hooks is not None:
            self._hooks.emit(event_name, event)

    # ------ Lifecycle ------

    def close(self) -> None:
        """Release the HTTP client if this flow created it."""
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> AuthorizationFlow:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Shared response validation
# ---------------------------------------------------------------------------


def parse_response(response: HttpResponse) -> dict[str, Any]:
    """Validate an outbound response and decode its JSON object body.

    Every call to GitHub goes through this check.

    Raises:
        TransportFailure: Status is anything but 200.
        EmptyResponse: Body is empty.
        UnparsableResponse: Body is not JSON, or not a JSON object.
    """
    if response.status_code != 200:
        raise TransportFailure(
            "Something went wrong when trying to contact GitHub. Please try again later.",
            status=response.status_code,
        )

    if not response.body:
        raise EmptyResponse("GitHub returned an empty response")

    try:
        data = json.loads(response.body)
    except ValueError:
        raise UnparsableResponse("Unable to process the response from GitHub") from None

    if not isinstance(data, dict):
        raise UnparsableResponse("Unable to process the response from GitHub")
    return data


def _raise_for_provider_error(data: Mapping[str, Any]) -> None:
    if data.get("error") is not None:
        description = data.get("error_description") or data["error"]
        raise ProviderError(f"GitHub error: {description}", github_error=data["error"])
