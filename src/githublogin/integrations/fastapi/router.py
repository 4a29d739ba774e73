"""FastAPI login router — redirect to GitHub and handle the callback."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import RedirectResponse

from githublogin.errors import LoginError, ProviderError
from githublogin.events import LoginFailed
from githublogin.session import MappingSessionStore

if TYPE_CHECKING:
    from githublogin.githublogin import GitHubLogin


def _login_error_detail(e: LoginError) -> dict:
    """Build HTTPException detail dict from a LoginError."""
    detail = {"error": e.code, "message": e.message}
    if e.extra:
        detail.update(e.extra)
    return detail


def _session_store(request: Request) -> MappingSessionStore:
    if "session" not in request.scope:
        raise RuntimeError(
            "GitHub login requires a session middleware "
            "(e.g. starlette.middleware.sessions.SessionMiddleware)"
        )
    return MappingSessionStore(request.session)


def create_login_router(login: GitHubLogin) -> APIRouter:
    """Create a FastAPI router with the GitHub login endpoints.

    Registers:
        GET /github           — 302 to GitHub's consent screen
        GET /github/callback  — completes the flow, returns the GitHub profile

    Endpoints are sync: the flow blocks on outbound calls, so FastAPI runs
    them in its threadpool.
    """
    router = APIRouter(tags=["github-login"])

    @router.get("/github")
    def github_authorize(request: Request):
        """Start the login — redirect to GitHub."""
        flow = login.flow(_session_store(request), request.query_params.get)
        return RedirectResponse(url=flow.generate_authorization_url(), status_code=302)

    @router.get("/github/callback")
    def github_callback(
        request: Request,
        error: str | None = None,
        error_description: str | None = None,
    ):
        """Callback — verify state, exchange the code, return the profile."""
        if error:
            # User denied access (or GitHub rejected the request) before any code was issued
            e = ProviderError(f"GitHub error: {error_description or error}", github_error=error)
            login.hooks.emit("login_failed", LoginFailed(reason=e.code, message=e.message))
            raise HTTPException(status_code=e.status_code, detail=_login_error_detail(e))

        flow = login.flow(_session_store(request), request.query_params.get)
        try:
            return flow.complete_authorization()
        except LoginError as e:
            raise HTTPException(status_code=e.status_code, detail=_login_error_detail(e))

    return router
