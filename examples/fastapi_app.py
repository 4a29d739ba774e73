"""Example app using githublogin.

Setup:
  1. Create an OAuth App at https://github.com/settings/developers
  2. Set the callback URL to http://localhost:8000/auth/github/callback
  3. Export GITHUB_CLIENT_ID, GITHUB_CLIENT_SECRET and GITHUB_APP_NAME
     (optionally GITHUB_SCOPES, GITHUB_HTTP_TIMEOUT)

Run:  uvicorn fastapi_app:app --reload --port 8000
Then open http://localhost:8000/auth/github
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from githublogin import GitHubLogin

logging.basicConfig(level=logging.INFO)

login = GitHubLogin.from_reader(lambda key: os.environ.get(f"GITHUB_{key.upper()}"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    login.close()


app = FastAPI(title="githublogin example", lifespan=lifespan)
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "change-me"),
    https_only=False,  # localhost dev
)
app.include_router(login.fastapi_router(), prefix="/auth")


# ---------------------------------------------------------------------------
# Event hooks — audit logs, account linking, analytics
# ---------------------------------------------------------------------------


@login.on("login")
def on_login(event):
    print(f"[hook] GitHub login: {event.login} (id={event.user_id})")


@login.on("login_failed")
def on_login_failed(event):
    print(f"[hook] GitHub login failed: {event.reason}: {event.message}")
