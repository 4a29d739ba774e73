"""FastAPI integration for githublogin."""

from githublogin.integrations.fastapi.router import create_login_router

__all__ = ["create_login_router"]
