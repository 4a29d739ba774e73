"""githublogin — GitHub OAuth login (authorization code flow) for Python web apps."""

__version__ = "0.1.0"

from githublogin.config import GitHubLoginConfig
from githublogin.errors import (
    ConfigurationError,
    CsrfMismatch,
    EmptyResponse,
    LoginError,
    MissingCode,
    ProviderError,
    TokenMissing,
    TransportFailure,
    UnparsableResponse,
)
from githublogin.events import AuthorizationStarted, Login, LoginFailed
from githublogin.flow import AuthorizationFlow
from githublogin.githublogin import GitHubLogin
from githublogin.session import MappingSessionStore, MemorySessionStore, SessionStore
from githublogin.transport import HttpClient, HttpResponse, HttpxClient

__all__ = [
    "AuthorizationFlow",
    "AuthorizationStarted",
    "ConfigurationError",
    "CsrfMismatch",
    "EmptyResponse",
    "GitHubLogin",
    "GitHubLoginConfig",
    "HttpClient",
    "HttpResponse",
    "HttpxClient",
    "Login",
    "LoginError",
    "LoginFailed",
    "MappingSessionStore",
    "MemorySessionStore",
    "MissingCode",
    "ProviderError",
    "SessionStore",
    "TokenMissing",
    "TransportFailure",
    "UnparsableResponse",
]
