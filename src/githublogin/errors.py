"""Login error taxonomy — one class per failure kind, all sharing the LoginError shape."""


class LoginError(Exception):
    """Base login error with an error code and HTTP status."""

    code = "login_error"
    status_code = 400

    def __init__(self, message: str, **extra):
        self.message = message
        self.extra = extra
        super().__init__(message)


class ConfigurationError(LoginError):
    """Missing or invalid GitHub app configuration."""

    code = "configuration_error"
    status_code = 500


class CsrfMismatch(LoginError):
    """Stored anti-forgery token is absent or differs from the received state."""

    code = "csrf_mismatch"


class MissingCode(LoginError):
    """Callback arrived without an authorization code."""

    code = "missing_code"


class ProviderError(LoginError):
    """GitHub answered with an error field."""

    code = "provider_error"


class TokenMissing(LoginError):
    """Token exchange succeeded but carried no access token."""

    code = "token_missing"


class TransportFailure(LoginError):
    """Outbound call failed at the transport level or returned a non-200 status."""

    code = "transport_failure"
    status_code = 502

    def __init__(self, message: str, *, status: int | None = None, **extra):
        self.status = status
        super().__init__(message, **extra)


class EmptyResponse(LoginError):
    """Outbound call returned an empty body."""

    code = "empty_response"
    status_code = 502


class UnparsableResponse(LoginError):
    """Outbound call returned a body that is not a JSON object."""

    code = "unparsable_response"
    status_code = 502
