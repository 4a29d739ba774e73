"""Anti-forgery state tokens — generation and comparison."""

import hashlib
import hmac
import secrets


def generate_state_token() -> str:
    """Generate a random anti-forgery token.

    Returns:
        Hex-encoded SHA-256 digest of 10 random bytes (64 characters).
    """
    return hashlib.sha256(secrets.token_bytes(10)).hexdigest()


def state_matches(stored: str | None, received: str | None) -> bool:
    """Constant-time check that the received state equals the stored token.

    An absent or empty token on either side never matches.
    """
    if not stored or not received:
        return False
    return hmac.compare_digest(stored.encode("utf-8"), received.encode("utf-8"))
