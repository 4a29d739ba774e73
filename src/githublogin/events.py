"""githublogin event system — typed events and the hook registry.

Developers register hooks via @login.on("event_name") to react to login
events (audit logs, metrics, account linking). Hooks are fail-open: errors
are logged and never break the login flow.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable

logger = logging.getLogger("githublogin.events")


# ---------------------------------------------------------------------------
# Event dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Event:
    """Base event — all events carry a timestamp."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True)
class AuthorizationStarted(Event):
    """Fired when an authorization URL is generated."""
    state_reused: bool = False


@dataclass(frozen=True, slots=True)
class Login(Event):
    """Fired when the callback completes and the profile is fetched."""
    login: str | None = None
    user_id: int | None = None


@dataclass(frozen=True, slots=True)
class LoginFailed(Event):
    """Fired when the callback fails at any step."""
    reason: str = ""
    message: str = ""


# ---------------------------------------------------------------------------
# Event name mapping
# ---------------------------------------------------------------------------

EVENT_MAP: dict[str, type[Event]] = {
    "authorization_started": AuthorizationStarted,
    "login": Login,
    "login_failed": LoginFailed,
}


# ---------------------------------------------------------------------------
# Hook registry
# ---------------------------------------------------------------------------

HookCallback = Callable[..., Any]


class HookRegistry:
    """Registry for event hook callbacks. Supports multiple listeners per event."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[HookCallback]] = {}

    def register(self, event_name: str, callback: HookCallback) -> None:
        """Register a callback for an event name."""
        if event_name not in EVENT_MAP:
            raise ValueError(
                f"Unknown event '{event_name}'. "
                f"Valid events: {', '.join(sorted(EVENT_MAP))}"
            )
        self._hooks.setdefault(event_name, []).append(callback)

    def get_hooks(self, event_name: str) -> list[HookCallback]:
        """Get all registered callbacks for an event name."""
        return self._hooks.get(event_name, [])

    def emit(self, event_name: str, event: Event) -> None:
        """Fire all registered callbacks for an event. Fail-open: errors are logged.

        Raises:
            TypeError: If the event is not the type registered for ``event_name``.
        """
        expected = EVENT_MAP.get(event_name)
        if expected is None or not isinstance(event, expected):
            raise TypeError(
                f"Event '{event_name}' expects {expected.__name__ if expected else 'a known event'}, "
                f"got {type(event).__name__}"
            )
        for callback in self.get_hooks(event_name):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Hook error in '%s' handler %s.%s",
                    event_name,
                    callback.__module__,
                    callback.__qualname__,
                )
