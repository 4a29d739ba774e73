"""Session store — where the pending anti-forgery token lives between redirect and callback."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """Per-user session storage, scoped by the host framework."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MappingSessionStore:
    """Adapts any dict-like session (e.g. Starlette's ``request.session``)."""

    def __init__(self, mapping: MutableMapping[str, Any]) -> None:
        self._mapping = mapping

    def get(self, key: str) -> str | None:
        return self._mapping.get(key)

    def set(self, key: str, value: str) -> None:
        self._mapping[key] = value

    def delete(self, key: str) -> None:
        self._mapping.pop(key, None)


class MemorySessionStore(MappingSessionStore):
    """Session store backed by a private dict. Useful for tests and scripts."""

    def __init__(self) -> None:
        super().__init__({})
