"""ASGI type aliases.

The gateway only speaks the ``http`` and ``lifespan`` scope types.
Everything above ``server.handler`` works with ``Request`` instead.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

Scope: TypeAlias = MutableMapping[str, Any]
Message: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]


def encode_headers(headers: tuple[tuple[str, str], ...]) -> list[tuple[bytes, bytes]]:
    """Lower-case and latin-1 encode header pairs for an ASGI start message."""
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers]
