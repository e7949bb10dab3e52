"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    CORSMiddleware -- unrestricted cross-origin access, preflight short-circuit
"""

from certgate.middleware.cors import CORSConfig, CORSMiddleware
from certgate.middleware.protocol import Middleware, Next, chain

__all__ = [
    "CORSConfig",
    "CORSMiddleware",
    "Middleware",
    "Next",
    "chain",
]
