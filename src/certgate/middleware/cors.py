"""CORS middleware.

The gateway grants unrestricted cross-origin access: every response carries
the allow-origin, allow-methods and allow-headers headers, and ``OPTIONS``
requests are answered here with an empty 200 before any routing happens.
"""

from dataclasses import dataclass

from certgate.http.request import Request
from certgate.http.response import Response
from certgate.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS header values.

    Defaults allow any origin, the five methods the API uses, and the two
    request headers the SPA sends::

        CORSConfig(allow_origin="https://certs.example.com")
    """

    allow_origin: str = "*"
    allow_methods: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization")

    @property
    def headers(self) -> dict[str, str]:
        """The three ``Access-Control-Allow-*`` headers as a dict."""
        return {
            "Access-Control-Allow-Origin": self.allow_origin,
            "Access-Control-Allow-Methods": ", ".join(self.allow_methods),
            "Access-Control-Allow-Headers": ", ".join(self.allow_headers),
        }


class CORSMiddleware:
    """Adds CORS headers to every response and short-circuits preflights.

    Usage::

        app.add_middleware(CORSMiddleware(CORSConfig()))

    The App installs one automatically as the outermost middleware.
    """

    __slots__ = ("_headers", "config")

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()
        self._headers = self.config.headers

    def preflight(self) -> Response:
        """Empty 200 carrying only the CORS headers."""
        return Response(body="", status=200, content_type="text/plain").with_headers(
            self._headers
        )

    def apply(self, response: Response) -> Response:
        """Return *response* with any CORS header it does not set itself."""
        missing = {
            name: value for name, value in self._headers.items() if response.header(name) is None
        }
        return response.with_headers(missing) if missing else response

    async def __call__(self, request: Request, next: Next) -> Response:
        if request.method == "OPTIONS":
            return self.preflight()
        return self.apply(await next(request))
