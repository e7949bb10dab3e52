"""Static file serving with single-page-application fallback.

Every non-API path lands here. ``/`` is the index document; any other path
is looked up under the static directory and, when it does not name a
readable regular file inside that directory, the index document is served
instead so client-side routes can be deep-linked.
"""

import logging
from pathlib import Path

import anyio

from certgate.http.request import Request
from certgate.http.response import Response, file_response

logger = logging.getLogger("certgate.server")


class SPAStaticFiles:
    """Serve files from *directory*, falling back to *index*.

    Security: the candidate path is resolved (``..`` segments and symlinks)
    and must stay inside the directory; anything outside is treated as a
    missing file and gets the index document.

    Usage::

        static = SPAStaticFiles("./public")
        response = await static(request)
    """

    __slots__ = ("_cache_control", "_directory", "_index")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        cache_control: str | None = "no-cache",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def index_path(self) -> Path:
        return self._directory / self._index

    async def __call__(self, request: Request) -> Response:
        if request.path == "/":
            return await self.send_index()

        candidate = await self.resolve(request.path)
        if candidate is None:
            return await self.send_index()

        try:
            body = await anyio.Path(candidate).read_bytes()
        except OSError:
            return await self.send_index()
        return file_response(candidate, body, cache_control=self._cache_control)

    async def resolve(self, path: str) -> Path | None:
        """Map a request path to a servable file, or ``None``.

        ``None`` covers every way the lookup can fail: no such file, a
        directory, a path escaping the static directory, or an access error.
        """
        relative = path.lstrip("/")
        if not relative or "\x00" in relative:
            return None
        try:
            resolved = Path(await anyio.Path(self._directory / relative).resolve())
            if not resolved.is_relative_to(self._directory):
                return None
            if not await anyio.Path(resolved).is_file():
                return None
        except (OSError, ValueError):
            return None
        return resolved

    async def send_index(self) -> Response:
        """The fallback document, or a plain 404 if it is missing."""
        try:
            body = await anyio.Path(self.index_path).read_bytes()
        except OSError:
            logger.warning("Index document missing: %s", self.index_path)
            return Response(body="Not Found", status=404, content_type="text/plain; charset=utf-8")
        return file_response(self.index_path, body, cache_control=self._cache_control)
