"""ApiRoute and ApiMatch frozen dataclasses."""

from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias
from urllib.parse import unquote

MatchKind: TypeAlias = Literal["exact", "prefix"]


@dataclass(frozen=True, slots=True)
class ApiRoute:
    """One row of the routing table.

    ``exact`` routes match the path verbatim. ``prefix`` routes match any
    path starting with ``path``; when ``inject`` is set, the final path
    segment is handed to the collaborator as that query parameter.
    """

    path: str
    collaborator: str
    match: MatchKind = "exact"
    inject: str | None = None

    def matches(self, path: str) -> bool:
        if self.match == "prefix":
            return path.startswith(self.path)
        return path == self.path

    def query_updates(self, path: str, raw_path: str | None = None) -> dict[str, str]:
        """Query parameters this route adds for *path*.

        The segment is cut from *raw_path* when given, then percent-decoded,
        so an encoded slash stays inside the value.
        """
        if self.inject is None:
            return {}
        if raw_path is not None:
            return {self.inject: unquote(raw_path.rsplit("/", 1)[-1])}
        return {self.inject: path.rsplit("/", 1)[-1]}


@dataclass(frozen=True, slots=True)
class ApiMatch:
    """Result of a successful routing-table lookup."""

    route: ApiRoute
    handler: Any
    query_updates: dict[str, str] = field(default_factory=dict)
