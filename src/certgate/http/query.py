"""Immutable query string parameters.

The lookup-by-number route needs to add a ``number`` key before the
collaborator runs. Instead of mutating the mapping, ``merged()`` returns a
new ``QueryParams`` with the extra values layered on top.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs, urlencode


class QueryParams(Mapping[str, str]):
    """Query string parameters, first value wins on ``[]`` access.

    Attributes:
        _data: Field name -> list of values, in query string order.
        _raw: The raw query string bytes as received.
    """

    __slots__ = ("_data", "_raw")

    _data: dict[str, list[str]]
    _raw: bytes

    def __init__(self, query_string: bytes = b"") -> None:
        object.__setattr__(self, "_raw", query_string)
        parsed = parse_qs(query_string.decode("latin-1"), keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"QueryParams({self.to_dict()!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def to_dict(self) -> dict[str, str]:
        """First value per key, as a plain dict."""
        return {key: values[0] for key, values in self._data.items() if values}

    def merged(self, **values: str) -> "QueryParams":
        """Return a copy where each given key is replaced by a single value."""
        data = {key: list(vals) for key, vals in self._data.items()}
        for key, value in values.items():
            data[key] = [value]
        return QueryParams(urlencode(data, doseq=True).encode("latin-1"))

    @property
    def raw(self) -> bytes:
        """The query string bytes this instance was parsed from."""
        return self._raw
