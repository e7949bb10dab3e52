"""Collaborator registry.

The five API handlers (certificates, certificate lookup, generic lookup,
login, database setup) live outside this package. They are plugged in once,
at startup, either as callables or as ``"module:attribute"`` import strings.

A collaborator is::

    async def handler(request: Request) -> Response: ...

Plain ``def`` works too. The collaborator owns the response entirely; the
dispatcher passes it through unchanged.
"""

import importlib
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any, TypeAlias

from certgate.errors import ConfigurationError
from certgate.http.request import Request
from certgate.http.response import Response, json_response

Collaborator: TypeAlias = Callable[[Request], Any]

ENV_PREFIX = "CERTGATE_"


def not_configured(slot: str) -> Collaborator:
    """Placeholder for an empty slot: answers 501 with the endpoint."""

    async def handler(request: Request) -> Response:
        return json_response({"error": "Not implemented", "endpoint": request.path}, status=501)

    handler.__name__ = f"not_configured_{slot}"
    handler.__qualname__ = handler.__name__
    return handler


def resolve_import_string(import_string: str) -> Any:
    """Import ``"package.module:attribute"`` and return the attribute.

    Dotted attributes (``"module:obj.method"``) are followed.

    Raises ``ConfigurationError`` if the string is malformed, the module
    cannot be imported, or the attribute does not exist.
    """
    module_path, sep, attr_path = import_string.partition(":")
    if not sep or not module_path or not attr_path:
        msg = f"Import string must look like 'module:attribute', got {import_string!r}"
        raise ConfigurationError(msg)
    try:
        obj: Any = importlib.import_module(module_path)
    except ImportError as exc:
        msg = f"Cannot import {module_path!r} for {import_string!r}: {exc}"
        raise ConfigurationError(msg) from exc
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            msg = f"{import_string!r}: {exc}"
            raise ConfigurationError(msg) from exc
    return obj


@dataclass(frozen=True, slots=True)
class Collaborators:
    """The five collaborator slots the routing table refers to.

    Unset slots answer 501 through ``not_configured()``::

        Collaborators(
            certificates=list_certificates,
            certificate_lookup=lookup_certificate,
        )
    """

    certificates: Collaborator | None = None
    certificate_lookup: Collaborator | None = None
    lookup: Collaborator | None = None
    login: Collaborator | None = None
    setup_database: Collaborator | None = None

    def __post_init__(self) -> None:
        for name in self.slots():
            handler = getattr(self, name)
            if handler is not None and not callable(handler):
                msg = f"Collaborator {name!r} is not callable: {handler!r}"
                raise ConfigurationError(msg)

    @classmethod
    def slots(cls) -> tuple[str, ...]:
        """Slot names in declaration order."""
        return tuple(f.name for f in fields(cls))

    def get(self, slot: str) -> Collaborator:
        """The handler for *slot*, or the 501 placeholder if unset."""
        if slot not in self.slots():
            msg = f"Unknown collaborator slot {slot!r}; expected one of {', '.join(self.slots())}"
            raise ConfigurationError(msg)
        return getattr(self, slot) or not_configured(slot)

    def configured(self) -> tuple[str, ...]:
        """Names of the slots that have a real handler."""
        return tuple(name for name in self.slots() if getattr(self, name) is not None)

    @classmethod
    def from_import_strings(cls, mapping: Mapping[str, str]) -> "Collaborators":
        """Resolve ``{slot: "module:attribute"}`` into a registry."""
        unknown = set(mapping) - set(cls.slots())
        if unknown:
            msg = f"Unknown collaborator slot(s): {', '.join(sorted(unknown))}"
            raise ConfigurationError(msg)
        return cls(**{slot: resolve_import_string(value) for slot, value in mapping.items()})

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Collaborators":
        """Read ``CERTGATE_<SLOT>`` import strings from the environment.

        ``CERTGATE_CERTIFICATE_LOOKUP=myapi.certs:lookup`` fills the
        ``certificate_lookup`` slot. Missing or blank variables leave the
        slot empty.
        """
        env = os.environ if environ is None else environ
        mapping = {}
        for slot in cls.slots():
            value = env.get(f"{ENV_PREFIX}{slot.upper()}", "").strip()
            if value:
                mapping[slot] = value
        return cls.from_import_strings(mapping)
