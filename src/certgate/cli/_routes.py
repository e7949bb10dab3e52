"""``certgate routes``: print the API routing table.

Rows are printed in evaluation order (first match wins), followed by the
endpoint list reported in 404 responses.
"""

import argparse
import sys

from certgate.cli._resolve import resolve_app
from certgate.errors import ConfigurationError
from certgate.routing.router import AVAILABLE_ENDPOINTS


def run_routes(args: argparse.Namespace) -> None:
    """Resolve the app, freeze it, and print MATCH, PATH, COLLABORATOR, HANDLER."""
    try:
        app = resolve_app(args.app)
    except (ConfigurationError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    router = app.router
    rows: list[tuple[str, str, str, str]] = []
    for route in router.routes:
        match = route.match if route.inject is None else f"{route.match}+{route.inject}"
        handler = router.handler_for(route)
        handler_name = getattr(handler, "__qualname__", None) or repr(handler)
        rows.append((match, route.path, route.collaborator, handler_name))

    headers = ("MATCH", "PATH", "COLLABORATOR", "HANDLER")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(3)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"

    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 6 + max(len(r[3]) for r in rows), 80))
    for row in rows:
        print(fmt.format(*row))
    print()
    print("404 availableEndpoints: " + ", ".join(AVAILABLE_ENDPOINTS))
