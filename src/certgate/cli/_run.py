"""``certgate run``: start the gateway under pounce."""

import argparse
import sys

from certgate.cli._resolve import resolve_app
from certgate.errors import ConfigurationError
from certgate.log import configure_logging


def run_server(args: argparse.Namespace) -> None:
    """Resolve the app, apply CLI overrides, and serve until stopped.

    CLI flags override the app's config (which already reflects ``PORT``).
    Configuration problems print ``Error: ...`` and exit 1.
    """
    from certgate.server.production import run_server as serve

    try:
        app = resolve_app(args.app)
        app.configure(
            host=args.host,
            port=args.port,
            static_dir=args.static_dir,
            workers=args.workers,
            log_level=args.log_level,
        )
        configure_logging(app.config.log_level)
        serve(
            app,
            host=app.config.host,
            port=app.config.port,
            workers=app.config.workers,
            log_level=app.config.log_level,
            log_format=app.config.log_format,
            request_timeout=app.config.request_timeout,
        )
    except (ConfigurationError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
