"""certgate CLI: run the gateway and inspect its routing table.

Entry point registered as ``certgate`` in ``pyproject.toml``::

    [project.scripts]
    certgate = "certgate.cli:main"
"""

import argparse
import sys


def _add_app_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "app",
        nargs="?",
        default=None,
        help="Import string (e.g. myproject.gateway:app). "
        "Defaults to a gateway built from PORT and CERTGATE_* variables.",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``certgate`` command."""
    parser = argparse.ArgumentParser(
        prog="certgate",
        description="certgate: HTTP front door for the GIE certificate system.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- certgate run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the gateway server")
    _add_app_argument(run_parser)
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--static-dir",
        default=None,
        help="Directory holding the single-page application",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect)",
    )
    run_parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Log level for the gateway and the server",
    )

    # -- certgate routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the API routing table")
    _add_app_argument(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from certgate.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from certgate.cli._routes import run_routes

        run_routes(args)
