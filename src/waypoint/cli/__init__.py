"""Waypoint CLI — inspect and exercise a router from the shell.

Entry point registered as ``waypoint`` in ``pyproject.toml``::

    [project.scripts]
    waypoint = "waypoint.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypoint`` command."""
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint — regex path routing with multi-match lookup.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log route registration to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:router)")
    routes_parser.add_argument(
        "--method",
        default=None,
        help="Only routes tried for this request method",
    )

    # -- waypoint match ---------------------------------------------------
    match_parser = subparsers.add_parser(
        "match", help="Show every route matching a request, in chain order"
    )
    match_parser.add_argument("app", help="Import string (e.g. myapp:router)")
    match_parser.add_argument("method", help="Request method (e.g. GET)")
    match_parser.add_argument("path", help="Request path (e.g. /contact/3)")

    # -- waypoint url -----------------------------------------------------
    url_parser = subparsers.add_parser("url", help="Build a URL from a route name or template")
    url_parser.add_argument("app", help="Import string (e.g. myapp:router)")
    url_parser.add_argument("target", help="Route name or uri pattern")
    url_parser.add_argument(
        "params",
        nargs="*",
        metavar="key=value",
        help="Parameter values; unused ones become the query string",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "routes":
        from waypoint.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from waypoint.cli._match import run_match

        run_match(args)
    elif args.command == "url":
        from waypoint.cli._url import run_url

        run_url(args)
