"""``waypoint match`` — show which routes a request would run through."""

import argparse
import sys

from waypoint.cli._resolve import resolve_or_exit
from waypoint.cli._routes import handler_label


def run_match(args: argparse.Namespace) -> None:
    """Print every matching route in chain order with its path parameters.

    Exits with status 1 when nothing matches.
    """
    router = resolve_or_exit(args)

    matches = router.find_routes(args.method, args.path)
    if not matches:
        print(f"No route matches {args.method.upper()} {args.path!r}", file=sys.stderr)
        raise SystemExit(1)

    for position, match in enumerate(matches, start=1):
        route = match.route
        print(f"{position}. {route.method} {route.uri_pattern}  -> {handler_label(route)}")
        for name, value in match.path_params.items():
            print(f"     {name} = {value!r}")
