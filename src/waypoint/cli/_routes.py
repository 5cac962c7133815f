"""``waypoint routes`` — list registered routes.

Resolves an import string to a Router and prints all registered routes
with method, uri pattern, and handler info, in registration order.
"""

import argparse

from waypoint.cli._resolve import resolve_or_exit
from waypoint.routing.route import Route


def handler_label(route: Route) -> str:
    """Handler name, with the route name appended when it has one."""
    label = getattr(route.handler, "__name__", None) or type(route.handler).__name__
    if route.name:
        label = f"{label} ({route.name})"
    return label


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a waypoint router."""
    router = resolve_or_exit(args)

    routes = router.get_routes(args.method)
    if not routes:
        print("No routes registered.")
        return

    rows = [(route.method, route.uri_pattern, handler_label(route)) for route in routes]

    # Column widths
    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_method}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    sep_len = max_method + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, pattern, label in rows:
        print(fmt.format(method, pattern, label))
