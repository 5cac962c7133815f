"""``waypoint url`` — reverse routing from the command line."""

import argparse
import sys

from waypoint.cli._resolve import resolve_or_exit
from waypoint.errors import MissingParameterError, PatternError


def parse_params(pairs: list[str]) -> dict[str, str]:
    """Turn ``["id=5", "q=a b"]`` into ``{"id": "5", "q": "a b"}``.

    Raises ``ValueError`` for an item without ``=``.
    """
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got {pair!r}"
            raise ValueError(msg)
        params[key] = value
    return params


def run_url(args: argparse.Namespace) -> None:
    """Build and print a URL for a route name or uri pattern."""
    router = resolve_or_exit(args)

    try:
        params = parse_params(args.params)
        print(router.uri_for(args.target, params))
    except (ValueError, MissingParameterError, PatternError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
