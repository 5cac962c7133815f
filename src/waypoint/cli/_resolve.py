"""Router import resolution — resolves ``"module:attribute"`` strings to Router instances.

Shared utility used by every ``waypoint`` sub-command to locate the
router from a user-supplied import string.
"""

import argparse
import importlib
import logging
import sys

from waypoint.errors import WaypointError
from waypoint.routing.router import Router

logger = logging.getLogger("waypoint.cli")


def resolve_router(import_string: str) -> Router:
    """Resolve an import string to a waypoint Router instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"router"`` (e.g. ``"myapp"`` resolves to
    ``myapp.router``).

    Supports factory functions: if the resolved object is callable and
    not a Router instance, it will be called (assuming it's a router factory).

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``Router`` or callable.

    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Router):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Router):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a waypoint.Router instance"
        raise TypeError(msg)

    logger.debug("Resolved %s to a router with %d routes", import_string, len(obj.get_routes()))
    return obj


def resolve_or_exit(args: argparse.Namespace) -> Router:
    """``resolve_router(args.app)``, reporting failures the CLI way."""
    try:
        return resolve_router(args.app)
    except (ImportError, AttributeError, TypeError, WaypointError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
