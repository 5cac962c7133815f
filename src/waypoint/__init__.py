"""Waypoint — a regex path router with multi-match lookup and reverse routing.

Routes (method + path template + handler) are registered in order; a
lookup returns every route that matches, so filters and endpoints can be
chained by whoever executes them.

Basic usage::

    from waypoint import Route, Router

    router = Router()
    router.add_route(Route.any("/.*", audit))
    router.add_route(Route.get("/contact/{id: [0-9]+}", show_contact, name="contact"))

    for match in router.find_routes("GET", "/contact/3"):
        match.route.handler, match.path_params      # {"id": "3"}

    router.uri_for("contact", {"id": 3, "tab": "notes"})
    # "/contact/3?tab=notes"
"""

__version__ = "0.1.0"
__all__ = [
    "ANY_METHOD",
    "CompiledPattern",
    "ConfigurationError",
    "MissingParameterError",
    "PatternError",
    "Route",
    "RouteGroup",
    "RouteMatch",
    "Router",
    "RouterConfig",
    "WaypointError",
    "build_uri",
    "compile_pattern",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast (the CLI imports it before it knows
    which command runs) while providing a clean top-level API.
    """
    if name == "Router":
        from waypoint.routing.router import Router

        return Router

    if name in ("Route", "RouteMatch", "ANY_METHOD"):
        from waypoint.routing import route as _route

        return getattr(_route, name)

    if name == "RouteGroup":
        from waypoint.routing.group import RouteGroup

        return RouteGroup

    if name in ("CompiledPattern", "compile_pattern"):
        from waypoint.routing import pattern as _pattern

        return getattr(_pattern, name)

    if name == "build_uri":
        from waypoint.routing.urls import build_uri

        return build_uri

    if name == "RouterConfig":
        from waypoint.config import RouterConfig

        return RouterConfig

    if name in ("WaypointError", "ConfigurationError", "PatternError", "MissingParameterError"):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
