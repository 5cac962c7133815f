"""Multi-match router.

Routes are registered during setup and tried in registration order at
lookup time. Every route that matches is returned — the caller walks the
list as a filter chain and decides when to stop.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from waypoint._internal.types import Handler
from waypoint.config import RouterConfig
from waypoint.errors import ConfigurationError
from waypoint.routing.group import RouteGroup, require_single_method
from waypoint.routing.pattern import CompiledPattern, compile_pattern
from waypoint.routing.route import ANY_METHOD, GET, HTTP_METHODS, Route, RouteMatch
from waypoint.routing.urls import build_uri

logger = logging.getLogger("waypoint.routing")


@dataclass(frozen=True, slots=True)
class _Entry:
    """A registered route together with its compiled pattern."""

    route: Route
    pattern: CompiledPattern


class Router:
    """Ordered route registry with all-matches lookup.

    Usage::

        router = Router()
        router.add_route(Route.any("/.*", audit))
        router.add_route(Route.get("/contact/{id: [0-9]+}", show_contact))
        for match in router.find_routes("GET", "/contact/3"):
            ...

    Thread safety:
        Registration is expected to happen during a single-threaded setup
        phase, optionally closed with ``freeze()``. Mutations that do happen
        later are serialised by a Lock and publish fresh immutable tuples,
        so ``find_routes`` reads one consistent snapshot without locking.
    """

    __slots__ = ("_entries", "_frozen", "_index", "_lock", "_names", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._entries: tuple[_Entry, ...] = ()
        # method -> entries for that method and wildcard entries, in order
        self._index: dict[str, tuple[_Entry, ...]] = {}
        self._names: dict[str, Route] = {}
        self._frozen = False
        self._lock = threading.Lock()
        self._publish(())

    # -- Registration --

    def add_route(self, route: Route) -> Route:
        """Register *route* after every route added so far.

        Raises ``ConfigurationError`` for an empty template, an unspecified
        or unsupported method, or a route name that is already taken.
        Raises ``PatternError`` if the template does not compile.
        """
        self._check_not_frozen()
        if not route.uri_pattern:
            msg = "The uri pattern cannot be null or empty"
            raise ConfigurationError(msg)
        if not route.method:
            msg = f"Unspecified request method for route {route.uri_pattern!r}"
            raise ConfigurationError(msg)
        if route.method != ANY_METHOD and route.method not in HTTP_METHODS:
            msg = (
                f"Unsupported request method {route.method!r} for route "
                f"{route.uri_pattern!r}. Use one of {', '.join(sorted(HTTP_METHODS))} "
                f"or {ANY_METHOD!r}."
            )
            raise ConfigurationError(msg)

        pattern = compile_pattern(route.uri_pattern, trailing_slash=self.config.trailing_slash)

        with self._lock:
            self._check_not_frozen()
            if route.name and route.name in self._names:
                msg = f"Route name {route.name!r} is already used by {self._names[route.name]!r}"
                raise ConfigurationError(msg)
            self._publish((*self._entries, _Entry(route, pattern)))

        logger.debug("Add route for '%s %s'", route.method, route.uri_pattern)
        return route

    def remove_route(self, route: Route) -> None:
        """Unregister *route* (by identity). Unknown routes are ignored."""
        self._check_not_frozen()
        with self._lock:
            self._check_not_frozen()
            remaining = tuple(e for e in self._entries if e.route is not route)
            if len(remaining) == len(self._entries):
                return
            self._publish(remaining)

        logger.debug("Removed route for '%s %s'", route.method, route.uri_pattern)

    def add_route_group(self, group: RouteGroup) -> None:
        """Register every route of *group* and its nested groups."""
        self._check_not_frozen()
        routes = list(group.iter_routes())
        logger.debug("Add route group '%s' (%d routes)", group.uri_pattern, len(routes))
        for route in routes:
            self.add_route(route)

    def route(
        self,
        uri_pattern: str,
        *,
        methods: tuple[str, ...] | list[str] = (GET,),
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            uri_pattern: Path template. Use ``{param}`` or ``{param: regex}``.
            methods: HTTP methods. Defaults to ``("GET",)``; ``"ALL"``
                matches every method.
            name: Optional route name for ``uri_for``. Only allowed with a
                single method, since names are unique.
        """
        require_single_method(methods, name)

        def decorator(func: Handler) -> Handler:
            for method in methods:
                self.add_route(Route(method, uri_pattern, func, name))
            return func

        return decorator

    def freeze(self) -> None:
        """Close the setup phase. Later mutations raise ``RuntimeError``."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Introspection --

    def get_routes(self, method: str | None = None) -> list[Route]:
        """Return the registered routes in registration order.

        With *method*, only the routes tried for that request method: the
        routes registered for it plus the wildcard routes.
        """
        if method is None:
            return [e.route for e in self._entries]
        return [e.route for e in self._lookup_entries(method)]

    def get_route(self, name: str) -> Route | None:
        """Return the route registered under *name*, if any."""
        return self._names.get(name)

    def uri_pattern_for(self, handler_type: type) -> str | None:
        """Template of the first route whose handler is a *handler_type*.

        Lets templates link to resources served by a handler without
        repeating its uri pattern.
        """
        for entry in self._entries:
            if isinstance(entry.route.handler, handler_type):
                return entry.route.uri_pattern
        return None

    # -- Lookup --

    def find_routes(self, method: str, path: str) -> list[RouteMatch]:
        """Return every route matching *method* and *path*, in order.

        The path is matched exactly as given; percent-encoded sequences are
        not decoded and stay in the captured values. An empty list means
        nothing matched.
        """
        matches: list[RouteMatch] = []
        for entry in self._lookup_entries(method):
            params = entry.pattern.match(path)
            if params is not None:
                matches.append(RouteMatch(route=entry.route, path=path, path_params=params))
        return matches

    def uri_for(
        self,
        name_or_pattern: str,
        parameters: Mapping[str, Any] | None = None,
    ) -> str:
        """Build a URL from a route name or a path template.

        A registered route name takes precedence; anything else is used as
        the template itself. See ``build_uri`` for substitution rules.
        """
        route = self._names.get(name_or_pattern)
        template = route.uri_pattern if route is not None else name_or_pattern
        return build_uri(template, parameters, base_path=self.config.base_path)

    # -- Internal --

    def _lookup_entries(self, method: str) -> tuple[_Entry, ...]:
        index = self._index
        found = index.get(method.upper())
        if found is None:
            return index[ANY_METHOD]
        return found

    def _publish(self, entries: tuple[_Entry, ...]) -> None:
        """Install a new entry tuple and rebuild the derived indexes.

        MUST only be called while holding _lock (or from __init__).
        """
        index: dict[str, tuple[_Entry, ...]] = {
            method: tuple(e for e in entries if e.route.method in (method, ANY_METHOD))
            for method in HTTP_METHODS
        }
        index[ANY_METHOD] = tuple(e for e in entries if e.route.method == ANY_METHOD)
        names = {e.route.name: e.route for e in entries if e.route.name}

        self._entries = entries
        self._index = index
        self._names = names

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has been frozen. "
                "Register routes and groups before calling router.freeze()."
            )
            raise RuntimeError(msg)
