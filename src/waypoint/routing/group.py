"""Route groups — register many routes under a shared path prefix.

A group is a composition convenience only. Adding it to a router adds
each of its routes (and the routes of nested groups) one by one; the
group itself is never stored in the router::

    users = RouteGroup("/users")
    users.get("", list_users)                # /users
    member = users.group("{id}")
    member.post("like", like_user)           # /users/{id}/like

    router.add_route_group(users)
"""

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Protocol, runtime_checkable

from waypoint._internal.types import Handler
from waypoint.errors import ConfigurationError
from waypoint.routing.route import (
    ANY_METHOD,
    DELETE,
    GET,
    HEAD,
    OPTIONS,
    PATCH,
    POST,
    PUT,
    Route,
)


def require_single_method(methods: tuple[str, ...] | list[str], name: str | None) -> None:
    """Reject a route name shared by several methods before anything is registered."""
    if name is not None and len(methods) > 1:
        msg = (
            f"Route name {name!r} can only be given to a single method, "
            f"got {', '.join(methods)}. Register each method with its own name."
        )
        raise ConfigurationError(msg)


def join_paths(prefix: str, path: str) -> str:
    """Join two template pieces with exactly one ``/`` between them.

    An empty *path* refers to the prefix itself.
    """
    if not path:
        return prefix
    if not prefix:
        return path
    return prefix.rstrip("/") + "/" + path.lstrip("/")


@runtime_checkable
class PopulatesOwnRoutes(Protocol):
    """A group that declares its own routes.

    ``populate_routes()`` is called once, the first time the group is
    expanded into a router.
    """

    def populate_routes(self) -> None: ...


class RouteGroup:
    """A path prefix plus the routes and child groups registered under it.

    The effective prefix (``uri_pattern``) is fixed at construction:
    the parent's prefix joined with this group's own. A group created
    with ``parent=`` attaches itself to that parent.
    """

    def __init__(self, prefix: str, parent: "RouteGroup | None" = None) -> None:
        self.prefix = prefix
        self.parent = parent
        if parent is None:
            self.uri_pattern = "/" + prefix.lstrip("/")
        else:
            self.uri_pattern = join_paths(parent.uri_pattern, prefix)
            parent._entries.append(self)
        # Routes and child groups, interleaved in the order they were added
        self._entries: list[Route | RouteGroup] = []
        self._populated = False

    def __repr__(self) -> str:
        return f"<RouteGroup {self.uri_pattern!r}>"

    @property
    def routes(self) -> list[Route]:
        """Routes registered directly on this group (fully qualified)."""
        return [e for e in self._entries if isinstance(e, Route)]

    @property
    def children(self) -> list["RouteGroup"]:
        return [e for e in self._entries if isinstance(e, RouteGroup)]

    def group(self, prefix: str) -> "RouteGroup":
        """Create a nested group under this one."""
        return RouteGroup(prefix, parent=self)

    def add_route(self, route: Route) -> Route:
        """Register *route* relative to this group.

        Returns the stored copy, whose template carries the group prefix.
        It is the object the router will hold, so it can also be passed to
        ``Router.add_route`` or ``Router.remove_route`` directly.
        """
        qualified = route.with_uri_pattern(join_paths(self.uri_pattern, route.uri_pattern))
        self._entries.append(qualified)
        return qualified

    def iter_routes(self) -> Iterator[Route]:
        """Yield every route of this group and its descendants.

        Depth-first, in the order routes and groups were added — this is
        the order they will be registered in, and therefore the order in
        which a router tries them.
        """
        _populate_once(self)
        for entry in list(self._entries):
            if isinstance(entry, RouteGroup):
                yield from entry.iter_routes()
            else:
                yield entry

    # -- Convenience registration --

    def route(
        self,
        uri_pattern: str,
        *,
        methods: tuple[str, ...] | list[str] = (GET,),
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register the decorated function for each of *methods*."""
        require_single_method(methods, name)

        def decorator(func: Handler) -> Handler:
            for method in methods:
                self.add_route(Route(method, uri_pattern, func, name))
            return func

        return decorator

    def _add(
        self,
        method: str,
        uri_pattern: str,
        handler: Handler,
        name: str | None,
        attributes: Mapping[str, Any] | None,
    ) -> Route:
        return self.add_route(Route(method, uri_pattern, handler, name, attributes or {}))

    def get(
        self,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Route:
        return self._add(GET, uri_pattern, handler, name, attributes)

    def post(
        self,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Route:
        return self._add(POST, uri_pattern, handler, name, attributes)

    def put(
        self,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Route:
        return self._add(PUT, uri_pattern, handler, name, attributes)

    def patch(
        self,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Route:
        return self._add(PATCH, uri_pattern, handler, name, attributes)

    def delete(
        self,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Route:
        return self._add(DELETE, uri_pattern, handler, name, attributes)

    def head(
        self,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Route:
        return self._add(HEAD, uri_pattern, handler, name, attributes)

    def options(
        self,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Route:
        return self._add(OPTIONS, uri_pattern, handler, name, attributes)

    def any(
        self,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Route:
        return self._add(ANY_METHOD, uri_pattern, handler, name, attributes)


def _populate_once(group: RouteGroup) -> None:
    if group._populated:
        return
    group._populated = True
    if isinstance(group, PopulatesOwnRoutes):
        group.populate_routes()
