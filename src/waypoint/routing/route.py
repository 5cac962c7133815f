"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from waypoint._internal.types import Handler

GET = "GET"
POST = "POST"
PUT = "PUT"
PATCH = "PATCH"
DELETE = "DELETE"
HEAD = "HEAD"
OPTIONS = "OPTIONS"

# Wildcard sentinel: the route is consulted for every request method.
ANY_METHOD = "ALL"

HTTP_METHODS: frozenset[str] = frozenset({GET, POST, PUT, PATCH, DELETE, HEAD, OPTIONS})


@runtime_checkable
class ResourceHandler(Protocol):
    """A collaborator that serves resources under its own uri pattern.

    Static-file and webjars handlers only tell the router which paths they
    want (e.g. ``"/public/{path: .*}"``); what they do with a match is
    their business.
    """

    uri_pattern: str


@dataclass(frozen=True, slots=True, eq=False)
class Route:
    """A route definition: method + path template + handler.

    Created during setup and never mutated. Routes compare by identity,
    which is what ``Router.remove_route`` relies on.
    """

    method: str
    uri_pattern: str
    handler: Handler
    name: str | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", (self.method or "").upper())
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __repr__(self) -> str:
        suffix = f" ({self.name})" if self.name else ""
        return f"<Route {self.method} {self.uri_pattern!r}{suffix}>"

    @property
    def is_wildcard(self) -> bool:
        """True when the route answers every request method."""
        return self.method == ANY_METHOD

    def with_uri_pattern(self, uri_pattern: str) -> "Route":
        """Return a copy of this route bound to another template."""
        return replace(self, uri_pattern=uri_pattern)

    # -- Factories --

    @classmethod
    def get(
        cls,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> "Route":
        return cls(GET, uri_pattern, handler, name, attributes or {})

    @classmethod
    def post(
        cls,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> "Route":
        return cls(POST, uri_pattern, handler, name, attributes or {})

    @classmethod
    def put(
        cls,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> "Route":
        return cls(PUT, uri_pattern, handler, name, attributes or {})

    @classmethod
    def patch(
        cls,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> "Route":
        return cls(PATCH, uri_pattern, handler, name, attributes or {})

    @classmethod
    def delete(
        cls,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> "Route":
        return cls(DELETE, uri_pattern, handler, name, attributes or {})

    @classmethod
    def head(
        cls,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> "Route":
        return cls(HEAD, uri_pattern, handler, name, attributes or {})

    @classmethod
    def options(
        cls,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> "Route":
        return cls(OPTIONS, uri_pattern, handler, name, attributes or {})

    @classmethod
    def any(
        cls,
        uri_pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> "Route":
        """A wildcard route, matched for every request method (filters)."""
        return cls(ANY_METHOD, uri_pattern, handler, name, attributes or {})

    @classmethod
    def resource(cls, handler: ResourceHandler, method: str = GET) -> "Route":
        """A route serving *handler* under the pattern the handler declares."""
        return cls(method, handler.uri_pattern, handler)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path: str
    path_params: dict[str, str]
