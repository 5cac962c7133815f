"""Waypoint exception hierarchy.

Shared across the pattern compiler, Router, RouteGroup, and URL builder so
every module raises and catches the same types.
"""


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when a route registration is invalid.

    Typically raised by ``Router.add_route()`` at startup: an empty
    template, an unspecified request method, or a duplicate route name.
    """


class PatternError(WaypointError):
    """A path template that cannot be compiled into a matcher.

    Raised at registration time. ``template`` names the offending template
    so a broken route is easy to find among many registrations.
    """

    def __init__(self, template: str | None, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Invalid uri pattern {template!r}: {reason}")


class MissingParameterError(WaypointError, LookupError):
    """``uri_for`` was asked to fill a placeholder it has no value for."""

    def __init__(self, name: str, template: str) -> None:
        self.name = name
        self.template = template
        super().__init__(f"Parameter {name!r} is required by uri pattern {template!r}")
