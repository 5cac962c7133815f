"""Shared type aliases used across waypoint modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: opaque to the router, invoked by the request executor
Handler: TypeAlias = Callable[..., Any]
