"""Reverse routing — build a concrete URL from a path template.

Placeholders are filled verbatim from the parameter mapping; whatever the
template does not consume becomes the query string::

    build_uri("/user/{email}", {"email": "test@test.com", "name": "Decebal Suiu"})
    -> "/user/test@test.com?name=Decebal+Suiu"
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from waypoint.errors import MissingParameterError
from waypoint.routing.group import join_paths
from waypoint.routing.pattern import parse_template


def build_uri(
    template: str,
    parameters: Mapping[str, Any] | None = None,
    *,
    base_path: str = "",
) -> str:
    """Substitute *parameters* into *template* and append the leftovers.

    Path values are inserted as-is, without percent-encoding, so a value
    such as ``"test/myrepo"`` for a ``{repo: .*}`` placeholder round-trips
    through the router. Leftover values are form-encoded in the mapping's
    iteration order; ``None`` values are dropped and list or tuple values
    repeat the key.

    Raises ``MissingParameterError`` when a placeholder has no value.
    """
    parameters = parameters or {}
    consumed: set[str] = set()
    pieces: list[str] = []

    for part in parse_template(template):
        if not part.is_param:
            pieces.append(part.value)
            continue
        name = part.param_name or ""
        value = parameters.get(name)
        if value is None:
            raise MissingParameterError(name, template)
        pieces.append(str(value))
        consumed.add(name)

    uri = "".join(pieces)
    if base_path:
        uri = join_paths(base_path, uri)

    query = [
        (key, _query_value(value))
        for key, value in parameters.items()
        if key not in consumed and value is not None
    ]
    if query:
        uri = f"{uri}?{urlencode(query, doseq=True)}"
    return uri


def _query_value(value: Any) -> str | list[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return str(value)
