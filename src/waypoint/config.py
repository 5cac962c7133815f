"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(base_path="/app", trailing_slash=False)
    """

    # Prefix joined in front of every URL built by ``Router.uri_for``
    # (the path the application is mounted under). Lookups are unaffected:
    # callers pass the path relative to the mount point.
    base_path: str = ""

    # Templates without a trailing slash also match the same path with one
    # trailing slash appended.
    trailing_slash: bool = True
