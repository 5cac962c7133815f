"""Path template parsing and compilation.

A template mixes literal text (which is itself raw regex), placeholders and
embedded regex fragments::

    "/contact/{id}"                      -> id matches one path segment
    "/contact/{id: [0-9]+}"              -> id matches digits only
    "/user/{login: :alpha:+}"            -> POSIX macro, Unicode letters
    "/public/{path: .*}"                 -> may span "/" separators
    "/api/contact/{id}(\\.(json|xml))?"  -> raw optional suffix group

``parse_template`` splits a template into parts; ``compile_pattern`` turns
the parts into one anchored regular expression. ``build_uri`` walks the
same parts to substitute parameter values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

import regex

from waypoint.errors import PatternError
from waypoint.routing.posix import rewrite_posix_classes

# Body of a placeholder without an explicit expression: one path segment.
DEFAULT_PARAM_REGEX = r"[^/]+"

# "{name}" or "{name:". The name may be any run of characters other than
# whitespace, braces and ":".
_PLACEHOLDER_START = re.compile(r"\{\s*([^\s{}:]+)\s*(:|\})")

# Bodies of "{2}", "{2,4}", "{,4}": regex quantifiers, kept as literal text.
_QUANTIFIER = re.compile(r"\d*(?:,\d*)?")

# Escapes whose argument is written in braces: \p{L}, \P{Lu}, \N{DASH}
_BRACED_ESCAPE = re.compile(r"\\[pPN]\{[^}]*\}")


@dataclass(frozen=True, slots=True)
class TemplatePart:
    """A parsed piece of a path template.

    Literal:      ``/users/``         (is_param=False)
    Placeholder:  ``{id}``            (is_param=True, param_name="id")
    With regex:   ``{id: [0-9]+}``    (is_param=True, expression="[0-9]+")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    expression: str | None = None


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A template compiled into a single regular expression.

    Immutable and shareable between threads; ``match`` only reads.
    """

    template: str
    source: str
    regex: regex.Pattern[str]
    param_names: tuple[str, ...]
    # Regex group for each entry of param_names, same order
    group_names: tuple[str, ...] = ()

    def match(self, path: str) -> dict[str, str] | None:
        """Match the whole of *path*.

        Returns the captured parameters in placeholder order, or ``None``.
        Placeholders inside an optional group that did not take part in
        the match are left out.
        """
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        params: dict[str, str] = {}
        for name, group in zip(self.param_names, self.group_names or self.param_names):
            value = m.group(group)
            if value is not None:
                params[name] = value
        return params


def parse_template(template: str) -> list[TemplatePart]:
    """Parse a path template into literal and placeholder parts.

    Examples::

        "/users"            -> [TemplatePart("/users")]
        "/users/{id}"       -> [TemplatePart("/users/"), TemplatePart("{id}", True, "id")]
        "/f/{path: .*}"     -> [TemplatePart("/f/"), TemplatePart("{path: .*}", True, "path", ".*")]

    Raises ``PatternError`` for an unclosed placeholder, an empty
    expression, or a parameter name used twice.
    """
    parts: list[TemplatePart] = []
    seen: set[str] = set()
    literal: list[str] = []
    i = 0
    n = len(template)

    def flush() -> None:
        if literal:
            parts.append(TemplatePart("".join(literal)))
            literal.clear()

    while i < n:
        ch = template[i]

        if ch == "\\":
            escape = _BRACED_ESCAPE.match(template, i)
            end = escape.end() if escape else i + 2
            literal.append(template[i:end])
            i = end
            continue

        if ch != "{":
            literal.append(ch)
            i += 1
            continue

        start = _PLACEHOLDER_START.match(template, i)
        if start is None or _QUANTIFIER.fullmatch(start.group(1)):
            literal.append(ch)
            i += 1
            continue

        name = start.group(1)
        if name in seen:
            raise PatternError(template, f"parameter {name!r} is used more than once")
        seen.add(name)
        flush()

        if start.group(2) == "}":
            parts.append(TemplatePart(template[i : start.end()], True, name))
            i = start.end()
            continue

        end = _find_closing_brace(template, start.end())
        if end is None:
            raise PatternError(template, f"placeholder {name!r} is not closed")
        expression = template[start.end() : end].strip()
        if not expression:
            raise PatternError(template, f"placeholder {name!r} has an empty expression")
        parts.append(TemplatePart(template[i : end + 1], True, name, expression))
        i = end + 1

    flush()
    return parts


def _find_closing_brace(template: str, pos: int) -> int | None:
    """Index of the ``}`` closing a placeholder whose body starts at *pos*."""
    depth = 1
    n = len(template)
    while pos < n:
        ch = template[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return None


@lru_cache(maxsize=1024)
def compile_pattern(template: str, *, trailing_slash: bool = True) -> CompiledPattern:
    """Compile a path template into an anchored matcher.

    The pattern must match the entire path. When *trailing_slash* is set
    and the template does not already end with ``/``, one optional trailing
    ``/`` is accepted as well. A closing ``$`` anchor is dropped first, so
    ``"/foo$"`` also matches ``"/foo/"``.

    Placeholder names that are not identifiers (``{user-id}``) are
    captured under generated group names and reported under their own.

    Results are cached: the same template always yields the same
    ``CompiledPattern`` object.
    """
    if not template:
        raise PatternError(template, "the uri pattern cannot be null or empty")

    pieces: list[str] = []
    names: list[str] = []
    groups: list[str] = []
    for part in parse_template(template):
        if not part.is_param:
            pieces.append(part.value)
            continue
        name = part.param_name or ""
        group = name if name.isidentifier() else f"_wp{len(names)}"
        body = rewrite_posix_classes(part.expression) if part.expression else DEFAULT_PARAM_REGEX
        pieces.append(f"(?P<{group}>{body})")
        names.append(name)
        groups.append(group)

    body = "".join(pieces)
    if _ends_with_anchor(body):
        body = body[:-1]
    source = "(?:" + body + ")"
    if trailing_slash and not body.endswith("/"):
        source += "/?"

    try:
        compiled = regex.compile(source)
    except regex.error as exc:
        raise PatternError(template, str(exc)) from exc

    return CompiledPattern(
        template=template,
        source=source,
        regex=compiled,
        param_names=tuple(names),
        group_names=tuple(groups),
    )


def _ends_with_anchor(text: str) -> bool:
    """True when *text* ends with an unescaped ``$``."""
    if not text.endswith("$"):
        return False
    backslashes = len(text[:-1]) - len(text[:-1].rstrip("\\"))
    return backslashes % 2 == 0
