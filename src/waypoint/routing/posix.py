"""POSIX character-class macros for placeholder expressions.

Inside ``{name: expr}`` a template may use ``:alpha:``, ``:digit:``,
``:alnum:``, ``:xdigit:`` and ``:ascii:``. Each macro is rewritten into a
character-class fragment for the ``regex`` engine before the expression is
embedded in the route's pattern::

    ":alpha:+"              -> r"[\\p{L}]+"
    "[:digit::alpha:-_\\.]+" -> r"[\\p{Nd}\\p{L}\\-_\\.]+"

``:alpha:`` is the Unicode letter category, so Cyrillic and accented
letters match, not just ``[A-Za-z]``.
"""

import re

# macro name -> body of a character set (without the surrounding brackets)
POSIX_CLASSES: dict[str, str] = {
    "alpha": r"\p{L}",
    "digit": r"\p{Nd}",
    "alnum": r"\p{L}\p{Nd}",
    "xdigit": r"0-9a-fA-F",
    "ascii": r"\x00-\x7F",
}

_NAMES = "|".join(POSIX_CLASSES)
_MACRO = re.compile(rf":({_NAMES}):")
# ``[:alpha:]`` written inside a bracket expression, the classic POSIX form
_BRACKETED_MACRO = re.compile(rf"\[:({_NAMES}):\]")


def rewrite_posix_classes(expression: str) -> str:
    """Replace POSIX macros in *expression* with character-class fragments.

    Outside a bracket expression a macro becomes a complete set
    (``[\\p{L}]``). Inside one, only the set body is inserted so it can be
    combined with other members. A ``-`` right after a macro is escaped:
    a class cannot be a range endpoint, so the hyphen is a literal member.
    """
    out: list[str] = []
    in_set = False
    i = 0
    n = len(expression)

    while i < n:
        ch = expression[i]

        if ch == "\\":
            out.append(expression[i : i + 2])
            i += 2
            continue

        if in_set:
            match = _BRACKETED_MACRO.match(expression, i) or _MACRO.match(expression, i)
            if match:
                out.append(POSIX_CLASSES[match.group(1)])
                i = match.end()
                if expression.startswith("-", i) and not expression.startswith("-]", i):
                    out.append(r"\-")
                    i += 1
                continue
            if ch == "]":
                in_set = False
            out.append(ch)
            i += 1
            continue

        match = _MACRO.match(expression, i)
        if match:
            out.append(f"[{POSIX_CLASSES[match.group(1)]}]")
            i = match.end()
            continue

        if ch == "[":
            in_set = True
            out.append(ch)
            i += 1
            # A leading "^" negates; a "]" right after the opening bracket
            # (or after "^") is a literal member, not the end of the set.
            if expression.startswith("^", i):
                out.append("^")
                i += 1
            if expression.startswith("]", i):
                out.append("]")
                i += 1
            continue

        out.append(ch)
        i += 1

    return "".join(out)
