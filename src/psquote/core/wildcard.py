"""Wildcard pattern escaping for arguments that go through glob expansion."""

from __future__ import annotations

WILDCARD_CHARS = frozenset("*?[]")


def escape_wildcards(value: str, escape: str = "`") -> str:
    """Escape wildcard metacharacters so the pattern matches only itself.

    The escape character is escaped too, otherwise a literal escape in the
    input would swallow the character after it.
    """
    if not value:
        return ""
    result = []
    for c in value:
        if c in WILDCARD_CHARS or c == escape:
            result.append(escape)
        result.append(c)
    return "".join(result)


def unescape_wildcards(value: str, escape: str = "`") -> str:
    """Reverse of escape_wildcards. A trailing lone escape is kept."""
    if not value:
        return ""
    result = []
    i = 0
    n = len(value)
    while i < n:
        c = value[i]
        if c == escape and i + 1 < n:
            result.append(value[i + 1])
            i += 2
            continue
        result.append(c)
        i += 1
    return "".join(result)


def contains_wildcards(value: str, escape: str = "`") -> bool:
    """Check for an unescaped wildcard metacharacter."""
    escaped = False
    for c in value:
        if escaped:
            escaped = False
        elif c == escape:
            escaped = True
        elif c in WILDCARD_CHARS:
            return True
    return False
