"""
Reverse rules: decode fragments the way the PowerShell tokenizer reads them.

Each function undoes the matching escaper in psquote.core.codegen, so
``unescape_X(escape_X(s)) == s`` for every string. Malformed input decodes
on a best-effort basis and never raises. Block comments have no reverse
rule because the grammar does not interpret comment text.
"""

from __future__ import annotations

from psquote.core.chars import POWERSHELL, Dialect
from psquote.core.wildcard import unescape_wildcards

# Escape sequences recognised inside double-quoted strings
_DOUBLE_QUOTED_ESCAPES = {
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


def unescape_single_quoted(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Collapse each pair of single-quote-like characters into one."""
    result = []
    i = 0
    n = len(value)
    while i < n:
        c = value[i]
        result.append(c)
        if dialect.is_single_quote(c) and i + 1 < n and dialect.is_single_quote(value[i + 1]):
            i += 2
        else:
            i += 1
    return "".join(result)


def unescape_format_string(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Collapse ``{{`` and ``}}`` into single braces."""
    result = []
    i = 0
    n = len(value)
    while i < n:
        c = value[i]
        result.append(c)
        if dialect.is_curly_bracket(c) and i + 1 < n and value[i + 1] == c:
            i += 2
        else:
            i += 1
    return "".join(result)


def unescape_variable_name(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Drop the escape in front of every escaped character of a ``${...}`` name."""
    return unescape_wildcards(value, dialect.escape)


def _read_unicode_escape(value: str, start: int) -> tuple[str, int] | None:
    """Parse ``{hex}`` at value[start:]. Returns (char, next index) or None."""
    if start >= len(value) or value[start] != "{":
        return None
    end = value.find("}", start + 1)
    if end == -1:
        return None
    digits = value[start + 1 : end]
    if not 1 <= len(digits) <= 6:
        return None
    try:
        code = int(digits, 16)
    except ValueError:
        return None
    if code > 0x10FFFF:
        return None
    return chr(code), end + 1


def unescape_double_quoted(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Decode the body of a double-quoted string.

    Handles escape sequences (```n``, ```u{263A}``, ```$`` ...) and doubled
    double quotes. Variable references are not expanded.
    """
    result = []
    i = 0
    n = len(value)
    while i < n:
        c = value[i]
        if dialect.is_escape(c) and i + 1 < n:
            nxt = value[i + 1]
            if nxt == "u":
                decoded = _read_unicode_escape(value, i + 2)
                if decoded is not None:
                    result.append(decoded[0])
                    i = decoded[1]
                    continue
            result.append(_DOUBLE_QUOTED_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        result.append(c)
        if dialect.is_double_quote(c) and i + 1 < n and dialect.is_double_quote(value[i + 1]):
            i += 2
        else:
            i += 1
    return "".join(result)


def _strip_delimiters(fragment: str, is_quote) -> str | None:
    if len(fragment) >= 2 and is_quote(fragment[0]) and is_quote(fragment[-1]):
        return fragment[1:-1]
    return None


def unquote_member_name(fragment: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Reverse of quote_member_name."""
    body = _strip_delimiters(fragment, dialect.is_single_quote)
    if body is None:
        return fragment
    return unescape_single_quoted(body, dialect=dialect)


def unquote_argument(
    fragment: str, literal: bool = False, *, dialect: Dialect = POWERSHELL
) -> str:
    """Reverse of quote_argument.

    Args:
        fragment: A bareword or a single- or double-quoted argument.
        literal: Must match the value passed to quote_argument; when False
            wildcard escaping is removed as well.
        dialect: Character classification of the target grammar.
    """
    body = _strip_delimiters(fragment, dialect.is_single_quote)
    if body is not None:
        value = unescape_single_quoted(body, dialect=dialect)
    else:
        body = _strip_delimiters(fragment, dialect.is_double_quote)
        if body is not None:
            value = unescape_double_quoted(body, dialect=dialect)
        else:
            value = fragment
    if literal:
        return value
    return unescape_wildcards(value, dialect.escape)
