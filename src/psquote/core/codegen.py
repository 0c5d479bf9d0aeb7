"""
Escaping and quoting for generated PowerShell source.

Every function here is total and pure: any str in, a fragment out, and the
empty string maps to the empty string with no delimiters added. Callers wrap
the escaped content in the delimiters of the context they picked, e.g.

    "'" + escape_single_quoted(value) + "'"
    "<#" + escape_block_comment(value) + "#>"
    "${" + escape_variable_name(value) + "}"

quote_argument and quote_member_name add the delimiters themselves, and only
when they are needed.
"""

from __future__ import annotations

from psquote.core.chars import POWERSHELL, Dialect
from psquote.core.wildcard import escape_wildcards

# Names of the bareword rules, as reported by bareword_violation()
RULE_FIRST_CHAR = "first_char"
RULE_REDIRECTION = "redirection"
RULE_TOKEN_BREAK = "token_break"
RULE_QUOTE = "quote"
RULE_ESCAPE = "escape"
RULE_VARIABLE = "variable"

# Quote character meaning "pick one only if needed", same as None or ""
NO_QUOTE = "\0"


# === Context escapers ===


def escape_single_quoted(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Escape content for a single-quoted string by doubling every quote."""
    if not value:
        return ""
    result = []
    for c in value:
        result.append(c)
        if dialect.is_single_quote(c):
            result.append(c)
    return "".join(result)


def escape_block_comment(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Escape content for a ``<# ... #>`` block comment.

    Breaks up both the opening and the closing sequence so the comment can
    neither end early nor appear to nest.
    """
    if not value:
        return ""
    esc = dialect.escape
    return value.replace("<#", "<" + esc + "#").replace("#>", "#" + esc + ">")


def escape_format_string(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Escape content for a string later used as a format string (``-f``).

    If the result goes inside a single-quoted string, also pass it through
    escape_single_quoted.
    """
    if not value:
        return ""
    result = []
    for c in value:
        result.append(c)
        if dialect.is_curly_bracket(c):
            result.append(c)
    return "".join(result)


def escape_variable_name(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Escape content for the braced variable form ``${...}``."""
    if not value:
        return ""
    esc = dialect.escape
    # Escape characters first, or the brace escapes below would get doubled
    return (
        value.replace(esc, esc + esc)
        .replace("}", esc + "}")
        .replace("{", esc + "{")
    )


def escape_double_quoted(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Escape content for a double-quoted (expandable) string.

    The sigil gets an escape prefix so it cannot start a variable
    reference; double quotes and escape characters are doubled. Done in one
    pass over the original characters so inserted escapes are never
    reprocessed.
    """
    if not value:
        return ""
    result = []
    for c in value:
        if dialect.is_sigil(c):
            result.append(dialect.escape)
        result.append(c)
        if dialect.is_double_quote(c) or dialect.is_escape(c):
            result.append(c)
    return "".join(result)


# === Bareword decision ===


def bareword_violation(value: str, *, dialect: Dialect = POWERSHELL) -> str | None:
    """Return the first bareword rule the value breaks, or None if it has none.

    Rules, in order:
      first_char   first character is one of dialect.bareword_first
      redirection  starts like ``2>`` and would be read as a redirection
      token_break  contains a character that ends a token (whitespace, ``;``, ...)
      quote        contains a single- or double-quote-like character
      escape       contains the escape character
      variable     a variable-start character directly follows the sigil
    """
    if not value:
        return None

    first = value[0]
    if first in dialect.bareword_first:
        return RULE_FIRST_CHAR
    if (
        len(value) > 1
        and first in dialect.redirect_digits
        and value[1] == dialect.redirect_marker
    ):
        return RULE_REDIRECTION

    last_was_sigil = False
    for c in value:
        if dialect.forces_new_token(c):
            return RULE_TOKEN_BREAK
        if dialect.is_quote(c):
            return RULE_QUOTE
        if dialect.is_escape(c):
            return RULE_ESCAPE
        if last_was_sigil and dialect.is_variable_start(c):
            return RULE_VARIABLE
        last_was_sigil = dialect.is_sigil(c)
    return None


def requires_quoting(value: str, *, dialect: Dialect = POWERSHELL) -> bool:
    """True if the value cannot appear as a bareword command argument."""
    return bareword_violation(value, dialect=dialect) is not None


# === Quoters ===


def quote_argument(
    value: str,
    quote: str | None = None,
    literal: bool = False,
    *,
    dialect: Dialect = POWERSHELL,
) -> str:
    """Quote a command argument if needed, or always if a quote is given.

    Args:
        value: The argument value, to be taken literally.
        quote: The quote character to use. None ("" or NUL) leaves the value
            bare when it is safe and single-quotes it otherwise.
        literal: The argument is bound to a literal parameter, so wildcard
            metacharacters need no escaping.
        dialect: Character classification of the target grammar.

    Returns:
        The argument fragment, delimiters included when quoted.
    """
    if not value:
        return ""
    if not literal:
        value = escape_wildcards(value, dialect.escape)

    if not quote or quote == NO_QUOTE:
        if not requires_quoting(value, dialect=dialect):
            return value
        quote = "'"

    if dialect.is_double_quote(quote):
        escaped = escape_double_quoted(value, dialect=dialect)
    else:
        escaped = escape_single_quoted(value, dialect=dialect)
    return quote + escaped + quote


def quote_member_name(value: str, *, dialect: Dialect = POWERSHELL) -> str:
    """Single-quote a member name unless it is a plain identifier."""
    if not value:
        return ""
    plain = dialect.is_identifier_start(value[0]) and all(
        dialect.is_identifier_follow(c) for c in value[1:]
    )
    if plain:
        return value
    return "'" + escape_single_quoted(value, dialect=dialect) + "'"
