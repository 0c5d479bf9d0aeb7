"""
Character classification for the target scripting grammar.

A Dialect bundles the handful of lexer facts the escapers need: which
characters are quotes, which end a token, which may begin or continue an
identifier or a variable name. POWERSHELL is the default dialect.
"""

from __future__ import annotations

import string
import unicodedata
from dataclasses import dataclass

_LETTER_CATEGORIES = frozenset({"Lu", "Ll", "Lt", "Lm", "Lo"})
_SEPARATOR_CATEGORIES = frozenset({"Zs", "Zl", "Zp"})

# ASCII characters that always end the current token
_TOKEN_BREAKS = "\x00\t\n\x0b\x0c\r ;(){}|&,"

_VARIABLE_START = string.ascii_letters + string.digits + "_?^:$"


def _is_letter(c: str) -> bool:
    return unicodedata.category(c) in _LETTER_CATEGORIES


def _is_digit(c: str) -> bool:
    return unicodedata.category(c) == "Nd"


def _is_separator(c: str) -> bool:
    return c in "\x85\xa0" or unicodedata.category(c) in _SEPARATOR_CATEGORIES


@dataclass(frozen=True)
class Dialect:
    """Lexer facts for one target grammar.

    Single characters are stored as one-character strings, sets of
    characters as plain strings. Non-ASCII characters fall back to Unicode
    categories for token breaks, identifiers and variable names.
    """

    escape: str = "`"
    sigil: str = "$"
    bareword_first: str = "@#<>"
    """Characters that may not open a bareword argument."""
    redirect_digits: str = "123456"
    """Stream numbers that turn ``N>`` into a redirection."""
    redirect_marker: str = ">"
    single_quotes: str = "'‘’‚‛"
    double_quotes: str = '"“”„'
    token_breaks: str = _TOKEN_BREAKS
    variable_start: str = _VARIABLE_START

    def is_single_quote(self, c: str) -> bool:
        return c in self.single_quotes

    def is_double_quote(self, c: str) -> bool:
        return c in self.double_quotes

    def is_quote(self, c: str) -> bool:
        return c in self.single_quotes or c in self.double_quotes

    def is_curly_bracket(self, c: str) -> bool:
        return c == "{" or c == "}"

    def is_escape(self, c: str) -> bool:
        return c == self.escape

    def is_sigil(self, c: str) -> bool:
        return c == self.sigil

    def forces_new_token(self, c: str) -> bool:
        """True if the character unconditionally ends a bareword token."""
        if c.isascii():
            return c in self.token_breaks
        return c in self.token_breaks or _is_separator(c)

    def is_variable_start(self, c: str) -> bool:
        """True if the character begins a variable name right after the sigil."""
        if c.isascii():
            return c in self.variable_start
        return _is_letter(c) or _is_digit(c)

    def is_identifier_start(self, c: str) -> bool:
        if c.isascii():
            return c == "_" or c in string.ascii_letters
        return _is_letter(c)

    def is_identifier_follow(self, c: str) -> bool:
        if c.isascii():
            return c == "_" or c in string.ascii_letters or c in string.digits
        return _is_letter(c) or _is_digit(c)


POWERSHELL = Dialect()
