"""
psquote - Safe PowerShell code generation.

Escapes and quotes runtime strings so that generated scripts parse them back
exactly, in every context: strings, comments, format strings, variable names,
member names and command arguments.
"""

from __future__ import annotations

__version__ = "0.1.0"

from psquote.core.chars import POWERSHELL, Dialect
from psquote.core.codegen import (
    bareword_violation,
    escape_block_comment,
    escape_double_quoted,
    escape_format_string,
    escape_single_quoted,
    escape_variable_name,
    quote_argument,
    quote_member_name,
    requires_quoting,
)
from psquote.core.wildcard import escape_wildcards

__all__ = [
    "POWERSHELL",
    "Dialect",
    "bareword_violation",
    "escape_block_comment",
    "escape_double_quoted",
    "escape_format_string",
    "escape_single_quoted",
    "escape_variable_name",
    "escape_wildcards",
    "quote_argument",
    "quote_member_name",
    "requires_quoting",
    "__version__",
]
