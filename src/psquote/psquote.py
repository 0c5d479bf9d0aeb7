"""JSON entry point for psquote.

Reads one request object from stdin, applies the requested operation and
prints the fragment as JSON:

    $ echo '{"op": "quote_argument", "value": "a b"}' | python -m psquote
    {"result": "'a b'"}

Request fields:
    op       one of OPERATIONS
    value    the string to escape or quote
    quote    quote_argument only: quote character, or null for auto
    literal  quote_argument only: skip wildcard escaping (default false)

Exit codes:
- 0: Success. {"result": ...} on stdout.
- 1: Invalid request or config. {"error": ...} on stdout.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from psquote.core.chars import Dialect
from psquote.core.codegen import (
    NO_QUOTE,
    bareword_violation,
    escape_block_comment,
    escape_double_quoted,
    escape_format_string,
    escape_single_quoted,
    escape_variable_name,
    quote_argument,
    quote_member_name,
)
from psquote.core.config import configure_logging, load_config, log_operation
from psquote.core.wildcard import escape_wildcards

OPERATIONS: dict[str, Callable[..., str]] = {
    "escape_single_quoted": escape_single_quoted,
    "escape_block_comment": escape_block_comment,
    "escape_format_string": escape_format_string,
    "escape_variable_name": escape_variable_name,
    "escape_double_quoted": escape_double_quoted,
    "quote_member_name": quote_member_name,
    "quote_argument": quote_argument,
    "escape_wildcards": lambda value, *, dialect: escape_wildcards(value, dialect.escape),
}


def handle_request(request: Any, dialect: Dialect) -> str:
    """Apply one request. Raises ValueError if the request is malformed."""
    if not isinstance(request, dict):
        raise ValueError("request must be a JSON object")

    op = request.get("op")
    func = OPERATIONS.get(op) if isinstance(op, str) else None
    if func is None:
        raise ValueError(f"unknown op {op!r}")

    value = request.get("value")
    if not isinstance(value, str):
        raise ValueError("'value' must be a string")

    if op != "quote_argument":
        result = func(value, dialect=dialect)
        log_operation(op, len(result), value=value)
        return result

    quote = request.get("quote")
    if quote is not None and (not isinstance(quote, str) or len(quote) > 1):
        raise ValueError("'quote' must be null or a single character")
    literal = request.get("literal", False)
    if not isinstance(literal, bool):
        raise ValueError("'literal' must be true or false")

    result = quote_argument(value, quote, literal, dialect=dialect)
    violation = None
    if not quote or quote == NO_QUOTE:
        checked = value if literal else escape_wildcards(value, dialect.escape)
        violation = bareword_violation(checked, dialect=dialect)
    log_operation(op, len(result), violation=violation, value=value)
    return result


def _respond(payload: dict[str, str], code: int) -> None:
    print(json.dumps(payload))
    sys.exit(code)


def main() -> None:
    try:
        config = load_config(Path.cwd())
        configure_logging(config)
        dialect = config.dialect()
    except (OSError, ValueError) as e:
        _respond({"error": f"config: {e}"}, 1)

    try:
        request = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        _respond({"error": f"invalid JSON: {e}"}, 1)

    try:
        result = handle_request(request, dialect)
    except ValueError as e:
        _respond({"error": str(e)}, 1)

    _respond({"result": result}, 0)


if __name__ == "__main__":
    main()
