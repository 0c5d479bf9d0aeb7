#!/usr/bin/env python3
"""
Debug helper for inspecting how psquote escapes a value.

Usage:
    python bin/psquote-dump.py 'value to escape'

Prints the value in every context, plus which bareword rule (if any) forces
quoting. Useful when checking a tricky argument by hand.
"""

import sys

from psquote.core.codegen import (
    bareword_violation,
    escape_block_comment,
    escape_double_quoted,
    escape_format_string,
    escape_single_quoted,
    escape_variable_name,
    quote_argument,
    quote_member_name,
)
from psquote.core.wildcard import contains_wildcards, escape_wildcards

CONTEXTS = [
    ("single-quoted", lambda v: "'" + escape_single_quoted(v) + "'"),
    ("double-quoted", lambda v: '"' + escape_double_quoted(v) + '"'),
    ("block comment", lambda v: "<#" + escape_block_comment(v) + "#>"),
    ("format string", lambda v: "'" + escape_single_quoted(escape_format_string(v)) + "'"),
    ("variable", lambda v: "${" + escape_variable_name(v) + "}"),
    ("member", quote_member_name),
    ("argument", quote_argument),
    ("literal argument", lambda v: quote_argument(v, literal=True)),
]


def main():
    if len(sys.argv) < 2:
        print("Usage: psquote-dump.py 'value'")
        print("Example: psquote-dump.py 'it''s $HOME'")
        sys.exit(1)

    value = sys.argv[1]
    print(f"Value: {value!r}")
    print("-" * 40)

    for name, render in CONTEXTS:
        print(f"{name:>16}: {render(value)}")

    print()
    print(f"bareword rule (literal): {bareword_violation(value)}")
    print(f"bareword rule (pattern): {bareword_violation(escape_wildcards(value))}")
    print(f"wildcards: {'yes' if contains_wildcards(value) else 'no'}")


if __name__ == "__main__":
    main()
