#!/usr/bin/env python3
"""Check for banned Python constructions in psquote source.

Banned constructions:

    Construction          Reason                            Use instead
    --------------------  --------------------------------  --------------------------
    import shlex          POSIX shell quoting rules, wrong  psquote.core.codegen
    from shlex import     grammar for PowerShell output     quote_argument & friends
    import pipes          same (legacy shlex.quote alias)
"""

import ast
import os
from pathlib import Path
import sys

BANNED_MODULES = frozenset({"shlex", "pipes"})


def find_python_files(directory):
    """All .py files under directory, sorted."""
    return sorted(str(p) for p in Path(directory).rglob("*.py"))


def check_source(source, filepath="<string>"):
    """Return (lineno, description) for every banned import in source."""
    tree = ast.parse(source, filepath)
    errors = []

    for node in ast.walk(tree):
        lineno = getattr(node, "lineno", 0)

        # import shlex
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name in BANNED_MODULES:
                    errors.append(
                        (lineno, f"import {alias.name}: banned, POSIX quoting")
                    )

        # from shlex import ...
        if isinstance(node, ast.ImportFrom):
            if node.module in BANNED_MODULES:
                errors.append(
                    (lineno, f"from {node.module} import: banned, POSIX quoting")
                )

    return errors


def check_file(filepath):
    with open(filepath, encoding="utf-8") as f:
        source = f.read()
    return check_source(source, filepath)


def main(argv=None):
    """Check every path given (default: src). Exit 1 on any violation."""
    paths = (sys.argv[1:] if argv is None else argv) or ["src"]

    files = []
    for path in paths:
        if os.path.isfile(path):
            files.append(path)
        elif os.path.isdir(path):
            files.extend(find_python_files(path))
        else:
            print(f"Not found: {path}")
            return 1
    if not files:
        print(f"No Python files found in: {', '.join(paths)}")
        return 1

    violations = []
    for filepath in files:
        try:
            violations.extend((filepath, n, d) for n, d in check_file(filepath))
        except SyntaxError as e:
            print(f"Syntax error in {filepath}: {e}")
            return 1

    for filepath, lineno, description in sorted(violations):
        print(f"{filepath}:{lineno}: {description}")
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
