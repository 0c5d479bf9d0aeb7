"""
Shared test fixtures for psquote tests.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
import structlog

from psquote.core.chars import Dialect

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC = REPO_ROOT / "src"


def _env(home: Path) -> dict[str, str]:
    """Environment isolated from the developer's own config files."""
    env = dict(os.environ)
    env.pop("PSQUOTE_CONFIG", None)
    env["HOME"] = str(home)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    return env


@pytest.fixture
def caret_dialect():
    """A made-up dialect: ^ escapes, % introduces variables."""
    return Dialect(escape="^", sigil="%", bareword_first="!")


@pytest.fixture
def run_cli(tmp_path):
    """Run `python -m psquote` with a request and return (exit code, parsed JSON)."""

    def _run(request, env_extra: dict[str, str] | None = None):
        env = _env(tmp_path)
        if env_extra:
            env.update(env_extra)
        stdin = request if isinstance(request, str) else json.dumps(request)
        proc = subprocess.run(
            [sys.executable, "-m", "psquote"],
            input=stdin.encode(),
            capture_output=True,
            cwd=tmp_path,
            env=env,
            timeout=10,
        )
        assert proc.stderr == b"", proc.stderr.decode()
        return proc.returncode, json.loads(proc.stdout)

    return _run


@pytest.fixture
def run_script(tmp_path):
    """Run a repo script with psquote importable from src/."""

    def _run(script: Path, *args: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, str(script), *args],
            capture_output=True,
            text=True,
            cwd=tmp_path,
            env=_env(tmp_path),
            timeout=10,
        )

    return _run


@pytest.fixture
def reset_structlog():
    """Undo global structlog configuration made by a test."""
    yield
    structlog.reset_defaults()
