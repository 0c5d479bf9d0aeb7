"""Tests for the JSON entry point and the bin/ debug helper."""

from __future__ import annotations

import json

import pytest

from conftest import REPO_ROOT

PSQUOTE_DUMP = REPO_ROOT / "bin" / "psquote-dump.py"

#
# ==========================================================================
# python -m psquote
# ==========================================================================
#
TESTS = [
    ({"op": "quote_argument", "value": "a b"}, "'a b'"),
    ({"op": "quote_argument", "value": "hello"}, "hello"),
    ({"op": "quote_argument", "value": "1>foo"}, "'1>foo'"),
    ({"op": "quote_argument", "value": "$x", "quote": '"', "literal": True}, '"`$x"'),
    ({"op": "quote_argument", "value": "*.txt", "literal": False}, "'`*.txt'"),
    ({"op": "quote_argument", "value": "*.txt", "literal": True}, "*.txt"),
    ({"op": "quote_argument", "value": "hello", "quote": "\u0000"}, "hello"),
    ({"op": "quote_argument", "value": "a b", "quote": "\u0000"}, "'a b'"),
    ({"op": "escape_single_quoted", "value": "it's"}, "it''s"),
    ({"op": "escape_block_comment", "value": "a<#b#>c"}, "a<`#b#`>c"),
    ({"op": "escape_format_string", "value": "{0}"}, "{{0}}"),
    ({"op": "escape_variable_name", "value": "a{b}"}, "a`{b`}"),
    ({"op": "escape_double_quoted", "value": '$x"y'}, '`$x""y'),
    ({"op": "quote_member_name", "value": "foo-bar"}, "'foo-bar'"),
    ({"op": "quote_member_name", "value": "foo"}, "foo"),
    ({"op": "escape_wildcards", "value": "a[1]"}, "a`[1`]"),
]


@pytest.mark.parametrize("request_data,expected", TESTS)
def test_operations(run_cli, request_data, expected):
    code, output = run_cli(request_data)
    assert code == 0
    assert output == {"result": expected}


ERRORS = [
    ("not json", "invalid JSON"),
    ("[1, 2]", "request must be a JSON object"),
    ({"op": "rm", "value": "x"}, "unknown op 'rm'"),
    ({"value": "x"}, "unknown op None"),
    ({"op": "quote_argument", "value": 3}, "'value' must be a string"),
    ({"op": "quote_argument", "value": "x", "quote": "''"}, "'quote' must be null"),
    ({"op": "quote_argument", "value": "x", "quote": 1}, "'quote' must be null"),
    ({"op": "quote_argument", "value": "x", "literal": "no"}, "'literal' must be true or false"),
]


@pytest.mark.parametrize("request_data,message", ERRORS)
def test_errors(run_cli, request_data, message):
    code, output = run_cli(request_data)
    assert code == 1
    assert message in output["error"]


class TestConfig:
    """The entry point picks up dialect and logging config."""

    def test_env_dialect(self, run_cli, tmp_path):
        config = tmp_path / "dialect.toml"
        config.write_text('[dialect]\nescape = "^"\n')
        code, output = run_cli(
            {"op": "escape_variable_name", "value": "a{b}"},
            env_extra={"PSQUOTE_CONFIG": str(config)},
        )
        assert code == 0
        assert output == {"result": "a^{b^}"}

    def test_project_config_error(self, run_cli, tmp_path):
        (tmp_path / ".psquote.toml").write_text("[dialect]\nescape = 1\n")
        code, output = run_cli({"op": "quote_argument", "value": "x"})
        assert code == 1
        assert output["error"].startswith("config: ")
        assert "'escape' must be a string" in output["error"]

    def test_decision_logged(self, run_cli, tmp_path):
        log = tmp_path / "logs" / "psquote.log"
        (tmp_path / ".psquote.toml").write_text(
            f'[settings]\nlog = "{log.as_posix()}"\n'
        )
        code, output = run_cli({"op": "quote_argument", "value": "$x"})
        assert code == 0
        assert output == {"result": "'$x'"}
        entry = json.loads(log.read_text().splitlines()[-1])
        assert entry["op"] == "quote_argument"
        assert entry["violation"] == "variable"
        assert entry["result_len"] == 4
        assert "value" not in entry


#
# ==========================================================================
# bin/psquote-dump.py
# ==========================================================================
#
class TestDump:
    def test_usage_without_argument(self, run_script):
        result = run_script(PSQUOTE_DUMP)
        assert result.returncode == 1
        assert "Usage" in result.stdout

    def test_dumps_every_context(self, run_script):
        result = run_script(PSQUOTE_DUMP, "it's $x")
        assert result.returncode == 0, result.stderr
        out = result.stdout
        assert "single-quoted: 'it''s $x'" in out
        assert 'double-quoted: "it\'s `$x"' in out
        assert "member: 'it''s $x'" in out
        assert "bareword rule (literal): quote" in out
        assert "wildcards: no" in out

    def test_reports_live_wildcards(self, run_script):
        result = run_script(PSQUOTE_DUMP, "*.txt")
        assert result.returncode == 0, result.stderr
        assert "wildcards: yes" in result.stdout
        assert "argument: '`*.txt'" in result.stdout
