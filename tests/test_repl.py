"""Tests for the line-at-a-time REPL."""

from __future__ import annotations

import io

import pytest

from monkey.repl import PROMPT, start


def _run(lines: str, **kwargs) -> str:
    out = io.StringIO()
    start(stdin=io.StringIO(lines), stdout=out, **kwargs)
    return out.getvalue()


class TestParseMode:
    def test_prints_normalized_program(self):
        out = _run("1 + 2 * 3\n")
        assert "(1 + (2 * 3))" in out

    def test_prompt_before_each_line(self):
        out = _run("a\nb\n")
        assert out.count(PROMPT) == 3

    def test_errors_instead_of_program(self):
        out = _run("let x 5;\n")
        assert "parser errors:" in out
        assert "\texpected next token to be =, got INT instead" in out

    def test_blank_line_prints_nothing(self):
        assert _run("\n") == PROMPT + PROMPT + "\n"

    def test_custom_prompt(self):
        assert _run("", prompt="monkey> ").startswith("monkey> ")


class TestTokensMode:
    def test_prints_tokens_without_eof(self):
        out = _run("let x = 1;\n", mode="tokens")
        first = out.split(PROMPT)[1].splitlines()
        assert [line.split()[0] for line in first] == ["LET", "IDENT", "ASSIGN", "INT", "SEMICOLON"]
        assert "EOF" not in out

    def test_illegal_tokens_shown(self):
        out = _run("@\n", mode="tokens")
        assert "ILLEGAL" in out


class TestModes:
    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="unknown REPL mode"):
            _run("", mode="eval")
