"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from monkey.ast import (
    Boolean,
    Expression,
    ExpressionStatement,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    Program,
)
from monkey.errors import ParseError
from monkey.lexer import tokenize
from monkey.parser import parse
from monkey.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and asserts there were no errors."""

    def _parse(source: str) -> Program:
        program, errors = parse(source)
        assert_no_errors(errors)
        return program

    return _parse


def assert_no_errors(errors: list[ParseError]) -> None:
    messages = [str(e) for e in errors]
    assert not errors, f"parser has {len(errors)} errors: {messages}"


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token literals match the expected list."""
    actual = [t.literal for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def single_expression(program: Program) -> Expression:
    """Return the expression of a program holding exactly one expression statement."""
    assert len(program.statements) == 1, f"Expected 1 statement, got {program.statements}"
    stmt = program.statements[0]
    assert isinstance(stmt, ExpressionStatement), f"Expected ExpressionStatement, got {stmt}"
    return stmt.expression


def assert_literal(expr: Expression, expected: int | str | bool) -> None:
    """Assert expr is the Identifier, IntegerLiteral, or Boolean for expected."""
    if isinstance(expected, bool):
        assert isinstance(expr, Boolean), f"Expected Boolean, got {type(expr).__name__}"
        assert expr.value is expected
        assert expr.token_literal() == str(expected).lower()
    elif isinstance(expected, int):
        assert isinstance(expr, IntegerLiteral), f"Expected IntegerLiteral, got {type(expr).__name__}"
        assert expr.value == expected
        assert expr.token_literal() == str(expected)
    else:
        assert isinstance(expr, Identifier), f"Expected Identifier, got {type(expr).__name__}"
        assert expr.value == expected
        assert expr.token_literal() == expected


def assert_infix(
    expr: Expression, left: int | str | bool, operator: str, right: int | str | bool
) -> None:
    assert isinstance(expr, InfixExpression), f"Expected InfixExpression, got {type(expr).__name__}"
    assert_literal(expr.left, left)
    assert expr.operator == operator, f"Expected operator {operator!r}, got {expr.operator!r}"
    assert_literal(expr.right, right)
