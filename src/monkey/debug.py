"""--debug AST and token dumps."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from monkey.ast import (
    BlockStatement,
    Boolean,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
)
from monkey.tokens import Token


def dump_ast(program: Program, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Program\n")
    for stmt in program.statements:
        _dump_node(stmt, 1, file)


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stdout) -> None:
    """Print one token per line as TYPE 'literal' line:col."""
    for tok in tokens:
        pos = tok.span.start
        file.write(f"{tok.type.name:<9} {tok.literal!r} {pos.line}:{pos.column}\n")


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: object, depth: int, f: TextIO) -> None:
    pad = _indent(depth)
    if isinstance(node, LetStatement):
        f.write(f"{pad}Let {node.name.value}\n")
        _dump_node(node.value, depth + 1, f)
    elif isinstance(node, ReturnStatement):
        f.write(f"{pad}Return\n")
        if node.value is not None:
            _dump_node(node.value, depth + 1, f)
    elif isinstance(node, ExpressionStatement):
        f.write(f"{pad}ExpressionStatement\n")
        _dump_node(node.expression, depth + 1, f)
    elif isinstance(node, BlockStatement):
        f.write(f"{pad}Block\n")
        for stmt in node.statements:
            _dump_node(stmt, depth + 1, f)
    elif isinstance(node, Identifier):
        f.write(f"{pad}Identifier({node.value!r})\n")
    elif isinstance(node, IntegerLiteral):
        value = "<invalid>" if node.value is None else node.value
        f.write(f"{pad}IntegerLiteral({value})\n")
    elif isinstance(node, Boolean):
        f.write(f"{pad}Boolean({node.value})\n")
    elif isinstance(node, PrefixExpression):
        f.write(f"{pad}Prefix {node.operator}\n")
        _dump_node(node.right, depth + 1, f)
    elif isinstance(node, InfixExpression):
        f.write(f"{pad}Infix {node.operator}\n")
        _dump_node(node.left, depth + 1, f)
        _dump_node(node.right, depth + 1, f)
    elif isinstance(node, IfExpression):
        f.write(f"{pad}If\n")
        _dump_node(node.condition, depth + 1, f)
        _dump_node(node.consequence, depth + 1, f)
        if node.alternative is not None:
            f.write(f"{_indent(depth + 1)}Else\n")
            _dump_node(node.alternative, depth + 2, f)
    elif isinstance(node, FunctionLiteral):
        params = ", ".join(p.value for p in node.parameters)
        f.write(f"{pad}Function({params})\n")
        _dump_node(node.body, depth + 1, f)
    elif isinstance(node, CallExpression):
        f.write(f"{pad}Call\n")
        _dump_node(node.function, depth + 1, f)
        for arg in node.arguments:
            _dump_node(arg, depth + 1, f)
    else:
        raise TypeError(f"unknown AST node: {type(node).__name__}")
