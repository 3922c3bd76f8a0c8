"""Monkey language front end: lexer, Pratt parser, and AST."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from monkey.ast import Program
    from monkey.errors import ParseError

__version__ = "0.1.0"


def parse(source: str) -> tuple[Program, list[ParseError]]:
    """Parse Monkey source, returning the Program and any parse errors."""
    from monkey.parser import parse as _parse

    return _parse(source)
