"""Monkey lexer: produces tokens on demand from source text."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterator

from monkey.tokens import (
    SINGLE_CHAR_TOKENS,
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
    is_letter,
    lookup_ident,
)

# Sentinel for "no character": past the end of input
_EOF_CHAR = ""

_WHITESPACE = frozenset(" \t\n\r")


class Lexer:
    """Pull-based tokenizer: each next_token() call yields exactly one Token.

    The cursor only moves forward. ``_position`` indexes the character under
    examination (``_ch``) and ``_read_position`` is always one past it, so a
    single character of lookahead is a peek at ``_read_position``.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._read_position = 0
        self._ch = _EOF_CHAR
        self._line_starts = [0]
        for idx, ch in enumerate(source):
            if ch == "\n":
                self._line_starts.append(idx + 1)
        self._read_char()

    @property
    def source(self) -> str:
        return self._source

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """Skip whitespace and return the next token. Idempotent at end of input."""
        self._skip_whitespace()
        start = self._position
        ch = self._ch

        if ch == _EOF_CHAR:
            return self._make(TokenType.EOF, start, start)

        if ch == "=":
            if self._peek_char() == "=":
                self._read_char()
                self._read_char()
                return self._make(TokenType.EQ, start, self._position)
            self._read_char()
            return self._make(TokenType.ASSIGN, start, self._position)

        if ch == "!":
            if self._peek_char() == "=":
                self._read_char()
                self._read_char()
                return self._make(TokenType.NOT_EQ, start, self._position)
            self._read_char()
            return self._make(TokenType.BANG, start, self._position)

        tt = SINGLE_CHAR_TOKENS.get(ch)
        if tt is not None:
            self._read_char()
            return self._make(tt, start, self._position)

        if is_letter(ch):
            self._read_identifier()
            literal = self._source[start : self._position]
            return self._make(lookup_ident(literal), start, self._position)

        if is_digit(ch):
            self._read_number()
            return self._make(TokenType.INT, start, self._position)

        self._read_char()
        return self._make(TokenType.ILLEGAL, start, self._position)

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _read_char(self) -> None:
        if self._read_position >= len(self._source):
            self._ch = _EOF_CHAR
            self._position = len(self._source)
            return
        self._ch = self._source[self._read_position]
        self._position = self._read_position
        self._read_position += 1

    def _peek_char(self) -> str:
        if self._read_position >= len(self._source):
            return _EOF_CHAR
        return self._source[self._read_position]

    def _skip_whitespace(self) -> None:
        while self._ch in _WHITESPACE:
            self._read_char()

    def _read_identifier(self) -> None:
        while is_letter(self._ch) or is_digit(self._ch):
            self._read_char()

    def _read_number(self) -> None:
        while is_digit(self._ch):
            self._read_char()

    # ------------------------------------------------------------------
    # Token construction
    # ------------------------------------------------------------------

    def _position_at(self, offset: int) -> Position:
        line_idx = bisect_right(self._line_starts, offset) - 1
        column = offset - self._line_starts[line_idx] + 1
        return Position(line_idx + 1, column, offset)

    def _make(self, tt: TokenType, start: int, end: int) -> Token:
        literal = self._source[start:end]
        return Token(tt, literal, Span(self._position_at(start), self._position_at(end)))


def tokenize(source: str) -> list[Token]:
    """Convenience function: lex the whole source, EOF token included."""
    return list(Lexer(source))
