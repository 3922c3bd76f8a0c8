"""Parse diagnostics with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass

from monkey.tokens import Span, Token, TokenType


@dataclass(frozen=True, slots=True)
class ParseError:
    """A single parse diagnostic, collected by the parser rather than raised.

    ``expected`` and ``actual`` name the token kinds involved when the error
    is a token mismatch or a missing prefix handler.
    """

    message: str
    span: Span
    source: str
    expected: TokenType | None = None
    actual: TokenType | None = None

    def __str__(self) -> str:
        return self.message

    @classmethod
    def peek_mismatch(cls, expected: TokenType, got: Token, source: str) -> ParseError:
        return cls(
            f"expected next token to be {expected}, got {got.type} instead",
            got.span,
            source,
            expected=expected,
            actual=got.type,
        )

    @classmethod
    def no_prefix_fn(cls, tok: Token, source: str) -> ParseError:
        return cls(
            f"no prefix parse function for {tok.type} found",
            tok.span,
            source,
            actual=tok.type,
        )

    @classmethod
    def bad_integer(cls, tok: Token, source: str) -> ParseError:
        return cls(f"could not parse {tok.literal!r} as integer", tok.span, source)

    @classmethod
    def too_deep(cls, tok: Token, source: str) -> ParseError:
        return cls("expression nested too deeply", tok.span, source, actual=tok.type)

    def format(self, filename: str = "<input>") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Token spans are one line: `==`/`!=` get two carets, EOF is
        # zero-width and still gets one. Multi-line spans run to end of line.
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class MonkeySyntaxError(Exception):
    """Raised by parse_strict() when parsing produced any errors."""

    def __init__(self, errors: list[ParseError]) -> None:
        self.errors = errors
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        return "\n".join(err.format(filename) for err in self.errors)
