"""Monkey parser: Pratt parser from a token stream to a Program AST.

The parser never raises on malformed input. Problems are appended to
``Parser.errors`` and the offending statement is dropped; parsing always
runs to end of input and returns a Program.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from monkey.ast import (
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
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
    Statement,
)
from monkey.errors import MonkeySyntaxError, ParseError
from monkey.lexer import Lexer
from monkey.tokens import Token, TokenType

_INT64_MAX = 2**63 - 1
# Longest digit run (leading zeros aside) that can still fit in 64 bits
_INT64_MAX_DIGITS = len(str(_INT64_MAX))


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # my_function(X)


PRECEDENCES: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]


class Parser:
    """Pratt parser over a Lexer with one token of lookahead."""

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._source = lexer.source
        self.errors: list[ParseError] = []

        self._prefix_fns: dict[TokenType, PrefixParseFn] = {
            TokenType.IDENT: self._parse_identifier,
            TokenType.INT: self._parse_integer_literal,
            TokenType.TRUE: self._parse_boolean,
            TokenType.FALSE: self._parse_boolean,
            TokenType.BANG: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.LPAREN: self._parse_grouped_expression,
            TokenType.IF: self._parse_if_expression,
            TokenType.FUNCTION: self._parse_function_literal,
        }
        self._infix_fns: dict[TokenType, InfixParseFn] = {
            TokenType.PLUS: self._parse_infix_expression,
            TokenType.MINUS: self._parse_infix_expression,
            TokenType.ASTERISK: self._parse_infix_expression,
            TokenType.SLASH: self._parse_infix_expression,
            TokenType.EQ: self._parse_infix_expression,
            TokenType.NOT_EQ: self._parse_infix_expression,
            TokenType.LT: self._parse_infix_expression,
            TokenType.GT: self._parse_infix_expression,
            TokenType.LPAREN: self._parse_call_expression,
        }
        if self._infix_fns.keys() != PRECEDENCES.keys():
            raise RuntimeError("infix parse table and precedence table disagree")

        # Prime current and peek
        self._cur_token: Token = self._lexer.next_token()
        self._peek_token: Token = self._lexer.next_token()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _next_token(self) -> None:
        self._cur_token = self._peek_token
        self._peek_token = self._lexer.next_token()

    def _cur_token_is(self, tt: TokenType) -> bool:
        return self._cur_token.type == tt

    def _peek_token_is(self, tt: TokenType) -> bool:
        return self._peek_token.type == tt

    def _expect_peek(self, tt: TokenType) -> bool:
        """Advance if the peek token is tt; otherwise record an error and stay put."""
        if self._peek_token_is(tt):
            self._next_token()
            return True
        self.errors.append(ParseError.peek_mismatch(tt, self._peek_token, self._source))
        return False

    def _peek_precedence(self) -> int:
        return PRECEDENCES.get(self._peek_token.type, Precedence.LOWEST)

    def _cur_precedence(self) -> int:
        return PRECEDENCES.get(self._cur_token.type, Precedence.LOWEST)

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        statements: list[Statement] = []
        while not self._cur_token_is(TokenType.EOF):
            try:
                stmt = self._parse_statement()
            except RecursionError:
                # Nesting deeper than the interpreter stack; keep what was parsed
                self.errors.append(ParseError.too_deep(self._cur_token, self._source))
                break
            if stmt is not None:
                statements.append(stmt)
            self._next_token()
        return Program(tuple(statements))

    def _parse_statement(self) -> Statement | None:
        if self._cur_token_is(TokenType.LET):
            return self._parse_let_statement()
        if self._cur_token_is(TokenType.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement | None:
        let_tok = self._cur_token

        if not self._expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self._cur_token, self._cur_token.literal)

        if not self._expect_peek(TokenType.ASSIGN):
            return None
        self._next_token()

        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return LetStatement(let_tok, name, value)

    def _parse_return_statement(self) -> ReturnStatement | None:
        return_tok = self._cur_token

        # Bare `return;` / `return }` / `return` at end of input
        if self._peek_token.type in _RETURN_WITHOUT_VALUE:
            if self._peek_token_is(TokenType.SEMICOLON):
                self._next_token()
            return ReturnStatement(return_tok, None)

        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return ReturnStatement(return_tok, value)

    def _parse_expression_statement(self) -> ExpressionStatement | None:
        tok = self._cur_token
        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        # Semicolons terminate, and the last one may be omitted
        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return ExpressionStatement(tok, expression)

    def _parse_block_statement(self) -> BlockStatement:
        block_tok = self._cur_token
        statements: list[Statement] = []
        self._next_token()

        while not self._cur_token_is(TokenType.RBRACE) and not self._cur_token_is(TokenType.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self._next_token()

        return BlockStatement(block_tok, tuple(statements))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self, precedence: int) -> Expression | None:
        prefix = self._prefix_fns.get(self._cur_token.type)
        if prefix is None:
            self.errors.append(ParseError.no_prefix_fn(self._cur_token, self._source))
            return None

        left = prefix()
        while (
            left is not None
            and not self._peek_token_is(TokenType.SEMICOLON)
            and precedence < self._peek_precedence()
        ):
            infix = self._infix_fns.get(self._peek_token.type)
            if infix is None:
                return left
            self._next_token()
            left = infix(left)

        return left

    def _parse_identifier(self) -> Expression:
        return Identifier(self._cur_token, self._cur_token.literal)

    def _parse_integer_literal(self) -> Expression:
        tok = self._cur_token
        digits = tok.literal.lstrip("0")
        if len(digits) > _INT64_MAX_DIGITS or int(tok.literal) > _INT64_MAX:
            self.errors.append(ParseError.bad_integer(tok, self._source))
            return IntegerLiteral(tok, None)
        return IntegerLiteral(tok, int(tok.literal))

    def _parse_boolean(self) -> Expression:
        return Boolean(self._cur_token, self._cur_token_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> Expression | None:
        tok = self._cur_token
        self._next_token()

        right = self._parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(tok, tok.literal, right)

    def _parse_infix_expression(self, left: Expression) -> Expression | None:
        tok = self._cur_token
        precedence = self._cur_precedence()
        self._next_token()

        right = self._parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(tok, left, tok.literal, right)

    def _parse_grouped_expression(self) -> Expression | None:
        self._next_token()

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self._expect_peek(TokenType.RPAREN):
            return None
        return expression

    def _parse_if_expression(self) -> Expression | None:
        tok = self._cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None
        self._next_token()
        condition = self._parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self._expect_peek(TokenType.RPAREN):
            return None
        if not self._expect_peek(TokenType.LBRACE):
            return None
        consequence = self._parse_block_statement()

        alternative = None
        if self._peek_token_is(TokenType.ELSE):
            self._next_token()
            if not self._expect_peek(TokenType.LBRACE):
                return None
            alternative = self._parse_block_statement()

        return IfExpression(tok, condition, consequence, alternative)

    def _parse_function_literal(self) -> Expression | None:
        tok = self._cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None
        parameters = self._parse_function_parameters()
        if parameters is None:
            return None

        if not self._expect_peek(TokenType.LBRACE):
            return None
        body = self._parse_block_statement()

        return FunctionLiteral(tok, parameters, body)

    def _parse_function_parameters(self) -> tuple[Identifier, ...] | None:
        params: list[Identifier] = []

        if self._peek_token_is(TokenType.RPAREN):
            self._next_token()
            return ()

        if not self._expect_peek(TokenType.IDENT):
            return None
        params.append(Identifier(self._cur_token, self._cur_token.literal))

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            if not self._expect_peek(TokenType.IDENT):
                return None
            params.append(Identifier(self._cur_token, self._cur_token.literal))

        if not self._expect_peek(TokenType.RPAREN):
            return None
        return tuple(params)

    def _parse_call_expression(self, function: Expression) -> Expression | None:
        tok = self._cur_token
        arguments = self._parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(tok, function, arguments)

    def _parse_call_arguments(self) -> tuple[Expression, ...] | None:
        args: list[Expression] = []

        if self._peek_token_is(TokenType.RPAREN):
            self._next_token()
            return ()

        self._next_token()
        arg = self._parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            arg = self._parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self._expect_peek(TokenType.RPAREN):
            return None
        return tuple(args)


_RETURN_WITHOUT_VALUE: frozenset[TokenType] = frozenset(
    {TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF}
)


def parse(source: str) -> tuple[Program, list[ParseError]]:
    """Convenience function: parse source text, returning the Program and its errors."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


def parse_strict(source: str) -> Program:
    """Parse source text, raising MonkeySyntaxError if any error was recorded."""
    program, errors = parse(source)
    if errors:
        raise MonkeySyntaxError(errors)
    return program
