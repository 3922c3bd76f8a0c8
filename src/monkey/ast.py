"""AST node types for parsed Monkey programs.

Nodes are immutable and own their children outright. Each node keeps the
token that introduced it so diagnostics and ``token_literal()`` can point
back at the source. ``str(node)`` renders normalized source, with every
prefix and infix expression fully parenthesized.
"""

from __future__ import annotations

from dataclasses import dataclass

from monkey.tokens import Span, Token


class Node:
    __slots__ = ()

    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    @property
    def span(self) -> Span:
        return self.token.span


# ----------------------------------------------------------------------
# Expressions
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Identifier(Node):
    """A name reference."""

    token: Token
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class IntegerLiteral(Node):
    """Integer literal; value is None when the literal did not fit in 64 bits."""

    token: Token
    value: int | None

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True, slots=True)
class Boolean(Node):
    token: Token
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True, slots=True)
class PrefixExpression(Node):
    """Unary operator applied to its operand: -x, !x."""

    token: Token
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True, slots=True)
class InfixExpression(Node):
    """Binary operator; token is the operator token."""

    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True, slots=True)
class IfExpression(Node):
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None

    def __str__(self) -> str:
        out = f"if {self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass(frozen=True, slots=True)
class FunctionLiteral(Node):
    token: Token
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True, slots=True)
class CallExpression(Node):
    """Function invocation; token is the '(' that opened the argument list."""

    token: Token
    function: Expression
    arguments: tuple[Expression, ...]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# ----------------------------------------------------------------------
# Statements
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LetStatement(Node):
    """let <name> = <value>;"""

    token: Token
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True, slots=True)
class ReturnStatement(Node):
    """return <value>; with an optional value."""

    token: Token
    value: Expression | None

    def __str__(self) -> str:
        if self.value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.value};"


@dataclass(frozen=True, slots=True)
class ExpressionStatement(Node):
    """A bare expression used as a statement; token is its first token."""

    token: Token
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True, slots=True)
class BlockStatement(Node):
    """Braced statement list; token is the opening '{'."""

    token: Token
    statements: tuple[Statement, ...]

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


Expression = (
    Identifier
    | IntegerLiteral
    | Boolean
    | PrefixExpression
    | InfixExpression
    | IfExpression
    | FunctionLiteral
    | CallExpression
)

Statement = LetStatement | ReturnStatement | ExpressionStatement | BlockStatement


@dataclass(frozen=True, slots=True)
class Program:
    """Root node: top-level statements in source order."""

    statements: tuple[Statement, ...]

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)
