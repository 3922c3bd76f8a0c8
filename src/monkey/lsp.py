"""Minimal LSP server for Monkey: diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from monkey import __version__
from monkey.lexer import Lexer
from monkey.parser import Parser
from monkey.tokens import Span, TokenType

server = LanguageServer(
    "monkey-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _range(span: Span) -> Range:
    # Zero-width spans (EOF) still get a one-character range
    end_col = span.end.column - 1
    if span.end.line == span.start.line and span.end.column <= span.start.column:
        end_col = span.start.column
    return Range(
        start=Position(line=span.start.line - 1, character=span.start.column - 1),
        end=Position(line=span.end.line - 1, character=end_col),
    )


def collect_diagnostics(source: str) -> list[Diagnostic]:
    """Parse source and convert every parse error and ILLEGAL token to a Diagnostic."""
    diagnostics: list[Diagnostic] = []

    for tok in Lexer(source):
        if tok.type == TokenType.ILLEGAL:
            diagnostics.append(
                Diagnostic(
                    range=_range(tok.span),
                    message=f"illegal character {tok.literal!r}",
                    severity=DiagnosticSeverity.Warning,
                    source="monkey",
                )
            )

    parser = Parser(Lexer(source))
    parser.parse_program()
    for err in parser.errors:
        diagnostics.append(
            Diagnostic(
                range=_range(err.span),
                message=err.message,
                severity=DiagnosticSeverity.Error,
                source="monkey",
            )
        )

    return diagnostics


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=collect_diagnostics(doc.source))
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
