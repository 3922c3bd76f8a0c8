"""Tests for the LSP server: diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from monkey.lsp import _validate, collect_diagnostics


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.mk") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="monkey", version=0, text=source)
        )

    return ls, published, put


# ---------------------------------------------------------------------------
# Parse errors → Error severity
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_missing_assign(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("let x 5;")
        _validate(ls, "file:///test.mk")

        assert len(published) == 1
        assert published[0].uri == "file:///test.mk"
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "expected next token to be =" in d.message
        assert d.source == "monkey"
        # '5' is at column 7 (1-based) → character 6 (0-based)
        assert d.range.start.line == 0
        assert d.range.start.character == 6
        assert d.range.end.character == 7

    def test_all_errors_reported(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("let x 5;\nlet = 1;")
        _validate(ls, "file:///test.mk")
        assert len(published[0].diagnostics) >= 2


# ---------------------------------------------------------------------------
# Illegal characters → Warning severity
# ---------------------------------------------------------------------------


class TestIllegalTokens:
    def test_illegal_char(self) -> None:
        diags = collect_diagnostics("a $ b")
        warnings = [d for d in diags if d.severity == DiagnosticSeverity.Warning]
        assert len(warnings) == 1
        assert "'$'" in warnings[0].message
        assert warnings[0].range.start.character == 2


# ---------------------------------------------------------------------------
# Clean document → empty diagnostics
# ---------------------------------------------------------------------------


class TestCleanDocument:
    def test_valid_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("let add = fn(a, b) { a + b };\nadd(1, 2);")
        _validate(ls, "file:///test.mk")

        assert len(published) == 1
        assert published[0].diagnostics == []


# ---------------------------------------------------------------------------
# Position conversion (1-based → 0-based)
# ---------------------------------------------------------------------------


class TestPositionConversion:
    def test_error_on_second_line(self) -> None:
        diags = collect_diagnostics("let x = 1;\n* 2")
        assert len(diags) == 1
        assert diags[0].range.start.line == 1
        assert diags[0].range.start.character == 0

    def test_error_at_end_of_input_has_width(self) -> None:
        diags = collect_diagnostics("(1")
        d = diags[0]
        assert d.range.start.character == 2
        assert d.range.end.character == 3
