"""Minimal LSP server for Ween, diagnostics only."""

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

from ween import __version__
from ween.lexer import Lexer
from ween.tokens import Span, TokenType

server = LanguageServer("ween-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _utf16_character(lines: list[str], line: int, column: int) -> int:
    """Convert a 1-based code point column to a 0-based UTF-16 offset."""
    text = lines[line - 1] if line - 1 < len(lines) else ""
    return len(text[: column - 1].encode("utf-16-le")) // 2


def _range(span: Span, lines: list[str]) -> Range:
    """Convert a 1-based span to a 0-based LSP range in UTF-16 units."""
    return Range(
        start=Position(
            line=span.start.line - 1,
            character=_utf16_character(lines, span.start.line, span.start.column),
        ),
        end=Position(
            line=span.end.line - 1,
            character=_utf16_character(lines, span.end.line, span.end.column),
        ),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    lexer = Lexer(doc.source)
    lines = doc.source.split("\n")
    tokens = lexer.tokenize()
    diagnostics: list[Diagnostic] = []

    for tok in tokens:
        if tok.type == TokenType.ILLEGAL:
            diagnostics.append(
                Diagnostic(
                    range=_range(tok.span, lines),
                    message=f"illegal character '{tok.text}'",
                    severity=DiagnosticSeverity.Error,
                    source="ween",
                )
            )

    for warning in lexer.warnings:
        diagnostics.append(
            Diagnostic(
                range=_range(warning.span, lines),
                message=warning.message,
                severity=DiagnosticSeverity.Warning,
                source="ween",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
