"""Minimal LSP server for wordcheck: unknown-word diagnostics only."""

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

from wordcheck import __version__
from wordcheck.checker import Checker
from wordcheck.errors import ConfigurationError, GrammarViolation, ResourceError
from wordcheck.tokens import SourceBuffer, position_of

server = LanguageServer(
    "wordcheck-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)

# Set once by main() before the server starts
_checker: Checker | None = None
_setup_error: str | None = None


def _validate(
    ls: LanguageServer,
    uri: str,
    checker: Checker | None,
    setup_error: str | None = None,
) -> None:
    """Check the document and publish one diagnostic per unknown word."""
    diagnostics: list[Diagnostic] = []

    if checker is None:
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=0, character=0),
                    end=Position(line=0, character=1),
                ),
                message=setup_error or "no dictionaries loaded",
                severity=DiagnosticSeverity.Error,
                source="wordcheck",
            )
        )
    else:
        doc = ls.workspace.get_text_document(uri)
        source = doc.source
        filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
        buffer = SourceBuffer(source, filename)

        for lexeme in checker.unmatched(buffer):
            start = position_of(source, lexeme.start)
            end = position_of(source, lexeme.end)
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=start.line - 1, character=start.column - 1),
                        end=Position(line=end.line - 1, character=end.column - 1),
                    ),
                    message=f"unknown word '{lexeme.text}'",
                    severity=DiagnosticSeverity.Warning,
                    source="wordcheck",
                )
            )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri, _checker, _setup_error)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri, _checker, _setup_error)


def configure(argv: list[str] | None = None) -> None:
    """Build the checker from CLI-style arguments, recording any failure."""
    global _checker, _setup_error
    from wordcheck.cli import build_checker, parse_args, resolve_options

    try:
        _checker = build_checker(resolve_options(parse_args(argv)))
        _setup_error = None
    except GrammarViolation as exc:
        _checker = None
        _setup_error = exc.format()
    except (ConfigurationError, ResourceError) as exc:
        _checker = None
        _setup_error = str(exc)


def main(argv: list[str] | None = None) -> None:
    configure(argv)
    server.start_io()
