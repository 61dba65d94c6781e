from __future__ import annotations

"""
A minimal pygls-based Language Server for glenisp.

Features:
- Text synchronization (documents are read back from the pygls workspace)
- Diagnostics: syntax errors reported by the glenisp parser
- Hover: builtin signatures and locally defined symbols
- Completion: builtins and names introduced by def/fun
- Signature Help: for builtins and fun definitions
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)

from glenisp import __version__
from glenisp.errors import GlenispSyntaxError
from glenisp.reader.parser import parse
from glenisp_lsp.indexer import BUILTIN_SIGNATURES, DocumentIndex, build_index, signature_for

logger = logging.getLogger(__name__)

DELIMITERS = " \t()\n\r{}"


class GlenispLanguageServer(LanguageServer):
    CMD_NAME = "glenisp-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.indexes: Dict[str, DocumentIndex] = {}

    def source(self, uri: str) -> str:
        return self.workspace.get_text_document(uri).source


ls = GlenispLanguageServer()


# --- Diagnostics ---
def diagnostics_for(text: str) -> List[Diagnostic]:
    """Parse `text` and report the first syntax error, if any."""
    try:
        parse(text)
    except GlenispSyntaxError as err:
        start = Position(line=err.line - 1, character=err.col - 1)
        end = Position(line=err.line - 1, character=err.col)
        return [
            Diagnostic(
                range=Range(start=start, end=end),
                message=err.message,
                severity=DiagnosticSeverity.Error,
                source=GlenispLanguageServer.CMD_NAME,
            )
        ]
    return []


def _refresh(uri: str) -> None:
    text = ls.source(uri)
    logger.debug("indexing %s", uri)
    ls.indexes[uri] = build_index(text)
    ls.publish_diagnostics(uri, diagnostics_for(text))


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    _refresh(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    _refresh(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.indexes.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Hover ---
def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return f"{BUILTIN_SIGNATURES[word]} (builtin)"
    sdef = idx.symbols.get(word)
    if sdef is None:
        return None
    if sdef.kind == 'function':
        return f"{signature_for(word, idx)} (defined at {sdef.line+1}:{sdef.col+1})"
    return f"{word} (defined at {sdef.line+1}:{sdef.col+1})"


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    uri = params.text_document.uri
    idx = ls.indexes.get(uri)
    if idx is None:
        return None
    word = extract_word_at(ls.source(uri), params.position.line, params.position.character)
    if not word:
        return None
    contents = hover_text(word, idx)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["(", "{"]))
def on_completion(params: CompletionParams) -> CompletionList:
    idx = ls.indexes.get(params.text_document.uri, DocumentIndex())
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for name, sdef in idx.symbols.items():
        kind = CompletionItemKind.Function if sdef.kind == 'function' else CompletionItemKind.Variable
        items.append(CompletionItem(label=name, kind=kind))
    return CompletionList(is_incomplete=False, items=items)


# --- Signature Help ---
@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    uri = params.text_document.uri
    idx = ls.indexes.get(uri)
    if idx is None:
        return None

    prefix = line_prefix(ls.source(uri), params.position.line, params.position.character)
    callee = extract_callee_name(prefix)
    if not callee:
        return None
    label = signature_for(callee, idx)
    if label is None:
        return None

    params_list = label.strip("()").split()[1:]
    parameters = [ParameterInformation(label=p) for p in params_list]
    return SignatureHelp(
        signatures=[SignatureInformation(label=label, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    idx = ls.indexes.get(params.text_document.uri)
    if idx is None:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == 'function' else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---
def line_prefix(text: str, line: int, character: int) -> str:
    # Return the text from start of line up to the cursor
    lines = text.splitlines(True)
    if line >= len(lines):
        return ""
    return lines[line][:character]


def extract_word_at(text: str, line: int, character: int) -> Optional[str]:
    lines = text.splitlines(True)
    if line >= len(lines):
        return None
    src = lines[line]
    start = character
    while start > 0 and src[start - 1] not in DELIMITERS:
        start -= 1
    end = character
    while end < len(src) and src[end] not in DELIMITERS:
        end += 1
    return src[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    # find last '(' and take the token that follows it
    lp = prefix.rfind('(')
    if lp == -1:
        return None
    rest = prefix[lp + 1:].split()
    if not rest:
        return None
    return rest[0].rstrip(')}')


def main() -> None:
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
