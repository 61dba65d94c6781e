from __future__ import annotations

"""
Lightweight indexer for glenisp files without evaluating code.

We scan for definition forms and record where each name is introduced:
- (def {a b ...} ...)        -> one 'var' entry per symbol
- (fun {name args ...} ...)  -> a 'function' entry for name, with its params

The scanner is tolerant: it works on raw tokens so partial or unbalanced buffers
still produce an index.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple
import re

# Simple token patterns for scanning
TOKEN_REGEX = re.compile(
    r"\s+|;.*$|\(|\)|\{|\}|[^\s(){};]+",
    re.MULTILINE,
)


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: List[str] = field(default_factory=list)


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if not tok or tok.isspace() or tok.startswith(';'):
            continue
        yield tok, m.start(), m.end()


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _brace_names(tokens, start: int) -> List[Tuple[str, int]]:
    """Collect (name, offset) pairs from a `{...}` group starting at tokens[start]."""
    names: List[Tuple[str, int]] = []
    if start >= len(tokens) or tokens[start][0] != '{':
        return names
    j = start + 1
    while j < len(tokens):
        t, s, _ = tokens[j]
        if t in ('{', '}', '(', ')'):
            break
        names.append((t, s))
        j += 1
    return names


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(_iter_tokens(text))

    for i, (tok, _, _) in enumerate(tokens):
        if tok != '(' or i + 1 >= len(tokens):
            continue
        head = tokens[i + 1][0]
        if head not in ("def", "fun"):
            continue
        names = _brace_names(tokens, i + 2)
        if not names:
            continue
        if head == "def":
            for name, offset in names:
                line, col = _position_from_offset(text, offset)
                idx.symbols[name] = SymbolDef(name=name, kind='var', line=line, col=col)
        else:
            (name, offset), params = names[0], [n for n, _ in names[1:]]
            line, col = _position_from_offset(text, offset)
            idx.symbols[name] = SymbolDef(
                name=name, kind='function', line=line, col=col, params=params
            )

    return idx


# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "+": "(+ n & ns)",
    "-": "(- n & ns)",
    "*": "(* n & ns)",
    "/": "(/ n & ns)",
    "%": "(% n & ns)",
    "^": "(^ n & ns)",
    "min": "(min n & ns)",
    "max": "(max n & ns)",
    "<": "(< & ns)",
    "<=": "(<= & ns)",
    ">": "(> & ns)",
    ">=": "(>= & ns)",
    "=": "(= & xs)",
    "!=": "(!= & xs)",
    "!": "(! b)",
    "list": "(list & xs)",
    "head": "(head q)",
    "tail": "(tail q)",
    "last": "(last q)",
    "init": "(init q)",
    "join": "(join q & qs)",
    "cons": "(cons x q)",
    "len": "(len q)",
    "eval": "(eval q)",
    "id": "(id x)",
    "if": "(if cond then else)",
    "def": "(def syms & values)",
    "\\": "(\\ params body)",
    "env": "(env)",
    "exit": "(exit)",
}


def signature_for(name: str, idx: DocumentIndex) -> str | None:
    """Signature text for a builtin or an indexed `fun` definition."""
    if name in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[name]
    sdef = idx.symbols.get(name)
    if sdef is not None and sdef.kind == 'function':
        return "(" + " ".join([name, *sdef.params]) + ")"
    return None
