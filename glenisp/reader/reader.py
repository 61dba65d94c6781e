"""Convert a ParseNode tree into glenisp values.

Failures are returned as Error values (BadNumber, MalformedNode) rather than raised,
so a bad literal nested inside a quoted list stays inert until something touches it.
"""

from __future__ import annotations

from typing import Iterator

from glenisp.errors import BadNumber, MalformedNode
from glenisp.reader.parser import ParseNode
from glenisp.types.value import INT64_MAX, INT64_MIN, Boolean, Cells, Number, Qexp, Sexp, Symbol, Value

PUNCTUATION = {"(", ")", "{", "}"}


def _ignored(node: ParseNode) -> bool:
    return node.contents in PUNCTUATION or node.tag == "regex"


def top_level_forms(root: ParseNode) -> Iterator[ParseNode]:
    """Yield the meaningful children of a root node, skipping the anchors."""
    for child in root.children:
        if not _ignored(child):
            yield child


def read_number(node: ParseNode) -> Value:
    try:
        x = int(node.contents, 10)
    except ValueError:
        return BadNumber(f"Unknown number {node.contents}").to_value()
    if not INT64_MIN <= x <= INT64_MAX:
        return BadNumber(f"Unknown number {node.contents}").to_value()
    return Number(x)


def read(node: ParseNode) -> Value:
    """Build a Value from a parse node; the root wrapper is unwrapped to its single form."""
    if node.tag == ">":
        forms = list(top_level_forms(node))
        if len(forms) != 1:
            return MalformedNode(
                f"Expected a single top-level form, got {len(forms)}"
            ).to_value()
        return read(forms[0])

    if "number" in node.tag:
        return read_number(node)
    if "boolean" in node.tag:
        return Boolean(node.contents == "#t")
    if "symbol" in node.tag:
        return Symbol(node.contents)

    x: Cells
    if "sexp" in node.tag:
        x = Sexp()
    elif "qexp" in node.tag:
        x = Qexp()
    else:
        return MalformedNode(f"Unexpected node: {node.tag}").to_value()

    for child in node.children:
        if _ignored(child):
            continue
        x.add(read(child))
    return x
