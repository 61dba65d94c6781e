"""
  Lexer and parser for glenisp source text.

Produces a generic labelled tree of ParseNode objects shaped the way the mpc parser
combinator library shapes its ASTs:

    >                         root
      regex                   start-of-input anchor
      expr|number|regex       "42", "-7"
      expr|boolean|regex      "#t", "#f"
      expr|symbol|regex       "+", "head", "&"
      expr|sexp|>             children: char "(", <expr>*, char ")"
      expr|qexp|>             children: char "{", <expr>*, char "}"
      regex                   end-of-input anchor

The reader (glenisp.reader.reader) consumes this tree; nothing here knows about
runtime values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from glenisp.errors import GlenispSyntaxError


# A number or boolean must end at a delimiter, otherwise the token is a symbol.
_END = r"(?=[\s(){};]|$)"

TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    rf"|(?P<boolean>#[tf]{_END})"  # #t / #f
    rf"|(?P<number>-?[0-9]+{_END})"  # decimal integers
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&^%?]+)"  # fallback: symbols
)

CLOSING = {"(": ")", "{": "}"}
GROUP_TAGS = {"(": "expr|sexp|>", "{": "expr|qexp|>"}


@dataclass
class Token:
    type: str
    value: str
    line: int
    col: int


@dataclass
class ParseNode:
    tag: str
    contents: str = ""
    children: list[ParseNode] = field(default_factory=list)
    line: int = 1
    col: int = 1


def lex(source: str) -> Iterator[Token]:
    """Token generator; whitespace and comments are dropped."""
    pos = 0
    line = 1
    line_start = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise GlenispSyntaxError(
                f"Unexpected character {source[pos]!r}", line, pos - line_start + 1
            )
        kind = m.lastgroup
        text = m.group()
        if kind not in ("whitespace", "comment"):
            yield Token(kind, text, line, pos - line_start + 1)
        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rfind("\n") + 1
        pos = m.end()


class TokenStream:
    def __init__(self, tokens: Iterator[Token]):
        self.tokens = iter(tokens)
        self.buffer: list[Token] = []
        self.last: Optional[Token] = None

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            tok = next(self.tokens, None)
            if tok is None:
                return None
            self.buffer.append(tok)
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        tok = self.buffer.pop(0) if self.buffer else next(self.tokens, None)
        if tok is not None:
            self.last = tok
        return tok

    def _end_position(self) -> tuple[int, int]:
        if self.last is None:
            return 1, 1
        return self.last.line, self.last.col + len(self.last.value)

    def parse_expr(self) -> Optional[ParseNode]:
        tok = self.advance()
        if tok is None:
            return None

        if tok.type in ("number", "boolean", "symbol"):
            return ParseNode(f"expr|{tok.type}|regex", tok.value, [], tok.line, tok.col)

        if tok.type in ("lparen", "lbrace"):
            close = CLOSING[tok.value]
            node = ParseNode(GROUP_TAGS[tok.value], "", [], tok.line, tok.col)
            node.children.append(ParseNode("char", tok.value, [], tok.line, tok.col))
            while True:
                nxt = self.peek()
                if nxt is None:
                    line, col = self._end_position()
                    raise GlenispSyntaxError(
                        f"Unexpected end of input, expected '{close}'", line, col
                    )
                if nxt.type in ("rparen", "rbrace"):
                    self.advance()
                    if nxt.value != close:
                        raise GlenispSyntaxError(
                            f"Unexpected '{nxt.value}', expected '{close}'", nxt.line, nxt.col
                        )
                    node.children.append(ParseNode("char", nxt.value, [], nxt.line, nxt.col))
                    return node
                node.children.append(self.parse_expr())

        raise GlenispSyntaxError(f"Unexpected '{tok.value}'", tok.line, tok.col)

    def parse_all(self) -> Iterator[ParseNode]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(source: str) -> ParseNode:
    """Parse a whole program into a root node tagged '>'.

    Raises GlenispSyntaxError on the first token that does not fit the grammar.
    """
    stream = TokenStream(lex(source))
    root = ParseNode(">")
    root.children.append(ParseNode("regex"))
    root.children.extend(stream.parse_all())
    line, col = stream._end_position()
    root.children.append(ParseNode("regex", "", [], line, col))
    return root
