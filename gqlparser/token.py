"""Token kinds and tokens produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .source import Position


class TokenKind(Enum):
    """The kinds of token in a GraphQL document."""

    INVALID = 0
    EOF = 1
    BANG = 2
    DOLLAR = 3
    AMP = 4
    PAREN_L = 5
    PAREN_R = 6
    SPREAD = 7
    COLON = 8
    EQUALS = 9
    AT = 10
    BRACKET_L = 11
    BRACKET_R = 12
    BRACE_L = 13
    BRACE_R = 14
    PIPE = 15
    NAME = 16
    INT = 17
    FLOAT = 18
    STRING = 19
    BLOCK_STRING = 20
    COMMENT = 21

    @property
    def label(self) -> str:
        """The kind's descriptive name, such as ``ParenL`` or ``BlockString``."""
        return _LABELS[self]

    def __str__(self) -> str:
        return _DISPLAY.get(self, _LABELS[self])

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_LABELS = {
    TokenKind.INVALID: "Invalid",
    TokenKind.EOF: "EOF",
    TokenKind.BANG: "Bang",
    TokenKind.DOLLAR: "Dollar",
    TokenKind.AMP: "Amp",
    TokenKind.PAREN_L: "ParenL",
    TokenKind.PAREN_R: "ParenR",
    TokenKind.SPREAD: "Spread",
    TokenKind.COLON: "Colon",
    TokenKind.EQUALS: "Equals",
    TokenKind.AT: "At",
    TokenKind.BRACKET_L: "BracketL",
    TokenKind.BRACKET_R: "BracketR",
    TokenKind.BRACE_L: "BraceL",
    TokenKind.BRACE_R: "BraceR",
    TokenKind.PIPE: "Pipe",
    TokenKind.NAME: "Name",
    TokenKind.INT: "Int",
    TokenKind.FLOAT: "Float",
    TokenKind.STRING: "String",
    TokenKind.BLOCK_STRING: "BlockString",
    TokenKind.COMMENT: "Comment",
}

_DISPLAY = {
    TokenKind.INVALID: "<Invalid>",
    TokenKind.EOF: "<EOF>",
    TokenKind.BANG: "!",
    TokenKind.DOLLAR: "$",
    TokenKind.AMP: "&",
    TokenKind.PAREN_L: "(",
    TokenKind.PAREN_R: ")",
    TokenKind.SPREAD: "...",
    TokenKind.COLON: ":",
    TokenKind.EQUALS: "=",
    TokenKind.AT: "@",
    TokenKind.BRACKET_L: "[",
    TokenKind.BRACKET_R: "]",
    TokenKind.BRACE_L: "{",
    TokenKind.BRACE_R: "}",
    TokenKind.PIPE: "|",
}

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _quote(text: str) -> str:
    """Quote a string with double quotes, escaping control and unprintable characters."""
    out = ['"']
    for char in text:
        if char in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[char])
        elif char.isprintable():
            out.append(char)
        else:
            code = ord(char)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code < 0x10000:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


@dataclass
class Token:
    """A lexed token: its kind, its literal value and where it was read from."""

    kind: TokenKind
    value: str = ""
    pos: Position = field(default_factory=Position)

    def __str__(self) -> str:
        if self.value:
            return f"{self.kind} {_quote(self.value)}"
        return str(self.kind)