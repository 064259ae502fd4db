"""Turns GraphQL request and schema text into tokens."""

from __future__ import annotations

import string
from typing import Iterator, List, Optional

from .blockstring import block_string_value
from .errors import GraphQLError, error_loc
from .source import Position, Source
from .token import Token, TokenKind

_PUNCTUATORS = {
    "!": TokenKind.BANG,
    "$": TokenKind.DOLLAR,
    "&": TokenKind.AMP,
    "(": TokenKind.PAREN_L,
    ")": TokenKind.PAREN_R,
    ":": TokenKind.COLON,
    "=": TokenKind.EQUALS,
    "@": TokenKind.AT,
    "[": TokenKind.BRACKET_L,
    "]": TokenKind.BRACKET_R,
    "{": TokenKind.BRACE_L,
    "}": TokenKind.BRACE_R,
    "|": TokenKind.PIPE,
}

_DIGITS = frozenset(string.digits)
_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_CHARS = _NAME_START | _DIGITS
_HEX_DIGITS = frozenset(string.hexdigits)

_ESCAPES = {
    '"': '"',
    "/": "/",
    "\\": "\\",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _is_control(char: str) -> bool:
    return ord(char) < 0x20


class Lexer:
    """Reads tokens one at a time from a source.

    ``read_token`` raises ``GraphQLError`` when the input cannot be lexed.
    Iterating over a lexer yields every token up to, but not including, EOF.
    """

    def __init__(self, source: Source) -> None:
        self.source = source
        self._text = source.input
        self._start = 0
        self._end = 0
        self._line = 1
        self._line_start = 0

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.read_token()
            if token.kind is TokenKind.EOF:
                return
            yield token

    def _make_token(self, kind: TokenKind, value: Optional[str] = None) -> Token:
        if value is None:
            value = self._text[self._start : self._end]
        return Token(
            kind=kind,
            value=value,
            pos=Position(
                start=self._start,
                end=self._end,
                line=self._line,
                column=self._start - self._line_start + 1,
                src=self.source,
            ),
        )

    def _error(self, message: str) -> GraphQLError:
        column = self._end - self._line_start + 1
        return error_loc(self.source.name, self._line, column, message)

    def read_token(self) -> Token:
        """Skip whitespace and comments and return the next token."""
        text = self._text
        while True:
            self._skip_whitespace()
            self._start = self._end
            if self._end >= len(text):
                return self._make_token(TokenKind.EOF)
            if text[self._start] != "#":
                break
            self._end += 1
            self._skip_comment()

        char = text[self._start]

        kind = _PUNCTUATORS.get(char)
        if kind is not None:
            self._end += 1
            return self._make_token(kind, "")
        if char == "." and text.startswith("...", self._start):
            self._end += 3
            return self._make_token(TokenKind.SPREAD, "")
        if char in _NAME_START:
            self._end += 1
            return self._read_name()
        if char == "-" or char in _DIGITS:
            return self._read_number()
        if char == '"':
            self._end += 1
            if text.startswith('"""', self._start):
                return self._read_block_string()
            return self._read_string()

        if _is_control(char) and char not in "\t\n\r":
            raise self._error(f'Cannot contain the invalid character "\\u{ord(char):04d}"')
        if char == "'":
            raise self._error(
                "Unexpected single quote character ('), did you mean to use a double quote (\")?"
            )
        raise self._error(f'Cannot parse the unexpected character "{char}".')

    def _skip_whitespace(self) -> None:
        text = self._text
        size = len(text)
        while self._end < size:
            char = text[self._end]
            if char in "\t ,":
                self._end += 1
            elif char == "\n":
                self._end += 1
                self._line += 1
                self._line_start = self._end
            elif char == "\r":
                self._end += 1
                self._line += 1
                self._line_start = self._end
                if self._end < size and text[self._end] == "\n":
                    self._end += 1
            elif char == "\ufeff" and self._end + 1 < size:
                self._end += 1
            else:
                return

    def _skip_comment(self) -> None:
        text = self._text
        while self._end < len(text):
            char = text[self._end]
            if ord(char) > 0x1F or char == "\t":
                self._end += 1
            else:
                break

    def _accept(self, *chars: str) -> bool:
        if self._end < len(self._text) and self._text[self._end] in chars:
            self._end += 1
            return True
        return False

    def _accept_digits(self) -> int:
        consumed = 0
        text = self._text
        while self._end < len(text) and text[self._end] in _DIGITS:
            self._end += 1
            consumed += 1
        return consumed

    def _describe_next(self) -> str:
        if self._end < len(self._text):
            return f'"{self._text[self._end]}"'
        return "<EOF>"

    def _read_number(self) -> Token:
        is_float = False
        self._accept("-")

        if self._accept("0"):
            consumed = self._accept_digits()
            if consumed:
                self._end -= consumed
                raise self._error(
                    f"Invalid number, unexpected digit after 0: {self._describe_next()}."
                )
        elif not self._accept_digits():
            raise self._error(f"Invalid number, expected digit but got: {self._describe_next()}.")

        if self._accept("."):
            is_float = True
            if not self._accept_digits():
                raise self._error(
                    f"Invalid number, expected digit but got: {self._describe_next()}."
                )

        if self._accept("e", "E"):
            is_float = True
            self._accept("-", "+")
            if not self._accept_digits():
                raise self._error(
                    f"Invalid number, expected digit but got: {self._describe_next()}."
                )

        return self._make_token(TokenKind.FLOAT if is_float else TokenKind.INT)

    def _read_string(self) -> Token:
        text = self._text
        size = len(text)
        chunks: Optional[List[str]] = None

        self._start += 1

        while self._end < size:
            char = text[self._end]
            if char in "\n\r":
                break
            if _is_control(char) and char != "\t":
                raise self._error(f'Invalid character within String: "\\u{ord(char):04d}".')

            if char == '"':
                token = self._make_token(TokenKind.STRING)
                token.pos.start -= 1
                token.pos.end += 1
                if chunks is not None:
                    token.value = "".join(chunks)
                self._end += 1
                return token

            if char == "\\":
                if self._end + 1 >= size:
                    self._end += 1
                    raise self._error("Invalid character escape sequence.")
                if chunks is None:
                    chunks = [text[self._start : self._end]]

                escape = text[self._end + 1]
                if escape == "u":
                    if self._end + 6 >= size:
                        self._end += 1
                        raise self._error(
                            f"Invalid character escape sequence: \\{text[self._end:]}."
                        )
                    digits = text[self._end + 2 : self._end + 6]
                    if not all(digit in _HEX_DIGITS for digit in digits):
                        self._end += 1
                        raise self._error(
                            "Invalid character escape sequence: "
                            f"\\{text[self._end:self._end + 5]}."
                        )
                    code = int(digits, 16)
                    chunks.append("\ufffd" if 0xD800 <= code <= 0xDFFF else chr(code))
                    self._end += 6
                else:
                    replacement = _ESCAPES.get(escape)
                    if replacement is None:
                        self._end += 1
                        raise self._error(f"Invalid character escape sequence: \\{escape}.")
                    chunks.append(replacement)
                    self._end += 2
                continue

            if chunks is not None:
                chunks.append(char)
            self._end += 1

        raise self._error("Unterminated string.")

    def _read_block_string(self) -> Token:
        text = self._text
        size = len(text)
        chunks: List[str] = []

        self._start += 3
        self._end += 2

        while self._end < size:
            char = text[self._end]

            if text.startswith('"""', self._end):
                token = self._make_token(TokenKind.BLOCK_STRING, block_string_value("".join(chunks)))
                token.pos.start -= 3
                token.pos.end += 3
                self._end += 3
                return token

            if _is_control(char) and char not in "\t\n\r":
                raise self._error(f'Invalid character within String: "\\u{ord(char):04d}".')

            if text.startswith('\\"""', self._end):
                chunks.append('"""')
                self._end += 4
            elif char == "\r":
                if self._end + 1 < size and text[self._end + 1] == "\n":
                    self._end += 1
                chunks.append("\n")
                self._end += 1
            else:
                chunks.append(char)
                self._end += 1

        raise self._error("Unterminated string.")

    def _read_name(self) -> Token:
        text = self._text
        while self._end < len(text) and text[self._end] in _NAME_CHARS:
            self._end += 1
        return self._make_token(TokenKind.NAME)