"""Script tokenizer — ELIZA script text to brackets, numbers and symbols.

Just enough lexing to divide the S-expression script format:

    (       open bracket
    )       close bracket
    123     number: a run of digits
    ;...    comment to end of line, skipped
    other   symbol: runs until a bracket, ';' or whitespace

Whitespace is any control character, space or DEL. Lines are counted
so errors can name where they happened (CR LF counts once).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    EOF = "eof"
    SYMBOL = "symbol"
    NUMBER = "number"
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str = ""

    def is_symbol(self, value: str | None = None) -> bool:
        if self.type is not TokenType.SYMBOL:
            return False
        return value is None or self.value == value

    @property
    def is_number(self) -> bool:
        return self.type is TokenType.NUMBER

    @property
    def is_open(self) -> bool:
        return self.type is TokenType.OPEN

    @property
    def is_close(self) -> bool:
        return self.type is TokenType.CLOSE

    @property
    def is_eof(self) -> bool:
        return self.type is TokenType.EOF


NEWLINES = "\n\x0b\x0c\r"


def is_whitespace(ch: str) -> bool:
    return ch <= " " or ch == "\x7f"


def is_symbol_end(ch: str) -> bool:
    return ch in "();" or is_whitespace(ch)


class ScriptTokenizer:
    """Token stream over script text with one token of lookahead."""

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self._line = 1
        self._peeked: Token | None = None

    @property
    def line(self) -> int:
        return self._line

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self._read()
        return self._peeked

    def next(self) -> Token:
        """Consume and return the next token."""
        if self._peeked is not None:
            token, self._peeked = self._peeked, None
            return token
        return self._read()

    def _newline(self, ch):
        if ch == "\r" and self._text.startswith("\n", self._pos):
            self._pos += 1
        self._line += 1

    def _read(self) -> Token:
        text = self._text
        while True:
            # whitespace
            while self._pos < len(text) and is_whitespace(text[self._pos]):
                ch = text[self._pos]
                self._pos += 1
                if ch in NEWLINES:
                    self._newline(ch)
            if self._pos == len(text):
                return Token(TokenType.EOF)
            if text[self._pos] != ";":
                break
            # comment
            while self._pos < len(text) and text[self._pos] not in NEWLINES:
                self._pos += 1
            if self._pos == len(text):
                return Token(TokenType.EOF)
            ch = text[self._pos]
            self._pos += 1
            self._newline(ch)

        ch = text[self._pos]
        start = self._pos
        self._pos += 1
        if ch == "(":
            return Token(TokenType.OPEN)
        if ch == ")":
            return Token(TokenType.CLOSE)
        if ch.isascii() and ch.isdigit():
            while self._pos < len(text) and text[self._pos].isascii() and text[self._pos].isdigit():
                self._pos += 1
            return Token(TokenType.NUMBER, text[start:self._pos])
        while self._pos < len(text) and not is_symbol_end(text[self._pos]):
            self._pos += 1
        return Token(TokenType.SYMBOL, text[start:self._pos])
