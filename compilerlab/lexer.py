"""Scanner for identifiers, integer literals, keywords and single-character operators."""

from __future__ import annotations

import argparse
import string
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

KEYWORDS = frozenset({"if", "then", "else", "while", "do"})
OPERATORS = frozenset("+-*/=<>();")

_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CHARS = _IDENT_START | frozenset(string.digits)
_DIGITS = frozenset(string.digits)
_NONZERO_DIGITS = frozenset("123456789")
_OCTAL_START = frozenset("1234567")
_OCTAL_DIGITS = frozenset("01234567")
_HEX_START = frozenset("123456789abcdefABCDEF")
_HEX_DIGITS = frozenset(string.hexdigits)
_BLANKS = frozenset(" \n\t")


class TokenType(IntEnum):
    """Kind of a scanned word; the values are the codes shown in token listings."""

    ERROR = -1
    IDENTIFIER = 0
    DECIMAL_INT = 1
    OCTAL_INT = 2
    HEX_INT = 3
    OPERATOR = 4
    KEYWORD = 5


@dataclass(frozen=True)
class Token:
    """A scanned word and its kind."""

    type: TokenType
    value: str

    @property
    def is_operand(self) -> bool:
        return self.type in (
            TokenType.IDENTIFIER,
            TokenType.DECIMAL_INT,
            TokenType.OCTAL_INT,
            TokenType.HEX_INT,
        )


class Lexer:
    """Scans words one at a time from a piece of program text.

    Whitespace, ``//`` line comments and ``/* */`` block comments are skipped.
    A word is only accepted once the character after it has been seen, so a
    word that runs into the end of the text comes back as an error token.
    Octal literals lose their leading ``0`` and hexadecimal ones their ``0x``.
    """

    def __init__(self, text: str, keywords: Iterable[str] = frozenset()) -> None:
        self.text = text
        self.keywords = frozenset(keywords)
        self._pos = 0

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self.text)

    def peek(self) -> str:
        """Return the next raw character without consuming it, or "" at the end."""
        return "" if self.at_end else self.text[self._pos]

    def skip(self) -> None:
        """Consume one raw character."""
        if not self.at_end:
            self._pos += 1

    def _get(self) -> str | None:
        if self.at_end:
            return None
        ch = self.text[self._pos]
        self._pos += 1
        return ch

    def _put_back(self) -> None:
        self._pos -= 1

    def _next_significant(self) -> str | None:
        while (ch := self._get()) is not None:
            if ch in _BLANKS:
                continue
            if ch == "/":
                following = self.peek()
                if following == "/":
                    while (c := self._get()) is not None and c != "\n":
                        pass
                elif following == "*":
                    self._get()
                    while (c := self._get()) is not None:
                        if c == "*" and self.peek() == "/":
                            self._get()
                            break
                continue
            return ch
        return None

    def _take_while(self, allowed: frozenset[str], value: str, kind: TokenType) -> tuple[str, TokenType]:
        """Extend value with allowed characters; succeed only if a terminator is seen."""
        while (c := self._get()) is not None:
            if c in allowed:
                value += c
            else:
                self._put_back()
                return value, kind
        return value, TokenType.ERROR

    def scan(self) -> Token:
        """Scan one word; at the end of the text an error token is returned."""
        ch = self._next_significant()
        if ch is None:
            return Token(TokenType.ERROR, "")
        value, kind = ch, TokenType.ERROR
        if ch in _IDENT_START:
            value, kind = self._take_while(_IDENT_CHARS, ch, TokenType.IDENTIFIER)
        elif ch in _NONZERO_DIGITS:
            value, kind = self._take_while(_DIGITS, ch, TokenType.DECIMAL_INT)
        elif ch == "0":
            c = self._get()
            if c is not None and c in _OCTAL_START:
                value, kind = self._take_while(_OCTAL_DIGITS, c, TokenType.OCTAL_INT)
            elif c in ("x", "X"):
                value += c
                c = self._get()
                if c is not None and c in _HEX_START:
                    value, kind = self._take_while(_HEX_DIGITS, c, TokenType.HEX_INT)
        elif ch in OPERATORS:
            kind = TokenType.OPERATOR
        if value in self.keywords:
            return Token(TokenType.KEYWORD, value)
        return Token(kind, value)

    def __iter__(self) -> Iterator[Token]:
        """Yield every well-formed token up to the end, dropping error tokens."""
        while not self.at_end:
            token = self.scan()
            if token.type is not TokenType.ERROR:
                yield token


def format_token(token: Token) -> str:
    """Render a token the way the scanner listing shows it."""
    if token.type in (TokenType.KEYWORD, TokenType.OPERATOR):
        return f"<{token.value},_>"
    if token.type is TokenType.ERROR:
        return f'To an error state! The value of the words is "{token.value}"'
    return f"<{int(token.type)},{token.value}>"


def split_expressions(text: str) -> Iterator[list[Token]]:
    """Yield the tokens of each ';'-terminated expression in text.

    Scanning stops for good at the first token that is neither an operand nor
    an operator; the expression it belongs to is not yielded.
    """
    lexer = Lexer(text)
    while not lexer.at_end:
        tokens: list[Token] = []
        while not lexer.at_end and lexer.peek() != ";":
            token = lexer.scan()
            if not (token.is_operand or token.type is TokenType.OPERATOR):
                return
            tokens.append(token)
        yield tokens
        lexer.skip()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="List the tokens of a program file.")
    parser.add_argument("path", help="program text to scan")
    args = parser.parse_args(argv)
    try:
        text = Path(args.path).read_text(encoding="utf-8")
    except OSError:
        print("File not found!", file=sys.stderr)
        return 1
    for token in Lexer(text, KEYWORDS):
        print(format_token(token))
    return 0


if __name__ == "__main__":
    sys.exit(main())