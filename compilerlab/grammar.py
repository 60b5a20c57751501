"""Reading context-free grammars written as ``A->x|y;`` productions."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path


class GrammarError(ValueError):
    """Raised when a production is not of the form ``A->...``."""


def _is_upper(ch: str) -> bool:
    return ch.isascii() and ch.isupper()


def _is_lower(ch: str) -> bool:
    return ch.isascii() and ch.islower()


def _split_fields(text: str, sep: str) -> list[str]:
    """Split like reading delimited fields: no trailing empty field."""
    parts = text.split(sep)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def _remove_blanks(text: str) -> str:
    return text.replace(" ", "").replace("\n", "").replace("\r", "")


@dataclass
class Grammar:
    """A grammar: symbol sets, start symbol and ordered productions."""

    nonterminals: set[str] = field(default_factory=set)
    terminals: set[str] = field(default_factory=set)
    start: str | None = None
    productions: dict[str, list[str]] = field(default_factory=dict)

    def add_alternative(self, left: str, right: str) -> None:
        """Append a right-hand side to the productions of left."""
        self.productions.setdefault(left, []).append(right)

    def format(self) -> str:
        """Render the productions, one left-hand side per line."""
        return "".join(
            f"{left} -> {' | '.join(rights)} ;\n" for left, rights in self.productions.items()
        )


def parse_line_grammar(text: str) -> Grammar:
    """Parse one production per line, ``A->x|y;``.

    Only letters go into the symbol sets: upper case ones are nonterminals,
    lower case ones terminals.
    """
    grammar = Grammar()
    for line in text.split("\n"):
        stripped = line.lstrip()
        if not stripped:
            continue
        left, rest = stripped[0], stripped[3:]
        grammar.nonterminals.add(left)
        if grammar.start is None:
            grammar.start = left
        for right in _split_fields(rest, "|"):
            if right.endswith(";"):
                right = right[:-1]
            grammar.add_alternative(left, right)
            for ch in right:
                if _is_upper(ch):
                    grammar.nonterminals.add(ch)
                elif _is_lower(ch):
                    grammar.terminals.add(ch)
    return grammar


def parse_grammar(text: str) -> Grammar:
    """Parse ';'-separated productions that may span or share lines.

    ``//`` comments, spaces and line breaks are removed first. Every symbol
    that is not an upper case letter counts as a terminal.
    """
    content = ""
    for line in text.split("\n"):
        line = _remove_blanks(line.split("//", 1)[0])
        content += line
    grammar = Grammar()
    for production in _split_fields(content, ";"):
        production = _remove_blanks(production)
        if not production:
            continue
        arrow = production.find("->")
        if arrow == -1:
            raise GrammarError(f"Grammatical formatting error: {production}")
        left = production[0]
        if grammar.start is None:
            grammar.start = left
        grammar.nonterminals.add(left)
        for part in _split_fields(production[arrow + 2:], "|"):
            grammar.add_alternative(left, part)
            for ch in part:
                if _is_upper(ch):
                    grammar.nonterminals.add(ch)
                else:
                    grammar.terminals.add(ch)
    return grammar


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Read a grammar and print its productions.")
    parser.add_argument("path", help="grammar file")
    parser.add_argument(
        "--lines",
        action="store_true",
        help="one production per line instead of free ';'-separated form",
    )
    args = parser.parse_args(argv)
    try:
        text = Path(args.path).read_text(encoding="utf-8")
    except OSError:
        print(f"File not found! {args.path}", file=sys.stderr)
        return 1
    try:
        grammar = parse_line_grammar(text) if args.lines else parse_grammar(text)
    except GrammarError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(grammar.format(), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())