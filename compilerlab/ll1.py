"""Turning a grammar into LL(1) form: left recursion removal and left factoring."""

from __future__ import annotations

import argparse
import os.path
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .grammar import GrammarError

EPSILON = "@"

_BLANKS = frozenset(" \n\t")


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


def strip_comments(text: str) -> str:
    """Drop blanks, tabs, line breaks, ``//`` and ``/* */`` comments from text."""
    out: list[str] = []
    pos, size = 0, len(text)
    while pos < size:
        ch = text[pos]
        if ch in _BLANKS:
            pos += 1
        elif text.startswith("//", pos):
            end = text.find("\n", pos)
            pos = size if end == -1 else end + 1
        elif text.startswith("/*", pos):
            end = text.find("*/", pos + 1)
            pos = size if end == -1 else end + 2
        else:
            out.append(ch)
            pos += 1
    return "".join(out)


@dataclass
class LL1Grammar:
    """A grammar with ordered productions that can be rewritten into LL(1) form.

    ``@`` stands for the empty string in right-hand sides.
    """

    nonterminals: set[str] = field(default_factory=set)
    terminals: set[str] = field(default_factory=set)
    start: str | None = None
    productions: list[tuple[str, list[str]]] = field(default_factory=list)

    def index_of(self, symbol: str) -> int:
        """Position of the productions of symbol; KeyError if it has none."""
        for index, (left, _) in enumerate(self.productions):
            if left == symbol:
                return index
        raise KeyError(symbol)

    def _add_choice(self, left: str, choice: str) -> None:
        try:
            self.productions[self.index_of(left)][1].append(choice)
        except KeyError:
            self.productions.append((left, [choice]))

    def remove_repeated_choices(self) -> None:
        """Keep only the first occurrence of each alternative."""
        self.productions = [
            (left, list(dict.fromkeys(choices))) for left, choices in self.productions
        ]

    def remove_unused_productions(self) -> None:
        """Drop productions whose left side cannot be reached from the start symbol."""
        reachable = {self.start}
        pending = [self.start]
        while pending:
            symbol = pending.pop()
            for left, choices in self.productions:
                if left != symbol:
                    continue
                for choice in choices:
                    for ch in choice:
                        if _is_upper(ch) and ch not in reachable:
                            reachable.add(ch)
                            pending.append(ch)
        self.productions = [(left, choices) for left, choices in self.productions if left in reachable]

    def unused_symbol(self) -> str:
        """The first character from ``A`` upwards that is not yet a nonterminal."""
        symbol = "A"
        while symbol in self.nonterminals:
            symbol = chr(ord(symbol) + 1)
        return symbol

    def _new_symbol(self) -> str:
        symbol = self.unused_symbol()
        self.nonterminals.add(symbol)
        return symbol

    def remove_left_recursion(self) -> None:
        """Remove indirect and direct left recursion, in production order."""
        i = 0
        while i < len(self.productions):
            left, choices = self.productions[i]
            for earlier, replacements in self.productions[:i]:
                substituted: list[str] = []
                for choice in choices:
                    if choice[:1] == earlier:
                        substituted.extend(r + choice[1:] for r in replacements)
                    else:
                        substituted.append(choice)
                choices = substituted

            alpha = [choice[1:] for choice in choices if choice[:1] == left]
            beta = [choice for choice in choices if choice[:1] != left]
            if alpha:
                new = self._new_symbol()
                self.productions[i] = (left, [b + new for b in beta])
                self.productions.insert(i + 1, (new, [a + new for a in alpha] + [EPSILON]))
            else:
                self.productions[i] = (left, choices)
            i += 1

    def _factor_once(self) -> bool:
        for pos, (left, choices) in enumerate(self.productions):
            groups: dict[str, list[int]] = {}
            for index, choice in enumerate(choices):
                groups.setdefault(choice[:1], []).append(index)
            for key in sorted(groups):
                members = groups[key]
                if len(members) < 2:
                    continue
                prefix = os.path.commonprefix([choices[m] for m in members])
                new = self._new_symbol()
                tails = [choices[m][len(prefix):] or EPSILON for m in members]
                member_set = set(members)
                updated: list[str] = []
                factored = False
                for index, choice in enumerate(choices):
                    if index not in member_set:
                        updated.append(choice)
                    elif not factored:
                        updated.append(prefix + new)
                        factored = True
                self.productions[pos] = (left, updated)
                self.productions.insert(pos + 1, (new, tails))
                return True
        return False

    def factor_left(self) -> None:
        """Extract common prefixes until no two alternatives share a first symbol."""
        while True:
            self.remove_repeated_choices()
            if not self._factor_once():
                break

    def transform(self) -> None:
        """Rewrite the grammar into LL(1) form."""
        self.remove_left_recursion()
        self.factor_left()
        self.remove_repeated_choices()
        self.remove_unused_productions()

    def format(self) -> str:
        """Render the productions, one left-hand side per line."""
        return "".join(
            f"{left} -> {' | '.join(choices)};\n" for left, choices in self.productions
        )

    def write(self, path: str | os.PathLike[str]) -> None:
        """Write the formatted productions to path."""
        Path(path).write_text(self.format(), encoding="utf-8")


def load_ll1_grammar(text: str, lowercase_terminals: bool = True) -> LL1Grammar:
    """Parse ``A->x|y;`` productions, then drop repeated and unreachable ones.

    With lowercase_terminals only lower case letters count as terminals,
    otherwise every symbol that is not an upper case letter does. The first
    left side is the start symbol unless ``S`` is a left side.
    """
    grammar = LL1Grammar()
    for production in _split_fields(strip_comments(text), ";"):
        if not production:
            continue
        parts = production.split("->")
        if len(parts) < 2 or not parts[0]:
            raise GrammarError(f"Grammatical formatting error: {production}")
        left = parts[0][0]
        if grammar.start is None:
            grammar.start = left
        if _is_upper(left):
            grammar.nonterminals.add(left)
        for choice in _split_fields(parts[1], "|"):
            grammar._add_choice(left, choice)
            for ch in choice:
                if _is_lower(ch) if lowercase_terminals else not _is_upper(ch):
                    grammar.terminals.add(ch)
    if "S" in grammar.nonterminals:
        grammar.start = "S"
    grammar.remove_repeated_choices()
    grammar.remove_unused_productions()
    return grammar


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Rewrite a grammar into LL(1) form.")
    parser.add_argument("path", help="grammar file")
    parser.add_argument("-o", "--output", help="file to write the LL(1) grammar to")
    parser.add_argument(
        "--all-terminals",
        action="store_true",
        help="count every non-upper-case symbol as a terminal",
    )
    args = parser.parse_args(argv)
    try:
        text = Path(args.path).read_text(encoding="utf-8")
    except OSError:
        print(f"Failed to open: {args.path}", file=sys.stderr)
        return 1
    try:
        grammar = load_ll1_grammar(text, lowercase_terminals=not args.all_terminals)
    except GrammarError as exc:
        print(exc, file=sys.stderr)
        return 1
    print("Original Grammar:")
    print(grammar.format())
    grammar.remove_left_recursion()
    print("after remove left recursion: ")
    print(grammar.format())
    grammar.factor_left()
    grammar.remove_repeated_choices()
    grammar.remove_unused_productions()
    print("LL(1) Grammar:")
    print(grammar.format())
    if args.output:
        try:
            grammar.write(args.output)
        except OSError:
            print(f"Failed to open: {args.output}", file=sys.stderr)
            return 1
    print("Processing is complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())