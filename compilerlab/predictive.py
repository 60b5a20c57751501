"""Table-driven predictive (LL(1)) parsing with FIRST and FOLLOW sets."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from .grammar import GrammarError
from .lexer import TokenType, split_expressions
from .ll1 import EPSILON, LL1Grammar, load_ll1_grammar

END_MARKER = "#"


@dataclass(frozen=True)
class Step:
    """One recorded configuration of the parser.

    ``stack`` is written from bottom to top, ``input`` is the unread input
    including the end marker, and ``action`` names the production applied.
    """

    number: int
    stack: str
    input: str
    action: str = ""


def _format_set(symbols: frozenset[str]) -> str:
    return "{" + ", ".join(sorted(symbols)) + "}"


class PredictiveParser:
    """Predictive parser for a grammar that is already in LL(1) form."""

    def __init__(self, grammar: LL1Grammar) -> None:
        if grammar.start is None:
            raise ValueError("grammar has no start symbol")
        self.grammar = grammar
        self._firsts: dict[str, frozenset[str]] | None = None
        self._follows: dict[str, frozenset[str]] | None = None
        self.table: dict[tuple[str, str], str] = {}
        self.build_table()

    def _first_with(self, string: str, firsts: dict[str, set[str]] | dict[str, frozenset[str]]) -> set[str]:
        result: set[str] = set()
        for symbol in string:
            if symbol in self.grammar.terminals:
                result.add(symbol)
                return result
            if symbol in self.grammar.nonterminals:
                symbol_first = firsts.get(symbol, frozenset())
                result |= symbol_first
                if EPSILON not in symbol_first:
                    return result
                result.discard(EPSILON)
        result.add(EPSILON)
        return result

    def _compute_firsts(self) -> dict[str, frozenset[str]]:
        firsts: dict[str, set[str]] = {nt: set() for nt in self.grammar.nonterminals}
        for left, _ in self.grammar.productions:
            firsts.setdefault(left, set())
        changed = True
        while changed:
            changed = False
            for left, choices in self.grammar.productions:
                for choice in choices:
                    addition = self._first_with(choice, firsts)
                    if not addition <= firsts[left]:
                        firsts[left] |= addition
                        changed = True
        return {symbol: frozenset(values) for symbol, values in firsts.items()}

    def first_of(self, string: str) -> frozenset[str]:
        """FIRST set of a string of grammar symbols; ``@`` marks that it may be empty."""
        if self._firsts is None:
            self._firsts = self._compute_firsts()
        return frozenset(self._first_with(string, self._firsts))

    def first(self, symbol: str) -> frozenset[str]:
        """FIRST set of a nonterminal; empty for a symbol without productions."""
        if self._firsts is None:
            self._firsts = self._compute_firsts()
        return self._firsts.get(symbol, frozenset())

    def _compute_follows(self) -> dict[str, frozenset[str]]:
        follows: dict[str, set[str]] = {nt: set() for nt in self.grammar.nonterminals}
        follows.setdefault(self.grammar.start, set()).add(END_MARKER)
        changed = True
        while changed:
            changed = False
            for left, choices in self.grammar.productions:
                for choice in choices:
                    for index, symbol in enumerate(choice):
                        if symbol not in self.grammar.nonterminals:
                            continue
                        left_follow = follows.setdefault(left, set())
                        suffix = choice[index + 1:]
                        if not suffix:
                            addition = set(left_follow)
                        else:
                            suffix_first = self.first_of(suffix)
                            addition = set(suffix_first - {EPSILON})
                            if EPSILON in suffix_first:
                                addition |= left_follow
                        target = follows.setdefault(symbol, set())
                        if not addition <= target:
                            target |= addition
                            changed = True
        return {symbol: frozenset(values) for symbol, values in follows.items()}

    def follow(self, symbol: str) -> frozenset[str]:
        """FOLLOW set of a nonterminal; ``#`` marks the end of the input."""
        if self._follows is None:
            self._follows = self._compute_follows()
        return self._follows.get(symbol, frozenset())

    def build_table(self) -> dict[tuple[str, str], str]:
        """Fill the parse table mapping (nonterminal, lookahead) to a right-hand side."""
        self.table = {}
        for nonterminal in sorted(self.grammar.nonterminals):
            try:
                choices = self.grammar.productions[self.grammar.index_of(nonterminal)][1]
            except KeyError:
                continue
            for choice in choices:
                choice_first = self.first_of(choice)
                for terminal in choice_first:
                    if terminal != EPSILON:
                        self.table[(nonterminal, terminal)] = choice
                if EPSILON in choice_first:
                    for terminal in self.follow(nonterminal):
                        self.table[(nonterminal, terminal)] = choice
        return self.table

    def format_sets(self) -> str:
        """List the FIRST and then the FOLLOW set of every nonterminal."""
        symbols = sorted(self.grammar.nonterminals)
        lines = [f"FIRST({s}) = {_format_set(self.first(s))}" for s in symbols]
        lines += [f"FOLLOW({s}) = {_format_set(self.follow(s))}" for s in symbols]
        return "".join(line + "\n" for line in lines)

    def format_table_csv(self) -> str:
        """Render the parse table as comma-separated rows, one per nonterminal."""
        terminals = sorted(self.grammar.terminals)
        rows = [" ," + "".join(f"{t}," for t in terminals) + END_MARKER]
        for left, _ in self.grammar.productions:
            cells = [left]
            for terminal in [*terminals, END_MARKER]:
                choice = self.table.get((left, terminal))
                cells.append(f"{left}->{choice}" if choice is not None else " ")
            rows.append(",".join(cells))
        return "".join(row + "\n" for row in rows)

    def parse(self, expression: str) -> tuple[bool, list[Step]]:
        """Parse a string of terminals; return whether it is accepted and the steps taken."""
        stack = [END_MARKER, self.grammar.start]
        remaining = [*expression, END_MARKER]
        pos = 0
        number = 0
        steps = [Step(number, "".join(stack), "".join(remaining))]
        while stack or pos < len(remaining):
            if not stack or pos >= len(remaining):
                return False, steps
            top, current = stack[-1], remaining[pos]
            choice = self.table.get((top, current))
            if choice is not None:
                stack.pop()
                stack.extend(reversed([s for s in choice if s != EPSILON]))
                number += 1
                steps.append(Step(number, "".join(stack), "".join(remaining[pos:]), f"{top} -> {choice}"))
            elif top == current:
                while stack and pos < len(remaining) and stack[-1] == remaining[pos]:
                    stack.pop()
                    pos += 1
                if stack and pos < len(remaining):
                    number += 1
                    steps.append(Step(number, "".join(stack), "".join(remaining[pos:])))
            else:
                return False, steps
        return True, steps


def _process_lines(original: str, expression: str, steps: list[Step]) -> list[str]:
    lines = [f"{original},--->,{expression}, ", "step,stack,input,action"]
    lines += [f"{s.number},{s.stack},{s.input},{s.action or ' '}" for s in steps]
    lines.append(" , , , ")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check expressions with a predictive LL(1) parser.")
    parser.add_argument("grammar", help="grammar file")
    parser.add_argument("expressions", help="file of ';'-terminated expressions")
    parser.add_argument("--table", help="CSV file to write the parse table to")
    parser.add_argument("--process", help="CSV file to write the parsing steps to")
    parser.add_argument("--result", help="file to write the verdicts to")
    args = parser.parse_args(argv)
    try:
        grammar_text = Path(args.grammar).read_text(encoding="utf-8")
        expression_text = Path(args.expressions).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"File not found! {exc.filename}", file=sys.stderr)
        return 1
    try:
        grammar = load_ll1_grammar(grammar_text, lowercase_terminals=False)
    except GrammarError as exc:
        print(exc, file=sys.stderr)
        return 1
    grammar.transform()
    analyzer = PredictiveParser(grammar)
    print(grammar.format())
    print(analyzer.format_sets())

    process: list[str] = []
    results: list[str] = []
    for tokens in split_expressions(expression_text):
        original = "".join(token.value for token in tokens)
        expression = "".join("i" if token.is_operand else token.value for token in tokens
                             if token.is_operand or token.type is TokenType.OPERATOR)
        accepted, steps = analyzer.parse(expression)
        verdict = "Correct" if accepted else "Wrong"
        print(f"{original}\t{verdict}")
        process += _process_lines(original, expression, steps)
        results.append(f"{original} : {verdict}")

    try:
        if args.table:
            Path(args.table).write_text(analyzer.format_table_csv(), encoding="utf-8")
        if args.process:
            Path(args.process).write_text("".join(line + "\n" for line in process), encoding="utf-8")
        if args.result:
            Path(args.result).write_text("".join(line + "\n" for line in results), encoding="utf-8")
    except OSError as exc:
        print(f"Failed to open file: {exc.filename}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())