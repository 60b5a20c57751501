"""SLR(1) parsing: LR(0) item sets, FIRST/FOLLOW sets and the action and goto tables."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .grammar import GrammarError
from .lexer import TokenType, split_expressions
from .ll1 import EPSILON
from .predictive import END_MARKER

# An LR(0) item: left side, right side and the position of the dot.
_Item = tuple[str, str, int]


def _is_upper(ch: str) -> bool:
    return ch.isascii() and ch.isupper()


def _split_fields(text: str, sep: str) -> list[str]:
    """Split like reading delimited fields: no trailing empty field."""
    parts = text.split(sep)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def _remove_blanks(text: str) -> str:
    return text.replace(" ", "").replace("\n", "").replace("\r", "")


class ActionKind(Enum):
    """What a parse table entry tells the parser to do."""

    ERROR = 0
    SHIFT = 1
    REDUCE = 2
    GOTO = 3
    ACCEPT = 4


@dataclass(frozen=True)
class Action:
    """A parse table entry; target is a state or a production number."""

    kind: ActionKind
    target: int = -1


_ERROR = Action(ActionKind.ERROR)


@dataclass(frozen=True)
class Production:
    """One alternative ``left->right`` of the grammar."""

    left: str
    right: str

    def __str__(self) -> str:
        return f"{self.left}->{self.right}"


@dataclass(frozen=True)
class LRStep:
    """One recorded configuration of the LR parser.

    ``states`` and ``symbols`` run from bottom to top of their stacks,
    ``input`` is the unread input including the end marker and ``action``
    names the production reduced by, if any.
    """

    number: int
    states: tuple[int, ...]
    symbols: str
    input: str
    action: str = ""


def _unused_left(productions: Sequence[Production]) -> str:
    lefts = {p.left for p in productions}
    symbol = "A"
    while symbol in lefts:
        symbol = chr(ord(symbol) + 1)
    return symbol


def parse_lr_grammar(text: str) -> list[Production]:
    """Read ';'-separated ``A->x|y`` productions, keeping their order.

    ``//`` comments, spaces and line breaks are dropped. When the first two
    productions share a left side, the grammar is augmented with a new start
    production placed first.
    """
    content = "".join(_remove_blanks(line.split("//", 1)[0]) for line in text.split("\n"))
    productions: list[Production] = []
    for production in _split_fields(content, ";"):
        if not production:
            continue
        arrow = production.find("->")
        if arrow == -1:
            raise GrammarError(f"Grammatical formatting error: {production}")
        left = production[0]
        for part in _split_fields(production[arrow + 2:], "|"):
            productions.append(Production(left, part))
    if not productions:
        raise GrammarError("grammar has no productions")
    if len(productions) > 1 and productions[0].left == productions[1].left:
        productions.insert(0, Production(_unused_left(productions), productions[0].left))
    return productions


def _action_cell(action: Action) -> str:
    if action.kind is ActionKind.SHIFT:
        return f"s{action.target}"
    if action.kind is ActionKind.REDUCE:
        return f"r{action.target}"
    if action.kind is ActionKind.ACCEPT:
        return "acc"
    return " "


def _format_sets(name: str, sets: dict[str, frozenset[str]]) -> str:
    return "".join(
        f"{name}({symbol}) = {{{', '.join(sorted(values))}}}\n" for symbol, values in sorted(sets.items())
    )


class SLRParser:
    """SLR(1) parser built from productions whose first one starts the grammar."""

    def __init__(self, productions: Iterable[Production]) -> None:
        self.productions = list(productions)
        if not self.productions:
            raise ValueError("grammar has no productions")
        self.start = self.productions[0].left
        self.nonterminals = list(dict.fromkeys(p.left for p in self.productions))
        self.terminals = list(
            dict.fromkeys(ch for p in self.productions for ch in p.right if not _is_upper(ch))
        )
        self._lefts = frozenset(self.nonterminals)
        self.first_sets: dict[str, frozenset[str]] = {}
        self.follow_sets: dict[str, frozenset[str]] = {}
        self.item_sets: list[list[_Item]] = []
        self.transitions: dict[tuple[int, str], int] = {}
        self.action_table: dict[int, dict[str, Action]] = {}
        self.goto_table: dict[int, dict[str, Action]] = {}
        self.compute_first()
        self.compute_follow()
        self.build_item_sets()
        self.build_table()

    def is_nonterminal(self, symbol: str) -> bool:
        """Whether symbol is the left side of some production."""
        return symbol in self._lefts

    def is_terminal(self, symbol: str) -> bool:
        """Whether symbol is neither a nonterminal nor the empty-string mark."""
        return not self.is_nonterminal(symbol) and symbol != EPSILON

    def _first_with(self, string: str, firsts: dict[str, set[str]] | dict[str, frozenset[str]]) -> set[str]:
        result: set[str] = set()
        for symbol in string:
            if self.is_terminal(symbol):
                result.add(symbol)
                return result
            if self.is_nonterminal(symbol):
                symbol_first = firsts.get(symbol, frozenset())
                result |= symbol_first
                if EPSILON not in symbol_first:
                    return result
                result.discard(EPSILON)
        result.add(EPSILON)
        return result

    def first_of(self, string: str) -> frozenset[str]:
        """FIRST set of a string of symbols; ``@`` marks that it may be empty."""
        return frozenset(self._first_with(string, self.first_sets))

    def compute_first(self) -> dict[str, frozenset[str]]:
        """Compute the FIRST set of every nonterminal."""
        firsts: dict[str, set[str]] = {p.left: set() for p in self.productions}
        changed = True
        while changed:
            changed = False
            for production in self.productions:
                addition = self._first_with(production.right, firsts)
                target = firsts[production.left]
                if not addition <= target:
                    target |= addition
                    changed = True
        self.first_sets = {symbol: frozenset(values) for symbol, values in firsts.items()}
        return self.first_sets

    def compute_follow(self) -> dict[str, frozenset[str]]:
        """Compute the FOLLOW set of every nonterminal; ``#`` ends the input."""
        follows: dict[str, set[str]] = {p.left: set() for p in self.productions}
        follows[self.start].add(END_MARKER)
        changed = True
        while changed:
            changed = False
            for production in self.productions:
                right = production.right
                for index, symbol in enumerate(right):
                    if not self.is_nonterminal(symbol):
                        continue
                    suffix = right[index + 1:]
                    addition: set[str] = set()
                    suffix_first = self.first_of(suffix)
                    if suffix:
                        addition |= suffix_first - {EPSILON}
                    if not suffix or EPSILON in suffix_first:
                        addition |= follows[production.left]
                    target = follows[symbol]
                    if not addition <= target:
                        target |= addition
                        changed = True
        self.follow_sets = {symbol: frozenset(values) for symbol, values in follows.items()}
        return self.follow_sets

    def closure(self, items: Iterable[_Item]) -> list[_Item]:
        """Close a list of items, adding ``B->.x`` for every nonterminal B after a dot."""
        result = list(dict.fromkeys(items))
        seen = set(result)
        # The list grows while it is walked, so added items are closed too.
        for _, right, dot in result:
            if dot >= len(right) or not self.is_nonterminal(right[dot]):
                continue
            symbol = right[dot]
            for production in self.productions:
                item = (production.left, production.right, 0)
                if production.left == symbol and item not in seen:
                    seen.add(item)
                    result.append(item)
        return result

    def build_item_sets(self) -> list[list[_Item]]:
        """Build the canonical collection of LR(0) item sets and their transitions."""
        first = self.productions[0]
        self.item_sets = [self.closure([(first.left, first.right, 0)])]
        self.transitions = {}
        known = {frozenset(self.item_sets[0]): 0}
        # New states are appended while walking, so every state gets processed.
        for state, items in enumerate(self.item_sets):
            kernels: dict[str, list[_Item]] = {}
            for left, right, dot in items:
                if dot < len(right):
                    kernels.setdefault(right[dot], []).append((left, right, dot + 1))
            for symbol, kernel in kernels.items():
                target_items = self.closure(kernel)
                key = frozenset(target_items)
                target = known.get(key)
                if target is None:
                    target = len(self.item_sets)
                    known[key] = target
                    self.item_sets.append(target_items)
                self.transitions[(state, symbol)] = target
        return self.item_sets

    def build_table(self) -> None:
        """Fill the action and goto tables; later reductions override shifts."""
        self.action_table = {}
        self.goto_table = {}
        for state, items in enumerate(self.item_sets):
            row = {terminal: _ERROR for terminal in self.terminals}
            gotos = {n: _ERROR for n in self.nonterminals if n != self.start}
            for terminal in self.terminals:
                target = self.transitions.get((state, terminal))
                if target is not None:
                    row[terminal] = Action(ActionKind.SHIFT, target)
            for nonterminal in self.nonterminals:
                target = self.transitions.get((state, nonterminal))
                if target is not None:
                    gotos[nonterminal] = Action(ActionKind.GOTO, target)
            for left, right, dot in items:
                if dot != len(right):
                    continue
                if left == self.start:
                    row[END_MARKER] = Action(ActionKind.ACCEPT)
                    continue
                reduce = Action(ActionKind.REDUCE, self.productions.index(Production(left, right)))
                for lookahead in self.follow_sets.get(left, frozenset()):
                    row[lookahead] = reduce
            self.action_table[state] = row
            self.goto_table[state] = gotos

    def format_first(self) -> str:
        """List the FIRST set of every nonterminal, sorted by symbol."""
        return _format_sets("FIRST", self.first_sets)

    def format_follow(self) -> str:
        """List the FOLLOW set of every nonterminal, sorted by symbol."""
        return _format_sets("FOLLOW", self.follow_sets)

    def format_table_csv(self) -> str:
        """Render the action and goto tables as comma-separated rows, one per state."""
        gotos = [n for n in self.nonterminals if n != self.start]
        header = "state," + "".join(f"{t}," for t in self.terminals) + f"{END_MARKER}," + ",".join(gotos)
        rows = [header]
        for state in range(len(self.item_sets)):
            actions = self.action_table.get(state, {})
            goto_row = self.goto_table.get(state, {})
            cells = "".join(f"{_action_cell(actions.get(t, _ERROR))}," for t in self.terminals)
            end = _action_cell(actions.get(END_MARKER, _ERROR))
            goto_cells = ",".join(
                str(entry.target) if (entry := goto_row.get(n, _ERROR)).kind is ActionKind.GOTO else " "
                for n in gotos
            )
            rows.append(f"{state},{cells}{end},{goto_cells}")
        return "".join(row + "\n" for row in rows)

    def parse(self, symbols: Sequence[str]) -> tuple[bool, list[LRStep]]:
        """Parse a sequence of terminals; return whether it is accepted and the steps taken."""
        states = [0]
        stack = [END_MARKER]
        remaining = [*symbols, END_MARKER]
        pos = 0
        number = 0
        steps = [LRStep(number, tuple(states), "".join(stack), "".join(remaining))]
        while pos < len(remaining):
            current = remaining[pos]
            action = self.action_table.get(states[-1], {}).get(current, _ERROR)
            note = ""
            if action.kind is ActionKind.ACCEPT:
                return True, steps
            if action.kind is ActionKind.SHIFT:
                states.append(action.target)
                stack.append(current)
                pos += 1
            elif action.kind is ActionKind.REDUCE:
                production = self.productions[action.target]
                size = len(production.right)
                if size >= len(states):
                    return False, steps
                del states[len(states) - size:]
                del stack[len(stack) - size:]
                stack.append(production.left)
                goto = self.goto_table.get(states[-1], {}).get(production.left, _ERROR)
                if goto.kind is not ActionKind.GOTO:
                    return False, steps
                states.append(goto.target)
                note = str(production)
            else:
                return False, steps
            number += 1
            steps.append(LRStep(number, tuple(states), "".join(stack), "".join(remaining[pos:]), note))
        return False, steps


def _process_lines(original: str, expression: str, steps: list[LRStep]) -> list[str]:
    lines = [f"{original},--->,{expression}, , ", "step,state stack,symbol stack,input,action"]
    for step in steps:
        states = "".join(f"{state} " for state in step.states)
        symbols = "".join(f" {symbol}" for symbol in step.symbols)
        pending = "".join(f"{symbol} " for symbol in step.input)
        lines.append(f"{step.number},{states},{symbols},{pending},{step.action or ' '}")
    lines.append(" , , , , ")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check expressions with an SLR(1) parser.")
    parser.add_argument("grammar", help="grammar file")
    parser.add_argument("expressions", help="file of ';'-terminated expressions")
    parser.add_argument("--table", help="CSV file to write the SLR table to")
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
        analyzer = SLRParser(parse_lr_grammar(grammar_text))
    except GrammarError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(analyzer.format_first(), end="")
    print(analyzer.format_follow(), end="")
    print()

    process: list[str] = []
    results: list[str] = []
    for tokens in split_expressions(expression_text):
        original = "".join(token.value for token in tokens)
        expression = "".join(
            "i" if token.is_operand else token.value
            for token in tokens
            if token.is_operand or token.type is TokenType.OPERATOR
        )
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