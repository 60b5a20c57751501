"""Translating expressions to reverse Polish form and values with an SLR parser."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .grammar import GrammarError
from .lexer import Token, split_expressions
from .polish import Node, build_tree
from .slr import LRStep, SLRParser, parse_lr_grammar


@dataclass(frozen=True)
class Translation:
    """The outcome of translating one ';'-terminated expression.

    ``expression`` is the expression as grammar symbols (operands become
    ``i``); ``tree`` is the syntax tree when the parser accepted it.
    """

    original: str
    expression: str
    tokens: tuple[Token, ...]
    steps: tuple[LRStep, ...] = field(default=())
    tree: Node | None = None

    @property
    def accepted(self) -> bool:
        return self.tree is not None

    @property
    def postfix(self) -> list[str]:
        """Reverse Polish form of the expression; ValueError if it was rejected."""
        if self.tree is None:
            raise ValueError(f"expression {self.original!r} was rejected")
        return self.tree.postfix()

    @property
    def value(self) -> int:
        """Value of the expression; ValueError if it was rejected."""
        if self.tree is None:
            raise ValueError(f"expression {self.original!r} was rejected")
        return self.tree.value


def _symbol(token: Token) -> str:
    return "i" if token.is_operand else token.value[0]


def translate(parser: SLRParser, text: str) -> list[Translation]:
    """Parse every ';'-terminated expression of text and build its syntax tree.

    Scanning stops at the first malformed token, as in split_expressions.
    """
    translations: list[Translation] = []
    for tokens in split_expressions(text):
        original = "".join(token.value for token in tokens)
        symbols = [_symbol(token) for token in tokens]
        accepted, steps = parser.parse(symbols)
        tree = build_tree(parser, tokens) if accepted else None
        translations.append(
            Translation(original, "".join(symbols), tuple(tokens), tuple(steps), tree)
        )
    return translations


def format_translation(translation: Translation) -> str:
    """Render the original expression, its postfix form and its value."""
    if not translation.accepted:
        return f"{translation.original}\nrejected\n\n"
    postfix = "".join(f"{token}," for token in translation.postfix)
    return f"{translation.original}\n{postfix}\t{translation.value}\n\n"


def _process_lines(translation: Translation) -> list[str]:
    lines = [
        f"{translation.original},--->,{translation.expression}, , ",
        "step,state stack,symbol stack,input,action",
    ]
    for step in translation.steps:
        states = "".join(f"{state} " for state in step.states)
        symbols = "".join(f" {symbol}" for symbol in step.symbols)
        pending = "".join(f"{symbol} " for symbol in step.input)
        lines.append(f"{step.number},{states},{symbols},{pending},{step.action or ' '}")
    lines.append(" , , , , ")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Translate expressions to reverse Polish form with an SLR(1) parser."
    )
    parser.add_argument("grammar", help="grammar file")
    parser.add_argument("expressions", help="file of ';'-terminated expressions")
    parser.add_argument("--table", help="CSV file to write the SLR table to")
    parser.add_argument("--process", help="CSV file to write the parsing steps to")
    parser.add_argument("--result", help="file to write the translations to")
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

    try:
        translations = translate(analyzer, expression_text)
    except (ValueError, ZeroDivisionError) as exc:
        print(f"Translation failed: {exc}", file=sys.stderr)
        return 1

    process: list[str] = []
    results: list[str] = []
    for translation in translations:
        print(translation.expression)
        rendered = format_translation(translation)
        print(rendered, end="")
        process += _process_lines(translation)
        results.append(rendered)

    try:
        if args.table:
            Path(args.table).write_text(analyzer.format_table_csv(), encoding="utf-8")
        if args.process:
            Path(args.process).write_text("".join(line + "\n" for line in process), encoding="utf-8")
        if args.result:
            Path(args.result).write_text("".join(results), encoding="utf-8")
    except OSError as exc:
        print(f"Failed to open file: {exc.filename}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())