"""Infix to postfix conversion by operator precedence, and postfix evaluation."""

from __future__ import annotations

import argparse
import string
import sys
from collections.abc import Sequence
from pathlib import Path

_DIGITS = frozenset(string.digits)
_OPERATORS = frozenset("+-*/")


def precedence(op: str) -> int:
    """Binding strength of an operator; 0 for anything else."""
    if op in ("+", "-"):
        return 1
    if op in ("*", "/"):
        return 2
    return 0


def is_operator(char: str) -> bool:
    return char in _OPERATORS


def infix_to_postfix(expression: str) -> list[str]:
    """Convert an infix expression of integers to postfix tokens.

    Characters other than digits, operators and parentheses are ignored.
    """
    operators: list[str] = []
    postfix: list[str] = []
    number = ""
    for ch in expression:
        if ch in _DIGITS:
            number += ch
            continue
        if number:
            postfix.append(number)
            number = ""
        if ch == "(":
            operators.append(ch)
        elif ch == ")":
            while operators and operators[-1] != "(":
                postfix.append(operators.pop())
            if not operators:
                raise ValueError("unmatched ')'")
            operators.pop()
        elif is_operator(ch):
            while operators and precedence(operators[-1]) >= precedence(ch):
                postfix.append(operators.pop())
            operators.append(ch)
    if number:
        postfix.append(number)
    postfix.extend(reversed(operators))
    return postfix


def _truncating_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _apply(op: str, a: int, b: int) -> int:
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    return _truncating_div(a, b)


def evaluate_postfix(postfix: Sequence[str]) -> int:
    """Evaluate postfix tokens with integer arithmetic; division truncates toward zero."""
    values: list[int] = []
    for token in postfix:
        head = token[:1]
        if head in _DIGITS and head:
            values.append(int(token))
        elif head and is_operator(head):
            if len(values) < 2:
                raise ValueError(f"operator {head!r} lacks operands")
            b = values.pop()
            a = values.pop()
            values.append(_apply(head, a, b))
    if not values:
        raise ValueError("empty expression")
    return values[-1]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Convert expressions to postfix and evaluate them.")
    parser.add_argument("path", help="file with one expression per line")
    args = parser.parse_args(argv)
    try:
        text = Path(args.path).read_text(encoding="utf-8")
    except OSError:
        print(f"File not found: {args.path}", file=sys.stderr)
        return 1
    for line in text.splitlines():
        expression = line.replace(" ", "")
        if not expression:
            continue
        try:
            postfix = infix_to_postfix(expression)
            print("".join(f"{token}, " for token in postfix))
            print(f"result: {evaluate_postfix(postfix)}")
        except (ValueError, ZeroDivisionError) as exc:
            print(f"{expression}: {exc}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())