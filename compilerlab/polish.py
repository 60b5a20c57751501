"""Syntax trees built during SLR parsing, read back in reverse Polish order."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .lexer import Token, TokenType
from .predictive import END_MARKER
from .slr import ActionKind, Action, SLRParser

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_ERROR = Action(ActionKind.ERROR)


@dataclass
class Node:
    """A syntax tree node.

    Leaves carry the scanned token. A node made by reducing an operator
    production carries the operator token; any other reduction carries an
    error-typed token labelled with the production's left side, which is
    left out of the postfix listing.
    """

    value: int
    token: Token
    left: Node | None = None
    right: Node | None = None

    def _walk(self) -> Iterator[str]:
        if self.left is not None:
            yield from self.left._walk()
        if self.right is not None:
            yield from self.right._walk()
        if self.token.type is not TokenType.ERROR:
            yield self.token.value

    def postfix(self) -> list[str]:
        """Token values of the tree in post-order: the reverse Polish form."""
        return list(self._walk())


def _operand_value(token: Token) -> int:
    """Integer value of an operand lexeme, read from its leading decimal digits."""
    match = _LEADING_INT.match(token.value)
    if match is None:
        raise ValueError(f"operand {token.value!r} has no integer value")
    return int(match.group(1))


def _truncating_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _combine(op: str, a: int, b: int) -> int:
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        return _truncating_div(a, b)
    raise ValueError(f"unsupported operator {op!r}")


def _symbol_of(token: Token) -> str:
    if token.is_operand:
        return "i"
    if token.type is TokenType.OPERATOR:
        return token.value[0]
    raise ValueError(f"unexpected token {token.value!r}")


def _reduce(parser: SLRParser, left: str, right: str, nodes: list[Node]) -> Node:
    size = len(right)
    children = nodes[len(nodes) - size:]
    del nodes[len(nodes) - size:]
    label = Token(TokenType.ERROR, left)
    if size == 1:
        (child,) = children
        return Node(child.value, label, left=child)
    if size == 3:
        first, middle, last = children
        if (
            parser.is_nonterminal(right[0])
            and parser.is_terminal(right[1])
            and parser.is_nonterminal(right[2])
        ):
            value = _combine(middle.token.value, first.value, last.value)
            return Node(value, middle.token, left=first, right=last)
        if (
            parser.is_terminal(right[0])
            and parser.is_nonterminal(right[1])
            and parser.is_terminal(right[2])
        ):
            return Node(middle.value, label, left=middle)
    raise ValueError(f"no tree rule for production {left}->{right}")


def build_tree(parser: SLRParser, tokens: Sequence[Token]) -> Node:
    """Parse tokens with parser and return the syntax tree of the expression.

    Raises ValueError when the tokens are not accepted by the grammar.
    """
    symbols = [_symbol_of(token) for token in tokens]
    remaining = [*zip(symbols, tokens), (END_MARKER, Token(TokenType.ERROR, END_MARKER))]
    states = [0]
    nodes: list[Node] = []
    pos = 0
    while pos < len(remaining):
        symbol, token = remaining[pos]
        action = parser.action_table.get(states[-1], {}).get(symbol, _ERROR)
        if action.kind is ActionKind.ACCEPT:
            if not nodes:
                raise ValueError("expression is empty")
            return nodes[-1]
        if action.kind is ActionKind.SHIFT:
            states.append(action.target)
            value = _operand_value(token) if token.is_operand else 0
            nodes.append(Node(value, token))
            pos += 1
        elif action.kind is ActionKind.REDUCE:
            production = parser.productions[action.target]
            size = len(production.right)
            if size >= len(states) or size > len(nodes):
                raise ValueError("expression rejected")
            del states[len(states) - size:]
            goto = parser.goto_table.get(states[-1], {}).get(production.left, _ERROR)
            if goto.kind is not ActionKind.GOTO:
                raise ValueError("expression rejected")
            states.append(goto.target)
            nodes.append(_reduce(parser, production.left, production.right, nodes))
        else:
            raise ValueError("expression rejected")
    raise ValueError("expression rejected")