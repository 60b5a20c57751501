import pytest

from compilerlab.lexer import Token, TokenType, split_expressions
from compilerlab.polish import Node, build_tree
from compilerlab.precedence import evaluate_postfix, infix_to_postfix
from compilerlab.slr import SLRParser, parse_lr_grammar

GRAMMAR = "E->E+T|T;\nT->T*F|F;\nF->(E)|i;\n"


@pytest.fixture
def parser():
    return SLRParser(parse_lr_grammar(GRAMMAR))


def _tokens(text):
    return list(split_expressions(text + ";"))[0]


@pytest.mark.parametrize(
    "expression",
    ["2+3*4", "(2+3)*4", "1+2+3", "9*8+7", "((5))", "2*(3+4)*5", "42"],
)
def test_postfix_matches_precedence_conversion(parser, expression):
    tree = build_tree(parser, _tokens(expression))
    assert tree.postfix() == infix_to_postfix(expression)


@pytest.mark.parametrize(
    "expression",
    ["2+3*4", "(2+3)*4", "1+2+3", "9*8+7", "2*(3+4)*5", "42"],
)
def test_value_matches_postfix_evaluation(parser, expression):
    tree = build_tree(parser, _tokens(expression))
    assert tree.value == evaluate_postfix(infix_to_postfix(expression))


def test_worked_example(parser):
    tree = build_tree(parser, _tokens("2+3*4"))
    assert tree.postfix() == ["2", "3", "4", "*", "+"]
    assert tree.value == 14


def test_root_of_sum_carries_operator(parser):
    tree = build_tree(parser, _tokens("2+3"))
    assert tree.token.type is TokenType.OPERATOR
    assert tree.token.value == "+"
    assert tree.left.value == 2
    assert tree.right.value == 3


def test_single_operand_root_is_labelled_nonterminal(parser):
    tree = build_tree(parser, _tokens("7"))
    assert tree.token == Token(TokenType.ERROR, "E")
    assert tree.value == 7
    assert tree.postfix() == ["7"]


def test_parentheses_do_not_appear_in_postfix(parser):
    tree = build_tree(parser, _tokens("(1+2)"))
    assert "(" not in tree.postfix()
    assert ")" not in tree.postfix()


def test_octal_lexeme_read_as_decimal_digits(parser):
    tree = build_tree(parser, _tokens("017"))
    assert tree.value == 17


def test_incomplete_expression_rejected(parser):
    with pytest.raises(ValueError):
        build_tree(parser, _tokens("2+"))


def test_unbalanced_parenthesis_rejected(parser):
    with pytest.raises(ValueError):
        build_tree(parser, _tokens("(2+3"))


def test_identifier_has_no_value(parser):
    with pytest.raises(ValueError):
        build_tree(parser, _tokens("a+1"))


def test_node_postfix_skips_error_tokens():
    leaf_a = Node(1, Token(TokenType.DECIMAL_INT, "1"))
    leaf_b = Node(2, Token(TokenType.DECIMAL_INT, "2"))
    inner = Node(3, Token(TokenType.OPERATOR, "+"), left=leaf_a, right=leaf_b)
    root = Node(3, Token(TokenType.ERROR, "E"), left=inner)
    assert root.postfix() == ["1", "2", "+"]