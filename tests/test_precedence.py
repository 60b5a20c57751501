import pytest

from compilerlab.precedence import (
    evaluate_postfix,
    infix_to_postfix,
    is_operator,
    main,
    precedence,
)


def test_precedence_order():
    assert precedence("*") > precedence("+")
    assert precedence("/") == precedence("*")
    assert precedence("-") == precedence("+")
    assert precedence("(") == 0


def test_is_operator():
    assert all(is_operator(c) for c in "+-*/")
    assert not is_operator("(")


def test_multiplication_binds_tighter():
    assert infix_to_postfix("1+2*3") == ["1", "2", "3", "*", "+"]


def test_parentheses():
    assert infix_to_postfix("(1+2)*3") == ["1", "2", "+", "3", "*"]


def test_multi_digit_numbers():
    assert infix_to_postfix("12+345") == ["12", "345", "+"]


def test_left_associative():
    postfix = infix_to_postfix("8-3-2")
    assert postfix == ["8", "3", "-", "2", "-"]
    assert evaluate_postfix(postfix) == 3


def test_evaluate_matches_precedence():
    assert evaluate_postfix(infix_to_postfix("2*3+4")) == evaluate_postfix(
        infix_to_postfix("4+3*2")
    )


def test_division_truncates_toward_zero():
    assert evaluate_postfix(["7", "2", "/"]) == 3
    assert evaluate_postfix(["0", "7", "-", "2", "/"]) == -3


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        evaluate_postfix(["1", "0", "/"])


def test_missing_operands():
    with pytest.raises(ValueError):
        evaluate_postfix(["+"])


def test_unmatched_close_paren():
    with pytest.raises(ValueError):
        infix_to_postfix("1+2)")


def test_main(tmp_path, capsys):
    path = tmp_path / "expression.txt"
    path.write_text("1 + 2\n", encoding="utf-8")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "1, 2, +, \nresult: 3\n"


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.txt")]) == 1