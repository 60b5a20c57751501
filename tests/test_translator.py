import pytest

from compilerlab.precedence import evaluate_postfix, infix_to_postfix
from compilerlab.slr import SLRParser, parse_lr_grammar
from compilerlab.translator import Translation, format_translation, main, translate

GRAMMAR = "E->E+T|T;\nT->T*F|F;\nF->(E)|i;\n"


@pytest.fixture
def parser():
    return SLRParser(parse_lr_grammar(GRAMMAR))


def test_postfix_matches_precedence_conversion(parser):
    (translation,) = translate(parser, "1+2*3;")
    assert translation.accepted
    assert translation.postfix == infix_to_postfix("1+2*3")


def test_value_matches_postfix_evaluation(parser):
    (translation,) = translate(parser, "(1+2)*3;")
    assert translation.value == evaluate_postfix(translation.postfix)
    assert translation.postfix == infix_to_postfix("(1+2)*3")


def test_expression_symbols(parser):
    (translation,) = translate(parser, "12 + 34;")
    assert translation.original == "12+34"
    assert translation.expression == "i+i"


def test_several_expressions_in_order(parser):
    results = translate(parser, "1+2;\n4*5;\n(6);")
    assert [t.original for t in results] == ["1+2", "4*5", "(6)"]
    for t in results:
        assert t.value == evaluate_postfix(t.postfix)


def test_parenthesised_single_operand(parser):
    (translation,) = translate(parser, "(6);")
    assert translation.postfix == ["6"]
    assert translation.value == 6


def test_octal_literal_loses_prefix(parser):
    (translation,) = translate(parser, "017+1;")
    assert translation.postfix == ["17", "1", "+"]
    assert translation.value == evaluate_postfix(["17", "1", "+"])


def test_rejected_expression(parser):
    (translation,) = translate(parser, "1+*2;")
    assert not translation.accepted
    with pytest.raises(ValueError):
        translation.value
    with pytest.raises(ValueError):
        translation.postfix


def test_unterminated_expression_is_dropped(parser):
    assert translate(parser, "1+2") == []


def test_steps_start_from_initial_configuration(parser):
    (translation,) = translate(parser, "1+2;")
    first = translation.steps[0]
    assert first.number == 0
    assert first.states == (0,)
    assert first.input == "i+i#"


def test_format_translation(parser):
    (translation,) = translate(parser, "1+2;")
    assert format_translation(translation) == "1+2\n1,2,+,\t3\n\n"


def test_format_rejected_translation():
    translation = Translation("1+", "i+", ())
    assert format_translation(translation) == "1+\nrejected\n\n"


def test_main_writes_result(tmp_path, capsys):
    grammar = tmp_path / "g.txt"
    grammar.write_text(GRAMMAR, encoding="utf-8")
    expressions = tmp_path / "expression.txt"
    expressions.write_text("1+2;\n", encoding="utf-8")
    result = tmp_path / "result.txt"
    process = tmp_path / "process.csv"
    table = tmp_path / "table.csv"
    code = main([
        str(grammar), str(expressions),
        "--result", str(result), "--process", str(process), "--table", str(table),
    ])
    assert code == 0
    assert result.read_text(encoding="utf-8") == "1+2\n1,2,+,\t3\n\n"
    assert process.read_text(encoding="utf-8").startswith("1+2,--->,i+i, , \n")
    assert table.read_text(encoding="utf-8").startswith("state,")
    assert "i+i" in capsys.readouterr().out


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "none.txt"), str(tmp_path / "none2.txt")]) == 1