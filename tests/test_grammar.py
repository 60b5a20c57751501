import pytest

from compilerlab.grammar import (
    Grammar,
    GrammarError,
    main,
    parse_grammar,
    parse_line_grammar,
)


def test_parse_grammar_basic():
    g = parse_grammar("E->E+T|T;\nT->i;")
    assert g.productions == {"E": ["E+T", "T"], "T": ["i"]}
    assert g.start == "E"
    assert g.nonterminals == {"E", "T"}
    assert g.terminals == {"+", "i"}


def test_parse_grammar_removes_comments_and_spaces():
    g = parse_grammar("E -> a | b ; // comment\n")
    assert g.productions == {"E": ["a", "b"]}


def test_parse_grammar_joins_lines_and_splits_semicolons():
    g = parse_grammar("S->a\n|b;A->c;\n")
    assert g.productions == {"S": ["a", "b"], "A": ["c"]}


def test_parse_grammar_requires_arrow():
    with pytest.raises(GrammarError):
        parse_grammar("E=a;")


def test_format():
    g = parse_grammar("E->E+T|T;T->i;")
    assert g.format() == "E -> E+T | T ;\nT -> i ;\n"


def test_format_round_trip():
    g = parse_grammar("S->aB|c;B->b|S;")
    again = parse_grammar(g.format())
    assert again.productions == g.productions
    assert again.start == g.start


def test_parse_line_grammar():
    g = parse_line_grammar("S->aB|c;\n\nB->b;\n")
    assert g.productions == {"S": ["aB", "c"], "B": ["b"]}
    assert g.start == "S"
    assert g.nonterminals == {"S", "B"}
    assert g.terminals == {"a", "b", "c"}


def test_parse_line_grammar_only_letters_in_sets():
    g = parse_line_grammar("E->i+i;\n")
    assert g.terminals == {"i"}
    assert g.productions == {"E": ["i+i"]}


def test_add_alternative_keeps_order():
    g = Grammar()
    g.add_alternative("A", "x")
    g.add_alternative("B", "y")
    g.add_alternative("A", "z")
    assert g.productions == {"A": ["x", "z"], "B": ["y"]}


def test_main_prints_grammar(tmp_path, capsys):
    path = tmp_path / "g.txt"
    path.write_text("E->E+T|T;\nT->i;\n", encoding="utf-8")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "E -> E+T | T ;\nT -> i ;\n"


def test_main_line_mode(tmp_path, capsys):
    path = tmp_path / "g.txt"
    path.write_text("S->a|b;\n", encoding="utf-8")
    assert main([str(path), "--lines"]) == 0
    assert capsys.readouterr().out == "S -> a | b ;\n"


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "none.txt")]) == 1