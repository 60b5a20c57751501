import pytest

from compilerlab.lexer import (
    KEYWORDS,
    Lexer,
    Token,
    TokenType,
    format_token,
    main,
    split_expressions,
)


def test_identifier_and_decimal():
    assert list(Lexer("abc 123\n")) == [
        Token(TokenType.IDENTIFIER, "abc"),
        Token(TokenType.DECIMAL_INT, "123"),
    ]


def test_octal_drops_leading_zero():
    assert list(Lexer("017\n")) == [Token(TokenType.OCTAL_INT, "17")]


def test_hex_drops_prefix():
    assert list(Lexer("0x1F\n")) == [Token(TokenType.HEX_INT, "1F")]


def test_keywords_only_when_configured():
    with_keywords = [t.type for t in Lexer("if x then\n", KEYWORDS)]
    assert with_keywords == [TokenType.KEYWORD, TokenType.IDENTIFIER, TokenType.KEYWORD]
    without = [t.type for t in Lexer("if x then\n")]
    assert without == [TokenType.IDENTIFIER] * 3


def test_comments_are_skipped():
    tokens = list(Lexer("a // note\n/* block * text */ b\n"))
    assert [t.value for t in tokens] == ["a", "b"]


def test_operators():
    tokens = list(Lexer("( ) + ;\n"))
    assert [t.value for t in tokens] == ["(", ")", "+", ";"]
    assert all(t.type is TokenType.OPERATOR for t in tokens)


def test_lone_slash_is_dropped():
    assert [t.value for t in Lexer("a / b\n")] == ["a", "b"]


def test_word_running_into_end_is_error():
    assert Lexer("abc").scan().type is TokenType.ERROR
    assert list(Lexer("abc")) == []


def test_scan_at_end_gives_error():
    lexer = Lexer("   \n")
    assert lexer.scan().type is TokenType.ERROR
    assert lexer.at_end


def test_zero_without_digits_is_error():
    assert Lexer("0;\n").scan().type is TokenType.ERROR


def test_unknown_character_is_error():
    token = Lexer("#\n").scan()
    assert token == Token(TokenType.ERROR, "#")


def test_peek_and_skip():
    lexer = Lexer("a;")
    assert lexer.scan() == Token(TokenType.IDENTIFIER, "a")
    assert lexer.peek() == ";"
    lexer.skip()
    assert lexer.peek() == ""


@pytest.mark.parametrize(
    "token, expected",
    [
        (Token(TokenType.KEYWORD, "if"), "<if,_>"),
        (Token(TokenType.OPERATOR, "+"), "<+,_>"),
        (Token(TokenType.IDENTIFIER, "x"), "<0,x>"),
        (Token(TokenType.HEX_INT, "1F"), "<3,1F>"),
        (Token(TokenType.ERROR, "#"), 'To an error state! The value of the words is "#"'),
    ],
)
def test_format_token(token, expected):
    assert format_token(token) == expected


def test_split_expressions():
    groups = list(split_expressions("a+1;\n(b);"))
    assert [[t.value for t in g] for g in groups] == [["a", "+", "1"], ["(", "b", ")"]]


def test_split_expressions_stops_on_error():
    assert list(split_expressions("a+#;\nb;")) == []


def test_main_lists_tokens(tmp_path, capsys):
    source = tmp_path / "program.txt"
    source.write_text("if x\n", encoding="utf-8")
    assert main([str(source)]) == 0
    assert capsys.readouterr().out == "<if,_>\n<0,x>\n"


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.txt")]) == 1