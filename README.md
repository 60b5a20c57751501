# compilerlab

A small toolkit covering the classic stages of a compiler front end for
single-character grammar symbols and simple arithmetic expressions.

- **Lexical analysis** (`compilerlab.lexer`): `Lexer` scans identifiers,
  decimal integers, octal integers (`0` prefix, dropped from the value),
  hexadecimal integers (`0x` prefix, dropped from the value), the
  single-character operators `+ - * / = < > ( ) ;` and, when given a keyword
  set such as `KEYWORDS`, keywords. Blanks and `//` / `/* */` comments are
  skipped. A word only counts once the character after it has been seen, so a
  word that runs into the end of the text comes back as an error token.
  `format_token` renders a token for a listing; `split_expressions` yields the
  tokens of each `;`-terminated expression.
- **Grammar reading** (`compilerlab.grammar`): `parse_grammar` reads free-form
  `;`-separated productions with `//` comments; `parse_line_grammar` reads one
  production per line. Both return a `Grammar` with its nonterminals (upper
  case letters), terminals, start symbol (first left side) and ordered
  productions. A production without `->` raises `GrammarError`.
- **LL(1) rewriting** (`compilerlab.ll1`): `load_ll1_grammar` returns an
  `LL1Grammar` with repeated and unreachable alternatives removed (`S` is the
  start symbol when it is a left side). `LL1Grammar.transform` removes
  indirect and direct left recursion and factors out common prefixes; new
  nonterminals are the first free letters from `A` upwards. `@` stands for the
  empty string.
- **Predictive parsing** (`compilerlab.predictive`): `PredictiveParser` builds
  FIRST and FOLLOW sets and the LL(1) table, and `parse` returns whether a
  string of terminals is accepted together with the list of `Step`s taken.
  `#` marks the end of the input.
- **SLR parsing** (`compilerlab.slr`): `parse_lr_grammar` reads the
  productions and adds a new start production when the first two share a left
  side. `SLRParser` builds FIRST/FOLLOW sets, LR(0) item sets and the action
  and goto tables, renders them as CSV, and `parse` returns a verdict with the
  `LRStep`s taken.
- **Reverse Polish translation** (`compilerlab.polish`,
  `compilerlab.translator`): `build_tree` builds a syntax tree of `Node`s
  while SLR-parsing an expression; `Node.postfix` lists it in reverse Polish
  order and `Node.value` holds its integer value. `translate` does this for
  every expression in a text and returns `Translation`s.
- **Operator precedence** (`compilerlab.precedence`): `infix_to_postfix`
  converts an integer expression directly and `evaluate_postfix` evaluates the
  result; division truncates toward zero.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

```
compilerlab-lex PROGRAM                     # list the tokens of a program file
compilerlab-grammar GRAMMAR [--lines]       # read and print a grammar
compilerlab-ll1 GRAMMAR [-o OUT] [--all-terminals]
compilerlab-predictive GRAMMAR EXPRESSIONS [--table CSV] [--process CSV] [--result FILE]
compilerlab-slr GRAMMAR EXPRESSIONS [--table CSV] [--process CSV] [--result FILE]
compilerlab-polish GRAMMAR EXPRESSIONS [--table CSV] [--process CSV] [--result FILE]
compilerlab-precedence EXPRESSIONS          # one expression per line
```

`compilerlab-predictive` and `compilerlab-slr` print `Correct` or `Wrong` for
each `;`-terminated expression; operands are checked as the grammar symbol
`i`. `compilerlab-polish` prints each expression's postfix form and value.
The optional files receive the parse table, the step-by-step trace and the
verdicts or translations.

## Library use

```python
from compilerlab.precedence import infix_to_postfix, evaluate_postfix

postfix = infix_to_postfix("3+4*(2-1)")
print(postfix)                   # ['3', '4', '2', '1', '-', '*', '+']
print(evaluate_postfix(postfix)) # 7
```

```python
from compilerlab.lexer import KEYWORDS, Lexer, format_token

for token in Lexer("if x1 then y = 0x1F;", KEYWORDS):
    print(format_token(token))
```

```python
from compilerlab.slr import SLRParser, parse_lr_grammar
from compilerlab.translator import translate

parser = SLRParser(parse_lr_grammar("E->E+T|T; T->T*F|F; F->(E)|i;"))
for t in translate(parser, "2+3*4;"):
    print(t.postfix, t.value)    # ['2', '3', '4', '*', '+'] 14
```

## Grammar file format

Productions are separated by `;`, alternatives by `|`, and the left side is a
single upper-case letter followed by `->`. Whitespace is ignored and `//`
comments run to the end of the line:

```
E->E+T|T;   // expressions
T->T*F|F;
F->(E)|i;
```

## Limits

- Grammar symbols are single characters; upper case letters are
  nonterminals.
- Tree building handles only productions with one symbol, with a
  nonterminal-operator-nonterminal right side, or with a
  terminal-nonterminal-terminal (parenthesised) right side; anything else
  raises `ValueError`. The operators evaluated are `+ - * /`.
- Operand values are read from the leading decimal digits of the scanned
  text: octal and hexadecimal literals are not converted from their base, and
  identifiers have no value, so translating an expression with an identifier
  raises `ValueError`.
- Nothing beyond parsing and evaluating expressions is done: there is no
  semantic analysis, intermediate code or code generation.