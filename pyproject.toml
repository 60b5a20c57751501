[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "compilerlab"
version = "0.1.0"
description = "Compiler front-end toolkit: scanner, grammar reader, LL(1) rewriting, predictive and SLR parsing, reverse Polish translation"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "compiler",
    "lexer",
    "grammar",
    "ll1",
    "slr",
    "parsing",
    "first-follow",
    "reverse-polish",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
compilerlab-lex = "compilerlab.lexer:main"
compilerlab-grammar = "compilerlab.grammar:main"
compilerlab-precedence = "compilerlab.precedence:main"
compilerlab-ll1 = "compilerlab.ll1:main"
compilerlab-predictive = "compilerlab.predictive:main"
compilerlab-slr = "compilerlab.slr:main"
compilerlab-polish = "compilerlab.translator:main"

[tool.hatch.build.targets.wheel]
packages = ["compilerlab"]

[tool.pytest.ini_options]
addopts = "-ra"
