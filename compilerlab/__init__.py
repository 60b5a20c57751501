"""Compiler front-end toolkit: scanning, grammars, LL(1) and SLR parsing, reverse Polish translation."""

__version__ = "0.1.0"