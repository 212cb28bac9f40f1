"""Argument lexer module.

Exports the ``ArgumentLexer`` class and the ``tokenize`` convenience function.
"""
from __future__ import annotations

from magicline.lexer.lexer import ArgumentLexer, tokenize

__all__ = ["ArgumentLexer", "tokenize"]
