"""Argument grammar vocabulary.

Exports ``ArgToken`` and ``ArgTokenKind``.
"""
from __future__ import annotations

from magicline.grammar.tokens import ArgToken, ArgTokenKind

__all__ = ["ArgToken", "ArgTokenKind"]
