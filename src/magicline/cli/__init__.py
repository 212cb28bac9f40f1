"""Command-line interface for magicline.

``magicline.cli.main.cli`` is the Click group installed as the
``magicline`` console script.
"""
from __future__ import annotations
