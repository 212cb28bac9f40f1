"""Argument parser module.

Exports the ``ParameterParser`` class, the parsing convenience functions,
and parser error types.
"""
from __future__ import annotations

from magicline.parser.errors import ArgumentSplitError, MalformedJsonArgumentError
from magicline.parser.parser import (
    ParameterMap,
    ParameterParser,
    decode_parameter,
    json_to_dict,
    parse_input_parameters,
)

__all__ = [
    "ParameterMap",
    "ParameterParser",
    "parse_input_parameters",
    "json_to_dict",
    "decode_parameter",
    "MalformedJsonArgumentError",
    "ArgumentSplitError",
]
