"""magicline — argument parsing and fail-safe execution for magic commands.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import magicline

    # Parse the text that follows a magic keyword
    params = magicline.parse_input_parameters('Foo shots=100 verbose', "operation")
    # {'operation': '"Foo"', 'shots': '"100"', 'verbose': 'true'}

    # Decode a JSON-object payload
    params = magicline.json_to_dict('{"shots": 100}')
    # {'shots': '100'}

    # Wrap a handler so that failures are reported, never raised
    execute = magicline.safe_execute(handler)
    result = await execute("Foo shots=100", channel)

    magicline.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from magicline.executor.executor import Handler, SafeHandler
    from magicline.grammar.tokens import ArgToken


def tokenize(raw: str) -> list["ArgToken"]:
    """Split magic-command argument text into tokens.

    Parameters
    ----------
    raw:
        Argument text following the magic keyword.

    Returns
    -------
    list[ArgToken]
        Tokens in source order.
    """
    from magicline.lexer.lexer import tokenize as _tokenize

    return _tokenize(raw)


def parse_input_parameters(raw: str, first_parameter_name: str = "") -> dict[str, str]:
    """Parse magic-command argument text into JSON-encoded parameters.

    Parameters
    ----------
    raw:
        Argument text following the magic keyword.
    first_parameter_name:
        Name given to a leading bare token, or ``""`` for none.

    Returns
    -------
    dict[str, str]
        Parameter names mapped to JSON-encoded values.

    Raises
    ------
    magicline.parser.MalformedJsonArgumentError
        If a JSON-object argument cannot be decoded.
    """
    from magicline.parser.parser import parse_input_parameters as _parse

    return _parse(raw, first_parameter_name)


def json_to_dict(text: str) -> dict[str, str]:
    """Decode a JSON object into a map of JSON-encoded values.

    Raises
    ------
    magicline.parser.MalformedJsonArgumentError
        If ``text`` is non-empty and not a JSON object.
    """
    from magicline.parser.parser import json_to_dict as _json_to_dict

    return _json_to_dict(text)


def safe_execute(handler: "Handler") -> "SafeHandler":
    """Wrap a magic handler so that any failure is reported on its channel.

    Parameters
    ----------
    handler:
        Callable taking ``(input_text, channel)`` and returning an
        ``ExecutionResult`` (or an awaitable of one).

    Returns
    -------
    SafeHandler
        Async callable that always returns an ``ExecutionResult``.
    """
    from magicline.executor.executor import safe_execute as _safe_execute

    return _safe_execute(handler)


__all__ = [
    "__version__",
    "tokenize",
    "parse_input_parameters",
    "json_to_dict",
    "safe_execute",
]
