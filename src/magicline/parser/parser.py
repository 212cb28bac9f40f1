"""Magic-command argument parser.

Interprets the token list produced by :mod:`magicline.lexer` and builds a
``ParameterMap``: an insertion-ordered ``dict`` from parameter name to a
JSON-encoded value.  Three input styles are accepted::

    %simulate {"operation": "Foo", "shots": 100}     # one JSON object
    %simulate Foo shots=100 name="my run"            # positional + pairs
    %config dump.basisStates verbose                 # pairs and bare flags

Interpretation order
--------------------
1. Positional parameter.  When a ``first_parameter_name`` is given and the
   first token neither opens a JSON object nor contains ``=``, that token's
   raw text is stored JSON-encoded under the inferred name and removed.
2. JSON object.  If the (new) first token opens a JSON object, its entries
   are copied verbatim and every later token is ignored.
3. Pairs.  Every remaining token is split on its first ``=``.  A token
   without ``=`` is a flag whose value is ``true``.  Values are trimmed
   and lose a quote character at each end where one is present.  They are
   always encoded as JSON *strings*: ``shots=100`` yields ``"100"``, not
   ``100``.

Later occurrences of a key overwrite earlier ones.
"""
from __future__ import annotations

import json
from typing import Any, Final

from magicline.lexer.lexer import tokenize
from magicline.parser.errors import ArgumentSplitError, MalformedJsonArgumentError

ParameterMap = dict[str, str]

_ENCLOSING_QUOTES: Final[tuple[str, ...]] = ("'", '"')

_JSON_TYPE_NAMES: Final[dict[type, str]] = {
    list: "array",
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    type(None): "null",
}


def _encode(value: Any) -> str:
    """Serialize ``value`` as JSON, leaving non-ASCII text unescaped."""
    return json.dumps(value, ensure_ascii=False)


def _strip_enclosing_quotes(value: str) -> str:
    """Remove one single or double quote from each end where present.

    The ends are handled independently: ``'x"`` and ``'x`` both give ``x``.
    """
    if value[:1] in _ENCLOSING_QUOTES:
        value = value[1:]
    if value[-1:] in _ENCLOSING_QUOTES:
        value = value[:-1]
    return value


def _split_pair(argument: str) -> tuple[str, str | bool]:
    """Split ``key=value`` on the first ``=``; a bare key maps to ``True``."""
    parts = argument.split("=", 1)
    if len(parts) == 1:
        return parts[0].strip(), True
    if len(parts) == 2:
        return parts[0].strip(), _strip_enclosing_quotes(parts[1].strip())
    raise ArgumentSplitError(argument, len(parts))


class ParameterParser:
    """Turns raw argument text into a ``ParameterMap``.

    Parameters
    ----------
    first_parameter_name:
        Name under which a leading bare token is stored.  Empty disables
        the positional rule.
    """

    def __init__(self, first_parameter_name: str = "") -> None:
        self._first_parameter_name = first_parameter_name

    @property
    def first_parameter_name(self) -> str:
        return self._first_parameter_name

    def parse(self, raw: str) -> ParameterMap:
        """Parse ``raw`` and return a freshly built ``ParameterMap``.

        Raises
        ------
        MalformedJsonArgumentError
            If a JSON-object argument is not a valid JSON object.
        """
        parameters: ParameterMap = {}
        tokens = tokenize(raw)

        if (
            self._first_parameter_name
            and tokens
            and not tokens[0].is_json_object
            and not tokens[0].has_assignment
        ):
            parameters[self._first_parameter_name] = _encode(tokens[0].value)
            tokens = tokens[1:]

        if tokens and tokens[0].is_json_object:
            parameters.update(json_to_dict(tokens[0].value))
            return parameters

        for token in tokens:
            key, value = _split_pair(token.value)
            parameters[key] = _encode(value)

        return parameters


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def parse_input_parameters(raw: str, first_parameter_name: str = "") -> ParameterMap:
    """Parse magic-command argument text into a ``ParameterMap``.

    Parameters
    ----------
    raw:
        Argument text following the magic keyword.  May be empty.
    first_parameter_name:
        Name to assign to a leading bare token, or ``""`` for none.

    Returns
    -------
    ParameterMap
        Parameter names mapped to JSON-encoded values.

    Raises
    ------
    MalformedJsonArgumentError
        If the input carries a JSON-object argument that does not decode.

    Example
    -------
    ::

        >>> parse_input_parameters('Foo shots=100 verbose', "operation")
        {'operation': '"Foo"', 'shots': '"100"', 'verbose': 'true'}
    """
    return ParameterParser(first_parameter_name).parse(raw)


def json_to_dict(text: str) -> ParameterMap:
    """Decode a JSON object into a map of JSON-encoded values.

    An empty string yields an empty map.  Anything else must be a JSON
    object; each of its values is re-encoded as compact JSON.

    Raises
    ------
    MalformedJsonArgumentError
        If ``text`` is not valid JSON or does not hold an object.
    """
    if not text:
        return {}
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedJsonArgumentError(text, exc.msg) from exc
    if not isinstance(decoded, dict):
        found = _JSON_TYPE_NAMES.get(type(decoded), type(decoded).__name__)
        raise MalformedJsonArgumentError(text, f"expected a JSON object, found {found}")
    return {
        key: json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        for key, value in decoded.items()
    }


def decode_parameter(parameters: ParameterMap, name: str, default: Any = None) -> Any:
    """Return the decoded value of ``name``, or ``default`` when absent.

    Raises
    ------
    MalformedJsonArgumentError
        If the stored value is not valid JSON.
    """
    encoded = parameters.get(name)
    if encoded is None:
        return default
    try:
        return json.loads(encoded)
    except json.JSONDecodeError as exc:
        raise MalformedJsonArgumentError(encoded, exc.msg) from exc
