"""Error types raised while interpreting magic-command arguments.

The argument parser is tolerant: ambiguous input never raises.  Only two
conditions are errors:

- an explicit JSON-object payload that is not valid JSON (or not an
  object), which is surfaced to the caller unchanged;
- an internal invariant violation, which a correct parser never produces.
"""
from __future__ import annotations


class MalformedJsonArgumentError(ValueError):
    """Raised when a JSON-object argument cannot be decoded.

    Parameters
    ----------
    text:
        The offending argument text.
    reason:
        Human-readable description of the decoding problem.
    """

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Invalid JSON argument {_preview(text)}: {reason}")
        self.text = text
        self.reason = reason


class ArgumentSplitError(RuntimeError):
    """Raised when splitting an argument on ``=`` yields more than two parts."""

    def __init__(self, argument: str, parts: int) -> None:
        super().__init__(
            f"Splitting argument {argument!r} on '=' produced {parts} parts; expected at most 2"
        )
        self.argument = argument
        self.parts = parts


def _preview(text: str, limit: int = 40) -> str:
    """Return a short ``repr`` of ``text`` for error messages."""
    if len(text) <= limit:
        return repr(text)
    return repr(text[:limit] + "...")
