"""Token definitions for magic-command argument text.

Every argument unit recognised by the argument lexer is represented by an
``ArgToken`` carrying its kind, the exact source text of its span and the
span offsets.  The four kinds correspond one-to-one with the alternatives
of the argument grammar, listed here in precedence order.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ArgTokenKind(Enum):
    """Exhaustive enumeration of argument token kinds."""

    JSON_OBJECT = auto()  # {...} up to the last closing brace
    KEY_VALUE = auto()    # key=value, key = "quoted value"
    WORD = auto()         # bare word, possibly with "quoted" segments
    QUOTED = auto()       # "quoted string" with optional trailing text


@dataclass(frozen=True, slots=True)
class ArgToken:
    """A single argument token.

    Parameters
    ----------
    kind:
        Which grammar alternative produced the token.
    value:
        Exact source text of the token, quotes and whitespace included.
    start:
        0-based offset of the first character in the raw input.
    end:
        0-based offset *past* the last character.
    """

    kind: ArgTokenKind
    value: str
    start: int
    end: int

    @property
    def is_json_object(self) -> bool:
        """Return True if the token text opens a JSON object."""
        return self.value.startswith("{")

    @property
    def has_assignment(self) -> bool:
        """Return True if the token text contains an ``=`` anywhere."""
        return "=" in self.value

    def __repr__(self) -> str:
        return f"ArgToken({self.kind.name}, {self.value!r}, {self.start}:{self.end})"
