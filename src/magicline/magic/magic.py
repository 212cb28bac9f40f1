"""Base class for magic commands.

A magic command is identified by its marker-prefixed name (``%`` plus a
keyword), carries user-facing documentation, and implements ``run``.
``execute`` is ``run`` wrapped by :func:`~magicline.executor.safe_execute`,
so hosts always call ``execute`` and never see an exception.

Example
-------
::

    from magicline.magic import Documentation, Magic
    from magicline.execution import ExecutionResult

    class SimulateMagic(Magic):
        def __init__(self) -> None:
            super().__init__(
                "simulate",
                Documentation(summary="Runs an operation on a simulator."),
            )

        def run(self, input_text, channel):
            parameters = self.parse_input_parameters(input_text, "operation")
            ...
            return ExecutionResult.ok()
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Final

from magicline.executor.executor import safe_execute
from magicline.parser.parser import ParameterMap, json_to_dict, parse_input_parameters

if TYPE_CHECKING:
    from magicline.channel.channel import Channel
    from magicline.execution import ExecutionResult

MAGIC_MARKER: Final[str] = "%"


class SymbolKind(Enum):
    """Kinds of symbols a session can resolve."""

    MAGIC = auto()


@dataclass(frozen=True)
class Documentation:
    """User-facing documentation attached to a magic command.

    Parameters
    ----------
    summary:
        One-line description shown in listings.
    description:
        Longer explanation of what the command does.
    remarks:
        Additional notes, such as caveats or related commands.
    examples:
        Example invocations, each a short snippet.
    """

    summary: str
    description: str = field(default="")
    remarks: str = field(default="")
    examples: tuple[str, ...] = field(default=())


class Magic(ABC):
    """Abstract base class for magic commands.

    Parameters
    ----------
    keyword:
        The command keyword, without the marker.
    documentation:
        Documentation shown by hosts and ``%lsmagic``.
    """

    def __init__(self, keyword: str, documentation: Documentation) -> None:
        self.keyword: str = keyword
        self.name: str = f"{MAGIC_MARKER}{keyword}"
        self.documentation: Documentation = documentation
        self.kind: SymbolKind = SymbolKind.MAGIC
        self.execute = safe_execute(self.run)

    @staticmethod
    def parse_input_parameters(input_text: str, first_parameter_name: str = "") -> ParameterMap:
        """Parse this magic's input; see :func:`magicline.parser.parse_input_parameters`."""
        return parse_input_parameters(input_text, first_parameter_name)

    @staticmethod
    def json_to_dict(input_text: str) -> ParameterMap:
        """Decode a JSON-object input; see :func:`magicline.parser.json_to_dict`."""
        return json_to_dict(input_text)

    @abstractmethod
    def run(self, input_text: str, channel: "Channel") -> "ExecutionResult":
        """Execute the command.

        Implementations may be synchronous or ``async``; any exception
        they raise is reported by ``execute``.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
