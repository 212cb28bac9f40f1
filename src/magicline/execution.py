"""Execution results returned by magic commands.

An ``ExecutionResult`` is created once per invocation, is immutable, and
is consumed by whatever host dispatched the command.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ExecuteStatus(Enum):
    """Completion status of a single magic invocation."""

    OK = auto()
    ERROR = auto()
    ABORT = auto()

    def to_execution_result(self, output: Any = None) -> "ExecutionResult":
        """Return an ``ExecutionResult`` with this status."""
        return ExecutionResult(status=self, output=output)


@dataclass(frozen=True)
class ExecutionResult:
    """Status plus optional payload of one magic invocation.

    Parameters
    ----------
    status:
        Whether the invocation succeeded.
    output:
        Optional payload handed back to the host.
    """

    status: ExecuteStatus
    output: Any = field(default=None)

    @classmethod
    def ok(cls, output: Any = None) -> "ExecutionResult":
        return cls(status=ExecuteStatus.OK, output=output)

    @classmethod
    def error(cls) -> "ExecutionResult":
        """Return an error result with no payload."""
        return cls(status=ExecuteStatus.ERROR)

    @property
    def is_ok(self) -> bool:
        return self.status is ExecuteStatus.OK

    @property
    def is_error(self) -> bool:
        return self.status is ExecuteStatus.ERROR
