"""Failure classification for magic-command handlers.

Any exception escaping a handler is converted into exactly one of three
tagged failure records before it is reported:

WORKSPACE
    An ``InvalidWorkspaceError``; each of its error messages is reported
    on its own line.
AGGREGATE
    An ``ExceptionGroup`` (any ``BaseExceptionGroup``); the message of
    each inner exception is reported on its own line.
GENERIC
    Anything else; its message is reported as a single line.

Messages are always strings.  An exception whose message is empty is
reported by its class name.

Each record carries a ``kind`` tag and knows its own report lines, so
callers never depend on the order of ``except`` clauses.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from magicline.channel.channel import Channel


class InvalidWorkspaceError(Exception):
    """Raised by a handler when the workspace it depends on is invalid.

    Parameters
    ----------
    errors:
        One message per workspace problem, in reporting order.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: list[str] = list(errors)
        count = len(self.errors)
        super().__init__(f"Invalid workspace ({count} error{'s' if count != 1 else ''})")


class FailureKind(Enum):
    """Tag identifying how a caught failure is reported."""

    WORKSPACE = auto()
    AGGREGATE = auto()
    GENERIC = auto()


@dataclass(frozen=True)
class WorkspaceFailure:
    """Workspace validation failure carrying one message per problem."""

    messages: tuple[str, ...]

    @property
    def kind(self) -> FailureKind:
        return FailureKind.WORKSPACE

    def lines(self) -> list[str]:
        return list(self.messages)


@dataclass(frozen=True)
class AggregateFailure:
    """Several inner failures bundled together, one message each."""

    messages: tuple[str, ...]

    @property
    def kind(self) -> FailureKind:
        return FailureKind.AGGREGATE

    def lines(self) -> list[str]:
        return list(self.messages)


@dataclass(frozen=True)
class GenericFailure:
    """Any other failure, reported as a single message."""

    message: str

    @property
    def kind(self) -> FailureKind:
        return FailureKind.GENERIC

    def lines(self) -> list[str]:
        return [self.message]


Failure = Union[WorkspaceFailure, AggregateFailure, GenericFailure]


def _message_of(exc: BaseException) -> str:
    """Return the display message of ``exc``, falling back to its class name."""
    return str(exc) or type(exc).__name__


def classify_failure(exc: BaseException) -> Failure:
    """Convert a caught exception into its failure record.

    Parameters
    ----------
    exc:
        The exception raised by a handler.

    Returns
    -------
    Failure
        A ``WorkspaceFailure``, ``AggregateFailure`` or ``GenericFailure``.
    """
    if isinstance(exc, InvalidWorkspaceError):
        return WorkspaceFailure(messages=tuple(str(error) for error in exc.errors))
    if isinstance(exc, BaseExceptionGroup):
        return AggregateFailure(messages=tuple(_message_of(inner) for inner in exc.exceptions))
    return GenericFailure(message=_message_of(exc))


def report_failure(failure: Failure, channel: "Channel") -> None:
    """Write every line of ``failure`` to the channel's error stream, one per call."""
    for line in failure.lines():
        channel.stderr(line)
