"""Output channels that magic commands write to.

A channel exposes two operations, ``stdout`` and ``stderr``, each taking a
single message.  Hosts provide their own implementations; two are built in:

- ``ConsoleChannel`` writes to Rich consoles (used by the CLI);
- ``RecordingChannel`` keeps every message in memory.

``with_new_lines`` adapts any channel so that every message it receives is
newline-terminated.  The safe executor applies it once per invocation.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from rich.console import Console


@runtime_checkable
class Channel(Protocol):
    """Protocol for magic-command output channels.

    ``None`` is accepted as a message and writes nothing.
    """

    def stdout(self, message: str | None) -> None:
        """Write ``message`` to the normal output stream."""
        ...  # pragma: no cover

    def stderr(self, message: str | None) -> None:
        """Write ``message`` to the error stream."""
        ...  # pragma: no cover


class NewlineChannel:
    """Channel adapter that newline-terminates every message.

    Parameters
    ----------
    inner:
        The channel receiving the adapted messages.
    """

    def __init__(self, inner: Channel) -> None:
        self._inner = inner

    @property
    def inner(self) -> Channel:
        return self._inner

    @staticmethod
    def _terminate(message: str) -> str:
        return message if message.endswith("\n") else message + "\n"

    def stdout(self, message: str | None) -> None:
        if message is None:
            return
        self._inner.stdout(self._terminate(message))

    def stderr(self, message: str | None) -> None:
        if message is None:
            return
        self._inner.stderr(self._terminate(message))

    def __repr__(self) -> str:
        return f"NewlineChannel({self._inner!r})"


def with_new_lines(channel: Channel) -> Channel:
    """Return ``channel`` adapted to newline-terminate its messages.

    Already-adapted channels are returned unchanged.
    """
    if isinstance(channel, NewlineChannel):
        return channel
    return NewlineChannel(channel)


class ConsoleChannel:
    """Channel backed by Rich consoles.

    Messages are written verbatim: markup, emoji and highlighting are
    disabled, and no extra line ending is added.

    Parameters
    ----------
    console:
        Console for normal output.  Defaults to a stdout console.
    err_console:
        Console for errors.  Defaults to a stderr console.
    """

    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self._console = console if console is not None else Console()
        self._err_console = err_console if err_console is not None else Console(stderr=True)

    @staticmethod
    def _write(console: Console, message: str | None) -> None:
        if message is None:
            return
        console.print(message, end="", markup=False, emoji=False, highlight=False, soft_wrap=True)

    def stdout(self, message: str | None) -> None:
        self._write(self._console, message)

    def stderr(self, message: str | None) -> None:
        self._write(self._err_console, message)


class RecordingChannel:
    """Channel that stores every message in memory, in order."""

    def __init__(self) -> None:
        self.stdout_messages: list[str] = []
        self.stderr_messages: list[str] = []

    def stdout(self, message: str | None) -> None:
        if message is not None:
            self.stdout_messages.append(message)

    def stderr(self, message: str | None) -> None:
        if message is not None:
            self.stderr_messages.append(message)

    @property
    def stdout_text(self) -> str:
        return "".join(self.stdout_messages)

    @property
    def stderr_text(self) -> str:
        return "".join(self.stderr_messages)

    def __repr__(self) -> str:
        return (
            f"RecordingChannel(stdout={len(self.stdout_messages)}, "
            f"stderr={len(self.stderr_messages)})"
        )
