"""Unit tests for magicline.channel and magicline.execution."""
from __future__ import annotations

import io

import pytest
from rich.console import Console

from magicline.channel import (
    Channel,
    ConsoleChannel,
    NewlineChannel,
    RecordingChannel,
    with_new_lines,
)
from magicline.execution import ExecuteStatus, ExecutionResult


def _console(buffer: io.StringIO) -> Console:
    return Console(file=buffer, force_terminal=False, color_system=None, width=200)


# ---------------------------------------------------------------------------
# NewlineChannel / with_new_lines
# ---------------------------------------------------------------------------


class TestWithNewLines:
    def test_appends_newline(self, channel: RecordingChannel) -> None:
        adapted = with_new_lines(channel)
        adapted.stdout("out")
        adapted.stderr("err")
        assert channel.stdout_messages == ["out\n"]
        assert channel.stderr_messages == ["err\n"]

    def test_does_not_double_terminate(self, channel: RecordingChannel) -> None:
        with_new_lines(channel).stdout("line\n")
        assert channel.stdout_messages == ["line\n"]

    def test_empty_message_becomes_blank_line(self, channel: RecordingChannel) -> None:
        with_new_lines(channel).stderr("")
        assert channel.stderr_messages == ["\n"]

    def test_none_writes_nothing(self, channel: RecordingChannel) -> None:
        adapted = with_new_lines(channel)
        adapted.stdout(None)
        adapted.stderr(None)
        assert channel.stdout_messages == []
        assert channel.stderr_messages == []

    def test_is_idempotent(self, channel: RecordingChannel) -> None:
        adapted = with_new_lines(channel)
        assert with_new_lines(adapted) is adapted
        assert isinstance(adapted, NewlineChannel)
        assert adapted.inner is channel


# ---------------------------------------------------------------------------
# Built-in channels
# ---------------------------------------------------------------------------


class TestRecordingChannel:
    def test_records_in_order(self) -> None:
        channel = RecordingChannel()
        channel.stdout("a")
        channel.stdout("b")
        channel.stderr("c")
        assert channel.stdout_text == "ab"
        assert channel.stderr_text == "c"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(RecordingChannel(), Channel)
        assert isinstance(NewlineChannel(RecordingChannel()), Channel)


class TestConsoleChannel:
    def test_writes_verbatim_to_consoles(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        channel = ConsoleChannel(console=_console(out), err_console=_console(err))
        with_new_lines(channel).stdout("[bold]not markup[/bold]")
        channel.stderr("oops\n")
        assert out.getvalue() == "[bold]not markup[/bold]\n"
        assert err.getvalue() == "oops\n"

    def test_none_writes_nothing(self) -> None:
        out = io.StringIO()
        channel = ConsoleChannel(console=_console(out), err_console=_console(io.StringIO()))
        channel.stdout(None)
        assert out.getvalue() == ""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(ConsoleChannel(), Channel)


# ---------------------------------------------------------------------------
# ExecutionResult
# ---------------------------------------------------------------------------


class TestExecutionResult:
    def test_ok(self) -> None:
        result = ExecutionResult.ok([1, 2])
        assert result.is_ok and not result.is_error
        assert result.output == [1, 2]

    def test_error_has_no_payload(self) -> None:
        result = ExecutionResult.error()
        assert result.is_error
        assert result.output is None

    def test_status_to_result(self) -> None:
        assert ExecuteStatus.ABORT.to_execution_result() == ExecutionResult(ExecuteStatus.ABORT)

    def test_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            ExecutionResult.ok().output = 1  # type: ignore[misc]
