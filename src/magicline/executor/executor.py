"""Safe execution wrapper for magic-command handlers.

``safe_execute`` turns a handler ``(input, channel) -> ExecutionResult``
into an async function with the same arguments that never raises:

1. the channel is adapted once with :func:`~magicline.channel.with_new_lines`;
2. the handler is called (and awaited, if it returns an awaitable);
3. a normal result is passed through unchanged;
4. an exception is classified, reported line by line on the channel's
   error stream, and replaced by an error result with no payload.

The wrapper holds no state between calls, so the same wrapped function
may be awaited by several concurrent invocations.  ``SystemExit`` raised
by a handler is reported like any other failure.  ``KeyboardInterrupt``
and task cancellation are left to the host.  If the failure cannot be
reported (for example because the channel itself raises), the problem is
logged and the error result is still returned.

Usage
-----
::

    from magicline.executor import safe_execute

    def run(input_text, channel):
        channel.stdout(f"got {input_text!r}")
        return ExecutionResult.ok()

    execute = safe_execute(run)
    result = await execute("foo=1", channel)
"""
from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Union

from magicline.channel.channel import Channel, with_new_lines
from magicline.execution import ExecutionResult
from magicline.executor.failures import classify_failure, report_failure

logger = logging.getLogger(__name__)

Handler = Callable[[str, Channel], Union[ExecutionResult, Awaitable[ExecutionResult]]]
SafeHandler = Callable[[str, Channel], Awaitable[ExecutionResult]]


def safe_execute(handler: Handler) -> SafeHandler:
    """Wrap ``handler`` so that failures are reported instead of raised.

    Parameters
    ----------
    handler:
        A synchronous or asynchronous callable taking the remaining input
        text and an output channel, returning an ``ExecutionResult``.

    Returns
    -------
    SafeHandler
        An async callable with the same arguments that always returns an
        ``ExecutionResult``.
    """

    @functools.wraps(handler)
    async def execute(input_text: str, channel: Channel) -> ExecutionResult:
        channel = with_new_lines(channel)
        try:
            result = handler(input_text, channel)
            if inspect.isawaitable(result):
                result = await result
            return result
        except (Exception, SystemExit, BaseExceptionGroup) as exc:
            _report(handler, exc, channel)
            return ExecutionResult.error()

    return execute


def _report(handler: Handler, exc: BaseException, channel: Channel) -> None:
    """Classify ``exc`` and write it to ``channel``; never raises."""
    name = getattr(handler, "__qualname__", repr(handler))
    try:
        failure = classify_failure(exc)
        logger.debug(
            "Handler %s failed (%s): %s",
            name,
            failure.kind.name,
            exc,
            exc_info=exc,
        )
        report_failure(failure, channel)
    except Exception:
        logger.exception("Could not report the failure of handler %s", name)


class SafeExecutor:
    """Decorator object equivalent of :func:`safe_execute`.

    Parameters
    ----------
    handler:
        The handler to protect.

    Example
    -------
    ::

        @SafeExecutor
        def run(input_text, channel):
            ...

        result = await run("", channel)
    """

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self._execute = safe_execute(handler)
        functools.update_wrapper(self, handler)

    @property
    def handler(self) -> Handler:
        return self._handler

    async def __call__(self, input_text: str, channel: Channel) -> ExecutionResult:
        return await self._execute(input_text, channel)
