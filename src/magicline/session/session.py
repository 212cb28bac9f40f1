"""A minimal host that routes magic lines to registered commands.

``MagicSession`` owns a ``MagicRegistry`` seeded with the built-in magics
(and, optionally, entry-point magics) plus the settings edited by
``%config``.  ``run_line`` splits ``%keyword remainder``, looks the keyword
up and awaits the magic's safe ``execute``; the remainder is handed to the
command untouched.

Usage
-----
::

    import asyncio
    from magicline.channel import ConsoleChannel
    from magicline.session import MagicSession

    session = MagicSession()
    result = asyncio.run(session.run_line("%args Foo shots=10", ConsoleChannel()))
"""
from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from magicline.channel.channel import with_new_lines
from magicline.config import SessionConfig
from magicline.execution import ExecutionResult
from magicline.magic.builtins import ArgsMagic, ConfigMagic, LsMagicMagic
from magicline.magic.magic import MAGIC_MARKER
from magicline.magic.registry import MagicNotFoundError, MagicRegistry

if TYPE_CHECKING:
    from magicline.channel.channel import Channel

logger = logging.getLogger(__name__)

_MAGIC_LINE = re.compile(rf"^\s*{re.escape(MAGIC_MARKER)}(?P<keyword>\S+)(?:\s+(?P<rest>.*))?$", re.DOTALL)


def split_magic_line(line: str) -> tuple[str, str] | None:
    """Split a magic line into ``(keyword, remainder)``.

    Returns ``None`` when ``line`` does not start with the magic marker
    followed by a keyword.

    Example
    -------
    ::

        >>> split_magic_line('%simulate Foo shots=10')
        ('simulate', 'Foo shots=10')
    """
    match = _MAGIC_LINE.match(line)
    if match is None:
        return None
    return match.group("keyword"), match.group("rest") or ""


class MagicSession:
    """Registry of magics plus session settings, with line dispatch.

    Parameters
    ----------
    config:
        Session configuration; defaults to ``SessionConfig()``.
    registry:
        Registry to use.  A new one is created when omitted.  Built-in
        magics are added unless their keyword is already taken.
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        registry: MagicRegistry | None = None,
    ) -> None:
        self.config: SessionConfig = config if config is not None else SessionConfig()
        self.registry: MagicRegistry = registry if registry is not None else MagicRegistry()
        self.settings: dict[str, Any] = dict(self.config.settings)

        for magic in (LsMagicMagic(self.registry), ArgsMagic(), ConfigMagic(self.settings)):
            if magic.keyword not in self.registry:
                self.registry.register(magic)
        if self.config.load_entrypoints:
            self.registry.load_entrypoints()

    async def run_line(self, line: str, channel: "Channel") -> ExecutionResult:
        """Dispatch one raw line and return the command's result.

        Lines that are not magic commands, or name an unknown magic, are
        reported on the channel's error stream and yield an error result.
        """
        parts = split_magic_line(line)
        if parts is None:
            with_new_lines(channel).stderr(
                f"Expected a magic command starting with {MAGIC_MARKER!r}, got {line.strip()!r}"
            )
            return ExecutionResult.error()

        keyword, remainder = parts
        try:
            magic = self.registry.get(keyword)
        except MagicNotFoundError as exc:
            with_new_lines(channel).stderr(str(exc))
            return ExecutionResult.error()

        logger.debug("Dispatching %s with input %r", magic.name, remainder)
        return await magic.execute(remainder, channel)
