"""Output channel module."""
from __future__ import annotations

from magicline.channel.channel import (
    Channel,
    ConsoleChannel,
    NewlineChannel,
    RecordingChannel,
    with_new_lines,
)

__all__ = [
    "Channel",
    "ConsoleChannel",
    "NewlineChannel",
    "RecordingChannel",
    "with_new_lines",
]
