"""Session module: routes raw magic lines to registered commands."""
from __future__ import annotations

from magicline.session.session import MagicSession, split_magic_line

__all__ = ["MagicSession", "split_magic_line"]
