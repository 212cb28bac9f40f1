"""Magic command module.

Exports the ``Magic`` base class, its documentation type, the registry and
the built-in magics.
"""
from __future__ import annotations

from magicline.magic.builtins import ArgsMagic, ConfigMagic, LsMagicMagic
from magicline.magic.magic import MAGIC_MARKER, Documentation, Magic, SymbolKind
from magicline.magic.registry import (
    ENTRYPOINT_GROUP,
    MagicAlreadyRegisteredError,
    MagicNotFoundError,
    MagicRegistry,
)

__all__ = [
    "MAGIC_MARKER",
    "Magic",
    "Documentation",
    "SymbolKind",
    "MagicRegistry",
    "MagicNotFoundError",
    "MagicAlreadyRegisteredError",
    "ENTRYPOINT_GROUP",
    "ArgsMagic",
    "ConfigMagic",
    "LsMagicMagic",
]
