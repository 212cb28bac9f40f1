"""Magic command registry.

Maps keywords to ``Magic`` instances.  Third-party packages contribute
magics by declaring entry-points in the ``magicline.magics`` group; each
entry-point must name a ``Magic`` subclass constructible without
arguments.

Example
-------
::

    from magicline.magic import MagicRegistry

    registry = MagicRegistry()
    registry.register(SimulateMagic())
    registry.load_entrypoints()

    magic = registry.get("simulate")
    result = await magic.execute("Foo shots=10", channel)
"""
from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Iterator
from typing import Final

from magicline.magic.magic import Magic

logger = logging.getLogger(__name__)

ENTRYPOINT_GROUP: Final[str] = "magicline.magics"


class MagicNotFoundError(KeyError):
    """Raised when no magic is registered under the requested keyword."""

    def __init__(self, keyword: str) -> None:
        self.keyword = keyword
        super().__init__(
            f"No magic registered for keyword {keyword!r}. "
            "Use %lsmagic to list the available commands."
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class MagicAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a keyword that already exists."""

    def __init__(self, keyword: str) -> None:
        self.keyword = keyword
        super().__init__(
            f"A magic is already registered for keyword {keyword!r}. "
            "Deregister the existing entry first."
        )


class MagicRegistry:
    """Keyword-indexed collection of ``Magic`` instances."""

    def __init__(self) -> None:
        self._magics: dict[str, Magic] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, magic: Magic) -> Magic:
        """Register ``magic`` under its keyword and return it.

        Raises
        ------
        MagicAlreadyRegisteredError
            If the keyword is already in use.
        TypeError
            If ``magic`` is not a ``Magic`` instance.
        """
        if not isinstance(magic, Magic):
            raise TypeError(f"Cannot register {magic!r}: it must be a Magic instance.")
        if magic.keyword in self._magics:
            raise MagicAlreadyRegisteredError(magic.keyword)
        self._magics[magic.keyword] = magic
        logger.debug("Registered magic %s -> %s", magic.name, type(magic).__qualname__)
        return magic

    def deregister(self, keyword: str) -> None:
        """Remove the magic registered under ``keyword``.

        Raises
        ------
        MagicNotFoundError
            If ``keyword`` is not registered.
        """
        if keyword not in self._magics:
            raise MagicNotFoundError(keyword)
        del self._magics[keyword]
        logger.debug("Deregistered magic %r", keyword)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, keyword: str) -> Magic:
        """Return the magic registered under ``keyword``.

        Raises
        ------
        MagicNotFoundError
            If no magic is registered under ``keyword``.
        """
        try:
            return self._magics[keyword]
        except KeyError:
            raise MagicNotFoundError(keyword) from None

    def list_magics(self) -> list[str]:
        """Return all registered keywords in alphabetical order."""
        return sorted(self._magics)

    def __iter__(self) -> Iterator[Magic]:
        return iter([self._magics[k] for k in self.list_magics()])

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._magics

    def __len__(self) -> int:
        return len(self._magics)

    def __repr__(self) -> str:
        return f"MagicRegistry(magics={self.list_magics()})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = ENTRYPOINT_GROUP) -> None:
        """Instantiate and register magics declared as package entry-points.

        Entry-points whose name is already registered are skipped, so
        repeated calls are idempotent.  Entry-points that fail to load or
        instantiate are logged and skipped.

        Parameters
        ----------
        group:
            The entry-point group name.

        Example
        -------
        In a downstream package's ``pyproject.toml``::

            [project.entry-points."magicline.magics"]
            simulate = "my_package.magics:SimulateMagic"
        """
        for ep in importlib.metadata.entry_points(group=group):
            if ep.name in self._magics:
                logger.debug("Entry-point %r already registered; skipping.", ep.name)
                continue
            try:
                cls = ep.load()
                magic = cls()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            try:
                self.register(magic)
            except (MagicAlreadyRegisteredError, TypeError):
                logger.warning(
                    "Entry-point %r loaded but could not be registered; skipping.",
                    ep.name,
                )
