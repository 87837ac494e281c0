"""Generic interaction registry — single source of truth for name → interaction.

One :class:`InteractionRegistry` is instantiated per interaction variant
(slash, message-context, user-context) by :mod:`bot.bootstrap`.

Design:
- Names are unique per registry.  Registering a duplicate raises
  :class:`core.exceptions.DuplicateNameError`; it is never a silent
  overwrite.
- Registration happens during single-threaded startup.  The bootstrap then
  calls :meth:`InteractionRegistry.seal`, after which the mapping is
  read-only and concurrent lookups need no locking.
- Lookups never raise: an unknown name is a normal outcome.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

from core.exceptions import DuplicateNameError, RegistrySealedError
from core.logger import SwitchboardLogger
from bot.interactions import Interaction

logger = SwitchboardLogger.get_logger()

I = TypeVar("I", bound=Interaction)  # noqa: E741


class InteractionRegistry(Generic[I]):
    """Name-keyed store of interactions, generic over the variant *I*.

    Usage::

        slash: InteractionRegistry[SlashCommand] = InteractionRegistry("slash")
        slash.register(ping)
        slash.seal()

        command = slash.get("ping")
    """

    def __init__(self, kind: str = "interaction") -> None:
        self.kind = kind
        self._entries: dict[str, I] = {}
        self._lock = threading.Lock()
        self._sealed = False

    # ── registration ─────────────────────────────────────────────────────

    def register(self, interaction: I) -> I:
        """Insert *interaction* under its name and return it.

        Raises:
            DuplicateNameError: If the name is already registered.
            RegistrySealedError: If :meth:`seal` has been called.
        """
        name = interaction.name
        with self._lock:
            if self._sealed:
                raise RegistrySealedError(name)
            if name in self._entries:
                logger.critical(
                    "Duplicate interaction name",
                    extra={"registry": self.kind, "interaction": name},
                )
                raise DuplicateNameError(name)
            self._entries[name] = interaction

        logger.info("Registered interaction", extra={"registry": self.kind, "interaction": name})
        return interaction

    def register_all(self, interactions: Iterable[I]) -> None:
        for interaction in interactions:
            self.register(interaction)

    def seal(self) -> None:
        """Forbid any further registration."""
        with self._lock:
            self._sealed = True
        logger.debug("Registry sealed", extra={"registry": self.kind, "count": len(self._entries)})

    @property
    def sealed(self) -> bool:
        return self._sealed

    # ── lookup helpers ───────────────────────────────────────────────────

    def get(self, name: str) -> I | None:
        """Return the interaction registered as *name*, or ``None``."""
        return self._entries.get(name)

    lookup = get

    def entries(self) -> dict[str, I]:
        """Return a *read-only* view of all registered interactions."""
        return dict(self._entries)

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[I]:
        return iter(list(self._entries.values()))
