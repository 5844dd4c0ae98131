"""Ordered extent of live entities for one family."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry(Generic[T]):
    """Append-only list of entities, replaced wholesale by a load.

    The registry neither validates nor numbers entities; constructors do both
    and call ``_register`` as their final step.
    """

    def __init__(self, family: str) -> None:
        self.family = family
        self._entities: list[T] = []
        self._clear_listeners: list[Callable[[tuple[T, ...]], None]] = []

    def _register(self, entity: T) -> None:
        self._entities.append(entity)
        logger.debug("Registered %s #%d: %r", self.family, len(self._entities), entity)

    def _clear(self) -> None:
        """Drop every entity. Only the load path calls this."""
        dropped = tuple(self._entities)
        self._entities.clear()
        for listener in self._clear_listeners:
            listener(dropped)
        if dropped:
            logger.debug("Cleared %d %s entities", len(dropped), self.family)

    def on_clear(self, listener: Callable[[tuple[T, ...]], None]) -> None:
        """Call ``listener`` with the dropped entities whenever the registry clears."""
        self._clear_listeners.append(listener)

    def all(self) -> tuple[T, ...]:
        """Snapshot in registration order."""
        return tuple(self._entities)

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return any(e is entity for e in self._entities)

    def __repr__(self) -> str:
        return f"Registry({self.family!r}, {len(self)} entities)"
