from __future__ import annotations

import logging
from contextlib import suppress
from threading import RLock
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Signal(Generic[T]):
    """
    Synchronous publish/subscribe channel.
    Slots run on the emitting thread in the order they connected; an exception
    from a slot propagates to the emitter, except ReferenceError from a weak
    proxy whose target is gone, which drops that slot.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._slots: list[Callable[[T], None]] = []
        self._guard = RLock()

    def connect(self, slot: Callable[[T], None]) -> None:
        with self._guard:
            if slot not in self._slots:
                self._slots.append(slot)

    def disconnect(self, slot: Callable[[T], None]) -> None:
        with self._guard, suppress(ValueError):
            self._slots.remove(slot)

    def subscriber_count(self) -> int:
        with self._guard:
            return len(self._slots)

    def emit(self, payload: T) -> None:
        with self._guard:
            slots = tuple(self._slots)
        dead = [slot for slot in slots if not self._deliver(slot, payload)]
        if dead:
            logger.debug("Signal %s: dropping %d dead slot(s)", self.name, len(dead))
            for slot in dead:
                self.disconnect(slot)

    @staticmethod
    def _deliver(slot: Callable[[T], None], payload: T) -> bool:
        try:
            slot(payload)
        except ReferenceError:
            return False
        return True


__all__ = ["Signal"]
