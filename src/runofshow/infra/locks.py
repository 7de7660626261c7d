"""Per-production writer locks.

Ordering moves and assignment copies are read-modify-write over every segment
of a production. One writer per production at a time; different productions
never contend.
"""

from __future__ import annotations

import contextlib
import threading
from collections.abc import Iterator

from sqlalchemy.orm import Session


class ProductionLocks:
    """Registry of one lock per production id. Thread-safe."""

    def __init__(self) -> None:
        self._locks: dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

    def lock_for(self, production_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(production_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[production_id] = lock
            return lock

    @contextlib.contextmanager
    def hold(self, production_id: int) -> Iterator[None]:
        lock = self.lock_for(production_id)
        with lock:
            yield


_registry = ProductionLocks()


def production_lock(production_id: int) -> contextlib.AbstractContextManager[None]:
    """Serialize writers of one production within this process."""
    return _registry.hold(production_id)


@contextlib.contextmanager
def locked_production(db: Session, production_id: int) -> Iterator[None]:
    """Hold the production's writer lock around a fresh transaction.

    The session's open transaction is rolled back before waiting, so a
    waiting writer holds no database lock. Callers re-read what they need
    inside the block.
    """
    db.rollback()
    with production_lock(production_id):
        yield
