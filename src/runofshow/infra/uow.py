"""
Unit of Work boundary for runofshow. All transactional changes go through this.

Ordering renumbering and assignment copies are multi-row writes; they are
only atomic because the whole operation runs inside one session() block.
"""

from __future__ import annotations

import contextlib
from collections.abc import Generator

from sqlalchemy.orm import Session

from . import db as _db


@contextlib.contextmanager
def session() -> Generator[Session, None, None]:
    """
    Database session context manager for CLI operations and batch jobs.

    Provides Unit of Work semantics:
    - Opens a DB session
    - Yields it for use
    - On success: commits the transaction
    - On exception: rolls back and re-raises the exception
    - Always closes the session

    Usage:
        with session() as db:
            move_segment(db, segment_id=3, new_position=1)
    """
    db = _db.SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
