from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core import ordering
from ..infra.locks import locked_production
from ..infra.logging import get_logger
from ..infra.repositories import SegmentRepository
from .segment_add import _arena, segment_to_dict
from .timing_show import show_timing

_log = get_logger(__name__)


def _apply_move(repo: SegmentRepository, production_id: int, segment_id: int, new_position: int) -> int:
    """Renumber the arena for one move; returns the old position."""
    order, current = _arena(repo, production_id)
    new_order = ordering.move(order, segment_id, new_position)
    repo.apply_positions(production_id, ordering.changed_positions(current, new_order))
    return current[segment_id]


def move_segment(db: Session, *, segment_id: int, new_position: int) -> dict[str, Any]:
    """Move a segment to ``new_position`` (1-based) within its production.

    The displaced range shifts by one in a single transaction.

    Raises:
        UnknownReferenceError: If the segment does not exist
        InvalidOrderingError: If new_position is outside [1, N]
    """
    repo = SegmentRepository(db)
    production_id = repo.get_segment(segment_id).production_id

    with locked_production(db, production_id):
        repo.lock_production(production_id)
        repo.get_segment(segment_id)
        old_position = _apply_move(repo, production_id, segment_id, new_position)
        db.commit()

    _log.info(
        "segment_moved",
        production_id=production_id,
        segment_id=segment_id,
        from_position=old_position,
        to_position=new_position,
    )
    return {
        "segment": segment_to_dict(repo.get_segment(segment_id)),
        "segments": [segment_to_dict(s) for s in repo.list_segments(production_id)],
        "timing": show_timing(db, production_id=production_id),
    }


__all__ = ["move_segment"]
