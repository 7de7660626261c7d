from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core import ordering
from ..infra.locks import locked_production
from ..infra.logging import get_logger
from ..infra.repositories import SegmentRepository
from .segment_add import _arena
from .timing_show import show_timing

_log = get_logger(__name__)


def delete_segment(db: Session, *, segment_id: int) -> dict[str, Any]:
    """Delete a Segment with its assignments and close the gap it leaves.

    Args:
        db: Database session
        segment_id: Segment to delete

    Returns:
        Dictionary with status, deleted id, and the recomputed timing

    Raises:
        UnknownReferenceError: If the segment does not exist
    """
    repo = SegmentRepository(db)
    production_id = repo.get_segment(segment_id).production_id

    with locked_production(db, production_id):
        repo.lock_production(production_id)
        segment = repo.get_segment(segment_id)
        order, current = _arena(repo, production_id)
        new_order = ordering.remove(order, segment_id)
        del current[segment_id]

        repo.delete_segment(segment)
        repo.apply_positions(production_id, ordering.changed_positions(current, new_order))
        db.commit()

    _log.info("segment_deleted", production_id=production_id, segment_id=segment_id)
    return {
        "status": "ok",
        "deleted": 1,
        "id": segment_id,
        "timing": show_timing(db, production_id=production_id),
    }


__all__ = ["delete_segment"]
