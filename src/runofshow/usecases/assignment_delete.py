from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..domain.entities import SegmentAssignment
from ..infra.exceptions import UnknownReferenceError
from ..infra.logging import get_logger

_log = get_logger(__name__)


def remove_segment_assignment(db: Session, *, segment_id: int, assignment_id: int) -> dict[str, Any]:
    """Delete one assignment row of a segment.

    Raises:
        UnknownReferenceError: If the row does not exist or belongs to another segment
    """
    row = db.get(SegmentAssignment, assignment_id)
    if row is None or row.segment_id != segment_id:
        raise UnknownReferenceError("assignment", assignment_id)

    db.delete(row)
    db.commit()

    _log.info("segment_assignment_removed", segment_id=segment_id, assignment_id=assignment_id)
    return {"status": "ok", "deleted": 1, "id": assignment_id}


__all__ = ["remove_segment_assignment"]
