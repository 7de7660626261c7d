from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..domain.entities import Person, Position, SegmentAssignment
from ..infra.logging import get_logger
from ..infra.repositories import SegmentRepository, get_or_raise

_log = get_logger(__name__)


def assignment_to_dict(row: SegmentAssignment) -> dict[str, Any]:
    return {
        "id": row.id,
        "segment_id": row.segment_id,
        "person_id": row.person_id,
        "position_id": row.position_id,
    }


def add_segment_assignment(
    db: Session,
    *,
    segment_id: int,
    person_id: int,
    position_id: int,
) -> dict[str, Any]:
    """Bind a person to a position for one segment.

    Skill requirements are advisory and not checked here; a second person on
    the same position of the same segment is accepted.

    Raises:
        UnknownReferenceError: If segment, person, or position does not exist
    """
    SegmentRepository(db).get_segment(segment_id)
    get_or_raise(db, Person, person_id, "person")
    get_or_raise(db, Position, position_id, "position")

    row = SegmentAssignment(segment_id=segment_id, person_id=person_id, position_id=position_id)
    db.add(row)
    db.commit()
    db.refresh(row)

    _log.info(
        "segment_assignment_added",
        segment_id=segment_id,
        person_id=person_id,
        position_id=position_id,
        assignment_id=row.id,
    )
    return assignment_to_dict(row)


__all__ = ["add_segment_assignment", "assignment_to_dict"]
