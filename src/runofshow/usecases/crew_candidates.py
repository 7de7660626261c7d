from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core.eligibility import eligible_crew
from ..domain.entities import Position
from ..infra.repositories import CrewRosterRepository, SegmentRepository, get_or_raise


def list_candidates(db: Session, *, segment_id: int, position_id: int) -> dict[str, Any]:
    """Crew of the segment's production who can fill a position.

    Without a required skill on the position the whole roster is returned.
    This list feeds pickers; existing assignments are never checked against it.

    Raises:
        UnknownReferenceError: If the segment or position does not exist
    """
    segment = SegmentRepository(db).get_segment(segment_id)
    position: Position = get_or_raise(db, Position, position_id, "position")
    crew = CrewRosterRepository(db).crew_for(segment.production_id)
    return {
        "segment_id": segment.id,
        "position_id": position.id,
        "required_skill_id": position.skill_id,
        "candidates": [m.to_dict() for m in eligible_crew(position.skill_id, crew)],
    }


__all__ = ["list_candidates"]
