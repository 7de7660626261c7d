from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..infra.locks import locked_production
from ..infra.logging import get_logger
from ..infra.repositories import SegmentRepository
from .segment_add import _validate_duration, _validate_name, segment_to_dict
from .segment_move import _apply_move
from .timing_show import show_timing

_log = get_logger(__name__)


def update_segment(
    db: Session,
    *,
    segment_id: int,
    name: str | None = None,
    duration_minutes: int | None = None,
    is_time_anchor: bool | None = None,
    position: int | None = None,
) -> dict[str, Any]:
    """Update a Segment and return a contract-aligned dict.

    Only provided fields change. Flagging the segment as anchor clears the
    flag on every other segment of the production. A new position moves the
    segment exactly like move_segment.

    Raises:
        UnknownReferenceError: If the segment does not exist
        ValidationError: If name or duration is invalid
        InvalidOrderingError: If position is outside [1, N]
    """
    cleaned = _validate_name(name) if name is not None else None
    if duration_minutes is not None:
        _validate_duration(duration_minutes)

    repo = SegmentRepository(db)
    production_id = repo.get_segment(segment_id).production_id
    changes: dict[str, Any] = {}

    with locked_production(db, production_id):
        repo.lock_production(production_id)
        segment = repo.get_segment(segment_id)

        if position is not None and position != segment.position:
            changes["position"] = {"from": segment.position, "to": position}
            _apply_move(repo, production_id, segment_id, position)

        if cleaned is not None and cleaned != segment.name:
            changes["name"] = {"from": segment.name, "to": cleaned}
            segment.name = cleaned

        if duration_minutes is not None and duration_minutes != segment.duration_minutes:
            changes["duration_minutes"] = {"from": segment.duration_minutes, "to": duration_minutes}
            segment.duration_minutes = duration_minutes

        if is_time_anchor is not None and is_time_anchor != segment.is_time_anchor:
            changes["is_time_anchor"] = {"from": segment.is_time_anchor, "to": is_time_anchor}
            if is_time_anchor:
                repo.clear_anchor(production_id, keep_segment_id=segment_id)
            segment.is_time_anchor = is_time_anchor

        db.commit()

    _log.info("segment_updated", production_id=production_id, segment_id=segment_id, changes=changes)
    return {
        "segment": segment_to_dict(repo.get_segment(segment_id)),
        "changes": changes,
        "timing": show_timing(db, production_id=production_id),
    }


__all__ = ["update_segment"]
