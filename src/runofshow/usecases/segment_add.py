from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core import ordering
from ..domain.entities import Segment
from ..infra.exceptions import InvalidOrderingError, ValidationError
from ..infra.locks import locked_production
from ..infra.logging import get_logger
from ..infra.repositories import SegmentRepository
from .timing_show import show_timing

_log = get_logger(__name__)


def _validate_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Segment name must not be empty")
    if len(cleaned) > 100:
        raise ValidationError("Segment name must be at most 100 characters")
    return cleaned


def _validate_duration(duration_minutes: int) -> int:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) or duration_minutes < 0:
        raise ValidationError(f"Duration must be a non-negative integer, got {duration_minutes!r}")
    return duration_minutes


def segment_to_dict(segment: Segment) -> dict[str, Any]:
    return {
        "id": segment.id,
        "production_id": segment.production_id,
        "name": segment.name,
        "position": segment.position,
        "duration_minutes": segment.duration_minutes,
        "is_time_anchor": segment.is_time_anchor,
    }


def _arena(repo: SegmentRepository, production_id: int) -> tuple[list[int], dict[int, int]]:
    """Running order and current positions, after checking they are contiguous."""
    segments = repo.list_segments(production_id)
    current = {s.id: s.position for s in segments}
    ordering.check_contiguous(current.values(), production_id=production_id)
    return [s.id for s in segments], current


def add_segment(
    db: Session,
    *,
    production_id: int,
    name: str,
    duration_minutes: int,
    position: int | None = None,
    is_time_anchor: bool = False,
) -> dict[str, Any]:
    """Create a Segment and return a contract-aligned dict.

    Args:
        db: Database session
        production_id: Owning production
        name: Segment name (free text, need not be unique)
        duration_minutes: Non-negative duration
        position: 1-based slot to insert at; None appends. Past the end appends.
        is_time_anchor: Make this the anchor; clears the flag elsewhere

    Returns:
        Dictionary with the created segment and the recomputed timing

    Raises:
        UnknownReferenceError: If the production does not exist
        ValidationError: If name or duration is invalid
        InvalidOrderingError: If position < 1 or the stored order is corrupt
    """
    cleaned = _validate_name(name)
    _validate_duration(duration_minutes)
    if position is not None and position < 1:
        raise InvalidOrderingError(f"Position must be >= 1, got {position}", production_id=production_id)

    repo = SegmentRepository(db)
    with locked_production(db, production_id):
        repo.lock_production(production_id)
        order, current = _arena(repo, production_id)

        if is_time_anchor:
            repo.clear_anchor(production_id)

        segment = repo.insert_segment(
            production_id,
            name=cleaned,
            duration_minutes=duration_minutes,
            is_time_anchor=is_time_anchor,
        )
        new_order = ordering.insert_at(order, segment.id, position)
        current[segment.id] = segment.position
        repo.apply_positions(production_id, ordering.changed_positions(current, new_order))
        db.commit()

    db.refresh(segment)
    _log.info(
        "segment_added",
        production_id=production_id,
        segment_id=segment.id,
        position=segment.position,
        is_time_anchor=segment.is_time_anchor,
    )
    return {
        "segment": segment_to_dict(segment),
        "timing": show_timing(db, production_id=production_id),
    }


__all__ = ["add_segment", "segment_to_dict"]
