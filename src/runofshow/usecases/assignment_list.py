from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.assignments import Binding, baseline_bindings, effective_bindings, segment_bindings
from ..domain.entities import Person, Position
from ..infra.repositories import AssignmentRepository, SegmentRepository


def _names(db: Session, model: type, ids: set[int]) -> dict[int, str]:
    if not ids:
        return {}
    return dict(db.execute(select(model.id, model.name).where(model.id.in_(ids))).all())


def describe_bindings(db: Session, bindings: list[Binding]) -> list[dict[str, Any]]:
    """Bindings as dicts with person and position names attached."""
    people = _names(db, Person, {b.person_id for b in bindings})
    positions = _names(db, Position, {b.position_id for b in bindings})
    items = []
    for binding in bindings:
        item = binding.to_dict()
        item["person_name"] = people.get(binding.person_id)
        item["position_name"] = positions.get(binding.position_id)
        items.append(item)
    return items


def effective_for_segment(db: Session, segment_id: int) -> list[Binding]:
    segment = SegmentRepository(db).get_segment(segment_id)
    store = AssignmentRepository(db)
    return effective_bindings(
        baseline_bindings(store.production_bindings(segment.production_id)),
        segment_bindings(store.segment_assignments(segment.id), segment.id),
    )


def list_effective_assignments(db: Session, *, segment_id: int) -> dict[str, Any]:
    """Who plays which position in a segment: production-wide bindings plus segment rows.

    Raises:
        UnknownReferenceError: If the segment does not exist
    """
    return {
        "segment_id": segment_id,
        "assignments": describe_bindings(db, effective_for_segment(db, segment_id)),
    }


__all__ = ["describe_bindings", "effective_for_segment", "list_effective_assignments"]
