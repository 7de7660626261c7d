from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core.assignments import Binding, baseline_bindings, segment_bindings
from ..infra.repositories import AssignmentRepository, SegmentRepository
from .assignment_list import describe_bindings
from .production_add import _resolve_production


def crew_overview(db: Session, *, production_id: int) -> list[dict[str, Any]]:
    """Every person with a binding in the production and all their positions.

    Production-wide bindings come first, then segment rows in running order.
    People are sorted by name.
    """
    _resolve_production(db, production_id)
    store = AssignmentRepository(db)
    segments = SegmentRepository(db).list_segments(production_id)
    segment_names = {s.id: s.name for s in segments}

    bindings: list[Binding] = baseline_bindings(store.production_bindings(production_id))
    for segment in segments:
        bindings.extend(segment_bindings(store.segment_assignments(segment.id), segment.id))

    crew: dict[int, dict[str, Any]] = {}
    for binding, item in zip(bindings, describe_bindings(db, bindings)):
        if binding.segment_id is not None:
            item["segment_name"] = segment_names.get(binding.segment_id)
        entry = crew.setdefault(
            binding.person_id,
            {"person_id": binding.person_id, "person_name": item["person_name"], "positions": []},
        )
        entry["positions"].append(item)

    return sorted(crew.values(), key=lambda c: ((c["person_name"] or "").casefold(), c["person_id"]))


__all__ = ["crew_overview"]
