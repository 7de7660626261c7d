from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..infra.repositories import SegmentRepository
from .production_add import _resolve_production
from .segment_add import segment_to_dict


def list_segments(db: Session, *, production_id: int) -> list[dict[str, Any]]:
    """Segments of a production in running order."""
    _resolve_production(db, production_id)
    return [segment_to_dict(s) for s in SegmentRepository(db).list_segments(production_id)]


def show_segment(db: Session, *, segment_id: int) -> dict[str, Any]:
    return segment_to_dict(SegmentRepository(db).get_segment(segment_id))


__all__ = ["list_segments", "show_segment"]
