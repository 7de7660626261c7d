from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core.templates import (
    GLOBAL_SEGMENT_NAME,
    display_template_name,
    normalize_template_name,
    resolve_default_positions,
    sort_template,
)
from ..infra.repositories import SegmentRepository, TemplateRepository


def show_default_positions(db: Session, *, segment_id: int) -> dict[str, Any]:
    """Expected positions for a segment, resolved from its name."""
    segment = SegmentRepository(db).get_segment(segment_id)
    templates = TemplateRepository(db)
    positions = resolve_default_positions(segment.name, templates.rows_for)
    return {
        "segment_id": segment.id,
        "segment_name": segment.name,
        "positions": [p.to_dict() for p in positions],
    }


def show_template(db: Session, *, segment_name: str) -> dict[str, Any]:
    """Rows stored under exactly this template name, without fallback."""
    key = normalize_template_name(segment_name)
    rows = sort_template(TemplateRepository(db).rows_for(key))
    return {
        "segment_name": display_template_name(key),
        "positions": [r.to_dict() for r in rows],
    }


def list_template_names(db: Session) -> dict[str, Any]:
    names = TemplateRepository(db).names()
    return {
        "items": [display_template_name(n) for n in names],
        "has_global": GLOBAL_SEGMENT_NAME in names,
    }


__all__ = ["list_template_names", "show_default_positions", "show_template"]
