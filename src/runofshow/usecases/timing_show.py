from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..core.timeline import NoAnchorConfigured, compute_timeline, format_instant, with_live_marker
from ..infra.repositories import AnchorRepository, SegmentRepository
from .production_add import _resolve_production


def show_timing(db: Session, *, production_id: int, include_live: bool = True) -> dict[str, Any]:
    """Wall-clock timing of every segment of a production.

    Returns status "ok" with one entry per segment, or status "no_anchor"
    with a reason when the timeline cannot be placed on the clock yet.
    With ``include_live`` a zero-length livestream start marker is merged in
    when the production has a live time.
    """
    production = _resolve_production(db, production_id)
    segments = SegmentRepository(db).list_segments(production_id)
    anchor = AnchorRepository(db).anchor_for(production_id)

    result = compute_timeline(segments, anchor.instant if anchor else None)
    if isinstance(result, NoAnchorConfigured):
        return {
            "status": "no_anchor",
            "production_id": production_id,
            "reason": result.reason.value,
            "message": result.message,
        }

    entries = with_live_marker(result, production.live_time) if include_live else list(result.entries)
    return {
        "status": "ok",
        "production_id": production_id,
        "anchor_segment_id": result.anchor_segment_id,
        "starts_at": format_instant(result.starts_at) if result.starts_at else None,
        "ends_at": format_instant(result.ends_at) if result.ends_at else None,
        "total_minutes": int(result.total_duration.total_seconds() // 60),
        "segments": [entry.to_dict() for entry in entries],
    }


__all__ = ["show_timing"]
