from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from ..core.timeline import ensure_aware, format_instant
from ..domain.entities import Production
from ..infra.exceptions import UnknownReferenceError, ValidationError
from ..infra.logging import get_logger
from ..infra.settings import settings

_log = get_logger(__name__)


def _resolve_production(db: Session, production_id: int) -> Production:
    """Resolve production by id.

    Raises UnknownReferenceError if production not found.
    """
    production = db.get(Production, production_id)
    if production is None:
        raise UnknownReferenceError("production", production_id)
    return production


def _parse_instant(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 instant and normalize it to UTC.

    Naive values are read in the display timezone, since that is what an
    operator types ("2025-03-01T20:00" means kickoff on the local clock).
    Raises ValidationError on malformed input.
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as e:
            raise ValidationError(f"Invalid datetime format. Use ISO-8601: {e}") from e
        if value.tzinfo is None:
            value = value.replace(tzinfo=ZoneInfo(settings.display_timezone))
    return ensure_aware(value).astimezone(UTC)


def _format_datetime(dt: datetime | None) -> str | None:
    return format_instant(dt) if dt is not None else None


def production_to_dict(production: Production) -> dict[str, Any]:
    return {
        "id": production.id,
        "name": production.name,
        "anchor_time": _format_datetime(production.anchor_time),
        "live_time": _format_datetime(production.live_time),
    }


def add_production(
    db: Session,
    *,
    name: str,
    anchor_time: str | datetime | None = None,
    live_time: str | datetime | None = None,
) -> dict[str, Any]:
    """Create a Production and return a contract-aligned dict.

    Args:
        db: Database session
        name: Production name, usually the match ("Fortuna - PKC")
        anchor_time: Start of the anchor segment (match kickoff), ISO-8601
        live_time: Moment the livestream goes on air, ISO-8601

    Raises:
        ValidationError: If name is empty or a datetime is malformed
    """
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Production name must not be empty")

    production = Production(
        name=cleaned,
        anchor_time=_parse_instant(anchor_time),
        live_time=_parse_instant(live_time),
    )
    db.add(production)
    db.commit()
    db.refresh(production)
    _log.info("production_added", production_id=production.id, name=production.name)
    return production_to_dict(production)


def update_production_times(
    db: Session,
    *,
    production_id: int,
    anchor_time: str | datetime | None = None,
    live_time: str | datetime | None = None,
    clear_anchor_time: bool = False,
    clear_live_time: bool = False,
) -> dict[str, Any]:
    """Set or clear the anchor instant and live time of a production."""
    production = _resolve_production(db, production_id)

    if clear_anchor_time:
        production.anchor_time = None
    elif anchor_time is not None:
        production.anchor_time = _parse_instant(anchor_time)

    if clear_live_time:
        production.live_time = None
    elif live_time is not None:
        production.live_time = _parse_instant(live_time)

    db.commit()
    db.refresh(production)
    _log.info(
        "production_times_updated",
        production_id=production.id,
        anchor_time=_format_datetime(production.anchor_time),
        live_time=_format_datetime(production.live_time),
    )
    return production_to_dict(production)


def show_production(db: Session, *, production_id: int) -> dict[str, Any]:
    return production_to_dict(_resolve_production(db, production_id))


__all__ = ["add_production", "show_production", "update_production_times"]
