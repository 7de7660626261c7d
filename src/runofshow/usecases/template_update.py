from __future__ import annotations

from typing import Any

import pydantic
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.templates import normalize_template_name
from ..domain.entities import Position
from ..infra.exceptions import UnknownReferenceError, ValidationError
from ..infra.logging import get_logger
from ..infra.repositories import TemplateRepository
from ..shared.schemas import TemplateReplaceRequest
from .template_show import show_template

_log = get_logger(__name__)


def replace_template(
    db: Session,
    *,
    segment_name: str,
    positions: list[dict[str, int]],
) -> dict[str, Any]:
    """Replace every row of the template stored under ``segment_name``.

    Args:
        db: Database session
        segment_name: Template name; "Algemeen" addresses the global template
        positions: [{"position_id": ..., "order": ...}, ...]; empty clears it

    Raises:
        ValidationError: If the name or the order values are invalid
        UnknownReferenceError: If a position does not exist
    """
    try:
        request = TemplateReplaceRequest(segment_name=segment_name, positions=positions)
    except pydantic.ValidationError as e:
        raise ValidationError(e.errors()[0]["msg"].removeprefix("Value error, ")) from e

    key = normalize_template_name(request.segment_name)
    wanted = {entry.position_id for entry in request.positions}
    found = set(db.scalars(select(Position.id).where(Position.id.in_(wanted))))
    missing = sorted(wanted - found)
    if missing:
        raise UnknownReferenceError("position", missing[0])

    TemplateRepository(db).replace(key, [(e.position_id, e.order) for e in request.positions])
    db.commit()

    _log.info("template_replaced", segment_name=key, slots=len(request.positions))
    return show_template(db, segment_name=key)


__all__ = ["replace_template"]
