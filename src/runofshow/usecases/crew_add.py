from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..domain.entities import Person, Position, ProductionPerson, ProductionPersonPosition
from ..infra.exceptions import ValidationError
from ..infra.logging import get_logger
from ..infra.repositories import get_or_raise
from .production_add import _resolve_production

_log = get_logger(__name__)


def attach_person(db: Session, *, production_id: int, person_id: int) -> dict[str, Any]:
    """Put a person on the crew roster of a production. Idempotent.

    Raises:
        UnknownReferenceError: If the production or person does not exist
    """
    _resolve_production(db, production_id)
    get_or_raise(db, Person, person_id, "person")

    existing = db.get(ProductionPerson, (production_id, person_id))
    if existing is None:
        db.add(ProductionPerson(production_id=production_id, person_id=person_id))
        db.commit()
        _log.info("crew_member_attached", production_id=production_id, person_id=person_id)
    return {"production_id": production_id, "person_id": person_id, "attached": existing is None}


def add_person_position(
    db: Session, *, production_id: int, person_id: int, position_id: int
) -> dict[str, Any]:
    """Bind a person to a position for the whole production.

    Raises:
        UnknownReferenceError: If production, person, or position does not exist
        ValidationError: If the binding already exists
    """
    _resolve_production(db, production_id)
    get_or_raise(db, Person, person_id, "person")
    get_or_raise(db, Position, position_id, "position")

    duplicate = db.scalars(
        select(ProductionPersonPosition.id).where(
            ProductionPersonPosition.production_id == production_id,
            ProductionPersonPosition.person_id == person_id,
            ProductionPersonPosition.position_id == position_id,
        )
    ).first()
    if duplicate is not None:
        raise ValidationError("Duplicate production-wide assignment")

    row = ProductionPersonPosition(
        production_id=production_id, person_id=person_id, position_id=position_id
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    _log.info(
        "person_position_added",
        production_id=production_id,
        person_id=person_id,
        position_id=position_id,
    )
    return {
        "id": row.id,
        "production_id": row.production_id,
        "person_id": row.person_id,
        "position_id": row.position_id,
    }


__all__ = ["add_person_position", "attach_person"]
