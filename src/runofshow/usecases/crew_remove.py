from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from ..domain.entities import ProductionPersonPosition
from ..infra.exceptions import UnknownReferenceError
from ..infra.logging import get_logger

_log = get_logger(__name__)


def remove_person_position(db: Session, *, production_id: int, binding_id: int) -> dict[str, Any]:
    """Delete a production-wide binding.

    Segment rows are left alone; they are a separate layer.

    Raises:
        UnknownReferenceError: If the binding does not exist in this production
    """
    row = db.get(ProductionPersonPosition, binding_id)
    if row is None or row.production_id != production_id:
        raise UnknownReferenceError("person-position", binding_id)

    db.delete(row)
    db.commit()

    _log.info("person_position_removed", production_id=production_id, binding_id=binding_id)
    return {"status": "ok", "deleted": 1, "id": binding_id}


__all__ = ["remove_person_position"]
