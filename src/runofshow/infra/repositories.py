"""
SQLAlchemy repositories for run-of-show data.

Thin wrappers around session operations, one per store interface in
``runofshow.domain.interfaces``. Repositories flush but never commit; the
unit of work owns the transaction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, selectinload

from ..core.eligibility import CrewMember
from ..core.templates import ExpectedPosition
from ..domain.entities import (
    Person,
    Position,
    Production,
    ProductionPerson,
    ProductionPersonPosition,
    Segment,
    SegmentAssignment,
    SegmentDefaultPosition,
)
from ..domain.interfaces import AnchorTime
from .exceptions import UnknownReferenceError


def get_or_raise(db: Session, model: type, ref_id: int, kind: str):
    """Load a row by primary key or raise UnknownReferenceError."""
    row = db.get(model, ref_id)
    if row is None:
        raise UnknownReferenceError(kind, ref_id)
    return row


class SegmentRepository:
    """Segment rows of one production, treated as a single ordered arena."""

    def __init__(self, db: Session):
        self.db = db

    def lock_production(self, production_id: int) -> Production:
        stmt = select(Production).where(Production.id == production_id).with_for_update()
        production = self.db.scalars(stmt).one_or_none()
        if production is None:
            raise UnknownReferenceError("production", production_id)
        return production

    def list_segments(self, production_id: int) -> list[Segment]:
        stmt = (
            select(Segment)
            .where(Segment.production_id == production_id)
            .order_by(Segment.position, Segment.id)
        )
        return list(self.db.scalars(stmt))

    def get_segment(self, segment_id: int) -> Segment:
        return get_or_raise(self.db, Segment, segment_id, "segment")

    def insert_segment(
        self, production_id: int, *, name: str, duration_minutes: int, is_time_anchor: bool
    ) -> Segment:
        # Below every -position apply_positions can park on for the grown arena
        parked = -(len(self.list_segments(production_id)) + 2)
        segment = Segment(
            production_id=production_id,
            name=name,
            duration_minutes=duration_minutes,
            is_time_anchor=is_time_anchor,
            position=parked,
        )
        self.db.add(segment)
        self.db.flush()
        return segment

    def apply_positions(self, production_id: int, positions: Mapping[int, int]) -> None:
        """Two-phase write: park every changed row on -new, flush, then set new.

        Unchanged rows already hold positions outside the new set, so neither
        phase can hit the (production_id, position) unique constraint.
        """
        if not positions:
            return
        stmt = select(Segment).where(
            Segment.production_id == production_id, Segment.id.in_(list(positions))
        )
        rows = {segment.id: segment for segment in self.db.scalars(stmt)}
        missing = set(positions) - set(rows)
        if missing:
            raise UnknownReferenceError("segment", sorted(missing)[0])

        for segment_id, new_position in positions.items():
            rows[segment_id].position = -new_position
        self.db.flush()
        for segment_id, new_position in positions.items():
            rows[segment_id].position = new_position
        self.db.flush()

    def delete_segment(self, segment: Segment) -> None:
        # Assignment rows go with it: ORM cascade for loaded rows, ON DELETE CASCADE for the rest
        self.db.delete(segment)
        self.db.flush()

    def clear_anchor(self, production_id: int, keep_segment_id: int | None = None) -> int:
        stmt = update(Segment).where(
            Segment.production_id == production_id, Segment.is_time_anchor.is_(True)
        )
        if keep_segment_id is not None:
            stmt = stmt.where(Segment.id != keep_segment_id)
        result = self.db.execute(stmt.values(is_time_anchor=False).execution_options(synchronize_session="fetch"))
        return result.rowcount or 0


class AnchorRepository:
    """Anchor time provider backed by the production row and the segment flags."""

    def __init__(self, db: Session):
        self.db = db

    def anchor_for(self, production_id: int) -> AnchorTime | None:
        production = get_or_raise(self.db, Production, production_id, "production")
        stmt = select(Segment.id).where(
            Segment.production_id == production_id, Segment.is_time_anchor.is_(True)
        )
        anchor_ids = list(self.db.scalars(stmt))
        if len(anchor_ids) != 1 or production.anchor_time is None:
            return None
        return AnchorTime(segment_id=anchor_ids[0], instant=production.anchor_time)


class AssignmentRepository:
    """Segment assignment rows and production-wide bindings."""

    def __init__(self, db: Session):
        self.db = db

    def segment_assignments(self, segment_id: int) -> list[SegmentAssignment]:
        stmt = (
            select(SegmentAssignment)
            .where(SegmentAssignment.segment_id == segment_id)
            .order_by(SegmentAssignment.id)
        )
        return list(self.db.scalars(stmt))

    def production_bindings(self, production_id: int) -> list[ProductionPersonPosition]:
        stmt = (
            select(ProductionPersonPosition)
            .where(ProductionPersonPosition.production_id == production_id)
            .order_by(ProductionPersonPosition.id)
        )
        return list(self.db.scalars(stmt))

    def insert_segment_assignments(self, segment_id: int, pairs: Iterable[tuple[int, int]]) -> int:
        rows = [
            SegmentAssignment(segment_id=segment_id, person_id=person_id, position_id=position_id)
            for person_id, position_id in pairs
        ]
        self.db.add_all(rows)
        self.db.flush()
        return len(rows)

    def delete_segment_assignments(self, segment_id: int) -> int:
        result = self.db.execute(
            delete(SegmentAssignment)
            .where(SegmentAssignment.segment_id == segment_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0


class TemplateRepository:
    """Default-position templates keyed by segment name."""

    def __init__(self, db: Session):
        self.db = db

    def rows_for(self, segment_name: str) -> list[ExpectedPosition]:
        stmt = (
            select(SegmentDefaultPosition)
            .where(SegmentDefaultPosition.segment_name == segment_name)
            .options(selectinload(SegmentDefaultPosition.position).selectinload(Position.skill))
            .order_by(SegmentDefaultPosition.order, SegmentDefaultPosition.position_id)
        )
        return [
            ExpectedPosition(
                position_id=row.position.id,
                name=row.position.name,
                order=row.order,
                required_skill_id=row.position.skill_id,
                required_skill_code=row.position.skill.code if row.position.skill else None,
            )
            for row in self.db.scalars(stmt)
        ]

    def replace(self, segment_name: str, entries: Iterable[tuple[int, int]]) -> None:
        self.db.execute(
            delete(SegmentDefaultPosition).where(SegmentDefaultPosition.segment_name == segment_name)
        )
        self.db.flush()
        self.db.add_all(
            SegmentDefaultPosition(segment_name=segment_name, position_id=position_id, order=order)
            for position_id, order in entries
        )
        self.db.flush()

    def names(self) -> list[str]:
        stmt = select(SegmentDefaultPosition.segment_name).distinct().order_by(
            SegmentDefaultPosition.segment_name
        )
        return list(self.db.scalars(stmt))


class CrewRosterRepository:
    """Persons attached to a production, with their skills."""

    def __init__(self, db: Session):
        self.db = db

    def crew_for(self, production_id: int) -> list[CrewMember]:
        stmt = (
            select(Person)
            .join(ProductionPerson, ProductionPerson.person_id == Person.id)
            .where(ProductionPerson.production_id == production_id)
            .options(selectinload(Person.skills))
            .order_by(Person.name, Person.id)
        )
        return [
            CrewMember(person_id=p.id, name=p.name, skill_ids=p.skill_ids)
            for p in self.db.scalars(stmt)
        ]
