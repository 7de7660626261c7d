"""
Domain entities for runofshow.

A Production owns an ordered list of Segments and a crew roster. Positions and
Skills are shared catalogue data. Crew bindings live in two layers: production
wide (ProductionPersonPosition) and per segment (SegmentAssignment).
"""

from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy import (
    Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ..infra.db import Base
from ..shared.types import SkillType


class Production(Base):
    """A broadcast production for one match."""

    __tablename__ = "productions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    anchor_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Wall-clock start of the anchor segment, normally the match kickoff (UTC)",
    )
    live_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Moment the livestream goes on air (UTC)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    segments: Mapped[list[Segment]] = relationship(
        "Segment",
        back_populates="production",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Segment.position",
    )
    crew: Mapped[list[ProductionPerson]] = relationship(
        "ProductionPerson", cascade="all, delete-orphan", passive_deletes=True
    )
    person_positions: Mapped[list[ProductionPersonPosition]] = relationship(
        "ProductionPersonPosition", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Production(id={self.id}, name={self.name}, anchor_time={self.anchor_time})>"


class Segment(Base):
    """A timed block of the run of show (pre-show, first half, interviews...)."""

    __tablename__ = "production_segments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    production_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("productions.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_time_anchor: Mapped[bool] = mapped_column(
        Boolean, server_default=sa.text("false"), default=False, nullable=False
    )

    production: Mapped[Production] = relationship("Production", back_populates="segments")
    assignments: Mapped[list[SegmentAssignment]] = relationship(
        "SegmentAssignment",
        back_populates="segment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SegmentAssignment.id",
    )

    __table_args__ = (
        UniqueConstraint("production_id", "position", name="uq_production_segments_production_position"),
        # Temporary negative positions are allowed mid-transaction during renumbering
        CheckConstraint("position <> 0", name="position_nonzero"),
        CheckConstraint("duration_minutes >= 0", name="duration_nonnegative"),
        Index("ix_production_segments_production_id", "production_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Segment(id={self.id}, production_id={self.production_id}, name={self.name}, "
            f"position={self.position}, duration_minutes={self.duration_minutes}, "
            f"is_time_anchor={self.is_time_anchor})>"
        )


class Skill(Base):
    """A crew capability, e.g. CAMERA_ZOOM or COMMENTAAR."""

    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[SkillType] = mapped_column(
        SQLEnum(SkillType, name="skill_type"), nullable=False, default=SkillType.CREW
    )

    def __repr__(self) -> str:
        return f"<Skill(id={self.id}, code={self.code}, type={self.type})>"


class Position(Base):
    """A crew position in the catalogue (camera left, director, commentary...)."""

    __tablename__ = "positions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    skill_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("skills.id", ondelete="SET NULL"), nullable=True
    )
    is_studio: Mapped[bool] = mapped_column(
        Boolean, server_default=sa.text("false"), default=False, nullable=False
    )

    skill: Mapped[Skill | None] = relationship("Skill")

    def __repr__(self) -> str:
        return f"<Position(id={self.id}, name={self.name}, skill_id={self.skill_id})>"


class Person(Base):
    """A crew member."""

    __tablename__ = "persons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)

    skills: Mapped[list[PersonSkill]] = relationship(
        "PersonSkill", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def skill_ids(self) -> frozenset[int]:
        return frozenset(ps.skill_id for ps in self.skills)

    def __repr__(self) -> str:
        return f"<Person(id={self.id}, name={self.name})>"


class PersonSkill(Base):
    __tablename__ = "person_skills"

    person_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("persons.id", ondelete="CASCADE"), primary_key=True
    )
    skill_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True
    )


class ProductionPerson(Base):
    """Crew roster membership of a person in a production."""

    __tablename__ = "production_persons"

    production_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("productions.id", ondelete="CASCADE"), primary_key=True
    )
    person_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("persons.id", ondelete="CASCADE"), primary_key=True
    )

    person: Mapped[Person] = relationship("Person")


class ProductionPersonPosition(Base):
    """Baseline binding: a person plays a position across the whole production."""

    __tablename__ = "production_person_positions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    production_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("productions.id", ondelete="CASCADE"), nullable=False
    )
    person_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("persons.id", ondelete="CASCADE"), nullable=False
    )
    position_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("positions.id", ondelete="CASCADE"), nullable=False
    )

    person: Mapped[Person] = relationship("Person")
    position: Mapped[Position] = relationship("Position")

    __table_args__ = (
        UniqueConstraint(
            "production_id",
            "person_id",
            "position_id",
            name="uq_production_person_positions_binding",
        ),
        Index("ix_production_person_positions_production_id", "production_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ProductionPersonPosition(id={self.id}, production_id={self.production_id}, "
            f"person_id={self.person_id}, position_id={self.position_id})>"
        )


class SegmentAssignment(Base):
    """Override binding: a person plays a position in one segment.

    (segment, position) is deliberately not unique; duplicates are tolerated.
    """

    __tablename__ = "segment_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    segment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("production_segments.id", ondelete="CASCADE"), nullable=False
    )
    person_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("persons.id", ondelete="CASCADE"), nullable=False
    )
    position_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("positions.id", ondelete="CASCADE"), nullable=False
    )

    segment: Mapped[Segment] = relationship("Segment", back_populates="assignments")
    person: Mapped[Person] = relationship("Person")
    position: Mapped[Position] = relationship("Position")

    __table_args__ = (Index("ix_segment_assignments_segment_id", "segment_id"),)

    def __repr__(self) -> str:
        return (
            f"<SegmentAssignment(id={self.id}, segment_id={self.segment_id}, "
            f"person_id={self.person_id}, position_id={self.position_id})>"
        )


class SegmentDefaultPosition(Base):
    """One slot of the expected-position template stored under a segment name."""

    __tablename__ = "segment_default_positions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    segment_name: Mapped[str] = mapped_column(String(100), nullable=False)
    position_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("positions.id", ondelete="CASCADE"), nullable=False
    )
    order: Mapped[int] = mapped_column("order", Integer, nullable=False, default=0)

    position: Mapped[Position] = relationship("Position")

    __table_args__ = (
        UniqueConstraint("segment_name", "order", name="uq_segment_default_positions_name_order"),
        Index("ix_segment_default_positions_segment_name", "segment_name"),
    )

    def __repr__(self) -> str:
        return (
            f"<SegmentDefaultPosition(id={self.id}, segment_name={self.segment_name}, "
            f"position_id={self.position_id}, order={self.order})>"
        )
