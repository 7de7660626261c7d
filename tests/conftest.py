"""
Global test configuration for runofshow.

Every test gets a fresh in-memory SQLite database with the full schema. The
module-level SessionLocal is pointed at it so code using the unit of work
sees the same database as the ``db`` fixture.
"""

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker

# Ensure the project src directory is importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from runofshow.domain import entities  # noqa: E402
from runofshow.infra import db as db_module  # noqa: E402
from runofshow.shared.types import SkillType  # noqa: E402

KICKOFF = datetime(2025, 3, 1, 19, 30, tzinfo=UTC)


@pytest.fixture
def engine():
    engine = db_module.get_engine(db_url="sqlite://")
    db_module.Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(autouse=True)
def _force_test_db(monkeypatch, engine):
    """Point the module-level SessionLocal at the per-test database."""
    TestSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    monkeypatch.setattr(db_module, "SessionLocal", TestSessionLocal)
    return TestSessionLocal


@pytest.fixture
def db(_force_test_db):
    session = _force_test_db()
    try:
        yield session
    finally:
        session.close()


class Seed:
    """Small factory for rows the tests need. Every helper commits."""

    def __init__(self, db):
        self.db = db

    def _save(self, row):
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def production(self, name="Fortuna - PKC", anchor_time=KICKOFF, live_time=None):
        return self._save(
            entities.Production(name=name, anchor_time=anchor_time, live_time=live_time)
        )

    def segments(self, production, *specs):
        """Create segments in running order from (name, minutes[, anchor]) tuples."""
        created = []
        for position, spec in enumerate(specs, start=1):
            name, minutes, *rest = spec
            created.append(
                entities.Segment(
                    production_id=production.id,
                    name=name,
                    position=position,
                    duration_minutes=minutes,
                    is_time_anchor=bool(rest and rest[0]),
                )
            )
        self.db.add_all(created)
        self.db.commit()
        for segment in created:
            self.db.refresh(segment)
        return created

    def skill(self, code, name=None, type=SkillType.CREW):
        return self._save(entities.Skill(code=code, name=name or code.title(), type=type))

    def position(self, name, skill=None):
        return self._save(entities.Position(name=name, skill_id=skill.id if skill else None))

    def person(self, name, skills=(), production=None):
        person = self._save(entities.Person(name=name))
        for skill in skills:
            self.db.add(entities.PersonSkill(person_id=person.id, skill_id=skill.id))
        if production is not None:
            self.db.add(entities.ProductionPerson(production_id=production.id, person_id=person.id))
        self.db.commit()
        return person

    def assignment(self, segment, person, position):
        return self._save(
            entities.SegmentAssignment(
                segment_id=segment.id, person_id=person.id, position_id=position.id
            )
        )

    def binding(self, production, person, position):
        return self._save(
            entities.ProductionPersonPosition(
                production_id=production.id, person_id=person.id, position_id=position.id
            )
        )

    def template(self, segment_name, *positions):
        for order, position in enumerate(positions, start=1):
            self.db.add(
                entities.SegmentDefaultPosition(
                    segment_name=segment_name, position_id=position.id, order=order
                )
            )
        self.db.commit()


@pytest.fixture
def seed(db):
    return Seed(db)
