"""
Concurrent writers against one file-backed SQLite database.

Every thread has its own session, as separate operator commands would. Writers
of one production must queue behind each other instead of failing on the
database lock.
"""

import threading

import pytest
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from runofshow.domain import entities
from runofshow.infra import db as db_module
from runofshow.usecases.assignment_copy import copy_assignments
from runofshow.usecases.segment_move import move_segment

THREADS = 4
CALLS = 5


@pytest.fixture
def file_sessions(tmp_path):
    engine = db_module.get_engine(db_url=f"sqlite:///{tmp_path / 'runofshow.db'}")
    db_module.Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    engine.dispose()


def _run_threads(worker):
    errors = []

    def guarded(k):
        try:
            worker(k)
        except Exception as e:  # noqa: BLE001
            errors.append(e)

    threads = [threading.Thread(target=guarded, args=(k,)) for k in range(THREADS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=120)
    assert not any(t.is_alive() for t in threads)
    return errors


def _seed_production(Session, names):
    with Session() as s:
        production = entities.Production(name="Heracles - Twente")
        s.add(production)
        s.flush()
        segments = [
            entities.Segment(
                production_id=production.id, name=name, position=i, duration_minutes=10
            )
            for i, name in enumerate(names, start=1)
        ]
        s.add_all(segments)
        s.commit()
        return production.id, [seg.id for seg in segments]


class TestConcurrentWriters:
    """Writers of one production are serialized through real sessions."""

    def test_concurrent_moves_all_succeed_and_stay_contiguous(self, file_sessions):
        production_id, segment_ids = _seed_production(
            file_sessions, ["Opening", "Voorbeschouwing", "Wedstrijd", "Rust", "Nabeschouwing"]
        )
        n = len(segment_ids)

        def mover(k):
            with file_sessions() as s:
                for i in range(CALLS):
                    move_segment(
                        s,
                        segment_id=segment_ids[(k + i) % n],
                        new_position=(k * CALLS + i) % n + 1,
                    )

        errors = _run_threads(mover)

        assert errors == []
        with file_sessions() as s:
            positions = s.scalars(
                select(entities.Segment.position).where(entities.Segment.production_id == production_id)
            ).all()
        assert sorted(positions) == list(range(1, n + 1))

    def test_concurrent_merge_copies_never_duplicate(self, file_sessions):
        _, (source_id, first_id, second_id) = _seed_production(
            file_sessions, ["Wedstrijd", "Rust", "Nabeschouwing"]
        )
        with file_sessions() as s:
            camera = entities.Position(name="Camera 1")
            director = entities.Position(name="Regie")
            anna = entities.Person(name="Anna")
            bram = entities.Person(name="Bram")
            s.add_all([camera, director, anna, bram])
            s.flush()
            s.add_all(
                [
                    entities.SegmentAssignment(segment_id=source_id, person_id=anna.id, position_id=camera.id),
                    entities.SegmentAssignment(segment_id=source_id, person_id=bram.id, position_id=director.id),
                ]
            )
            s.commit()
            expected = sorted([(anna.id, camera.id), (bram.id, director.id)])

        def copier(k):
            with file_sessions() as s:
                for _ in range(CALLS):
                    report = copy_assignments(
                        s,
                        source_segment_id=source_id,
                        target_segment_ids=[first_id, second_id],
                        mode="merge",
                    )
                    assert report["status"] == "ok"

        errors = _run_threads(copier)

        assert errors == []
        with file_sessions() as s:
            for target_id in (first_id, second_id):
                pairs = s.execute(
                    select(entities.SegmentAssignment.person_id, entities.SegmentAssignment.position_id).where(
                        entities.SegmentAssignment.segment_id == target_id
                    )
                ).all()
                assert sorted(tuple(p) for p in pairs) == expected
