"""
Usecase tests for the segment running order.

Run against an in-memory SQLite database; every write goes through the
two-phase renumbering under the (production_id, position) unique constraint.
"""

import pytest
from sqlalchemy import func, select

from runofshow.domain.entities import Segment, SegmentAssignment
from runofshow.infra.exceptions import (
    InvalidOrderingError,
    UnknownReferenceError,
    ValidationError,
)
from runofshow.usecases import segment_add, segment_delete, segment_list, segment_move, segment_update


def _running_order(db, production_id):
    rows = db.execute(
        select(Segment.name, Segment.position)
        .where(Segment.production_id == production_id)
        .order_by(Segment.position)
    ).all()
    return [(name, position) for name, position in rows]


def _names(db, production_id):
    return [name for name, _ in _running_order(db, production_id)]


def _assert_contiguous(db, production_id):
    positions = [p for _, p in _running_order(db, production_id)]
    assert positions == list(range(1, len(positions) + 1))


class TestAddSegment:
    """Test creating segments."""

    def test_append_to_empty_production(self, db, seed):
        production = seed.production()
        result = segment_add.add_segment(
            db, production_id=production.id, name="Opening", duration_minutes=5
        )
        assert result["segment"]["position"] == 1
        assert result["segment"]["name"] == "Opening"
        assert result["timing"]["status"] == "no_anchor"

    def test_append_goes_last(self, db, seed):
        production = seed.production()
        seed.segments(production, ("A", 5), ("B", 5))
        segment_add.add_segment(db, production_id=production.id, name="C", duration_minutes=5)
        assert _running_order(db, production.id) == [("A", 1), ("B", 2), ("C", 3)]

    def test_insert_at_position_shifts_later_segments(self, db, seed):
        production = seed.production()
        seed.segments(production, ("A", 5), ("B", 5), ("C", 5))
        segment_add.add_segment(
            db, production_id=production.id, name="X", duration_minutes=5, position=1
        )
        assert _names(db, production.id) == ["X", "A", "B", "C"]
        _assert_contiguous(db, production.id)

    def test_insert_past_the_end_appends(self, db, seed):
        production = seed.production()
        seed.segments(production, ("A", 5))
        result = segment_add.add_segment(
            db, production_id=production.id, name="X", duration_minutes=5, position=40
        )
        assert result["segment"]["position"] == 2

    def test_position_below_one_writes_nothing(self, db, seed):
        production = seed.production()
        seed.segments(production, ("A", 5))
        with pytest.raises(InvalidOrderingError):
            segment_add.add_segment(
                db, production_id=production.id, name="X", duration_minutes=5, position=0
            )
        assert _names(db, production.id) == ["A"]

    def test_anchor_flag_moves_to_new_segment(self, db, seed):
        production = seed.production()
        first, _ = seed.segments(production, ("Match", 90, True), ("Post", 10))
        result = segment_add.add_segment(
            db,
            production_id=production.id,
            name="Kickoff show",
            duration_minutes=15,
            is_time_anchor=True,
        )
        db.refresh(first)
        assert first.is_time_anchor is False
        assert result["segment"]["is_time_anchor"] is True
        assert result["timing"]["status"] == "ok"

    def test_unknown_production(self, db):
        with pytest.raises(UnknownReferenceError):
            segment_add.add_segment(db, production_id=999, name="A", duration_minutes=5)

    @pytest.mark.parametrize("duration", [-1, True, 2.5])
    def test_invalid_duration(self, db, seed, duration):
        production = seed.production()
        with pytest.raises(ValidationError):
            segment_add.add_segment(
                db, production_id=production.id, name="A", duration_minutes=duration
            )

    def test_blank_name(self, db, seed):
        production = seed.production()
        with pytest.raises(ValidationError):
            segment_add.add_segment(db, production_id=production.id, name="  ", duration_minutes=5)


class TestMoveSegment:
    """Test relocating one segment."""

    def setup_production(self, seed):
        production = seed.production()
        segments = seed.segments(production, ("A", 5), ("B", 5), ("C", 5), ("D", 5), ("E", 5))
        return production, {s.name: s for s in segments}

    def test_move_down(self, db, seed):
        production, by_name = self.setup_production(seed)
        result = segment_move.move_segment(db, segment_id=by_name["B"].id, new_position=4)

        assert _names(db, production.id) == ["A", "C", "D", "B", "E"]
        assert result["segment"]["position"] == 4
        assert [s["name"] for s in result["segments"]] == ["A", "C", "D", "B", "E"]
        _assert_contiguous(db, production.id)

    def test_move_up(self, db, seed):
        production, by_name = self.setup_production(seed)
        segment_move.move_segment(db, segment_id=by_name["D"].id, new_position=2)
        assert _names(db, production.id) == ["A", "D", "B", "C", "E"]

    def test_move_to_the_ends(self, db, seed):
        production, by_name = self.setup_production(seed)
        segment_move.move_segment(db, segment_id=by_name["A"].id, new_position=5)
        segment_move.move_segment(db, segment_id=by_name["E"].id, new_position=1)
        assert _names(db, production.id) == ["E", "B", "C", "D", "A"]
        _assert_contiguous(db, production.id)

    def test_move_to_own_position_changes_nothing(self, db, seed):
        production, by_name = self.setup_production(seed)
        segment_move.move_segment(db, segment_id=by_name["C"].id, new_position=3)
        assert _names(db, production.id) == ["A", "B", "C", "D", "E"]

    @pytest.mark.parametrize("target", [0, 6])
    def test_out_of_range_leaves_order_unchanged(self, db, seed, target):
        production, by_name = self.setup_production(seed)
        with pytest.raises(InvalidOrderingError):
            segment_move.move_segment(db, segment_id=by_name["B"].id, new_position=target)
        db.rollback()
        assert _names(db, production.id) == ["A", "B", "C", "D", "E"]

    def test_move_recomputes_timing(self, db, seed):
        production = seed.production()
        pre, match = seed.segments(production, ("Pre", 20), ("Match", 90, True))
        result = segment_move.move_segment(db, segment_id=pre.id, new_position=2)
        timing = result["timing"]
        assert timing["status"] == "ok"
        assert [e["name"] for e in timing["segments"]] == ["Match", "Pre"]
        assert timing["segments"][1]["start"] == "2025-03-01T21:00:00Z"

    def test_corrupt_order_is_reported(self, db, seed):
        production = seed.production()
        a, b = seed.segments(production, ("A", 5), ("B", 5))
        b.position = 3
        db.commit()
        with pytest.raises(InvalidOrderingError):
            segment_move.move_segment(db, segment_id=a.id, new_position=2)

    def test_unknown_segment(self, db):
        with pytest.raises(UnknownReferenceError):
            segment_move.move_segment(db, segment_id=404, new_position=1)


class TestUpdateSegment:
    """Test field edits, anchor toggling and moves through update."""

    def test_rename_and_resize(self, db, seed):
        production = seed.production()
        (segment,) = seed.segments(production, ("Rust", 15))
        result = segment_update.update_segment(
            db, segment_id=segment.id, name="Pauze", duration_minutes=20
        )
        assert result["segment"]["name"] == "Pauze"
        assert result["segment"]["duration_minutes"] == 20
        assert result["changes"] == {
            "name": {"from": "Rust", "to": "Pauze"},
            "duration_minutes": {"from": 15, "to": 20},
        }

    def test_anchor_toggle_keeps_at_most_one(self, db, seed):
        production = seed.production()
        first, second = seed.segments(production, ("First half", 45, True), ("Second half", 45))
        segment_update.update_segment(db, segment_id=second.id, is_time_anchor=True)

        anchors = db.scalars(
            select(Segment.name).where(
                Segment.production_id == production.id, Segment.is_time_anchor.is_(True)
            )
        ).all()
        assert anchors == ["Second half"]

    def test_clearing_the_anchor_gives_no_anchor_timing(self, db, seed):
        production = seed.production()
        (match,) = seed.segments(production, ("Match", 90, True))
        result = segment_update.update_segment(db, segment_id=match.id, is_time_anchor=False)
        assert result["timing"]["status"] == "no_anchor"
        assert result["timing"]["reason"] == "no_anchor_segment"

    def test_position_moves_the_segment(self, db, seed):
        production = seed.production()
        _, _, c = seed.segments(production, ("A", 5), ("B", 5), ("C", 5))
        result = segment_update.update_segment(db, segment_id=c.id, position=1)
        assert _names(db, production.id) == ["C", "A", "B"]
        assert result["changes"]["position"] == {"from": 3, "to": 1}

    def test_position_out_of_range(self, db, seed):
        production = seed.production()
        a, _ = seed.segments(production, ("A", 5), ("B", 5))
        with pytest.raises(InvalidOrderingError):
            segment_update.update_segment(db, segment_id=a.id, position=3)

    def test_nothing_to_change(self, db, seed):
        production = seed.production()
        (a,) = seed.segments(production, ("A", 5))
        result = segment_update.update_segment(db, segment_id=a.id, name="A")
        assert result["changes"] == {}


class TestDeleteSegment:
    """Test deletion, compaction and cascade."""

    def test_delete_compacts_and_cascades(self, db, seed):
        production = seed.production()
        a, b, c = seed.segments(production, ("A", 5), ("B", 5), ("C", 5))
        person = seed.person("Anna")
        camera = seed.position("Camera 1")
        seed.assignment(b, person, camera)
        seed.assignment(c, person, camera)

        result = segment_delete.delete_segment(db, segment_id=b.id)

        assert result["deleted"] == 1
        assert _running_order(db, production.id) == [("A", 1), ("C", 2)]
        remaining = db.scalar(select(func.count()).select_from(SegmentAssignment))
        assert remaining == 1

    def test_delete_last_segment(self, db, seed):
        production = seed.production()
        (a,) = seed.segments(production, ("A", 5))
        result = segment_delete.delete_segment(db, segment_id=a.id)
        assert _running_order(db, production.id) == []
        assert result["timing"]["status"] == "ok"
        assert result["timing"]["segments"] == []

    def test_unknown_segment(self, db):
        with pytest.raises(UnknownReferenceError):
            segment_delete.delete_segment(db, segment_id=404)


class TestListSegments:
    """Test reading the running order."""

    def test_running_order(self, db, seed):
        production = seed.production()
        other = seed.production(name="Other")
        seed.segments(production, ("A", 5), ("B", 10, True))
        seed.segments(other, ("Z", 5))

        items = segment_list.list_segments(db, production_id=production.id)
        assert [(s["name"], s["position"], s["is_time_anchor"]) for s in items] == [
            ("A", 1, False),
            ("B", 2, True),
        ]

    def test_show_segment(self, db, seed):
        production = seed.production()
        (a,) = seed.segments(production, ("A", 5))
        assert segment_list.show_segment(db, segment_id=a.id)["name"] == "A"

    def test_unknown_production(self, db):
        with pytest.raises(UnknownReferenceError):
            segment_list.list_segments(db, production_id=404)


class TestMixedOperations:
    """Positions stay exactly 1..N after every step of a mixed sequence."""

    def test_contiguous_after_every_step(self, db, seed):
        production = seed.production()
        pid = production.id
        ids = {}

        def add(name, position=None):
            result = segment_add.add_segment(
                db, production_id=pid, name=name, duration_minutes=10, position=position
            )
            ids[name] = result["segment"]["id"]

        steps = [
            lambda: add("Opening"),
            lambda: add("Wedstrijd"),
            lambda: add("Voorbeschouwing", position=2),
            lambda: add("Nabeschouwing"),
            lambda: segment_move.move_segment(db, segment_id=ids["Nabeschouwing"], new_position=1),
            lambda: segment_delete.delete_segment(db, segment_id=ids["Voorbeschouwing"]),
            lambda: add("Rust", position=3),
            lambda: segment_update.update_segment(db, segment_id=ids["Opening"], position=4),
            lambda: segment_delete.delete_segment(db, segment_id=ids["Nabeschouwing"]),
            lambda: add("Interviews", position=1),
            lambda: segment_move.move_segment(db, segment_id=ids["Interviews"], new_position=4),
        ]
        for step in steps:
            step()
            _assert_contiguous(db, pid)

        assert _names(db, pid) == ["Rust", "Wedstrijd", "Opening", "Interviews"]
