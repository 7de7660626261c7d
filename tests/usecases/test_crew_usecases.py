"""
Usecase tests for the production crew: roster, production-wide bindings,
candidates and the per-person overview.
"""

import pytest

from runofshow.infra.exceptions import UnknownReferenceError, ValidationError
from runofshow.usecases import crew_add, crew_candidates, crew_overview, crew_remove


class TestRoster:
    """Test attaching people and binding them production-wide."""

    def test_attach_is_idempotent(self, db, seed):
        production = seed.production()
        anna = seed.person("Anna")
        first = crew_add.attach_person(db, production_id=production.id, person_id=anna.id)
        second = crew_add.attach_person(db, production_id=production.id, person_id=anna.id)
        assert first["attached"] is True
        assert second["attached"] is False

    def test_attach_unknown_person(self, db, seed):
        production = seed.production()
        with pytest.raises(UnknownReferenceError):
            crew_add.attach_person(db, production_id=production.id, person_id=404)

    def test_duplicate_binding_is_rejected(self, db, seed):
        production = seed.production()
        anna = seed.person("Anna")
        director = seed.position("Regie")
        crew_add.add_person_position(
            db, production_id=production.id, person_id=anna.id, position_id=director.id
        )
        with pytest.raises(ValidationError):
            crew_add.add_person_position(
                db, production_id=production.id, person_id=anna.id, position_id=director.id
            )

    def test_remove_binding(self, db, seed):
        production = seed.production()
        binding = seed.binding(production, seed.person("Anna"), seed.position("Regie"))
        binding_id = binding.id
        result = crew_remove.remove_person_position(
            db, production_id=production.id, binding_id=binding_id
        )
        assert result["deleted"] == 1
        assert crew_overview.crew_overview(db, production_id=production.id) == []

    def test_remove_binding_of_other_production(self, db, seed):
        production = seed.production()
        other = seed.production(name="Other")
        binding = seed.binding(other, seed.person("Anna"), seed.position("Regie"))
        with pytest.raises(UnknownReferenceError):
            crew_remove.remove_person_position(
                db, production_id=production.id, binding_id=binding.id
            )


class TestCandidates:
    """Test the eligibility filter against the production roster."""

    def test_filters_roster_by_required_skill(self, db, seed):
        production = seed.production()
        (segment,) = seed.segments(production, ("Wedstrijd", 90))
        zoom = seed.skill("CAMERA_ZOOM")
        sound = seed.skill("GELUID")
        seed.person("Bart", skills=[zoom], production=production)
        seed.person("Anna", skills=[zoom, sound], production=production)
        seed.person("Cees", skills=[sound], production=production)
        seed.person("Dirk", skills=[zoom])  # not on the roster
        camera = seed.position("Camera zoom", skill=zoom)

        result = crew_candidates.list_candidates(db, segment_id=segment.id, position_id=camera.id)
        assert result["required_skill_id"] == zoom.id
        assert [c["name"] for c in result["candidates"]] == ["Anna", "Bart"]

    def test_position_without_skill_returns_whole_roster(self, db, seed):
        production = seed.production()
        (segment,) = seed.segments(production, ("Wedstrijd", 90))
        seed.person("Bart", production=production)
        seed.person("Anna", production=production)
        runner = seed.position("Runner")

        result = crew_candidates.list_candidates(db, segment_id=segment.id, position_id=runner.id)
        assert [c["name"] for c in result["candidates"]] == ["Anna", "Bart"]

    def test_empty_roster(self, db, seed):
        production = seed.production()
        (segment,) = seed.segments(production, ("Wedstrijd", 90))
        runner = seed.position("Runner")
        result = crew_candidates.list_candidates(db, segment_id=segment.id, position_id=runner.id)
        assert result["candidates"] == []

    def test_unknown_position(self, db, seed):
        production = seed.production()
        (segment,) = seed.segments(production, ("Wedstrijd", 90))
        with pytest.raises(UnknownReferenceError):
            crew_candidates.list_candidates(db, segment_id=segment.id, position_id=404)


class TestCrewOverview:
    """Test grouping every binding per person."""

    def test_groups_baseline_then_segments_in_running_order(self, db, seed):
        production = seed.production()
        first, second = seed.segments(production, ("Eerste helft", 45), ("Tweede helft", 45))
        anna = seed.person("anna")
        bart = seed.person("Bart")
        camera = seed.position("Camera 1")
        director = seed.position("Regie")
        seed.assignment(second, anna, camera)
        seed.assignment(first, anna, camera)
        seed.binding(production, anna, director)
        seed.assignment(first, bart, director)

        crew = crew_overview.crew_overview(db, production_id=production.id)

        assert [member["person_name"] for member in crew] == ["anna", "Bart"]
        anna_positions = crew[0]["positions"]
        assert [(p["position_name"], p.get("segment_name")) for p in anna_positions] == [
            ("Regie", None),
            ("Camera 1", "Eerste helft"),
            ("Camera 1", "Tweede helft"),
        ]

    def test_unknown_production(self, db):
        with pytest.raises(UnknownReferenceError):
            crew_overview.crew_overview(db, production_id=404)
