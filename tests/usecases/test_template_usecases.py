"""
Usecase tests for default-position templates.
"""

import pytest

from runofshow.infra.exceptions import UnknownReferenceError, ValidationError
from runofshow.usecases import template_show, template_update


class TestDefaultPositions:
    """Test resolution for a concrete segment."""

    def test_exact_template(self, db, seed):
        production = seed.production()
        (segment,) = seed.segments(production, ("Rust", 15))
        zoom = seed.skill("CAMERA_ZOOM")
        camera = seed.position("Camera zoom", skill=zoom)
        director = seed.position("Regie")
        seed.template("Rust", director, camera)
        seed.template("__GLOBAL__", director)

        result = template_show.show_default_positions(db, segment_id=segment.id)
        assert [p["name"] for p in result["positions"]] == ["Regie", "Camera zoom"]
        assert result["positions"][1]["required_skill_code"] == "CAMERA_ZOOM"

    def test_global_fallback(self, db, seed):
        production = seed.production()
        (segment,) = seed.segments(production, ("Interview", 10))
        director = seed.position("Regie")
        seed.template("__GLOBAL__", director)

        result = template_show.show_default_positions(db, segment_id=segment.id)
        assert [p["position_id"] for p in result["positions"]] == [director.id]

    def test_nothing_configured(self, db, seed):
        production = seed.production()
        (segment,) = seed.segments(production, ("Interview", 10))
        assert template_show.show_default_positions(db, segment_id=segment.id)["positions"] == []


class TestReplaceTemplate:
    """Test writing templates."""

    def test_replace_and_show(self, db, seed):
        director = seed.position("Regie")
        camera = seed.position("Camera 1")
        seed.template("Rust", camera)

        result = template_update.replace_template(
            db,
            segment_name="Rust",
            positions=[{"position_id": director.id, "order": 1}, {"position_id": camera.id, "order": 2}],
        )
        assert [p["name"] for p in result["positions"]] == ["Regie", "Camera 1"]

    def test_alias_writes_global_template(self, db, seed):
        director = seed.position("Regie")
        result = template_update.replace_template(
            db, segment_name="Algemeen", positions=[{"position_id": director.id, "order": 0}]
        )
        assert result["segment_name"] == "Algemeen"

        names = template_show.list_template_names(db)
        assert names == {"items": ["Algemeen"], "has_global": True}

    def test_empty_list_clears_template(self, db, seed):
        seed.template("Rust", seed.position("Regie"))
        template_update.replace_template(db, segment_name="Rust", positions=[])
        assert template_show.show_template(db, segment_name="Rust")["positions"] == []
        assert template_show.list_template_names(db)["items"] == []

    def test_unknown_position(self, db, seed):
        seed.position("Regie")
        with pytest.raises(UnknownReferenceError):
            template_update.replace_template(
                db, segment_name="Rust", positions=[{"position_id": 404, "order": 1}]
            )

    def test_duplicate_order(self, db, seed):
        director = seed.position("Regie")
        camera = seed.position("Camera 1")
        with pytest.raises(ValidationError):
            template_update.replace_template(
                db,
                segment_name="Rust",
                positions=[
                    {"position_id": director.id, "order": 1},
                    {"position_id": camera.id, "order": 1},
                ],
            )

    def test_one_letter_segment_gets_its_own_template(self, db, seed):
        production = seed.production()
        (segment,) = seed.segments(production, ("Q", 5))
        director = seed.position("Regie")
        seed.template("__GLOBAL__", seed.position("Camera 1"))

        template_update.replace_template(
            db, segment_name="Q", positions=[{"position_id": director.id, "order": 1}]
        )

        result = template_show.show_default_positions(db, segment_id=segment.id)
        assert [p["name"] for p in result["positions"]] == ["Regie"]

    def test_blank_name(self, db, seed):
        director = seed.position("Regie")
        with pytest.raises(ValidationError, match="blank"):
            template_update.replace_template(
                db, segment_name="   ", positions=[{"position_id": director.id, "order": 1}]
            )
