"""
Unit tests for effective crew bindings.
"""

from types import SimpleNamespace

from runofshow.core.assignments import (
    Binding,
    baseline_bindings,
    effective_bindings,
    segment_bindings,
)
from runofshow.shared.types import BindingSource


def _row(row_id, person_id, position_id):
    return SimpleNamespace(id=row_id, person_id=person_id, position_id=position_id)


class TestEffectiveBindings:
    """Test the additive overlay of segment rows on the baseline."""

    def test_baseline_then_segment_rows(self):
        baseline = baseline_bindings([_row(2, 5, 1), _row(1, 4, 3)])
        overrides = segment_bindings([_row(11, 6, 2), _row(10, 7, 3)], segment_id=40)
        result = effective_bindings(baseline, overrides)

        assert [b.pair for b in result] == [(4, 3), (5, 1), (7, 3), (6, 2)]
        assert [b.source for b in result] == [
            BindingSource.PRODUCTION,
            BindingSource.PRODUCTION,
            BindingSource.SEGMENT,
            BindingSource.SEGMENT,
        ]
        assert all(b.segment_id == 40 for b in result[2:])

    def test_segment_row_never_hides_baseline(self):
        # Same position, different person: both are kept
        baseline = baseline_bindings([_row(1, 4, 3)])
        overrides = segment_bindings([_row(10, 9, 3)], segment_id=40)
        result = effective_bindings(baseline, overrides)
        assert {b.person_id for b in result if b.position_id == 3} == {4, 9}

    def test_duplicates_are_preserved(self):
        overrides = segment_bindings([_row(10, 4, 3), _row(11, 4, 3)], segment_id=40)
        result = effective_bindings([], overrides)
        assert [b.row_id for b in result] == [10, 11]

    def test_empty_layers(self):
        assert effective_bindings([], []) == []

    def test_deterministic_for_shuffled_rows(self):
        rows = [_row(3, 2, 2), _row(1, 1, 1), _row(2, 1, 2)]
        assert baseline_bindings(rows) == baseline_bindings(list(reversed(rows)))


def test_binding_to_dict():
    binding = Binding(4, 3, BindingSource.SEGMENT, row_id=10, segment_id=40)
    assert binding.to_dict() == {
        "person_id": 4,
        "position_id": 3,
        "source": "segment",
        "row_id": 10,
        "segment_id": 40,
    }
