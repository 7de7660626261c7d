"""
Effective crew bindings for a segment.

Baseline bindings (production wide) are folded together with the segment's own
assignment rows. Segment rows add to the baseline; they never suppress a
baseline binding. Duplicate rows are kept: preventing them is a write-time
concern. Skill requirements are not consulted here.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from ..shared.types import BindingSource


class BindingRow(Protocol):
    id: int
    person_id: int
    position_id: int


@dataclass(frozen=True)
class Binding:
    person_id: int
    position_id: int
    source: BindingSource
    row_id: int | None = None
    segment_id: int | None = None

    @property
    def pair(self) -> tuple[int, int]:
        return (self.person_id, self.position_id)

    def to_dict(self) -> dict[str, object]:
        return {
            "person_id": self.person_id,
            "position_id": self.position_id,
            "source": self.source.value,
            "row_id": self.row_id,
            "segment_id": self.segment_id,
        }


def baseline_bindings(rows: Iterable[BindingRow]) -> list[Binding]:
    """Production-wide rows as bindings, ordered by (person, position, row id)."""
    bindings = [
        Binding(r.person_id, r.position_id, BindingSource.PRODUCTION, row_id=r.id) for r in rows
    ]
    return sorted(bindings, key=lambda b: (b.person_id, b.position_id, b.row_id or 0))


def segment_bindings(rows: Iterable[BindingRow], segment_id: int) -> list[Binding]:
    """Segment rows as bindings, in row id order."""
    bindings = [
        Binding(r.person_id, r.position_id, BindingSource.SEGMENT, row_id=r.id, segment_id=segment_id)
        for r in rows
    ]
    return sorted(bindings, key=lambda b: b.row_id or 0)


def overlay(effective: list[Binding], binding: Binding) -> list[Binding]:
    """Fold step: a segment binding is added on top, nothing is removed."""
    return [*effective, binding]


def effective_bindings(baseline: Iterable[Binding], overrides: Iterable[Binding]) -> list[Binding]:
    """Baseline first, then every override in order."""
    effective = list(baseline)
    for binding in overrides:
        effective = overlay(effective, binding)
    return effective


__all__ = [
    "Binding",
    "baseline_bindings",
    "effective_bindings",
    "overlay",
    "segment_bindings",
]
