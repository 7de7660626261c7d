"""Store interfaces the usecases depend on.

SQLAlchemy implementations live in ``runofshow.infra.repositories``. Every
write method runs inside the caller's transaction; none of them commit.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from ..core.eligibility import CrewMember
from ..core.templates import ExpectedPosition
from .entities import Production, ProductionPersonPosition, Segment, SegmentAssignment


@dataclass(frozen=True)
class AnchorTime:
    """The anchor segment of a production and its fixed start instant."""

    segment_id: int
    instant: datetime


class SegmentStore(Protocol):
    def lock_production(self, production_id: int) -> Production:
        """Load the production row for update; raises UnknownReferenceError."""
        ...

    def list_segments(self, production_id: int) -> list[Segment]:
        """Segments of a production ordered by position."""
        ...

    def get_segment(self, segment_id: int) -> Segment:
        """Raises UnknownReferenceError when missing."""
        ...

    def insert_segment(
        self, production_id: int, *, name: str, duration_minutes: int, is_time_anchor: bool
    ) -> Segment:
        """Insert a segment parked outside the running order (negative position)."""
        ...

    def apply_positions(self, production_id: int, positions: Mapping[int, int]) -> None:
        """Write a renumbering atomically without transient collisions."""
        ...

    def delete_segment(self, segment: Segment) -> None: ...

    def clear_anchor(self, production_id: int, keep_segment_id: int | None = None) -> int: ...


class AnchorTimeProvider(Protocol):
    def anchor_for(self, production_id: int) -> AnchorTime | None:
        """None when no single anchor segment is flagged or its instant is unset."""
        ...


class AssignmentStore(Protocol):
    def segment_assignments(self, segment_id: int) -> list[SegmentAssignment]: ...

    def production_bindings(self, production_id: int) -> list[ProductionPersonPosition]: ...

    def insert_segment_assignments(self, segment_id: int, pairs: Iterable[tuple[int, int]]) -> int: ...

    def delete_segment_assignments(self, segment_id: int) -> int: ...


class TemplateStore(Protocol):
    def rows_for(self, segment_name: str) -> list[ExpectedPosition]: ...

    def replace(self, segment_name: str, entries: Iterable[tuple[int, int]]) -> None: ...

    def names(self) -> list[str]: ...


class CrewRosterProvider(Protocol):
    def crew_for(self, production_id: int) -> list[CrewMember]: ...
