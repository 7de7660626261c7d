"""
Planning and reporting for copying segment assignments onto other segments.

merge:     add source pairs the target does not have yet, keep everything else
overwrite: drop every target row, then insert the source rows

Each target is handled independently; the report says per target whether the
write went through.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import pydantic

from ..infra.exceptions import InvalidCopyRequestError
from ..shared.schemas import CopyAssignmentsRequest
from ..shared.types import CopyMode

Pair = tuple[int, int]


def validate_copy_request(
    source_segment_id: int, target_segment_ids: Iterable[int], mode: str | CopyMode
) -> CopyAssignmentsRequest:
    """Validate the request shape; raises InvalidCopyRequestError before any write."""
    try:
        return CopyAssignmentsRequest(
            source_segment_id=source_segment_id,
            target_segment_ids=list(target_segment_ids),
            mode=mode,
        )
    except pydantic.ValidationError as e:
        violations = [err["msg"].removeprefix("Value error, ") for err in e.errors()]
        raise InvalidCopyRequestError("Invalid copy request", violations=violations) from e


def plan_merge(source_pairs: Iterable[Pair], target_pairs: Iterable[Pair]) -> list[Pair]:
    """Source pairs missing on the target, each distinct pair once, in source order."""
    present = set(target_pairs)
    planned: list[Pair] = []
    for pair in source_pairs:
        if pair not in present:
            present.add(pair)
            planned.append(pair)
    return planned


def plan_overwrite(source_pairs: Iterable[Pair]) -> list[Pair]:
    """The full set of source rows."""
    return list(source_pairs)


@dataclass
class TargetOutcome:
    segment_id: int
    ok: bool
    created: int = 0
    deleted: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "segment_id": self.segment_id,
            "ok": self.ok,
            "created": self.created,
            "deleted": self.deleted,
            "error": self.error,
        }


@dataclass
class CopyReport:
    source_segment_id: int
    mode: CopyMode
    outcomes: list[TargetOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[int]:
        return [o.segment_id for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[int]:
        return [o.segment_id for o in self.outcomes if not o.ok]

    @property
    def partial_failure(self) -> bool:
        return bool(self.failed)

    @property
    def created(self) -> int:
        return sum(o.created for o in self.outcomes)

    @property
    def deleted(self) -> int:
        return sum(o.deleted for o in self.outcomes)

    def to_dict(self) -> dict[str, object]:
        return {
            "status": "partial_failure" if self.partial_failure else "ok",
            "source_segment_id": self.source_segment_id,
            "mode": self.mode.value,
            "created": self.created,
            "deleted": self.deleted,
            "targets": [o.to_dict() for o in self.outcomes],
        }


__all__ = [
    "CopyReport",
    "Pair",
    "TargetOutcome",
    "plan_merge",
    "plan_overwrite",
    "validate_copy_request",
]
