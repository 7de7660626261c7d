from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.copy_plan import (
    CopyReport,
    Pair,
    TargetOutcome,
    plan_merge,
    plan_overwrite,
    validate_copy_request,
)
from ..domain.interfaces import AssignmentStore
from ..infra.exceptions import InvalidCopyRequestError, RunOfShowError
from ..infra.locks import locked_production
from ..infra.logging import get_logger
from ..infra.repositories import AssignmentRepository, SegmentRepository
from ..shared.types import CopyMode

_log = get_logger(__name__)


def _copy_to_target(
    store: AssignmentStore, target_id: int, source_pairs: list[Pair], mode: CopyMode
) -> TargetOutcome:
    deleted = 0
    if mode is CopyMode.OVERWRITE:
        deleted = store.delete_segment_assignments(target_id)
        planned = plan_overwrite(source_pairs)
    else:
        existing = [(a.person_id, a.position_id) for a in store.segment_assignments(target_id)]
        planned = plan_merge(source_pairs, existing)
    created = store.insert_segment_assignments(target_id, planned)
    return TargetOutcome(segment_id=target_id, ok=True, created=created, deleted=deleted)


def copy_assignments(
    db: Session,
    *,
    source_segment_id: int,
    target_segment_ids: Iterable[int],
    mode: str | CopyMode = CopyMode.MERGE,
    store: AssignmentStore | None = None,
) -> dict[str, Any]:
    """Copy every assignment row of a segment onto other segments.

    The request is validated completely before anything is written. Each
    target is then written inside its own savepoint: a target that fails is
    rolled back on its own and reported, the others still go through.

    Args:
        db: Database session
        source_segment_id: Segment to copy from
        target_segment_ids: Non-empty, unique, must not contain the source
        mode: "merge" adds missing (person, position) pairs; "overwrite"
            replaces the target's rows with the source's
        store: Assignment store override (defaults to the SQLAlchemy repository)

    Returns:
        Dictionary with overall status ("ok" or "partial_failure") and
        per-target outcomes

    Raises:
        InvalidCopyRequestError: Malformed request or targets in another production
        UnknownReferenceError: If the source or a target does not exist
    """
    request = validate_copy_request(source_segment_id, target_segment_ids, mode)

    segments = SegmentRepository(db)
    production_id = segments.get_segment(request.source_segment_id).production_id

    store = store or AssignmentRepository(db)
    report = CopyReport(source_segment_id=request.source_segment_id, mode=request.mode)

    with locked_production(db, production_id):
        segments.lock_production(production_id)
        source = segments.get_segment(request.source_segment_id)
        targets = [segments.get_segment(t) for t in request.target_segment_ids]
        foreign = [t.id for t in targets if t.production_id != source.production_id]
        if foreign:
            raise InvalidCopyRequestError(
                "Targets must belong to the same production as the source",
                violations=[f"segment {sid} belongs to another production" for sid in foreign],
            )

        source_pairs = [(a.person_id, a.position_id) for a in store.segment_assignments(source.id)]

        for target_id in request.target_segment_ids:
            try:
                with db.begin_nested():
                    outcome = _copy_to_target(store, target_id, source_pairs, request.mode)
            except (SQLAlchemyError, RunOfShowError) as e:
                _log.warning(
                    "assignment_copy_target_failed",
                    source_segment_id=source.id,
                    target_segment_id=target_id,
                    error=str(e),
                )
                outcome = TargetOutcome(segment_id=target_id, ok=False, error=str(e))
            report.outcomes.append(outcome)

        db.commit()

    _log.info(
        "assignments_copied",
        source_segment_id=source.id,
        mode=request.mode.value,
        succeeded=report.succeeded,
        failed=report.failed,
        created=report.created,
        deleted=report.deleted,
    )
    return report.to_dict()


__all__ = ["copy_assignments"]
