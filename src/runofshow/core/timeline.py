"""
Timeline calculation: wall-clock start/end for every segment.

One segment is the time anchor; its start is fixed externally (match kickoff).
Later segments run forward from the anchor's end, earlier segments are laid
out backwards from the anchor's start. Pure and deterministic.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol

from ..shared.types import NoAnchorReason

LIVE_MARKER_NAME = "LIVESTREAM START"


class TimedSegment(Protocol):
    id: int
    name: str
    position: int
    duration_minutes: int
    is_time_anchor: bool


@dataclass(frozen=True)
class TimelineEntry:
    segment_id: int | None
    name: str
    position: int | None
    duration_minutes: int
    start: datetime
    end: datetime
    is_anchor: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "segment_id": self.segment_id,
            "name": self.name,
            "position": self.position,
            "duration_minutes": self.duration_minutes,
            "start": format_instant(self.start),
            "end": format_instant(self.end),
            "is_anchor": self.is_anchor,
        }


@dataclass(frozen=True)
class Timeline:
    entries: tuple[TimelineEntry, ...]
    anchor_segment_id: int | None = None

    @property
    def starts_at(self) -> datetime | None:
        return self.entries[0].start if self.entries else None

    @property
    def ends_at(self) -> datetime | None:
        return self.entries[-1].end if self.entries else None

    @property
    def total_duration(self) -> timedelta:
        return timedelta(minutes=sum(e.duration_minutes for e in self.entries))


@dataclass(frozen=True)
class NoAnchorConfigured:
    """The timeline cannot be placed on the clock yet. Callers prompt for an anchor."""

    reason: NoAnchorReason
    anchor_count: int = 0

    @property
    def message(self) -> str:
        if self.reason is NoAnchorReason.MULTIPLE_ANCHOR_SEGMENTS:
            return f"{self.anchor_count} segments are flagged as time anchor; exactly one is required"
        if self.reason is NoAnchorReason.ANCHOR_TIME_UNSET:
            return "The anchor segment has no start time"
        return "No anchor segment defined"


TimelineResult = Timeline | NoAnchorConfigured


def ensure_aware(instant: datetime) -> datetime:
    """Naive datetimes are UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def format_instant(instant: datetime) -> str:
    """ISO-8601 UTC with a Z suffix."""
    return ensure_aware(instant).astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def compute_timeline(segments: Sequence[TimedSegment], anchor_start: datetime | None) -> TimelineResult:
    """Place every segment on the wall clock relative to the anchor segment.

    Args:
        segments: Segments of one production; ordered by ``position`` here.
        anchor_start: Fixed start instant of the anchor segment, or None if unset.

    Returns:
        Timeline with one entry per segment in running order, or
        NoAnchorConfigured when zero or several segments are flagged or the
        anchor instant is unset. An empty production yields an empty Timeline.
    """
    ordered = sorted(segments, key=lambda s: s.position)
    if not ordered:
        return Timeline(entries=())

    anchors = [i for i, s in enumerate(ordered) if s.is_time_anchor]
    if not anchors:
        return NoAnchorConfigured(NoAnchorReason.NO_ANCHOR_SEGMENT)
    if len(anchors) > 1:
        return NoAnchorConfigured(NoAnchorReason.MULTIPLE_ANCHOR_SEGMENTS, anchor_count=len(anchors))
    if anchor_start is None:
        return NoAnchorConfigured(NoAnchorReason.ANCHOR_TIME_UNSET, anchor_count=1)

    anchor_index = anchors[0]
    starts: list[datetime] = [ensure_aware(anchor_start)] * len(ordered)
    ends: list[datetime] = list(starts)

    t = starts[anchor_index]
    for i in range(anchor_index, len(ordered)):
        starts[i] = t
        t = t + timedelta(minutes=ordered[i].duration_minutes)
        ends[i] = t

    t = starts[anchor_index]
    for i in range(anchor_index - 1, -1, -1):
        ends[i] = t
        t = t - timedelta(minutes=ordered[i].duration_minutes)
        starts[i] = t

    entries = tuple(
        TimelineEntry(
            segment_id=s.id,
            name=s.name,
            position=s.position,
            duration_minutes=s.duration_minutes,
            start=starts[i],
            end=ends[i],
            is_anchor=(i == anchor_index),
        )
        for i, s in enumerate(ordered)
    )
    return Timeline(entries=entries, anchor_segment_id=ordered[anchor_index].id)


def with_live_marker(timeline: Timeline, live_time: datetime | None) -> list[TimelineEntry]:
    """Timeline entries plus a zero-length livestream start marker, sorted by start.

    The marker sorts before a segment starting at the same instant.
    """
    entries = list(timeline.entries)
    if live_time is None:
        return entries
    live = ensure_aware(live_time)
    marker = TimelineEntry(
        segment_id=None,
        name=LIVE_MARKER_NAME,
        position=None,
        duration_minutes=0,
        start=live,
        end=live,
    )
    return sorted([marker, *entries], key=lambda e: e.start)


__all__ = [
    "LIVE_MARKER_NAME",
    "NoAnchorConfigured",
    "Timeline",
    "TimelineEntry",
    "TimelineResult",
    "compute_timeline",
    "ensure_aware",
    "format_instant",
    "with_live_marker",
]
