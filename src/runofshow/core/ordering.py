"""
Segment ordering: pure renumbering over the arena of one production.

The arena is the list of segment ids of a production in running order. Every
mutation (append, insert, move, remove) is computed here as a new arena; the
repository then writes the resulting ``{segment_id: position}`` map in one
transaction. Positions are always exactly ``{1..N}``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ..infra.exceptions import InvalidOrderingError


def check_contiguous(positions: Iterable[int], production_id: int | None = None) -> None:
    """Raise InvalidOrderingError unless positions are exactly ``{1..N}``."""
    values = sorted(positions)
    expected = list(range(1, len(values) + 1))
    if values != expected:
        raise InvalidOrderingError(
            f"Segment positions must be contiguous from 1 without duplicates, got {values}",
            production_id=production_id,
        )


def append_position(positions: Iterable[int]) -> int:
    """Position a newly appended segment receives."""
    return max(positions, default=0) + 1


def insert_at(order: Sequence[int], segment_id: int, position: int | None = None) -> list[int]:
    """Insert ``segment_id`` at ``position`` (1-based); later segments shift up.

    ``None`` appends. A position past the end is clamped to ``N + 1``.
    """
    if segment_id in order:
        raise InvalidOrderingError(f"Segment {segment_id} is already in the running order")
    new_order = list(order)
    if position is None:
        new_order.append(segment_id)
        return new_order
    if position < 1:
        raise InvalidOrderingError(f"Position must be >= 1, got {position}")
    index = min(position, len(new_order) + 1) - 1
    new_order.insert(index, segment_id)
    return new_order


def move(order: Sequence[int], segment_id: int, new_position: int) -> list[int]:
    """Relocate one segment to ``new_position``.

    Moving down (q > p) shifts the segments in (p, q] up one slot; moving up
    (q < p) shifts the segments in [q, p) down one slot. Positions outside
    ``[1, N]`` are rejected.
    """
    size = len(order)
    if segment_id not in order:
        raise InvalidOrderingError(f"Segment {segment_id} is not in the running order")
    if new_position < 1 or new_position > size:
        raise InvalidOrderingError(f"Position {new_position} is out of range [1, {size}]")
    new_order = list(order)
    new_order.remove(segment_id)
    new_order.insert(new_position - 1, segment_id)
    return new_order


def remove(order: Sequence[int], segment_id: int) -> list[int]:
    """Drop a segment; every later segment moves up one slot."""
    if segment_id not in order:
        raise InvalidOrderingError(f"Segment {segment_id} is not in the running order")
    return [sid for sid in order if sid != segment_id]


def renumber(order: Sequence[int]) -> dict[int, int]:
    """Map each segment id to its 1-based position."""
    return {segment_id: index for index, segment_id in enumerate(order, start=1)}


def changed_positions(current: Mapping[int, int], order: Sequence[int]) -> dict[int, int]:
    """Only the entries of ``renumber(order)`` that differ from ``current``."""
    target = renumber(order)
    return {sid: pos for sid, pos in target.items() if current.get(sid) != pos}


__all__ = [
    "append_position",
    "changed_positions",
    "check_contiguous",
    "insert_at",
    "move",
    "remove",
    "renumber",
]
