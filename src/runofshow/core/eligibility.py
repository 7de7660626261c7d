"""Crew candidates for a position, by required skill. Advisory only."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CrewMember:
    person_id: int
    name: str
    skill_ids: frozenset[int] = field(default_factory=frozenset)

    def to_dict(self) -> dict[str, object]:
        return {"person_id": self.person_id, "name": self.name, "skill_ids": sorted(self.skill_ids)}


def is_eligible(member: CrewMember, required_skill_id: int | None) -> bool:
    return required_skill_id is None or required_skill_id in member.skill_ids


def eligible_crew(required_skill_id: int | None, crew: Iterable[CrewMember]) -> list[CrewMember]:
    """Roster members that can fill a position; the whole roster when no skill is required."""
    return [member for member in crew if is_eligible(member, required_skill_id)]


__all__ = ["CrewMember", "eligible_crew", "is_eligible"]
