"""
Default-position templates per segment name.

A segment named "Rust" expects the positions stored under the template
"Rust". When no template exists for that literal name the global template is
used; when that is missing too the segment simply has no expected positions.
The global template's storage key lives only in this module.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

GLOBAL_SEGMENT_NAME = "__GLOBAL__"
# Operators see and type the global template under this name
GLOBAL_DISPLAY_NAME = "Algemeen"


@dataclass(frozen=True)
class ExpectedPosition:
    position_id: int
    name: str
    order: int
    required_skill_id: int | None = None
    required_skill_code: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "position_id": self.position_id,
            "name": self.name,
            "order": self.order,
            "required_skill_id": self.required_skill_id,
            "required_skill_code": self.required_skill_code,
        }


TemplateLookup = Callable[[str], Iterable[ExpectedPosition]]


def normalize_template_name(name: str) -> str:
    """Storage key for a template name typed by an operator."""
    cleaned = name.strip()
    if cleaned == GLOBAL_DISPLAY_NAME:
        return GLOBAL_SEGMENT_NAME
    return cleaned


def display_template_name(name: str) -> str:
    return GLOBAL_DISPLAY_NAME if name == GLOBAL_SEGMENT_NAME else name


def sort_template(rows: Iterable[ExpectedPosition]) -> list[ExpectedPosition]:
    return sorted(rows, key=lambda r: (r.order, r.position_id))


def resolve_default_positions(segment_name: str, lookup: TemplateLookup) -> list[ExpectedPosition]:
    """Expected positions for a segment name.

    1. the template stored under ``segment_name``
    2. otherwise the global template
    3. otherwise an empty list
    """
    rows = list(lookup(segment_name))
    if not rows and segment_name != GLOBAL_SEGMENT_NAME:
        rows = list(lookup(GLOBAL_SEGMENT_NAME))
    return sort_template(rows)


__all__ = [
    "GLOBAL_DISPLAY_NAME",
    "GLOBAL_SEGMENT_NAME",
    "ExpectedPosition",
    "display_template_name",
    "normalize_template_name",
    "resolve_default_positions",
    "sort_template",
]
