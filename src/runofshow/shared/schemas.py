"""
Pydantic schemas for request validation.

These models validate operator input at the boundary before any write happens.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .types import CopyMode


class CopyAssignmentsRequest(BaseModel):
    """Copy all assignments of one segment onto a set of other segments."""

    model_config = ConfigDict(frozen=True)

    source_segment_id: int = Field(..., gt=0, description="Segment to copy assignments from")
    target_segment_ids: list[int] = Field(
        ..., min_length=1, description="Segments to copy onto (non-empty, unique, excludes source)"
    )
    mode: CopyMode = Field(CopyMode.MERGE, description="merge or overwrite")

    @field_validator("target_segment_ids")
    @classmethod
    def _targets_positive_and_unique(cls, value: list[int]) -> list[int]:
        if any(t <= 0 for t in value):
            raise ValueError("target segment ids must be positive integers")
        if len(set(value)) != len(value):
            raise ValueError("target segment ids must not contain duplicates")
        return value

    @model_validator(mode="after")
    def _source_not_a_target(self) -> CopyAssignmentsRequest:
        if self.source_segment_id in self.target_segment_ids:
            raise ValueError("source segment cannot be one of its own targets")
        return self


class TemplateEntry(BaseModel):
    """One position slot in a segment default-position template."""

    position_id: int = Field(..., gt=0)
    order: int = Field(..., ge=0)


class TemplateReplaceRequest(BaseModel):
    """Replace the default-position template stored under a segment name."""

    segment_name: str = Field(..., min_length=1, max_length=100)
    positions: list[TemplateEntry] = Field(default_factory=list)

    @field_validator("segment_name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("segment name must not be blank")
        return value

    @field_validator("positions")
    @classmethod
    def _orders_unique(cls, value: list[TemplateEntry]) -> list[TemplateEntry]:
        orders = [entry.order for entry in value]
        if len(set(orders)) != len(orders):
            raise ValueError("template order values must be unique")
        return value
