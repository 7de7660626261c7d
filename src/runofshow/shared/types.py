"""
Shared types and enums for runofshow.

This module contains common types and enums that are used across
the domain, core, CLI, and other layers.
"""

from __future__ import annotations

from enum import Enum


class CopyMode(str, Enum):
    """Conflict policy when copying segment assignments to other segments."""

    MERGE = "merge"
    OVERWRITE = "overwrite"


class BindingSource(str, Enum):
    """Layer a person-position binding comes from."""

    PRODUCTION = "production"
    SEGMENT = "segment"


class SkillType(str, Enum):
    """Whether a skill is exercised behind the scenes or on the stream itself."""

    CREW = "crew"
    ON_STREAM = "on_stream"


class NoAnchorReason(str, Enum):
    """Why a timeline could not be computed."""

    NO_ANCHOR_SEGMENT = "no_anchor_segment"
    MULTIPLE_ANCHOR_SEGMENTS = "multiple_anchor_segments"
    ANCHOR_TIME_UNSET = "anchor_time_unset"
