"""
Pure run-of-show computations.

Nothing in this package touches the database; every function works on data
already loaded into memory:
- ordering: segment renumbering
- timeline: wall-clock placement around the anchor segment
- templates: default positions per segment name
- assignments: baseline + segment binding overlay
- copy_plan: merge/overwrite planning and per-target reports
- eligibility: crew candidates by required skill
"""

from .assignments import Binding, effective_bindings
from .copy_plan import CopyReport, TargetOutcome, plan_merge, plan_overwrite
from .eligibility import CrewMember, eligible_crew
from .templates import ExpectedPosition, resolve_default_positions
from .timeline import NoAnchorConfigured, Timeline, TimelineEntry, compute_timeline

__all__ = [
    "Binding",
    "CopyReport",
    "CrewMember",
    "ExpectedPosition",
    "NoAnchorConfigured",
    "TargetOutcome",
    "Timeline",
    "TimelineEntry",
    "compute_timeline",
    "effective_bindings",
    "eligible_crew",
    "plan_merge",
    "plan_overwrite",
    "resolve_default_positions",
]
