"""
Application usecases.

CLI commands call functions from here. Each usecase takes a Session, does its
own commit, and returns plain dicts ready for JSON output.
"""

# Import order matters: the later modules reuse helpers from production_add,
# timing_show and segment_add.
from . import production_add  # noqa: I001
from . import timing_show  # noqa: I001
from . import segment_add  # noqa: I001  # Depends on production_add and timing_show
from . import segment_list  # noqa: I001
from . import segment_move  # noqa: I001  # Depends on segment_add
from . import segment_update  # noqa: I001  # Depends on segment_add and segment_move
from . import segment_delete  # noqa: I001  # Depends on segment_add
from . import template_show  # noqa: I001
from . import template_update  # noqa: I001  # Depends on template_show
from . import assignment_add  # noqa: I001
from . import assignment_delete  # noqa: I001
from . import assignment_list  # noqa: I001
from . import assignment_copy  # noqa: I001
from . import crew_add  # noqa: I001
from . import crew_remove  # noqa: I001
from . import crew_candidates  # noqa: I001
from . import crew_overview  # noqa: I001  # Depends on assignment_list

__all__ = [
    "assignment_add",
    "assignment_copy",
    "assignment_delete",
    "assignment_list",
    "crew_add",
    "crew_candidates",
    "crew_overview",
    "crew_remove",
    "production_add",
    "segment_add",
    "segment_delete",
    "segment_list",
    "segment_move",
    "segment_update",
    "template_show",
    "template_update",
    "timing_show",
]
