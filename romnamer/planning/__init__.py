"""
Rename planning package for romnamer.

Builds rename plans from match results, exports them, and applies them
to the filesystem.
"""

from .planner import (
    PlanAction,
    PlanItem,
    PlannerOptions,
    RenamePlan,
    build_plan,
    sanitize_filename,
    strip_numeric_prefix,
)
from .executor import ApplyResult, RenameFailure, apply_plan, resolve_collision
from .export import write_plan_csv, write_unmatched_list

__all__ = [
    'PlanAction',
    'PlanItem',
    'PlannerOptions',
    'RenamePlan',
    'build_plan',
    'sanitize_filename',
    'strip_numeric_prefix',
    'ApplyResult',
    'RenameFailure',
    'apply_plan',
    'resolve_collision',
    'write_plan_csv',
    'write_unmatched_list',
]
