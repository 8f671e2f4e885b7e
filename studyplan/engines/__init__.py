"""
Validation and placement engines.

This package contains the engines that perform the core logic of the
planner: evaluating prerequisite trees, checking corequisites, validating
a plan term by term, and moving modules between containers.
"""

from .prereq_tree import evaluate_violations, is_satisfied
from .coreq import CoreqValidator
from .validation import ValidationPipeline, taken_sets
from .placement import (
    PlacementEngine,
    derive_pools,
    pool_colors,
    assign_pool_colors,
    rederive,
)

__all__ = [
    "evaluate_violations",
    "is_satisfied",
    "CoreqValidator",
    "ValidationPipeline",
    "taken_sets",
    "PlacementEngine",
    "derive_pools",
    "pool_colors",
    "assign_pool_colors",
    "rederive",
]
