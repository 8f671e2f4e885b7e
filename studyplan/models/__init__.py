"""
Data models for the study planner.

This package contains all dataclasses and enums used throughout the system.
These serve as "contracts" between different parts of the system.
"""

from .prereq_tree import (
    Leaf,
    And,
    Or,
    Malformed,
    PrereqTree,
    parse_prereq_tree,
)
from .module import (
    Module,
    BasicModuleInfo,
    Unset,
    UNRESOLVED,
    UNAVAILABLE,
    ViolationGroups,
)
from .plan import ContainerKind, ContainerRef, Term, RequirementPool, Plan

__all__ = [
    # Prerequisite trees
    "Leaf",
    "And",
    "Or",
    "Malformed",
    "PrereqTree",
    "parse_prereq_tree",
    # Modules
    "Module",
    "BasicModuleInfo",
    "Unset",
    "UNRESOLVED",
    "UNAVAILABLE",
    "ViolationGroups",
    # Plan structure
    "ContainerKind",
    "ContainerRef",
    "Term",
    "RequirementPool",
    "Plan",
]
