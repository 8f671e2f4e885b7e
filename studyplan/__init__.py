"""
Study Planner Package
=====================

Arrange modules into ordered terms and check, term by term, that
prerequisites and corequisites are met.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                         ENGINE LAYER                                     │
│        (Pure logic - returns new Plan values, NO UI/printing)           │
│                                                                         │
│  ┌──────────────────┐  ┌────────────────┐  ┌─────────────────────────┐  │
│  │ evaluate_        │  │ CoreqValidator │  │   ValidationPipeline    │  │
│  │ violations       │  │ (same term)    │  │ (resolve, then terms in │  │
│  │ (prereq trees)   │  │                │  │  order)                 │  │
│  └──────────────────┘  └────────────────┘  └─────────────────────────┘  │
│                                                                         │
│  ┌─────────────────────────────┐  ┌─────────────────────────────────┐  │
│  │      PlacementEngine        │  │        ModuleResolver           │  │
│  │ (moves, basket binding)     │  │ (NUSMods API, cached)           │  │
│  └─────────────────────────────┘  └─────────────────────────────────┘  │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   │ Returns dataclasses
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                      PRESENTATION LAYER                                  │
│                       TerminalDisplay                                    │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                        StudyPlanner                                      │
│        (Orchestrator - owns the session plan, wires it all up)          │
└─────────────────────────────────────────────────────────────────────────┘

PACKAGE STRUCTURE
-----------------

studyplan/
├── __init__.py          # This file - main exports
├── config.py            # Configuration constants
├── errors.py            # PlannerError, ResolverUnavailable, InvalidPlacement
├── planner.py           # StudyPlanner orchestrator
├── cli.py               # Command-line interface
│
├── models/              # Data classes and enums
│   ├── prereq_tree.py   # Leaf, And, Or, Malformed, parse_prereq_tree
│   ├── module.py        # Module, BasicModuleInfo, UNRESOLVED, UNAVAILABLE
│   └── plan.py          # Term, RequirementPool, Plan, ContainerRef
│
├── data/                # Data access
│   ├── resolver.py      # ModuleResolver, NUSModsResolver
│   ├── catalog.py       # Code validation, basket options
│   └── loader.py        # load_plan
│
├── engines/             # Validation and placement
│   ├── prereq_tree.py   # evaluate_violations
│   ├── coreq.py         # CoreqValidator
│   ├── validation.py    # ValidationPipeline
│   └── placement.py     # PlacementEngine, derive_pools
│
└── ui/
    └── terminal.py      # TerminalDisplay

USAGE
-----

    from studyplan import StudyPlanner

    planner = StudyPlanner()
    planner.load("plan.json")
    planner.move_module("CS2040S", "requirement", 0, "planner:1", 0)
    for term_name, module in planner.violations():
        print(term_name, module.code, module.prereqs_violated, module.coreqs_violated)

Running from command line:

    python -m studyplan [plan.json]

"""

# Version
__version__ = "1.0.0"

# Main exports
from .planner import StudyPlanner
from .cli import main

# Model exports (for programmatic use)
from .models import (
    Leaf,
    And,
    Or,
    Malformed,
    PrereqTree,
    parse_prereq_tree,
    Module,
    BasicModuleInfo,
    UNRESOLVED,
    UNAVAILABLE,
    ContainerKind,
    ContainerRef,
    Term,
    RequirementPool,
    Plan,
)

# Engine exports (for advanced use)
from .engines import (
    evaluate_violations,
    is_satisfied,
    CoreqValidator,
    ValidationPipeline,
    PlacementEngine,
    derive_pools,
)

# Data exports
from .data import ModuleResolver, NUSModsResolver, load_plan, build_plan

# UI exports
from .ui import TerminalDisplay

# Error exports
from .errors import PlannerError, ResolverUnavailable, InvalidPlacement

__all__ = [
    # Version
    "__version__",
    # Main entry points
    "StudyPlanner",
    "main",
    # Models
    "Leaf",
    "And",
    "Or",
    "Malformed",
    "PrereqTree",
    "parse_prereq_tree",
    "Module",
    "BasicModuleInfo",
    "UNRESOLVED",
    "UNAVAILABLE",
    "ContainerKind",
    "ContainerRef",
    "Term",
    "RequirementPool",
    "Plan",
    # Engines
    "evaluate_violations",
    "is_satisfied",
    "CoreqValidator",
    "ValidationPipeline",
    "PlacementEngine",
    "derive_pools",
    # Data
    "ModuleResolver",
    "NUSModsResolver",
    "load_plan",
    "build_plan",
    # UI
    "TerminalDisplay",
    # Errors
    "PlannerError",
    "ResolverUnavailable",
    "InvalidPlacement",
]
