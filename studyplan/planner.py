"""
Study Planner - Main Orchestrator.

This module contains the StudyPlanner class that owns the plan for one
session and connects the engines to the presentation layer.

NOTE: Don't run this file directly. Run from the project root:
    python3 -m studyplan
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Union

from .data import ModuleResolver, NUSModsResolver, basket_options, load_plan, options_for_placeholder
from .engines import PlacementEngine, ValidationPipeline
from .errors import InvalidPlacement
from .models import BasicModuleInfo, ContainerRef, Plan
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)


class StudyPlanner:
    """
    Main interface for the study planner.

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: ORCHESTRATOR
    ═══════════════════════════════════════════════════════════════════════════

    1. Holds the current Plan for the session (nothing is persisted)
    2. Routes every change through the PlacementEngine, which returns a new,
       re-validated Plan
    3. Swaps the new plan in only when the whole operation succeeded

    Operations on one planner must not run concurrently. Each one replaces
    ``self.plan`` as a whole, so a failed call (InvalidPlacement,
    ResolverUnavailable) leaves the previous plan in place and can simply be
    retried.

    TO CHANGE THE UI:
    -----------------
    Pass a different display object. It only needs ``print_plan``.

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        planner = StudyPlanner()
        planner.load("plan.json")
        planner.move_module("CS2040S", "requirement:0", 0, "planner:1", 0)
        planner.select_underlying_module("^GEA1000", "GEA1000")
        planner.show()
    """

    def __init__(self, resolver: Optional[ModuleResolver] = None, display=None):
        self.resolver = resolver or NUSModsResolver()
        self.pipeline = ValidationPipeline(self.resolver)
        self.placement = PlacementEngine(self.pipeline)
        self.display = display or TerminalDisplay()
        self.plan = Plan()

    def load(self, path: Union[str, Path]) -> Plan:
        """Load a plan description, derive its pools and validate it."""
        return self.set_plan(load_plan(path))

    def set_plan(self, plan: Plan) -> Plan:
        self.plan = self.placement.prepare(plan)
        logger.info("Plan loaded: %d terms, %d pools", len(self.plan.terms), len(self.plan.pools))
        return self.plan

    def validate(self) -> Plan:
        self.plan = self.pipeline.validate(self.plan)
        return self.plan

    def move_module(self, module_id: str, source: Union[str, ContainerRef], source_index: int,
                    destination: Union[str, ContainerRef], dest_index: int) -> Plan:
        """
        Move a module. Containers are ContainerRefs or drag-and-drop ids
        ("planner:2", "requirement:0").
        """
        self.plan = self.placement.move_module(
            self.plan, module_id, _as_ref(source), source_index, _as_ref(destination), dest_index
        )
        return self.plan

    def close_module(self, module_id: str) -> Plan:
        self.plan = self.placement.close_module(self.plan, module_id)
        return self.plan

    def select_underlying_module(self, placeholder_id: str, concrete_code: str) -> Plan:
        self.plan = self.placement.select_underlying_module(self.plan, placeholder_id, concrete_code)
        return self.plan

    def basket_options(self, placeholder_id: str) -> list:
        """(label, code) choices for filling a basket slot."""
        placeholder = self.plan.get_module(placeholder_id)
        if placeholder is None or not placeholder.is_placeholder:
            raise InvalidPlacement(f"{placeholder_id} is not a basket slot in this plan")
        existing = set(self.plan.registry) | {
            m.effective_code for term in self.plan.terms for m in term.modules
        }
        options = options_for_placeholder(placeholder, self.resolver.fetch_module_list(), existing)
        return basket_options(options)

    def module_info(self, code: str) -> Optional[BasicModuleInfo]:
        return self.resolver.fetch_basic_module_info(code)

    def refresh(self) -> Plan:
        """Drop resolver caches and re-validate against fresh data."""
        self.resolver.refresh()
        plan = self.plan
        stale = replace(
            plan,
            terms=tuple(
                replace(t, modules=tuple(m.forget_requirements() for m in t.modules))
                for t in plan.terms
            ),
            registry={code: m.forget_requirements() for code, m in plan.registry.items()},
        )
        self.plan = self.placement.prepare(stale)
        return self.plan

    def show(self):
        self.display.print_plan(self.plan)

    def violations(self) -> List[tuple]:
        """(term name, module) for every placed module with unmet requirements."""
        return [
            (term.name, module)
            for term in self.plan.terms
            for module in term.modules
            if module.has_violations
        ]


def _as_ref(container: Union[str, ContainerRef]) -> ContainerRef:
    if isinstance(container, ContainerRef):
        return container
    return ContainerRef.parse(container)
