"""
Placement Engine.

This module moves modules between terms and requirement pools and keeps
pool contents, colour tags and validation results in step with every move.
"""

import logging
from dataclasses import replace
from typing import AbstractSet, Dict, List, Sequence, Tuple

from ..config import DEFAULT_CREDITS, DEFAULT_MODULE_COLOR, MODULE_COLORS
from ..errors import InvalidPlacement
from ..models import ContainerRef, Module, Plan, Term
from .validation import ValidationPipeline

logger = logging.getLogger(__name__)


def derive_pools(master_requirement_codes: Sequence[Sequence[str]],
                 currently_placed_codes: AbstractSet[str]) -> List[List[str]]:
    """
    Pool contents as a view over the master requirement lists.

    Each pool shows its master codes, in master order, minus whatever is
    currently placed in a term. A code listed by several requirements shows
    up in each of them until it is placed.
    """
    return [
        [code for code in codes if code not in currently_placed_codes]
        for codes in master_requirement_codes
    ]


def pool_colors(master_requirement_codes: Sequence[Sequence[str]]) -> Dict[str, Tuple[str, ...]]:
    """One colour per pool a code belongs to, cycling through MODULE_COLORS."""
    colors = {}
    for index, codes in enumerate(master_requirement_codes):
        color = MODULE_COLORS[index % len(MODULE_COLORS)]
        for code in codes:
            if color not in colors.get(code, ()):
                colors[code] = colors.get(code, ()) + (color,)
    return colors


def assign_pool_colors(plan: Plan) -> Plan:
    """Tag every module with the colours of the pools it belongs to."""
    colors = pool_colors(plan.master_codes)

    def tag(module: Module) -> Module:
        return replace(module, tags=colors.get(module.code, (DEFAULT_MODULE_COLOR,)))

    return replace(
        plan,
        terms=tuple(replace(t, modules=tuple(tag(m) for m in t.modules)) for t in plan.terms),
        pools=tuple(replace(p, modules=tuple(tag(m) for m in p.modules)) for p in plan.pools),
        registry={code: tag(m) for code, m in plan.registry.items()},
    )


def rederive(plan: Plan) -> Plan:
    """Rebuild every pool's contents from its master list and recolour."""
    derived = derive_pools(plan.master_codes, plan.placed_codes)
    pools = tuple(
        replace(pool, modules=tuple(plan.registry[c] for c in codes if c in plan.registry))
        for pool, codes in zip(plan.pools, derived)
    )
    return assign_pool_colors(replace(plan, pools=pools))


def _unplaced(module: Module) -> Module:
    # Violations only mean something for a placed module
    return replace(module, prereqs_violated=None, coreqs_violated=[])


class PlacementEngine:
    """
    Moves modules around a plan.

    CONTAINERS:
    ----------
    Terms are ordered. A module is removed from a term by position and
    inserted by position, and everything after it shifts.

    Pools are views. Picking a module up from "the pools" removes the code
    from every pool at once, because a placed module can no longer be
    "needed" anywhere. Dropping a module on a pool ignores the drop index;
    pool contents are re-derived from the master lists after every move.

    Every operation returns a NEW plan that has been re-derived and fully
    re-validated: moving one module can change the taken-set of every later
    term. Bad input raises InvalidPlacement before anything is built, and a
    resolver failure raises from validation; either way the caller's plan is
    unchanged.
    """

    def __init__(self, pipeline: ValidationPipeline):
        self.pipeline = pipeline

    def prepare(self, plan: Plan) -> Plan:
        """Derive pools and validate a freshly loaded plan."""
        placed = [code for term in plan.terms for code in term.codes]
        repeated = sorted({code for code in placed if placed.count(code) > 1})
        if repeated:
            raise InvalidPlacement(f"Placed in more than one term: {', '.join(repeated)}")
        return self._finish(plan)

    def move_module(self, plan: Plan, module_id: str, source: ContainerRef, source_index: int,
                    destination: ContainerRef, dest_index: int) -> Plan:
        plan, module = self._take(plan, module_id, source, source_index)
        plan = self._put(plan, module, destination, dest_index)
        logger.info("Moved %s from %s to %s", module_id, source, destination)
        return self._finish(plan)

    def close_module(self, plan: Plan, module_id: str) -> Plan:
        """Take a module out of its term and return it to the default pool."""
        location = plan.locate(module_id)
        if location is None:
            raise InvalidPlacement(f"{module_id} is not placed in any term")
        term_index, position = location
        return self.move_module(plan, module_id, ContainerRef.term(term_index), position,
                                ContainerRef.pool(0), 0)

    def select_underlying_module(self, plan: Plan, placeholder_id: str, concrete_code: str) -> Plan:
        """
        Bind a basket slot to a concrete module.

        The slot takes the concrete module's code, name and credits for all
        validation from now on. A module the resolver does not know still
        binds, with an empty name and DEFAULT_CREDITS.
        """
        placeholder = plan.get_module(placeholder_id)
        if placeholder is None or not placeholder.is_placeholder:
            raise InvalidPlacement(f"{placeholder_id} is not a basket slot in this plan")

        info = self.pipeline.resolver.fetch_basic_module_info(concrete_code)
        if info is None:
            underlying = Module(code=concrete_code, name="", credits=DEFAULT_CREDITS)
        else:
            underlying = Module.from_info(info)

        def bind(module: Module) -> Module:
            return module.bind(underlying) if module.code == placeholder_id else module

        registry = dict(plan.registry)
        registry[placeholder_id] = bind(registry.get(placeholder_id, placeholder))
        plan = replace(
            plan,
            terms=tuple(replace(t, modules=tuple(bind(m) for m in t.modules)) for t in plan.terms),
            registry=registry,
        )
        logger.info("Bound %s to %s", placeholder_id, underlying.code)
        return self._finish(plan)

    def _finish(self, plan: Plan) -> Plan:
        return self.pipeline.validate(rederive(plan))

    def _term_at(self, plan: Plan, ref: ContainerRef) -> Term:
        if ref.index is None or not 0 <= ref.index < len(plan.terms):
            raise InvalidPlacement(f"No term at {ref}")
        return plan.terms[ref.index]

    def _take(self, plan: Plan, module_id: str, source: ContainerRef,
              source_index: int) -> Tuple[Plan, Module]:
        if source.is_term:
            term = self._term_at(plan, source)
            if not 0 <= source_index < len(term.modules):
                raise InvalidPlacement(
                    f"Index {source_index} out of range for {source} ({len(term.modules)} modules)"
                )
            module = term.modules[source_index]
            if module.code != module_id:
                raise InvalidPlacement(f"{source} holds {module.code} at {source_index}, not {module_id}")

            modules = term.modules[:source_index] + term.modules[source_index + 1:]
            terms = list(plan.terms)
            terms[source.index] = replace(term, modules=modules)
            return replace(plan, terms=tuple(terms)), module

        if not plan.in_pools(module_id):
            raise InvalidPlacement(f"{module_id} is not in any requirement pool")
        pools = tuple(
            replace(pool, modules=tuple(m for m in pool.modules if m.code != module_id))
            for pool in plan.pools
        )
        return replace(plan, pools=pools), plan.registry[module_id]

    def _put(self, plan: Plan, module: Module, destination: ContainerRef, dest_index: int) -> Plan:
        if destination.is_term:
            term = self._term_at(plan, destination)
            if dest_index < 0:
                raise InvalidPlacement(f"Index {dest_index} out of range for {destination}")
            if module.code in plan.placed_codes:
                raise InvalidPlacement(f"{module.code} is already placed in another term")

            modules = list(term.modules)
            modules.insert(dest_index, module)
            terms = list(plan.terms)
            terms[destination.index] = replace(term, modules=tuple(modules))
            return replace(plan, terms=tuple(terms))

        if not plan.pools:
            raise InvalidPlacement("Plan has no requirement pools")

        registry = dict(plan.registry)
        registry[module.code] = _unplaced(module)
        pools = plan.pools
        if not any(module.code in pool.codes for pool in pools):
            # Not part of any requirement: keep it in the default pool
            first = pools[0]
            pools = (replace(first, codes=first.codes + (module.code,)),) + pools[1:]
        return replace(plan, pools=pools, registry=registry)
