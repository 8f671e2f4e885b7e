"""
Validation Pipeline.

This module walks the terms of a plan in order and annotates every placed
module with its prerequisite and corequisite violations.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import FrozenSet, List, Optional, Sequence, Tuple

from ..config import MAX_RESOLVER_WORKERS, PRECLUSIONS_SATISFY_PREREQS
from ..data import ModuleResolver
from ..models import Module, Plan, PrereqTree, Term, UNAVAILABLE
from .coreq import CoreqValidator
from .prereq_tree import evaluate_violations

logger = logging.getLogger(__name__)

Requirements = Tuple[Optional[PrereqTree], List[str], List[str]]


def taken_sets(terms: Sequence[Term],
               preclusions_satisfy_prereqs: bool = PRECLUSIONS_SATISFY_PREREQS) -> List[FrozenSet[str]]:
    """
    The codes that count as taken at the START of each term.

    Entry i holds what terms 0..i-1 contributed, so modules in the same
    term never satisfy each other. A term contributes:
    - every module's own code
    - the underlying code of every bound basket slot
    - every preclusion declared by its modules (kept apart from taken codes
      and merged in only when ``preclusions_satisfy_prereqs`` is set)
    """
    taken = set()
    precluded = set()
    result = []
    for term in terms:
        if preclusions_satisfy_prereqs:
            result.append(frozenset(taken | precluded))
        else:
            result.append(frozenset(taken))

        for module in term.modules:
            taken.add(module.code)
            taken.add(module.effective_code)
            precluded.update(module.preclusions)
    return result


class ValidationPipeline:
    """
    Annotates a plan with prerequisite and corequisite violations.

    ═══════════════════════════════════════════════════════════════════════════
    PHASES
    ═══════════════════════════════════════════════════════════════════════════

    1. RESOLVE: every placed module without requirement data is looked up
       through the resolver. All lookups go out together on a thread pool
       and are joined once, before any evaluation starts.

    2. EVALUATE: terms are processed strictly in order. Each module's tree
       is checked against what was taken BEFORE its term (see taken_sets).

    3. COREQUISITES: CoreqValidator runs over the fully evaluated plan.

    The input plan is never modified. If any lookup fails the whole call
    raises ResolverUnavailable and the caller keeps its previous plan, so
    there is no half-annotated state to clean up. Retry the whole call.

    ═══════════════════════════════════════════════════════════════════════════

    Usage:
        pipeline = ValidationPipeline(NUSModsResolver())
        plan = pipeline.validate(plan)
    """

    def __init__(self, resolver: ModuleResolver, coreq_validator: Optional[CoreqValidator] = None,
                 max_workers: int = MAX_RESOLVER_WORKERS,
                 preclusions_satisfy_prereqs: bool = PRECLUSIONS_SATISFY_PREREQS):
        self.resolver = resolver
        self.coreq_validator = coreq_validator or CoreqValidator()
        self.max_workers = max_workers
        self.preclusions_satisfy_prereqs = preclusions_satisfy_prereqs

    def validate(self, plan: Plan) -> Plan:
        terms = self.resolve_terms(plan.terms)
        satisfied_sets = taken_sets(terms, self.preclusions_satisfy_prereqs)

        evaluated = []
        for term, satisfied in zip(terms, satisfied_sets):
            modules = tuple(self._evaluate(module, satisfied) for module in term.modules)
            evaluated.append(replace(term, modules=modules))

        plan = self.coreq_validator.validate_coreqs(replace(plan, terms=tuple(evaluated)))

        violations = sum(1 for term in plan.terms for m in term.modules if m.has_violations)
        logger.info("Validated %d terms, %d modules with violations", len(plan.terms), violations)
        return plan

    def resolve_terms(self, terms: Sequence[Term]) -> Tuple[Term, ...]:
        """Return the terms with requirement data filled in for every module."""
        codes = []
        for term in terms:
            for module in term.modules:
                code = self._lookup_code(module)
                if code is not None and code not in codes:
                    codes.append(code)

        requirements = {}
        if codes:
            logger.debug("Resolving requirements for %s", ", ".join(codes))
            workers = max(1, min(self.max_workers, len(codes)))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {code: executor.submit(self._fetch_requirements, code) for code in codes}
                # result() re-raises the first lookup failure
                requirements = {code: future.result() for code, future in futures.items()}

        return tuple(
            replace(term, modules=tuple(self._apply(module, requirements) for module in term.modules))
            for term in terms
        )

    def _lookup_code(self, module: Module) -> Optional[str]:
        """Code to ask the resolver about, or None when nothing is needed."""
        if module.is_resolved:
            return None
        if module.is_placeholder and module.underlying is None:
            return None
        return module.effective_code

    def _fetch_requirements(self, code: str) -> Requirements:
        return (
            self.resolver.fetch_prereq_tree(code),
            self.resolver.fetch_preclusions(code),
            self.resolver.fetch_coreqs(code),
        )

    def _apply(self, module: Module, requirements: dict) -> Module:
        if module.is_placeholder and module.underlying is None:
            # An empty basket slot has no requirements of its own
            return module.with_requirements(None, [], [])
        if module.is_resolved:
            return module
        return module.with_requirements(*requirements[module.effective_code])

    def _evaluate(self, module: Module, satisfied: FrozenSet[str]) -> Module:
        if module.prereqs is None:
            return replace(module, prereqs_violated=None)

        violated = evaluate_violations(module.prereqs, satisfied)
        if violated is UNAVAILABLE:
            logger.warning("Prerequisite data for %s is malformed, no violation result",
                           module.effective_code)
        return replace(module, prereqs_violated=violated)
