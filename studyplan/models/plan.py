"""
Plan data models.

A Plan is an ordered list of Terms plus a list of RequirementPools:

    Plan
    ├── terms: (Term "Y1S1", Term "Y1S2", ...)   ordered, position = time
    ├── pools: (RequirementPool "Core", ...)      unordered staging buckets
    └── registry: {code: Module}                  every module the plan knows

A module code is in at most one Term. The same code may sit in several
pools, because one module can count towards more than one requirement.

Pool contents are a view: each pool keeps its master ``codes`` list and
``modules`` is re-derived from it after every move (see
``studyplan.engines.placement.derive_pools``).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Set, Tuple

from ..errors import InvalidPlacement
from .module import Module


class ContainerKind(Enum):
    """The two kinds of container a module can sit in."""
    TERM = "planner"
    POOL = "requirement"


@dataclass(frozen=True)
class ContainerRef:
    """
    Address of a container.

    Terms are addressed by position. Pools are addressed as a whole ("any
    pool") because a pickup from the pools clears the code from all of them.
    """
    kind: ContainerKind
    index: Optional[int] = None

    @classmethod
    def term(cls, index: int) -> "ContainerRef":
        return cls(ContainerKind.TERM, index)

    @classmethod
    def pool(cls, index: Optional[int] = None) -> "ContainerRef":
        return cls(ContainerKind.POOL, index)

    @classmethod
    def parse(cls, container_id: str) -> "ContainerRef":
        """
        Parse a drag-and-drop container id such as "planner:3" or
        "requirement:0".
        """
        kind_str, _, index_str = container_id.partition(":")
        try:
            kind = ContainerKind(kind_str)
            index = int(index_str) if index_str else None
        except ValueError as exc:
            raise InvalidPlacement(f"Unknown container id: {container_id!r}") from exc
        return cls(kind, index)

    @property
    def is_term(self) -> bool:
        return self.kind is ContainerKind.TERM

    def __str__(self):
        if self.index is None:
            return self.kind.value
        return f"{self.kind.value}:{self.index}"


@dataclass(frozen=True)
class Term:
    """An academic period. Module order is kept exactly as placed."""
    name: str
    modules: Tuple[Module, ...] = ()

    __hash__ = None

    @property
    def codes(self) -> list:
        """Identity codes of the placed modules, in order."""
        return [m.code for m in self.modules]

    @property
    def effective_codes(self) -> Set[str]:
        return {m.effective_code for m in self.modules}

    @property
    def total_credits(self) -> float:
        return sum(m.effective_credits for m in self.modules)


@dataclass(frozen=True)
class RequirementPool:
    """
    A named bucket of modules still to be placed.

    Attributes:
        name: Requirement title (e.g. "Computer Science Foundation")
        codes: Master list of codes belonging to this requirement
        modules: Derived view, the master codes not currently placed in a term
    """
    name: str
    codes: Tuple[str, ...] = ()
    modules: Tuple[Module, ...] = ()

    __hash__ = None


@dataclass(frozen=True)
class Plan:
    """
    Terms in order, requirement pools, and every module the plan knows of.

    Like Module it is frozen but unhashable (the registry is a dict).
    """
    terms: Tuple[Term, ...] = ()
    pools: Tuple[RequirementPool, ...] = ()
    registry: Dict[str, Module] = field(default_factory=dict)

    __hash__ = None

    @property
    def placed_codes(self) -> Set[str]:
        """Identity codes of every module placed in any term."""
        return {code for term in self.terms for code in term.codes}

    @property
    def master_codes(self) -> Tuple[Tuple[str, ...], ...]:
        return tuple(pool.codes for pool in self.pools)

    def locate(self, code: str) -> Optional[Tuple[int, int]]:
        """(term index, position) of a placed module, or None."""
        for term_index, term in enumerate(self.terms):
            for position, module in enumerate(term.modules):
                if module.code == code:
                    return term_index, position
        return None

    def in_pools(self, code: str) -> bool:
        return any(m.code == code for pool in self.pools for m in pool.modules)

    def get_module(self, code: str) -> Optional[Module]:
        """The live copy of a module: placed copy first, then the registry."""
        location = self.locate(code)
        if location is not None:
            term_index, position = location
            return self.terms[term_index].modules[position]
        return self.registry.get(code)
