"""
Module data models.

Contains the Module dataclass that flows through every engine, the
BasicModuleInfo record returned by the module catalog, and the markers used
for "not fetched yet" and "could not evaluate".
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..config import BASKET_PLACEHOLDER_NAME
from .prereq_tree import PrereqTree


class Unset(Enum):
    """
    Markers for values that are not known.

    UNRESOLVED: requirement data has not been fetched for this module yet
    UNAVAILABLE: the prerequisite tree could not be evaluated (malformed data),
                 so there is no violation result. This is NOT "satisfied".
    """
    UNRESOLVED = "unresolved"
    UNAVAILABLE = "unavailable"

    def __repr__(self):
        return self.name


UNRESOLVED = Unset.UNRESOLVED
UNAVAILABLE = Unset.UNAVAILABLE

# [["CS3243", "CS3245"], ["ST2131", "ST2334"]] reads
# ("CS3243" OR "CS3245") AND ("ST2131" OR "ST2334") still required
ViolationGroups = List[List[str]]


@dataclass(frozen=True)
class BasicModuleInfo:
    """Catalog entry for a module: just enough to show and count it."""
    code: str
    name: str
    credits: float


@dataclass(frozen=True)
class Module:
    """
    A module placed in a term or waiting in a requirement pool.

    Modules are immutable. Engines hand back updated copies, so a plan that
    failed to validate is never left half-annotated.

    Attributes:
        code: Identity of the module in the plan (e.g. "CS2040S"). For a
            basket slot this is the slot's own code (e.g. "^GEA1000").
        name: Display name
        credits: Modular credits
        tags: Cosmetic colour tags, one per requirement pool it belongs to
        prereqs: Prerequisite tree, None for "no prerequisites", UNRESOLVED
            until fetched
        preclusions: Codes this module precludes
        coreqs: Codes that must be taken in the same term
        prereqs_violated: None when satisfied, violation groups when not,
            UNAVAILABLE when the tree could not be evaluated
        coreqs_violated: Corequisites missing from this module's term
        is_placeholder: True for a basket slot awaiting a concrete module
        underlying: The concrete module bound to a basket slot

    Frozen but not hashable: violation results and coreqs_violated are
    lists. Compare modules with ==, key them by code.
    """
    code: str
    name: str = ""
    credits: float = 0
    tags: Tuple[str, ...] = ()
    prereqs: Union[PrereqTree, None, Unset] = UNRESOLVED
    preclusions: Tuple[str, ...] = ()
    coreqs: Tuple[str, ...] = ()
    prereqs_violated: Union[ViolationGroups, None, Unset] = None
    coreqs_violated: List[str] = field(default_factory=list)
    is_placeholder: bool = False
    underlying: Optional["Module"] = None

    __hash__ = None

    @classmethod
    def from_info(cls, info: BasicModuleInfo) -> "Module":
        return cls(code=info.code, name=info.name, credits=info.credits)

    @classmethod
    def placeholder(cls, code: str, name: str = BASKET_PLACEHOLDER_NAME,
                    credits: float = 0) -> "Module":
        """An unbound basket slot. It has no requirements of its own."""
        return cls(code=code, name=name, credits=credits, prereqs=None,
                   is_placeholder=True)

    @property
    def effective_code(self) -> str:
        """Code used for validation: the bound module's code for a basket slot."""
        if self.underlying is not None:
            return self.underlying.code
        return self.code

    @property
    def effective_name(self) -> str:
        if self.underlying is not None:
            return self.underlying.name
        return self.name

    @property
    def effective_credits(self) -> float:
        if self.underlying is not None:
            return self.underlying.credits
        return self.credits

    @property
    def is_resolved(self) -> bool:
        return self.prereqs is not UNRESOLVED

    @property
    def prereqs_satisfied(self) -> bool:
        return self.prereqs_violated is None

    @property
    def has_violations(self) -> bool:
        return bool(self.coreqs_violated) or self.prereqs_violated is not None

    def with_requirements(self, prereqs: Optional[PrereqTree], preclusions: list,
                          coreqs: list) -> "Module":
        return replace(self, prereqs=prereqs, preclusions=tuple(preclusions),
                       coreqs=tuple(coreqs))

    def forget_requirements(self) -> "Module":
        """Mark requirement data stale so the next validation fetches it again."""
        return replace(self, prereqs=UNRESOLVED, preclusions=(), coreqs=())

    def bind(self, underlying: "Module") -> "Module":
        """
        Bind a basket slot to a concrete module.

        Requirement data from a previous binding is stale, so it is dropped
        and marked UNRESOLVED to force a fresh lookup on the next validation.
        """
        return replace(
            self,
            underlying=underlying,
            prereqs=UNRESOLVED,
            preclusions=(),
            coreqs=(),
            prereqs_violated=None,
            coreqs_violated=[],
        )
