"""
Prerequisite Tree Evaluator.

Pure functions over ``PrereqTree`` nodes. No I/O, no module objects: the
caller passes the set of codes that count as taken.
"""

from typing import AbstractSet, Optional, Union

from ..models import And, Leaf, Or, PrereqTree, UNAVAILABLE, Unset, ViolationGroups

EvaluationResult = Union[ViolationGroups, None, Unset]


def evaluate_violations(tree: PrereqTree, satisfied_codes: AbstractSet[str]) -> EvaluationResult:
    """
    Work out which prerequisites are still missing.

    Returns:
        None when the tree is satisfied.
        A list of OR-groups otherwise. Every group must be satisfied by
        taking any one code in it:

            [["CS3243", "CS3245"], ["ST2131", "ST2334", "MA2216"]]
            = (CS3243 OR CS3245) AND (ST2131 OR ST2334 OR MA2216)

        UNAVAILABLE when a malformed node decides the outcome. This means
        "no violation data", which is not the same as satisfied. A value
        that is not a tree node at all (raw API JSON, say) counts as
        malformed.

    NODE RULES:
    ----------
    Leaf: None if taken, else [[code]].

    And:  None if every child is None. Otherwise each unsatisfied child
          contributes ONE group: its own groups flattened one level. An OR
          child missing [["A"], ["B"]] becomes the group ["A", "B"].

    Or:   None if any child is None. Otherwise the groups of every child,
          concatenated one level deep. Which branch a group came from is
          lost, so a nested "one of a one of" reports as a plain list of
          alternatives. Callers depend on this exact shape.
    """
    if isinstance(tree, Leaf):
        return None if tree.code in satisfied_codes else [[tree.code]]

    if isinstance(tree, And):
        results = [evaluate_violations(child, satisfied_codes) for child in tree.children]
        if any(r is UNAVAILABLE for r in results):
            return UNAVAILABLE
        unfulfilled = [_flatten(r) for r in results if r is not None]
        return unfulfilled or None

    if isinstance(tree, Or):
        results = [evaluate_violations(child, satisfied_codes) for child in tree.children]
        if any(r is None for r in results):
            return None
        if any(r is UNAVAILABLE for r in results):
            return UNAVAILABLE
        return [group for r in results for group in r]

    # Malformed, or anything that never went through parse_prereq_tree
    return UNAVAILABLE


def is_satisfied(tree: Optional[PrereqTree], satisfied_codes: AbstractSet[str]) -> bool:
    """
    Boolean form of the evaluator. A missing tree is satisfied; malformed
    data is not.
    """
    if tree is None:
        return True
    return evaluate_violations(tree, satisfied_codes) is None


def _flatten(groups: ViolationGroups) -> list:
    return [code for group in groups for code in group]
