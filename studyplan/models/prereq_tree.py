"""
Prerequisite tree data models.

A prerequisite tree is a small boolean expression over module codes:

    Leaf("CS1231")
    And((Leaf("CS2040"), Leaf("CS1231")))
    Or((And((Leaf("CS2040"), Leaf("CS1231"))), Leaf("CS1231S")))

The module API ships these trees as JSON, where a leaf is a bare string and
inner nodes are ``{"and": [...]}`` or ``{"or": [...]}``. ``parse_prereq_tree``
converts that JSON into the node classes below. Anything else the API sends
(``{"nOf": ...}``, empty objects, numbers) becomes a ``Malformed`` node so the
evaluator can report "no data" for it instead of crashing.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class Leaf:
    """A single module that must have been taken."""
    code: str


@dataclass(frozen=True)
class And:
    """Every child must be satisfied."""
    children: Tuple["PrereqTree", ...]


@dataclass(frozen=True)
class Or:
    """At least one child must be satisfied."""
    children: Tuple["PrereqTree", ...]


@dataclass(frozen=True)
class Malformed:
    """A node with none of the known shapes. ``raw`` keeps what was received."""
    raw: Any


PrereqTree = Union[Leaf, And, Or, Malformed]


def _strip_grade(code: str) -> str:
    # Newer API payloads carry a minimum grade: "CS2040:D"
    return code.split(":", 1)[0].strip()


def _parse_node(raw: Any) -> PrereqTree:
    if isinstance(raw, str) and raw.strip():
        return Leaf(_strip_grade(raw))

    if isinstance(raw, dict):
        if isinstance(raw.get("and"), list):
            return And(tuple(_parse_node(child) for child in raw["and"]))
        if isinstance(raw.get("or"), list):
            return Or(tuple(_parse_node(child) for child in raw["or"]))

    return Malformed(raw)


def parse_prereq_tree(raw: Any) -> Optional[PrereqTree]:
    """
    Convert an API prerequisite tree into ``PrereqTree`` nodes.

    Returns None when the module has no prerequisites (``raw`` is None or
    missing). Unknown shapes anywhere in the tree become ``Malformed``.
    """
    if raw is None:
        return None
    return _parse_node(raw)
