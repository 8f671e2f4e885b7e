"""
Plan loading.

Builds a Plan from a JSON description of requirement pools and terms:

    {
        "pools": [
            {
                "name": "Computing Foundation",
                "modules": [
                    {"code": "CS1101S", "name": "Programming Methodology", "credits": 4},
                    {"code": "^GEA1000", "placeholder": true}
                ]
            }
        ],
        "terms": [
            {"name": "Y1S1", "modules": ["CS1101S"]},
            {"name": "Y1S2", "modules": []}
        ]
    }

A module object may carry its requirement data ("prereqTree",
"preclusions", "coreqs"). When "prereqTree" is present (null included) the
module counts as resolved and the resolver is never asked about it.

Pool contents are not derived here; the planner re-derives them once the
plan is built.
"""

import json
from pathlib import Path
from typing import Union

from ..config import BASKET_PLACEHOLDER_NAME
from ..errors import InvalidPlacement
from ..models import Module, Plan, RequirementPool, Term, parse_prereq_tree
from .catalog import extract_module_codes


def _parse_module(entry: Union[str, dict]) -> Module:
    if isinstance(entry, str):
        return Module(code=entry)

    code = entry["code"]
    if entry.get("placeholder"):
        module = Module.placeholder(code, name=entry.get("name") or BASKET_PLACEHOLDER_NAME,
                                    credits=entry.get("credits", 0))
    else:
        module = Module(code=code, name=entry.get("name", ""), credits=entry.get("credits", 0))

    if "prereqTree" in entry:
        module = module.with_requirements(
            parse_prereq_tree(entry["prereqTree"]),
            extract_module_codes(entry.get("preclusions")),
            extract_module_codes(entry.get("coreqs")),
        )
    return module


def build_plan(data: dict) -> Plan:
    """
    Build a Plan from its JSON description.

    Every module mentioned anywhere ends up in the registry. Pool entries
    define the module; a term entry that is only a code reuses the pool
    definition when there is one.

    Raises InvalidPlacement when a code is placed in more than one term.
    """
    registry = {}
    pools = []
    for pool_data in data.get("pools", []):
        codes = []
        for entry in pool_data.get("modules", []):
            module = _parse_module(entry)
            registry.setdefault(module.code, module)
            codes.append(module.code)
        pools.append(RequirementPool(name=pool_data.get("name", ""), codes=tuple(codes)))

    terms = []
    seen = {}
    for index, term_data in enumerate(data.get("terms", [])):
        term_name = term_data.get("name", f"Term {index + 1}")
        placed = []
        for entry in term_data.get("modules", []):
            module = _parse_module(entry)
            if module.code in seen:
                raise InvalidPlacement(
                    f"{module.code} is placed in both {seen[module.code]} and {term_name}"
                )
            seen[module.code] = term_name
            if isinstance(entry, str) and module.code in registry:
                module = registry[module.code]
            registry.setdefault(module.code, module)
            placed.append(module)
        terms.append(Term(name=term_name, modules=tuple(placed)))

    return Plan(terms=tuple(terms), pools=tuple(pools), registry=registry)


def load_plan(path: Union[str, Path]) -> Plan:
    """Load a plan description from a JSON file."""
    with open(path, "r") as f:
        return build_plan(json.load(f))
