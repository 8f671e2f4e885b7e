"""
Shared fixtures: an in-memory module resolver and plan builders.
"""

import threading

import pytest

from studyplan.data import ModuleResolver
from studyplan.engines import PlacementEngine, ValidationPipeline
from studyplan.errors import ResolverUnavailable
from studyplan.models import BasicModuleInfo, Module, Plan, RequirementPool, Term, parse_prereq_tree


# code -> requirement data, in the same shape the module API uses
CATALOG = {
    "CS1101S": {"name": "Programming Methodology"},
    "CS1231": {"name": "Discrete Structures"},
    "CS1231S": {"name": "Discrete Structures", "preclusions": ["CS1231"]},
    "CS2030S": {"name": "Programming Methodology II", "prereqTree": "CS1101S"},
    "CS2040": {"name": "Data Structures", "prereqTree": "CS1101S"},
    "CS2040S": {
        "name": "Data Structures and Algorithms",
        "prereqTree": {"and": ["CS1101S", {"or": ["CS1231", "CS1231S"]}]},
    },
    "CS2103T": {"name": "Software Engineering", "prereqTree": "CS2030S", "coreqs": ["CS2101"]},
    "CS2101": {"name": "Effective Communication", "coreqs": ["CS2103T"]},
    "CS3230": {
        "name": "Design and Analysis of Algorithms",
        "prereqTree": {"and": ["CS2040S", {"or": ["CS1231", "CS1231S"]}]},
    },
    "CS3243": {"name": "Introduction to AI", "prereqTree": {"and": ["CS2040", "CS1231"]}},
    "MA1521": {"name": "Calculus for Computing", "preclusions": ["MA1102R"]},
    "MA1102R": {"name": "Calculus"},
    "ST2334": {"name": "Probability and Statistics", "prereqTree": {"or": ["MA1521", "MA1102R"]}},
    "PC2020": {"name": "Electromagnetics", "coreqs": ["MA1521"]},
    "GEA1000": {"name": "Quantitative Reasoning with Data"},
    "GEA1001": {"name": "Quantitative Reasoning II"},
    "GEC1000": {"name": "Cultures and Connections"},
    "BROKEN1": {"name": "Broken Tree", "prereqTree": {"nOf": [2, ["CS1101S", "CS1231"]]}},
    "NEEDSGE": {"name": "Needs GEA1000", "prereqTree": "GEA1000"},
}


class FakeResolver(ModuleResolver):
    """In-memory resolver that records every lookup."""

    def __init__(self, modules=None, fail_on=()):
        self.modules = dict(CATALOG if modules is None else modules)
        self.fail_on = set(fail_on)
        self.calls = []
        self.refreshed = 0
        self._lock = threading.Lock()

    def _get(self, code):
        with self._lock:
            self.calls.append(code)
        if code in self.fail_on:
            raise ResolverUnavailable(code, "service down")
        return self.modules.get(code, {})

    def fetch_prereq_tree(self, code):
        return parse_prereq_tree(self._get(code).get("prereqTree"))

    def fetch_preclusions(self, code):
        return list(self._get(code).get("preclusions", []))

    def fetch_coreqs(self, code):
        return list(self._get(code).get("coreqs", []))

    def fetch_module_list(self):
        return [BasicModuleInfo(code, data["name"], data.get("credits", 4))
                for code, data in self.modules.items()]

    def fetch_basic_module_info(self, code):
        if code not in self.modules:
            return None
        data = self.modules[code]
        return BasicModuleInfo(code, data["name"], data.get("credits", 4))

    def refresh(self):
        self.refreshed += 1


def _module(code):
    if code.startswith("^"):
        return Module.placeholder(code)
    return Module(code=code, name=CATALOG.get(code, {}).get("name", ""), credits=4)


def make_plan(terms, pools=()):
    """
    Build an unvalidated plan.

    terms: list of lists of codes, one list per term
    pools: list of (name, [codes]) master lists
    """
    registry = {}
    for codes in list(terms) + [codes for _, codes in pools]:
        for code in codes:
            registry.setdefault(code, _module(code))

    return Plan(
        terms=tuple(
            Term(name=f"T{i}", modules=tuple(registry[c] for c in codes))
            for i, codes in enumerate(terms)
        ),
        pools=tuple(RequirementPool(name=name, codes=tuple(codes)) for name, codes in pools),
        registry=registry,
    )


def module_in(plan, code):
    """The placed copy of a module, failing the test if it is not placed."""
    location = plan.locate(code)
    assert location is not None, f"{code} is not placed"
    term_index, position = location
    return plan.terms[term_index].modules[position]


def term_codes(plan):
    return [term.codes for term in plan.terms]


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def pipeline(resolver):
    return ValidationPipeline(resolver, max_workers=4)


@pytest.fixture
def engine(pipeline):
    return PlacementEngine(pipeline)
