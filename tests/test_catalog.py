"""
Tests for data/catalog.py and data/loader.py
"""

import json

import pytest

from studyplan.config import SAMPLE_PLAN_PATH
from studyplan.data import (
    basket_options,
    build_plan,
    extract_module_codes,
    is_valid_module_code,
    load_plan,
    module_page_url,
    modules_with_prefix,
    non_duplicate_modules,
    options_for_placeholder,
)
from studyplan.errors import InvalidPlacement
from studyplan.models import UNRESOLVED, BasicModuleInfo, Leaf, Module

CATALOG = [
    BasicModuleInfo("GEA1000", "Quantitative Reasoning with Data", 4),
    BasicModuleInfo("GEC1000", "Cultures and Connections", 4),
    BasicModuleInfo("CS1101S", "Programming Methodology", 4),
    BasicModuleInfo("CS2040S", "Data Structures and Algorithms", 4),
]


class TestCatalogHelpers:

    @pytest.mark.parametrize("code", ["CS1231", "CS1231S", "GEA1000", "LSM1301X"])
    def test_valid_codes(self, code):
        assert is_valid_module_code(code)

    @pytest.mark.parametrize("code", ["", "cs1231", "1231", "^GEA1000", "CS 1231"])
    def test_invalid_codes(self, code):
        assert not is_valid_module_code(code)

    def test_extract_codes_from_text(self):
        text = "CS1231 or MA1100; students who have passed CS1231 may not take"
        assert extract_module_codes(text) == ["CS1231", "MA1100"]

    def test_extract_codes_skips_non_module_words(self):
        text = "H2 Mathematics or MA1301X; not for holders of A1 or CS1231Sbis"
        assert extract_module_codes(text) == ["MA1301X"]

    def test_extract_codes_from_list(self):
        assert extract_module_codes(["MA1521", "MA1505", "MA1521"]) == ["MA1521", "MA1505"]

    def test_extract_codes_from_nothing(self):
        assert extract_module_codes(None) == []

    def test_module_page_url(self):
        assert module_page_url("CS2040S") == "https://nusmods.com/modules/CS2040S"

    def test_modules_with_prefix(self):
        assert [m.code for m in modules_with_prefix(CATALOG, "GEA")] == ["GEA1000"]

    def test_non_duplicate_modules(self):
        codes = [m.code for m in non_duplicate_modules(CATALOG, ["CS1101S", "GEA1000"])]
        assert codes == ["GEC1000", "CS2040S"]

    def test_basket_options(self):
        assert basket_options(CATALOG[:1]) == [("GEA1000 Quantitative Reasoning with Data", "GEA1000")]

    def test_ge_slot_offers_its_pillar(self):
        options = options_for_placeholder(Module.placeholder("^GEC1000"), CATALOG, [])
        assert [m.code for m in options] == ["GEC1000"]

    def test_elective_slot_offers_unused_modules(self):
        options = options_for_placeholder(Module.placeholder("^UE1"), CATALOG, ["CS1101S"])
        assert [m.code for m in options] == ["GEA1000", "GEC1000", "CS2040S"]


class TestLoader:

    def test_build_plan(self):
        plan = build_plan({
            "pools": [{"name": "Core", "modules": [
                {"code": "CS1101S", "name": "Programming Methodology", "credits": 4, "prereqTree": None},
                {"code": "CS2030S", "name": "Programming Methodology II", "credits": 4,
                 "prereqTree": "CS1101S", "coreqs": ["CS2101"]},
                {"code": "^GEA1000", "placeholder": True},
            ]}],
            "terms": [{"name": "Y1S1", "modules": ["CS1101S"]}, {"modules": ["CS2040S"]}],
        })

        assert plan.pools[0].codes == ("CS1101S", "CS2030S", "^GEA1000")
        assert plan.terms[0].modules[0].name == "Programming Methodology"
        assert plan.terms[1].name == "Term 2"

        registry = plan.registry
        assert registry["CS1101S"].prereqs is None
        assert registry["CS2030S"].prereqs == Leaf("CS1101S")
        assert registry["CS2030S"].coreqs == ("CS2101",)
        assert registry["^GEA1000"].is_placeholder
        assert registry["CS2040S"].prereqs is UNRESOLVED

    def test_load_plan_from_file(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({"pools": [], "terms": [{"name": "Y1S1", "modules": ["CS1101S"]}]}))
        plan = load_plan(path)
        assert plan.terms[0].codes == ["CS1101S"]

    def test_sample_plan_is_fully_resolved(self):
        plan = load_plan(SAMPLE_PLAN_PATH)
        assert len(plan.terms) == 4
        assert all(m.is_resolved for m in plan.registry.values())

    def test_code_in_two_terms_is_rejected(self):
        with pytest.raises(InvalidPlacement, match="CS1101S is placed in both Y1S1 and Y1S2"):
            build_plan({
                "pools": [],
                "terms": [
                    {"name": "Y1S1", "modules": ["CS1101S"]},
                    {"name": "Y1S2", "modules": [{"code": "CS1101S", "prereqTree": None}]},
                ],
            })
