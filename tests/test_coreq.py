"""
Tests for engines/coreq.py - same-term corequisite check
"""

from dataclasses import replace

import pytest

from studyplan.engines import CoreqValidator
from studyplan.models import Module, Plan, Term


def _term(*modules):
    return Term(name="T", modules=tuple(modules))


class TestCoreqValidator:

    def test_missing_coreq_is_reported(self):
        plan = Plan(terms=(_term(Module("PC2020", coreqs=("MA1521",))),))
        result = CoreqValidator().validate_coreqs(plan)
        assert result.terms[0].modules[0].coreqs_violated == ["MA1521"]

    def test_coreq_in_same_term_clears_violation(self):
        plan = Plan(terms=(_term(Module("PC2020", coreqs=("MA1521",))),))
        validator = CoreqValidator()
        first = validator.validate_coreqs(plan)

        term = first.terms[0]
        with_coreq = replace(first, terms=(replace(term, modules=term.modules + (Module("MA1521"),)),))
        second = validator.validate_coreqs(with_coreq)
        assert second.terms[0].modules[0].coreqs_violated == []

    def test_earlier_term_does_not_count(self):
        plan = Plan(terms=(
            _term(Module("MA1521")),
            _term(Module("PC2020", coreqs=("MA1521",))),
        ))
        result = CoreqValidator().validate_coreqs(plan)
        assert result.terms[1].modules[0].coreqs_violated == ["MA1521"]

    def test_declared_order_is_kept(self):
        plan = Plan(terms=(_term(Module("X1000", coreqs=("B2000", "A1000", "C3000")), Module("A1000")),))
        result = CoreqValidator().validate_coreqs(plan)
        assert result.terms[0].modules[0].coreqs_violated == ["B2000", "C3000"]

    def test_idempotent(self):
        plan = Plan(terms=(_term(Module("PC2020", coreqs=("MA1521", "PC1101"))),))
        validator = CoreqValidator()
        once = validator.validate_coreqs(plan)
        twice = validator.validate_coreqs(once)
        assert twice.terms[0].modules[0].coreqs_violated == ["MA1521", "PC1101"]
        assert twice == once

    def test_bound_basket_slot_counts_by_underlying_code(self):
        slot = Module.placeholder("^GEA1000").bind(Module("MA1521"))
        plan = Plan(terms=(_term(Module("PC2020", coreqs=("MA1521",)), slot),))
        result = CoreqValidator().validate_coreqs(plan)
        assert result.terms[0].modules[0].coreqs_violated == []

    def test_input_plan_untouched(self):
        plan = Plan(terms=(_term(Module("PC2020", coreqs=("MA1521",))),))
        CoreqValidator().validate_coreqs(plan)
        assert plan.terms[0].modules[0].coreqs_violated == []

    def test_results_compare_by_value_but_are_unhashable(self):
        plan = Plan(terms=(_term(Module("PC2020", coreqs=("MA1521",))),))
        first = CoreqValidator().validate_coreqs(plan)
        second = CoreqValidator().validate_coreqs(plan)
        assert first == second
        for value in (first, first.terms[0], first.terms[0].modules[0]):
            with pytest.raises(TypeError, match="unhashable"):
                hash(value)
