"""
Tests for planner.py and cli.py - session orchestration
"""

from unittest.mock import MagicMock

import pytest

from conftest import FakeResolver
from studyplan import cli
from studyplan.config import SAMPLE_PLAN_PATH
from studyplan.errors import InvalidPlacement, ResolverUnavailable
from studyplan.planner import StudyPlanner


@pytest.fixture
def planner(resolver):
    planner = StudyPlanner(resolver=resolver, display=MagicMock())
    planner.load(SAMPLE_PLAN_PATH)
    return planner


class TestStudyPlanner:

    def test_load_validates_sample_plan(self, planner):
        blocked = [(term, m.code, m.coreqs_violated) for term, m in planner.violations()]
        assert blocked == [("Y2S1", "CS2103T", ["CS2101"])]

    def test_loaded_pools_exclude_placed_modules(self, planner):
        placed = planner.plan.placed_codes
        assert all(m.code not in placed for pool in planner.plan.pools for m in pool.modules)

    def test_move_with_container_ids(self, planner):
        planner.move_module("CS2101", "requirement", 0, "planner:2", 1)
        assert planner.plan.terms[2].codes == ["CS2103T", "CS2101"]
        assert planner.violations() == []

    def test_close_module(self, planner):
        planner.close_module("CS2103T")
        assert planner.plan.terms[2].codes == []
        assert "CS2103T" in [m.code for m in planner.plan.pools[0].modules]

    def test_invalid_move_keeps_plan(self, planner):
        before = planner.plan
        with pytest.raises(InvalidPlacement):
            planner.move_module("CS2101", "planner:0", 0, "planner:1", 0)
        assert planner.plan is before

    def test_resolver_failure_keeps_plan(self):
        planner = StudyPlanner(resolver=FakeResolver(fail_on={"GEA1000"}), display=MagicMock())
        planner.load(SAMPLE_PLAN_PATH)
        planner.select_underlying_module("^GEA1000", "GEA1000")
        before = planner.plan

        with pytest.raises(ResolverUnavailable):
            planner.move_module("^GEA1000", "requirement", 0, "planner:3", 0)
        assert planner.plan is before

    def test_basket_options(self, planner):
        options = planner.basket_options("^GEA1000")
        assert options == [
            ("GEA1000 Quantitative Reasoning with Data", "GEA1000"),
            ("GEA1001 Quantitative Reasoning II", "GEA1001"),
        ]

    def test_basket_options_for_regular_module(self, planner):
        with pytest.raises(InvalidPlacement):
            planner.basket_options("CS1101S")

    def test_refresh_refetches_placed_modules(self, planner, resolver):
        planner.refresh()
        assert resolver.refreshed == 1
        assert {"CS1101S", "CS2030S", "CS2103T"} <= set(resolver.calls)

    def test_show_uses_display(self, planner):
        planner.show()
        planner.display.print_plan.assert_called_once_with(planner.plan)


class TestCli:

    def _feed(self, monkeypatch, lines):
        answers = iter(lines)

        def fake_input(prompt=""):
            try:
                return next(answers)
            except StopIteration:
                raise EOFError

        monkeypatch.setattr("builtins.input", fake_input)

    def test_session(self, monkeypatch, capsys):
        self._feed(monkeypatch, ["show", "move CS2101 requirement 0 planner:2 1", "quit"])
        assert cli.main([str(SAMPLE_PLAN_PATH)]) == 0
        out = capsys.readouterr().out
        assert "needs same term: CS2101" in out
        assert "All placed modules have their requirements met" in out

    def test_errors_do_not_end_session(self, monkeypatch, capsys):
        self._feed(monkeypatch, ["close ZZ1000", "move CS2101 requirement x planner:2 0", "dance"])
        assert cli.main([str(SAMPLE_PLAN_PATH)]) == 0
        out = capsys.readouterr().out
        assert "ZZ1000 is not placed in any term" in out
        assert "Indexes must be whole numbers" in out
        assert "Unrecognised command: dance" in out

    def test_missing_plan_file(self, tmp_path, capsys):
        assert cli.main([str(tmp_path / "nope.json")]) == 1
        assert "Could not load" in capsys.readouterr().out
