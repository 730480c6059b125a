# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the set-cover placement optimizer."""
import pytest

from orbital_guardian.domain.candidates import CandidateLocation, FacilityCandidate, generate_candidates
from orbital_guardian.domain.debris import Debris, DebrisSize
from orbital_guardian.domain.facility import FacilityCategory, FacilityType
from orbital_guardian.domain.linear_model import Bound, Sense, SolverResult
from orbital_guardian.domain.orbital_mechanics import OrbitalElements
from orbital_guardian.domain.set_cover import (
    BUDGET,
    COVERAGE,
    MIN_COVERED,
    build_max_coverage_model,
    build_min_cost_model,
    covered_variable,
    debris_row,
    interpret_solution,
    link_row,
    required_covered_count,
    solve_max_coverage,
    solve_set_cover,
    summarize_result,
)


def _debris(debris_id, alt_km, inc_deg=51.6, size=DebrisSize.MEDIUM):
    return Debris(
        id=debris_id,
        orbit=OrbitalElements(semi_major_axis_km=6371.0 + alt_km, eccentricity=0.001, inclination_deg=inc_deg),
        size=size,
    )


def _candidate(candidate_id, cost, coverage, facility_type=FacilityType.RADAR_SBAND):
    kind = FacilityCategory.SPACE if facility_type is FacilityType.SURVEILLANCE_SATELLITE else FacilityCategory.GROUND
    return FacilityCandidate(
        id=candidate_id,
        facility_type=facility_type,
        location=CandidateLocation(kind=kind, name=candidate_id),
        cost=cost,
        coverage=tuple(coverage),
    )


# Three debris: LEO-low, LEO-high, high orbit. One ground radar covers the
# first two for 50; one surveillance satellite covers the third for 150.
_DEBRIS = [_debris("d0", 300.0), _debris("d1", 900.0), _debris("d2", 40000.0)]
_GROUND = _candidate("ground", 50.0, (True, True, False))
_SPACE = _candidate("space", 150.0, (False, False, True), FacilityType.SURVEILLANCE_SATELLITE)
_CANDIDATES = [_GROUND, _SPACE]


class _FixedSolver:

    def __init__(self, values=None, feasible=True):
        self.calls = 0
        self._values = values or {}
        self._feasible = feasible

    def solve(self, model):
        self.calls += 1
        return SolverResult(
            feasible=self._feasible,
            bounded=True,
            objective_value=sum(model.objective_coefficient(n) * v for n, v in self._values.items()),
            values=self._values,
            status="optimal" if self._feasible else "infeasible",
        )


class TestRequiredCount:

    def test_rounds_up(self):
        assert required_covered_count(0.8, 5) == 4
        assert required_covered_count(0.5, 3) == 2
        assert required_covered_count(1.0, 3) == 3

    def test_float_noise_tolerated(self):
        # 0.7 * 10 == 7.000000000000001 in binary floating point
        assert required_covered_count(0.7, 10) == 7

    def test_zero_target(self):
        assert required_covered_count(0.0, 10) == 0


class TestMinCostModel:

    def test_full_cover_rows(self):
        model = build_min_cost_model(_CANDIDATES, 3)
        assert model.sense is Sense.MINIMIZE
        assert model.constraints == {debris_row(i): Bound(lower=1.0) for i in range(3)}
        assert model.variables["ground"][debris_row(0)] == 1.0
        assert debris_row(2) not in model.variables["ground"]
        assert model.binaries == frozenset({"ground", "space"})
        assert model.objective_coefficient("space") == 150.0

    def test_budget_row_only_when_given(self):
        assert BUDGET not in build_min_cost_model(_CANDIDATES, 3).constraints
        model = build_min_cost_model(_CANDIDATES, 3, budget_limit=120.0)
        assert model.constraints[BUDGET] == Bound(upper=120.0)

    def test_partial_cover_linking(self):
        model = build_min_cost_model(_CANDIDATES, 3, min_coverage=0.5)
        assert model.constraints[MIN_COVERED] == Bound(lower=2.0)
        for i in range(3):
            assert model.constraints[link_row(i)] == Bound(upper=0.0)
            assert model.variables[covered_variable(i)] == {link_row(i): 1.0, MIN_COVERED: 1.0}
        assert model.variables["ground"][link_row(1)] == -1.0
        assert debris_row(0) not in model.constraints

    def test_full_target_uses_full_rows(self):
        model = build_min_cost_model(_CANDIDATES, 3, min_coverage=1.0)
        assert debris_row(0) in model.constraints
        assert MIN_COVERED not in model.constraints


class TestMaxCoverageModel:

    def test_structure(self):
        model = build_max_coverage_model(_CANDIDATES, 100.0)
        assert model.sense is Sense.MAXIMIZE
        assert model.objective == COVERAGE
        assert model.variables["ground"][COVERAGE] == 2.0
        assert model.variables["space"][COVERAGE] == 1.0
        assert model.constraints == {BUDGET: Bound(upper=100.0)}


class TestInterpretSolution:

    def test_selected_cost_and_union(self):
        candidates = [_GROUND, _candidate("overlap", 40.0, (False, True, False)), _SPACE]
        result = interpret_solution(3, candidates, SolverResult(
            feasible=True, bounded=True, objective_value=90.0,
            values={"ground": 1.0, "overlap": 1.0, "space": 0.0},
        ))
        assert result.selected_candidates == ("ground", "overlap")
        assert result.total_cost == 90.0
        assert result.covered_count == 2
        assert result.coverage == pytest.approx(2 / 3)
        assert result.objective_value == 90.0

    def test_near_integral_values_round(self):
        result = interpret_solution(3, _CANDIDATES, SolverResult(
            feasible=True, bounded=True, objective_value=50.0,
            values={"ground": 0.9999999, "space": 1e-9},
        ))
        assert result.selected_candidates == ("ground",)

    def test_infeasible_selects_nothing(self):
        result = interpret_solution(3, _CANDIDATES, SolverResult(
            feasible=False, bounded=True, objective_value=0.0, values={"ground": 1.0},
        ))
        assert not result.feasible
        assert result.selected_candidates == ()
        assert result.total_cost == 0.0
        assert result.coverage == 0.0


class TestSolveWithFakeSolver:

    def test_no_debris_short_circuits(self):
        solver = _FixedSolver()
        result = solve_set_cover([], _CANDIDATES, solver)
        assert solver.calls == 0
        assert result.feasible
        assert result.coverage == 1.0
        assert result.selected_candidates == ()
        assert result.problem_size.debris == 0

    def test_no_candidates_short_circuits(self):
        solver = _FixedSolver()
        result = solve_max_coverage(_DEBRIS, [], 100.0, solver)
        assert solver.calls == 0
        assert result.feasible
        assert result.coverage == 0.0
        assert result.total_cost == 0.0

    def test_solution_mapped(self):
        result = solve_set_cover(_DEBRIS, _CANDIDATES, _FixedSolver({"ground": 1.0, "space": 1.0}))
        assert result.selected_candidates == ("ground", "space")
        assert result.total_cost == 200.0
        assert result.coverage == 1.0
        assert result.problem_size.candidates == 2

    def test_negative_budget(self):
        with pytest.raises(ValueError, match="non-negative"):
            solve_set_cover(_DEBRIS, _CANDIDATES, _FixedSolver(), budget_limit=-1.0)
        with pytest.raises(ValueError, match="non-negative"):
            solve_max_coverage(_DEBRIS, _CANDIDATES, -5.0, _FixedSolver())

    def test_target_out_of_range(self):
        with pytest.raises(ValueError, match="Minimum coverage"):
            solve_set_cover(_DEBRIS, _CANDIDATES, _FixedSolver(), min_coverage=1.5)

    def test_stale_candidates_rejected(self):
        with pytest.raises(ValueError, match="regenerate"):
            solve_set_cover(_DEBRIS[:2], _CANDIDATES, _FixedSolver())

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            solve_set_cover(_DEBRIS, [_GROUND, _GROUND], _FixedSolver())

    def test_reserved_name_rejected(self):
        clash = _candidate(covered_variable(0), 10.0, (True, False, False))
        with pytest.raises(ValueError, match="reserved"):
            solve_set_cover(_DEBRIS, [clash, _SPACE], _FixedSolver())


class TestSummarize:

    def test_messages(self):
        solver = _FixedSolver()
        assert summarize_result(solve_set_cover([], [], solver)).startswith("No placement needed")
        assert summarize_result(solve_set_cover(_DEBRIS, [], solver)).startswith("No improvement possible")

        infeasible = solve_set_cover(_DEBRIS, _CANDIDATES, _FixedSolver(feasible=False))
        assert summarize_result(infeasible).startswith("No solution found")

        nothing = solve_max_coverage(_DEBRIS, _CANDIDATES, 0.0, _FixedSolver({}))
        assert summarize_result(nothing) == "No improvement possible within these constraints."

        both = solve_set_cover(_DEBRIS, _CANDIDATES, _FixedSolver({"ground": 1.0, "space": 1.0}))
        assert summarize_result(both) == "Build 2 facilities for 200 to cover 3/3 debris (100.0%)."


# ── HiGHS end to end ─────────────────────────────────────────────────

class TestWithHighs:

    @pytest.fixture
    def solver(self):
        pytest.importorskip("scipy", reason="scipy not installed")
        from orbital_guardian.adapters.scipy_milp import ScipyMilpSolver
        return ScipyMilpSolver()

    def test_budget_allows_both(self, solver):
        result = solve_set_cover(_DEBRIS, _CANDIDATES, solver, budget_limit=200.0)
        assert result.feasible
        assert set(result.selected_candidates) == {"ground", "space"}
        assert result.total_cost == pytest.approx(200.0)
        assert result.coverage == 1.0
        assert result.objective_value == pytest.approx(200.0)

    def test_unbudgeted_full_cover(self, solver):
        result = solve_set_cover(_DEBRIS, _CANDIDATES, solver)
        assert result.total_cost == pytest.approx(200.0)

    def test_budget_too_small_is_infeasible(self, solver):
        result = solve_set_cover(_DEBRIS, _CANDIDATES, solver, budget_limit=100.0)
        assert not result.feasible
        assert result.selected_candidates == ()
        assert summarize_result(result).startswith("No solution found")

    def test_max_coverage_within_budget(self, solver):
        result = solve_max_coverage(_DEBRIS, _CANDIDATES, 100.0, solver)
        assert result.feasible
        assert result.selected_candidates == ("ground",)
        assert result.coverage == pytest.approx(2 / 3)
        assert result.total_cost <= 100.0

    def test_objective_monotone_in_budget(self, solver):
        objectives = [
            solve_max_coverage(_DEBRIS, _CANDIDATES, budget, solver).objective_value
            for budget in (0.0, 49.0, 50.0, 150.0, 200.0, 500.0)
        ]
        assert objectives == sorted(objectives)
        assert objectives[0] == 0.0
        assert objectives[-1] == pytest.approx(3.0)

    def test_overlap_objective_monotone_but_coverage_not(self, solver):
        # "wide" sees all four debris; "left" and "right" see the same three
        debris = [_debris(f"d{i}", 800.0) for i in range(4)]
        candidates = [
            _candidate("wide", 15.0, (True, True, True, True)),
            _candidate("left", 10.0, (True, True, True, False)),
            _candidate("right", 10.0, (True, True, True, False)),
        ]
        results = {
            budget: solve_max_coverage(debris, candidates, budget, solver)
            for budget in (0.0, 10.0, 15.0, 20.0, 25.0, 35.0)
        }
        objectives = [r.objective_value for r in results.values()]
        assert objectives == sorted(objectives)
        assert objectives == pytest.approx([0.0, 3.0, 4.0, 6.0, 7.0, 10.0])

        assert results[15.0].selected_candidates == ("wide",)
        assert results[15.0].coverage == 1.0
        # Counting overlap twice prefers the two narrow candidates
        assert set(results[20.0].selected_candidates) == {"left", "right"}
        assert results[20.0].coverage == pytest.approx(0.75)
        assert results[35.0].coverage == 1.0

    def test_partial_target(self, solver):
        result = solve_set_cover(_DEBRIS, _CANDIDATES, solver, min_coverage=0.6)
        assert result.selected_candidates == ("ground",)
        assert result.total_cost == pytest.approx(50.0)
        assert result.covered_count >= required_covered_count(0.6, 3)

    def test_zero_target_builds_nothing(self, solver):
        result = solve_set_cover(_DEBRIS, _CANDIDATES, solver, min_coverage=0.0)
        assert result.feasible
        assert result.selected_candidates == ()
        assert result.total_cost == 0.0

    def test_partial_target_with_budget(self, solver):
        result = solve_set_cover(_DEBRIS, _CANDIDATES, solver, budget_limit=100.0, min_coverage=0.9)
        assert not result.feasible

    def test_generated_candidates(self, solver):
        debris = [
            _debris("leo", 800.0),
            _debris("meo", 20000.0, inc_deg=55.0, size=DebrisSize.LARGE),
            _debris("geo", 35786.0, inc_deg=0.1, size=DebrisSize.LARGE),
        ]
        candidates = generate_candidates(debris)
        result = solve_set_cover(debris, candidates, solver)

        assert result.feasible
        assert result.covered_count == 3
        # A single surveillance satellite covers all three for 150
        assert result.total_cost == pytest.approx(150.0)
        by_id = {c.id: c for c in candidates}
        assert result.total_cost == pytest.approx(sum(by_id[i].cost for i in result.selected_candidates))
