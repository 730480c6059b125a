# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Facility placement as a weighted Set Covering Problem.

Min-cost mode:

    minimize    Σ_j c_j·x_j
    subject to  Σ_j a_ij·x_j ≥ 1            ∀ i            (full coverage)
                Σ_j c_j·x_j ≤ B                           (if a budget is given)
                x_j ∈ {0, 1}

With a minimum coverage target ρ < 1 the per-debris rows are replaced by
an aggregate requirement over binary linking variables y_i:

                y_i ≤ Σ_j a_ij·x_j          ∀ i
                Σ_i y_i ≥ ⌈ρ·|I|⌉

Max-coverage mode:

    maximize    Σ_j |{i : a_ij = 1}|·x_j
    subject to  Σ_j c_j·x_j ≤ B,  x_j ∈ {0, 1}

The max-coverage objective sums per-candidate covered counts, so debris
covered by two selected candidates count twice. It is a proxy for the
union size; the reported ``coverage`` is always the true union.

Infeasibility is a normal result (``feasible=False``), never raised.
"""
import logging
import math
from dataclasses import dataclass

from orbital_guardian.domain.candidates import FacilityCandidate
from orbital_guardian.domain.debris import Debris
from orbital_guardian.domain.linear_model import (
    Bound,
    LinearModel,
    Sense,
    SolverResult,
    require_valid,
)
from orbital_guardian.ports.solver import MilpSolver

logger = logging.getLogger(__name__)

COST = "cost"
BUDGET = "budget"
COVERAGE = "coverage"
MIN_COVERED = "min_covered"


def debris_row(index: int) -> str:
    return f"debris_{index}"


def link_row(index: int) -> str:
    return f"link_{index}"


def covered_variable(index: int) -> str:
    return f"covered_{index}"


@dataclass(frozen=True)
class ProblemSize:
    debris: int
    candidates: int


@dataclass(frozen=True)
class SetCoverResult:
    """Outcome of one optimizer invocation."""
    feasible: bool
    selected_candidates: tuple[str, ...]
    total_cost: float
    coverage: float
    covered_count: int
    problem_size: ProblemSize
    solver_result: SolverResult

    @property
    def objective_value(self) -> float:
        return self.solver_result.objective_value


def _check_candidates(candidates: list[FacilityCandidate], debris_count: int) -> None:
    seen: set[str] = set()
    for candidate in candidates:
        if candidate.id in seen:
            raise ValueError(f"Duplicate candidate id '{candidate.id}'")
        seen.add(candidate.id)
        if len(candidate.coverage) != debris_count:
            raise ValueError(
                f"Candidate '{candidate.id}' has a coverage bitmap of length "
                f"{len(candidate.coverage)} for {debris_count} debris; "
                f"regenerate candidates for the current debris snapshot"
            )
    reserved = {covered_variable(i) for i in range(debris_count)}
    clashes = sorted(seen & reserved)
    if clashes:
        raise ValueError(f"Candidate ids clash with reserved names: {', '.join(clashes)}")


def _check_budget(budget: float | None) -> None:
    if budget is not None and budget < 0:
        raise ValueError(f"Budget must be non-negative, got {budget}")


def required_covered_count(min_coverage: float, debris_count: int) -> int:
    """Smallest debris count meeting a fractional coverage target."""
    return max(0, math.ceil(min_coverage * debris_count - 1e-9))


def build_min_cost_model(
    candidates: list[FacilityCandidate],
    debris_count: int,
    budget_limit: float | None = None,
    min_coverage: float | None = None,
) -> LinearModel:
    """
    Min-cost covering model.

    Args:
        candidates: Candidates whose bitmaps have length debris_count.
        debris_count: Number of debris objects to cover.
        budget_limit: Optional cap on total construction cost.
        min_coverage: Optional fractional target; None or ≥ 1 means every
            debris must be covered.
    """
    partial = min_coverage is not None and min_coverage < 1.0
    variables: dict[str, dict[str, float]] = {}
    constraints: dict[str, Bound] = {}
    binaries: set[str] = set()

    for candidate in candidates:
        coeffs: dict[str, float] = {COST: candidate.cost, BUDGET: candidate.cost}
        for i in candidate.covered_indices:
            if partial:
                coeffs[link_row(i)] = -1.0
            else:
                coeffs[debris_row(i)] = 1.0
        variables[candidate.id] = coeffs
        binaries.add(candidate.id)

    if not partial:
        for i in range(debris_count):
            constraints[debris_row(i)] = Bound(lower=1.0)
    else:
        required = required_covered_count(min_coverage, debris_count)
        if required > 0:
            for i in range(debris_count):
                variables[covered_variable(i)] = {link_row(i): 1.0, MIN_COVERED: 1.0}
                binaries.add(covered_variable(i))
                constraints[link_row(i)] = Bound(upper=0.0)
            constraints[MIN_COVERED] = Bound(lower=float(required))

    if budget_limit is not None:
        constraints[BUDGET] = Bound(upper=budget_limit)

    return LinearModel(
        objective=COST,
        sense=Sense.MINIMIZE,
        variables=variables,
        constraints=constraints,
        binaries=frozenset(binaries),
    )


def build_max_coverage_model(candidates: list[FacilityCandidate], budget: float) -> LinearModel:
    """Budget-constrained model maximizing the summed per-candidate covered counts."""
    variables = {
        candidate.id: {COVERAGE: float(candidate.covered_count), BUDGET: candidate.cost}
        for candidate in candidates
    }
    return LinearModel(
        objective=COVERAGE,
        sense=Sense.MAXIMIZE,
        variables=variables,
        constraints={BUDGET: Bound(upper=budget)},
        binaries=frozenset(variables),
    )


def _trivial_result(debris_count: int, candidate_count: int) -> SetCoverResult:
    return SetCoverResult(
        feasible=True,
        selected_candidates=(),
        total_cost=0.0,
        coverage=1.0 if debris_count == 0 else 0.0,
        covered_count=0,
        problem_size=ProblemSize(debris=debris_count, candidates=candidate_count),
        solver_result=SolverResult(
            feasible=True, bounded=True, objective_value=0.0, status="trivial",
        ),
    )


def interpret_solution(
    debris_count: int,
    candidates: list[FacilityCandidate],
    solver_result: SolverResult,
) -> SetCoverResult:
    """
    Map solver output back to selected candidates.

    A candidate is selected when its decision variable is 1. Cost is the
    sum of selected costs; coverage is the size of the union of selected
    bitmaps over debris_count. An infeasible result selects nothing.
    """
    selected: list[str] = []
    total_cost = 0.0
    covered: set[int] = set()

    if solver_result.feasible:
        for candidate in candidates:
            if round(solver_result.value(candidate.id)) == 1:
                selected.append(candidate.id)
                total_cost += candidate.cost
                covered.update(candidate.covered_indices)

    covered_count = len(covered)
    return SetCoverResult(
        feasible=solver_result.feasible,
        selected_candidates=tuple(selected),
        total_cost=total_cost,
        coverage=covered_count / debris_count if debris_count > 0 else 1.0,
        covered_count=covered_count,
        problem_size=ProblemSize(debris=debris_count, candidates=len(candidates)),
        solver_result=solver_result,
    )


def _run(
    model: LinearModel,
    debris_count: int,
    candidates: list[FacilityCandidate],
    solver: MilpSolver,
) -> SetCoverResult:
    require_valid(model)
    logger.debug(
        "Solving %s model: %d debris, %d candidates, %d rows",
        model.sense.value, debris_count, len(candidates), len(model.constraints),
    )
    result = interpret_solution(debris_count, candidates, solver.solve(model))
    if result.feasible:
        logger.info(
            "Selected %d of %d candidates: cost %.1f, coverage %.3f",
            len(result.selected_candidates), len(candidates), result.total_cost, result.coverage,
        )
    else:
        logger.info("No feasible facility combination (solver status: %s)", result.solver_result.status)
    return result


def solve_set_cover(
    debris: list[Debris],
    candidates: list[FacilityCandidate],
    solver: MilpSolver,
    budget_limit: float | None = None,
    min_coverage: float | None = None,
) -> SetCoverResult:
    """
    Cheapest candidate set meeting the coverage requirement.

    Args:
        debris: The debris sequence the candidates were generated for.
        candidates: Output of generate_candidates for that sequence.
        solver: MILP backend.
        budget_limit: Optional cap on total cost.
        min_coverage: Optional fractional target in [0, 1]; full
            coverage is required when omitted.

    Returns:
        SetCoverResult; ``feasible=False`` when no combination satisfies
        the constraints. Empty debris or candidates short-circuit to a
        trivial feasible result without calling the solver.

    Raises:
        ValueError: On a negative budget, a target outside [0, 1], or
            candidates that do not match the debris sequence.
    """
    _check_budget(budget_limit)
    if min_coverage is not None and not 0.0 <= min_coverage <= 1.0:
        raise ValueError(f"Minimum coverage must be in [0, 1], got {min_coverage}")

    if not debris or not candidates:
        return _trivial_result(len(debris), len(candidates))

    _check_candidates(candidates, len(debris))
    model = build_min_cost_model(candidates, len(debris), budget_limit, min_coverage)
    return _run(model, len(debris), candidates, solver)


def solve_max_coverage(
    debris: list[Debris],
    candidates: list[FacilityCandidate],
    budget: float,
    solver: MilpSolver,
) -> SetCoverResult:
    """
    Candidate set maximizing (summed) coverage within a budget.

    Raises:
        ValueError: On a negative budget or mismatched candidates.
    """
    _check_budget(budget)

    if not debris or not candidates:
        return _trivial_result(len(debris), len(candidates))

    _check_candidates(candidates, len(debris))
    model = build_max_coverage_model(candidates, budget)
    return _run(model, len(debris), candidates, solver)


def summarize_result(result: SetCoverResult) -> str:
    """One-line, user-facing description of an optimization outcome."""
    if result.problem_size.debris == 0:
        return "No placement needed: there is no active debris to cover."
    if result.problem_size.candidates == 0:
        return "No improvement possible: no candidate placement covers any debris."
    if not result.feasible:
        return "No solution found under these constraints."
    if not result.selected_candidates:
        return "No improvement possible within these constraints."
    return (
        f"Build {len(result.selected_candidates)} facilities for {result.total_cost:g} "
        f"to cover {result.covered_count}/{result.problem_size.debris} debris "
        f"({result.coverage:.1%})."
    )
