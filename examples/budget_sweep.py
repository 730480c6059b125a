#!/usr/bin/env python3
"""Budget sweep example: placement cost vs coverage for a debris field.

Builds a small synthetic debris field, enumerates placement candidates,
then sweeps the budget in max-coverage mode and compares against the
cheapest full-coverage plan and a cost sensitivity of one candidate.

Usage:
    python examples/budget_sweep.py
"""
from orbital_guardian import (
    Debris,
    DebrisSize,
    OrbitalElements,
    explain_set_cover,
    generate_candidates,
    solve_max_coverage,
    solve_set_cover,
    summarize_result,
)
from orbital_guardian.adapters.scipy_milp import ScipyMilpSolver
from orbital_guardian.domain.linear_model import coefficient_sensitivity
from orbital_guardian.domain.set_cover import build_min_cost_model


def _field() -> list[Debris]:
    shells = [
        (450.0, 51.6, DebrisSize.SMALL),
        (780.0, 86.4, DebrisSize.MEDIUM),
        (850.0, 98.7, DebrisSize.MEDIUM),
        (1400.0, 52.0, DebrisSize.LARGE),
        (20200.0, 55.0, DebrisSize.LARGE),
        (35786.0, 0.1, DebrisSize.LARGE),
    ]
    debris = []
    for i, (alt, inc, size) in enumerate(shells):
        debris.append(Debris(
            id=f"deb-{i}",
            orbit=OrbitalElements(semi_major_axis_km=6371.0 + alt, eccentricity=0.001, inclination_deg=inc),
            size=size,
        ))
    return debris


def main():
    debris = _field()
    candidates = generate_candidates(debris)
    solver = ScipyMilpSolver()
    print(f"{len(debris)} debris, {len(candidates)} placement candidates\n")

    # --- Step 1: Cheapest full coverage ---
    full = solve_set_cover(debris, candidates, solver)
    print(f"Full coverage: {summarize_result(full)}")

    # --- Step 2: Coverage bought per budget ---
    print(f"\n  {'Budget':>7} {'Built':>6} {'Cost':>6} {'Coverage':>9}")
    print(f"  {'-'*7} {'-'*6} {'-'*6} {'-'*9}")
    for budget in (0, 30, 50, 100, 150, 200, 300):
        result = solve_max_coverage(debris, candidates, budget, solver)
        print(
            f"  {budget:>7} {len(result.selected_candidates):>6} "
            f"{result.total_cost:>6g} {result.coverage * 100:>8.1f}%"
        )

    # --- Step 3: How expensive may the first candidate get? ---
    model = build_min_cost_model(candidates, len(debris))
    first = candidates[0]
    points = coefficient_sensitivity(model, first.id, (10.0, first.cost, 500.0), solver)
    print(f"\nSensitivity of {first.location.name}:")
    for pt in points:
        chosen = "built" if pt.solution[first.id] == 1.0 else "skipped"
        print(f"  cost {pt.coefficient:>6g}: total {pt.objective_value:>6g} ({chosen})")

    print()
    print(explain_set_cover(len(debris), len(candidates), min_coverage=0.8))


if __name__ == '__main__':
    main()
