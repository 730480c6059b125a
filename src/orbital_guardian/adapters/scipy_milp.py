# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
MILP solver adapter backed by scipy.optimize.milp (HiGHS).

External dependencies (scipy, numpy arrays) are confined to this layer.

Translation:
    variables    -> columns, in model insertion order, bounded [0, 1]
                    if binary, [0, ∞) otherwise
    constraints  -> rows of a single LinearConstraint; equal bounds map
                    to lb = ub
    maximize     -> minimize the negated objective
"""
import logging
import math

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, milp

from orbital_guardian.domain.linear_model import LinearModel, Sense, SolverResult
from orbital_guardian.ports.solver import MilpSolver

_log = logging.getLogger(__name__)

_STATUS_NAMES = {
    0: "optimal",
    1: "limit_reached",
    2: "infeasible",
    3: "unbounded",
}


def _row_bounds(bound) -> tuple[float, float]:
    if bound.equal is not None:
        return bound.equal, bound.equal
    lower = bound.lower if bound.lower is not None else -np.inf
    upper = bound.upper if bound.upper is not None else np.inf
    return lower, upper


def _solve_empty(model: LinearModel) -> SolverResult:
    """A model without columns: every row evaluates to 0."""
    feasible = True
    for bound in model.constraints.values():
        lower, upper = _row_bounds(bound)
        if not lower <= 0.0 <= upper:
            feasible = False
    return SolverResult(
        feasible=feasible,
        bounded=True,
        objective_value=0.0,
        values={},
        status="optimal" if feasible else "infeasible",
    )


class ScipyMilpSolver(MilpSolver):
    """Solves LinearModels with the HiGHS branch-and-cut in scipy."""

    def __init__(self, time_limit: float | None = None, mip_rel_gap: float | None = None):
        self._time_limit = time_limit
        self._mip_rel_gap = mip_rel_gap

    def solve(self, model: LinearModel) -> SolverResult:
        names = list(model.variables)
        if not names:
            return _solve_empty(model)

        integral = model.binaries | model.integers
        objective = np.array([model.objective_coefficient(n) for n in names], dtype=float)
        sign = -1.0 if model.sense is Sense.MAXIMIZE else 1.0

        lower_bounds = np.zeros(len(names))
        upper_bounds = np.array([1.0 if n in model.binaries else np.inf for n in names])
        integrality = np.array([1 if n in integral else 0 for n in names])

        constraints = None
        if model.constraints:
            rows = np.array([
                [model.variables[n].get(row_name, 0.0) for n in names]
                for row_name in model.constraints
            ], dtype=float)
            row_bounds = [_row_bounds(b) for b in model.constraints.values()]
            constraints = LinearConstraint(
                rows,
                np.array([lb for lb, _ in row_bounds], dtype=float),
                np.array([ub for _, ub in row_bounds], dtype=float),
            )

        options: dict = {"disp": False}
        if self._time_limit is not None:
            options["time_limit"] = self._time_limit
        if self._mip_rel_gap is not None:
            options["mip_rel_gap"] = self._mip_rel_gap

        _log.debug(
            "HiGHS solve: %d columns, %d rows, sense=%s",
            len(names), len(model.constraints), model.sense.value,
        )
        res = milp(
            c=sign * objective,
            constraints=constraints,
            integrality=integrality,
            bounds=Bounds(lower_bounds, upper_bounds),
            options=options,
        )

        if res.status not in _STATUS_NAMES:
            raise RuntimeError(f"HiGHS failed with status {res.status}: {res.message}")

        status = _STATUS_NAMES[res.status]
        feasible = res.x is not None and res.status in (0, 1)
        _log.debug("HiGHS status: %s (%s)", status, res.message)

        if not feasible:
            return SolverResult(
                feasible=False,
                bounded=res.status != 3,
                objective_value=0.0,
                values={},
                status=status,
            )

        values: dict[str, float] = {}
        for name, x in zip(names, res.x):
            values[name] = float(round(x)) if name in integral else float(x)

        objective_value = float(sum(
            model.objective_coefficient(n) * values[n] for n in names
        ))
        if math.isclose(objective_value, 0.0, abs_tol=1e-12):
            objective_value = 0.0

        return SolverResult(
            feasible=True,
            bounded=True,
            objective_value=objective_value,
            values=values,
            status=status,
        )
