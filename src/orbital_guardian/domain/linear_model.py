# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Solver-neutral linear / mixed-integer model.

A model is written column-wise: each variable maps attribute names to
coefficients. One attribute is the objective; every other attribute
that appears in ``constraints`` is a linear row bounded by its Bound.
Solver adapters translate this into their native format.

Also provides model validation (a hard precondition before solving),
weighted-sum scalarization of several objective attributes, and a
sweep of one objective coefficient for sensitivity analysis.

No external dependencies — only stdlib dataclasses/enum/logging.
"""
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orbital_guardian.ports.solver import MilpSolver

logger = logging.getLogger(__name__)


class Sense(Enum):
    MINIMIZE = "min"
    MAXIMIZE = "max"


@dataclass(frozen=True)
class Bound:
    """Row bound: lower ≤ row ≤ upper, or row == equal."""
    lower: float | None = None
    upper: float | None = None
    equal: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.lower is None and self.upper is None and self.equal is None


@dataclass(frozen=True)
class LinearModel:
    """Linear program in column form with optional binary/integer variables."""
    objective: str
    sense: Sense
    variables: dict[str, dict[str, float]]
    constraints: dict[str, Bound] = field(default_factory=dict)
    binaries: frozenset[str] = frozenset()
    integers: frozenset[str] = frozenset()

    def objective_coefficient(self, variable: str) -> float:
        return self.variables[variable].get(self.objective, 0.0)


@dataclass(frozen=True)
class SolverResult:
    """Solver output: feasibility/boundedness flags plus variable values."""
    feasible: bool
    bounded: bool
    objective_value: float
    values: dict[str, float] = field(default_factory=dict)
    status: str = "optimal"

    def value(self, name: str) -> float:
        return self.values.get(name, 0.0)


class ModelValidationError(ValueError):
    """Raised when a model is malformed and must not be sent to a solver."""

    def __init__(self, errors: tuple[str, ...]):
        self.errors = errors
        super().__init__("Invalid linear model: " + "; ".join(errors))


def validate_model(model: LinearModel) -> tuple[str, ...]:
    """
    Structural checks on a model.

    Returns:
        Error messages; empty when the model is well formed.
    """
    errors: list[str] = []

    if not model.objective:
        errors.append("No objective attribute specified")
    if not isinstance(model.sense, Sense):
        errors.append(f"Optimization sense must be 'min' or 'max', got {model.sense!r}")
    if not model.variables:
        errors.append("No variables defined")

    for name, bound in model.constraints.items():
        if bound.is_empty:
            errors.append(f"Constraint '{name}' has no bound")
        elif bound.lower is not None and bound.upper is not None and bound.lower > bound.upper:
            errors.append(f"Constraint '{name}' has lower bound above upper bound")

    if model.objective in model.constraints:
        errors.append(f"Objective '{model.objective}' is also constrained")

    if model.variables and not any(model.objective in coeffs for coeffs in model.variables.values()):
        errors.append("No variable carries an objective coefficient")

    unknown = sorted((model.binaries | model.integers) - set(model.variables))
    if unknown:
        errors.append(f"Integrality declared for unknown variables: {', '.join(unknown)}")

    return tuple(errors)


def require_valid(model: LinearModel) -> None:
    """
    Validate a model as a precondition for solving.

    Raises:
        ModelValidationError: Listing every structural error found.
    """
    errors = validate_model(model)
    if errors:
        for error in errors:
            logger.warning("Model validation: %s", error)
        raise ModelValidationError(errors)


def solve_weighted_sum(
    model: LinearModel,
    weights: dict[str, float],
    solver: "MilpSolver",
) -> SolverResult:
    """
    Scalarize several objective attributes into one and solve.

    Each variable gets a ``weighted_sum`` coefficient Σ_k w_k·coef_k over
    the attributes named in ``weights``; the original sense is kept.
    """
    combined = "weighted_sum"
    variables = {
        name: {
            **coeffs,
            combined: sum(coeffs[attr] * w for attr, w in weights.items() if attr in coeffs),
        }
        for name, coeffs in model.variables.items()
    }
    weighted = replace(model, objective=combined, variables=variables)
    require_valid(weighted)
    return solver.solve(weighted)


@dataclass(frozen=True)
class SensitivityPoint:
    coefficient: float
    objective_value: float
    solution: dict[str, float]


def coefficient_sensitivity(
    model: LinearModel,
    variable: str,
    coefficients: Iterable[float],
    solver: "MilpSolver",
) -> list[SensitivityPoint]:
    """
    Re-solve while sweeping one variable's objective coefficient.

    Infeasible re-solves are left out of the returned points.

    Raises:
        KeyError: If the variable is not in the model.
    """
    if variable not in model.variables:
        raise KeyError(f"Unknown variable '{variable}'")

    points: list[SensitivityPoint] = []
    for coefficient in coefficients:
        variables = dict(model.variables)
        variables[variable] = {**model.variables[variable], model.objective: coefficient}
        modified = replace(model, variables=variables)
        require_valid(modified)
        result = solver.solve(modified)
        if not result.feasible:
            logger.debug("Sensitivity: infeasible at %s=%s", variable, coefficient)
            continue
        points.append(SensitivityPoint(
            coefficient=coefficient,
            objective_value=result.objective_value,
            solution={name: result.value(name) for name in model.variables},
        ))
    return points
