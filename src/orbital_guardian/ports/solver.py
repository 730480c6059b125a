# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for mixed-integer linear solvers.

The set-cover formulator builds a LinearModel and hands it to whatever
solver is injected; adapters translate to a concrete backend.
"""
from typing import Protocol, runtime_checkable

from orbital_guardian.domain.linear_model import LinearModel, SolverResult


@runtime_checkable
class MilpSolver(Protocol):
    """Port for solving a LinearModel."""

    def solve(self, model: LinearModel) -> SolverResult:
        """
        Solve the model.

        Infeasibility and unboundedness are reported through the
        result's ``feasible`` / ``bounded`` flags, not raised. Backend
        failures propagate as the backend's own exceptions.
        """
        ...
