# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital Guardian

Debris-monitoring facility placement. Enumerates ground and orbital
placement candidates, precomputes which debris each could observe, and
selects facilities with a weighted Set Covering MILP: cheapest full or
partial coverage, optionally under a budget, or the most coverage a
budget can buy. Includes the facility catalog, live coverage analysis
with gap detection, CelesTrak debris ingestion and a formulation
explainer.
"""

from orbital_guardian.domain.orbital_mechanics import (
    OrbitalConstants,
    OrbitalElements,
    altitude_km,
    elements_from_state,
    position_at,
)
from orbital_guardian.domain.debris import (
    Debris,
    DebrisSize,
    DebrisStatus,
    DebrisType,
    active_debris,
)
from orbital_guardian.domain.facility import (
    FACILITY_TYPES,
    GROUND_SITE_CANDIDATES,
    Facility,
    FacilityCategory,
    FacilityStatus,
    FacilityType,
    GroundLocation,
    SpaceLocation,
    advance_construction,
    create_facility,
    space_facility_orbit,
)
from orbital_guardian.domain.visibility import (
    VisibilityConstants,
    can_cover_placement,
    can_track,
)
from orbital_guardian.domain.coverage import (
    CoverageResult,
    OrbitalRegion,
    compute_coverage,
    identify_gaps,
    predict_coverage_increase,
    recommended_facility_types,
)
from orbital_guardian.domain.candidates import (
    CandidateGrid,
    FacilityCandidate,
    generate_candidates,
)
from orbital_guardian.domain.linear_model import (
    Bound,
    LinearModel,
    ModelValidationError,
    Sense,
    SolverResult,
    validate_model,
)
from orbital_guardian.domain.set_cover import (
    SetCoverResult,
    solve_max_coverage,
    solve_set_cover,
    summarize_result,
)
from orbital_guardian.domain.formulation import explain_set_cover
from orbital_guardian.ports.solver import MilpSolver

__all__ = [
    "OrbitalConstants",
    "OrbitalElements",
    "altitude_km",
    "elements_from_state",
    "position_at",
    "Debris",
    "DebrisSize",
    "DebrisStatus",
    "DebrisType",
    "active_debris",
    "FACILITY_TYPES",
    "GROUND_SITE_CANDIDATES",
    "Facility",
    "FacilityCategory",
    "FacilityStatus",
    "FacilityType",
    "GroundLocation",
    "SpaceLocation",
    "advance_construction",
    "create_facility",
    "space_facility_orbit",
    "VisibilityConstants",
    "can_cover_placement",
    "can_track",
    "CoverageResult",
    "OrbitalRegion",
    "compute_coverage",
    "identify_gaps",
    "predict_coverage_increase",
    "recommended_facility_types",
    "CandidateGrid",
    "FacilityCandidate",
    "generate_candidates",
    "Bound",
    "LinearModel",
    "ModelValidationError",
    "Sense",
    "SolverResult",
    "validate_model",
    "SetCoverResult",
    "solve_max_coverage",
    "solve_set_cover",
    "summarize_result",
    "explain_set_cover",
    "MilpSolver",
]
