# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Facility-placement candidate generation.

Enumerates hypothetical placements (ground sites × ground monitoring
types, orbital altitude × inclination × space monitoring types) and
precomputes each one's coverage bitmap over the current debris snapshot
with the placement-only predicate. Candidates that cover nothing are
dropped.

Bitmap index i corresponds to debris[i] of the sequence passed in.
Candidates are tied to that snapshot and must be regenerated whenever
the debris sequence changes.

No external dependencies — only stdlib dataclasses + domain imports.
"""
from dataclasses import dataclass, replace

from orbital_guardian.domain.debris import Debris
from orbital_guardian.domain.facility import (
    FACILITY_TYPES,
    GROUND_SITE_CANDIDATES,
    Facility,
    FacilityCategory,
    FacilityStatus,
    FacilityType,
    GroundLocation,
    GroundSite,
    SpaceLocation,
    create_facility,
    space_facility_orbit,
)
from orbital_guardian.domain.visibility import can_cover_placement


@dataclass(frozen=True)
class _CandidateGrid:
    """Placement grid searched by the candidate generator."""
    ALTITUDES_KM: tuple[float, ...] = (500.0, 800.0, 1200.0, 20000.0)
    INCLINATIONS_DEG: tuple[float, ...] = (28.0, 45.0, 63.0, 90.0)
    DEFAULT_FACILITY_TYPES: tuple[FacilityType, ...] = (
        FacilityType.RADAR_SBAND,
        FacilityType.RADAR_CBAND,
        FacilityType.OPTICAL_TELESCOPE,
        FacilityType.SURVEILLANCE_SATELLITE,
    )


CandidateGrid: _CandidateGrid = _CandidateGrid()


@dataclass(frozen=True)
class CandidateLocation:
    """Where a candidate would be built."""
    kind: FacilityCategory
    name: str
    latitude_deg: float | None = None
    longitude_deg: float | None = None
    altitude_km: float | None = None
    inclination_deg: float | None = None


@dataclass(frozen=True)
class FacilityCandidate:
    """A not-yet-built placement with its static coverage bitmap."""
    id: str
    facility_type: FacilityType
    location: CandidateLocation
    cost: float
    coverage: tuple[bool, ...]

    @property
    def covered_indices(self) -> tuple[int, ...]:
        return tuple(i for i, covered in enumerate(self.coverage) if covered)

    @property
    def covered_count(self) -> int:
        return sum(1 for covered in self.coverage if covered)


def candidate_facility(candidate: FacilityCandidate) -> Facility:
    """
    Operational Facility equivalent to a candidate.

    The placement predicate evaluated on this facility reproduces the
    candidate's bitmap.
    """
    loc = candidate.location
    if loc.kind is FacilityCategory.GROUND:
        location = GroundLocation(latitude_deg=loc.latitude_deg, longitude_deg=loc.longitude_deg)
    else:
        location = SpaceLocation(orbit=space_facility_orbit(loc.altitude_km, loc.inclination_deg))
    return create_facility(
        candidate.facility_type,
        location,
        facility_id=candidate.id,
        name=loc.name,
        status=FacilityStatus.OPERATIONAL,
    )


def _coverage_bitmap(facility: Facility, debris: list[Debris]) -> tuple[bool, ...]:
    return tuple(can_cover_placement(facility, d) for d in debris)


def _ground_candidate(
    candidate_id: str,
    site: GroundSite,
    facility_type: FacilityType,
) -> FacilityCandidate:
    definition = FACILITY_TYPES[facility_type]
    return FacilityCandidate(
        id=candidate_id,
        facility_type=facility_type,
        location=CandidateLocation(
            kind=FacilityCategory.GROUND,
            name=f"{site.name} - {definition.name}",
            latitude_deg=site.latitude_deg,
            longitude_deg=site.longitude_deg,
        ),
        cost=definition.construction_cost,
        coverage=(),
    )


def _space_candidate(
    candidate_id: str,
    altitude_km: float,
    inclination_deg: float,
    facility_type: FacilityType,
) -> FacilityCandidate:
    definition = FACILITY_TYPES[facility_type]
    return FacilityCandidate(
        id=candidate_id,
        facility_type=facility_type,
        location=CandidateLocation(
            kind=FacilityCategory.SPACE,
            name=f"{definition.name} @ {altitude_km:g}km/{inclination_deg:g}°",
            altitude_km=altitude_km,
            inclination_deg=inclination_deg,
        ),
        cost=definition.construction_cost,
        coverage=(),
    )


def generate_candidates(
    debris: list[Debris],
    facility_types: tuple[FacilityType, ...] | list[FacilityType] | None = None,
) -> list[FacilityCandidate]:
    """
    Enumerate placement candidates that cover at least one debris object.

    Ground candidates come first (site-major, then type order), then
    space candidates (altitude, inclination, type). Non-monitoring types
    never produce candidates. Ids are ``candidate-<n>``, sequential over
    retained candidates and unique within this call only.

    Args:
        debris: Debris snapshot; bitmap index i refers to debris[i].
        facility_types: Types to consider (default: S-band radar, C-band
            radar, optical telescope, surveillance satellite).

    Returns:
        Retained candidates; empty when debris is empty.
    """
    if facility_types is None:
        facility_types = CandidateGrid.DEFAULT_FACILITY_TYPES

    ground_types = [
        t for t in facility_types
        if FACILITY_TYPES[t].category is FacilityCategory.GROUND and FACILITY_TYPES[t].monitoring
    ]
    space_types = [
        t for t in facility_types
        if FACILITY_TYPES[t].category is FacilityCategory.SPACE and FACILITY_TYPES[t].monitoring
    ]

    candidates: list[FacilityCandidate] = []

    def _keep(template: FacilityCandidate) -> None:
        bitmap = _coverage_bitmap(candidate_facility(template), debris)
        if any(bitmap):
            candidates.append(replace(template, coverage=bitmap))

    for site in GROUND_SITE_CANDIDATES:
        for facility_type in ground_types:
            _keep(_ground_candidate(f"candidate-{len(candidates)}", site, facility_type))

    for altitude in CandidateGrid.ALTITUDES_KM:
        for inclination in CandidateGrid.INCLINATIONS_DEG:
            for facility_type in space_types:
                _keep(_space_candidate(
                    f"candidate-{len(candidates)}", altitude, inclination, facility_type,
                ))

    return candidates
