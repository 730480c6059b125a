# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Scenario and result serialization.

Pure conversions between plain dicts (as loaded from / dumped to JSON)
and domain records. No file or json handling here.
"""
from dataclasses import replace
from datetime import datetime

from orbital_guardian.domain.candidates import FacilityCandidate
from orbital_guardian.domain.coverage import CoverageResult
from orbital_guardian.domain.debris import Debris, DebrisSize, DebrisStatus, DebrisType
from orbital_guardian.domain.facility import (
    Facility,
    FacilityStatus,
    FacilityType,
    GroundLocation,
    SpaceLocation,
    create_facility,
)
from orbital_guardian.domain.orbital_mechanics import OrbitalElements
from orbital_guardian.domain.set_cover import SetCoverResult


def _enum_value(enum_cls, raw: str, field_name: str):
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Unknown {field_name} '{raw}' (expected one of: {allowed})") from None


def orbit_from_dict(data: dict) -> OrbitalElements:
    """
    Parse an orbit dict.

    Raises:
        KeyError: If semi_major_axis_km, eccentricity or inclination_deg
            is missing.
    """
    epoch = data.get("epoch")
    return OrbitalElements(
        semi_major_axis_km=float(data["semi_major_axis_km"]),
        eccentricity=float(data["eccentricity"]),
        inclination_deg=float(data["inclination_deg"]),
        raan_deg=float(data.get("raan_deg", 0.0)),
        arg_periapsis_deg=float(data.get("arg_periapsis_deg", 0.0)),
        mean_anomaly_deg=float(data.get("mean_anomaly_deg", 0.0)),
        epoch=datetime.fromisoformat(epoch) if epoch else None,
    )


def orbit_to_dict(orbit: OrbitalElements) -> dict:
    data = {
        "semi_major_axis_km": orbit.semi_major_axis_km,
        "eccentricity": orbit.eccentricity,
        "inclination_deg": orbit.inclination_deg,
        "raan_deg": orbit.raan_deg,
        "arg_periapsis_deg": orbit.arg_periapsis_deg,
        "mean_anomaly_deg": orbit.mean_anomaly_deg,
    }
    if orbit.epoch is not None:
        data["epoch"] = orbit.epoch.isoformat()
    return data


def debris_from_dict(data: dict) -> Debris:
    return Debris(
        id=str(data["id"]),
        orbit=orbit_from_dict(data["orbit"]),
        size=_enum_value(DebrisSize, data["size"], "debris size"),
        status=_enum_value(DebrisStatus, data.get("status", "active"), "debris status"),
        debris_type=_enum_value(DebrisType, data.get("type", "unknown"), "debris type"),
        name=data.get("name"),
        catalog_number=data.get("catalog_number"),
    )


def debris_to_dict(debris: Debris) -> dict:
    data = {
        "id": debris.id,
        "orbit": orbit_to_dict(debris.orbit),
        "size": debris.size.value,
        "status": debris.status.value,
        "type": debris.debris_type.value,
    }
    if debris.name is not None:
        data["name"] = debris.name
    if debris.catalog_number is not None:
        data["catalog_number"] = debris.catalog_number
    return data


def facility_from_dict(data: dict) -> Facility:
    """
    Parse a facility dict; capabilities and costs come from the catalog.

    The location is ground when it carries latitude_deg, space when it
    carries an orbit.
    """
    facility_type = _enum_value(FacilityType, data["type"], "facility type")
    loc = data["location"]
    if "orbit" in loc:
        location = SpaceLocation(orbit=orbit_from_dict(loc["orbit"]))
    else:
        location = GroundLocation(
            latitude_deg=float(loc["latitude_deg"]),
            longitude_deg=float(loc.get("longitude_deg", 0.0)),
        )
    facility = create_facility(
        facility_type,
        location,
        facility_id=str(data["id"]),
        name=data.get("name"),
        status=_enum_value(FacilityStatus, data.get("status", "operational"), "facility status"),
    )
    if "construction_remaining" in data:
        facility = replace(facility, construction_remaining=int(data["construction_remaining"]))
    return facility


def candidate_to_dict(candidate: FacilityCandidate) -> dict:
    loc = candidate.location
    location = {"kind": loc.kind.value, "name": loc.name}
    if loc.latitude_deg is not None:
        location["latitude_deg"] = loc.latitude_deg
        location["longitude_deg"] = loc.longitude_deg
    if loc.altitude_km is not None:
        location["altitude_km"] = loc.altitude_km
        location["inclination_deg"] = loc.inclination_deg
    return {
        "id": candidate.id,
        "type": candidate.facility_type.value,
        "location": location,
        "cost": candidate.cost,
        "covered_count": candidate.covered_count,
    }


def set_cover_result_to_dict(
    result: SetCoverResult,
    candidates: list[FacilityCandidate] | None = None,
) -> dict:
    """Result dict; selected candidates are expanded when ``candidates`` is given."""
    data = {
        "feasible": result.feasible,
        "selected_candidates": list(result.selected_candidates),
        "total_cost": result.total_cost,
        "coverage": result.coverage,
        "covered_count": result.covered_count,
        "objective_value": result.objective_value,
        "solver_status": result.solver_result.status,
        "problem_size": {
            "debris": result.problem_size.debris,
            "candidates": result.problem_size.candidates,
        },
    }
    if candidates is not None:
        chosen = set(result.selected_candidates)
        data["selected"] = [candidate_to_dict(c) for c in candidates if c.id in chosen]
    return data


def coverage_result_to_dict(result: CoverageResult) -> dict:
    return {
        "total_coverage": result.total_coverage,
        "tracked_count": result.tracked_count,
        "untracked_count": result.untracked_count,
        "by_region": {region.value: ratio for region, ratio in result.by_region.items()},
        "tracking": {debris_id: list(ids) for debris_id, ids in result.tracking.items()},
    }
