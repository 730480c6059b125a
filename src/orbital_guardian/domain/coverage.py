# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Live tracking coverage over the active debris population.

Applies the live coverage predicate across every operational monitoring
facility and every active debris object, and reports global and
per-altitude-band tracking ratios. The ``tracking`` map gates removal:
only debris tracked by at least one facility may be removed.

No external dependencies — only stdlib dataclasses/enum + domain imports.
"""
from dataclasses import dataclass, replace
from enum import Enum

from orbital_guardian.domain.debris import Debris
from orbital_guardian.domain.facility import Facility, FacilityStatus, FacilityType
from orbital_guardian.domain.orbital_mechanics import OrbitalConstants
from orbital_guardian.domain.visibility import can_track


class OrbitalRegion(Enum):
    LEO_LOWER = "LEO-Lower"
    LEO_UPPER = "LEO-Upper"
    MEO = "MEO"
    GEO = "GEO"


# Lower bounds (km) of each band; the band extends to the next bound.
REGION_BOUNDS: tuple[tuple[OrbitalRegion, float], ...] = (
    (OrbitalRegion.LEO_LOWER, 0.0),
    (OrbitalRegion.LEO_UPPER, 600.0),
    (OrbitalRegion.MEO, 2000.0),
    (OrbitalRegion.GEO, OrbitalConstants.GEO_ALTITUDE_KM),
)


@dataclass(frozen=True)
class CoverageResult:
    """Tracking coverage of the active debris population."""
    total_coverage: float
    tracked_count: int
    untracked_count: int
    by_region: dict[OrbitalRegion, float]
    tracking: dict[str, tuple[str, ...]]  # debris id -> covering facility ids


def classify_region(altitude_km: float) -> OrbitalRegion:
    """Altitude band: <600 LEO-Lower, <2000 LEO-Upper, <35786 MEO, else GEO."""
    for region, lower_km in reversed(REGION_BOUNDS):
        if altitude_km >= lower_km:
            return region
    return OrbitalRegion.LEO_LOWER


def compute_coverage(facilities: list[Facility], debris: list[Debris]) -> CoverageResult:
    """
    Live tracking coverage of active debris by operational facilities.

    Args:
        facilities: Facility snapshot (any status; filtered here).
        debris: Debris snapshot (any status; filtered here).

    Returns:
        CoverageResult. Ratios are 0 for empty populations.
    """
    trackers = [f for f in facilities if f.is_operational and f.monitoring is not None]

    totals = {region: 0 for region in OrbitalRegion}
    tracked_by_region = {region: 0 for region in OrbitalRegion}
    tracking: dict[str, tuple[str, ...]] = {}

    for d in debris:
        if not d.is_active:
            continue

        covering = tuple(f.id for f in trackers if can_track(f, d))
        tracking[d.id] = covering

        region = classify_region(d.altitude_km)
        totals[region] += 1
        if covering:
            tracked_by_region[region] += 1

    active_count = len(tracking)
    tracked_count = sum(1 for ids in tracking.values() if ids)

    by_region = {
        region: tracked_by_region[region] / totals[region] if totals[region] > 0 else 0.0
        for region in OrbitalRegion
    }

    return CoverageResult(
        total_coverage=tracked_count / active_count if active_count > 0 else 0.0,
        tracked_count=tracked_count,
        untracked_count=active_count - tracked_count,
        by_region=by_region,
        tracking=tracking,
    )


def trackable_debris_ids(result: CoverageResult) -> frozenset[str]:
    """Debris ids covered by at least one facility (eligible for removal)."""
    return frozenset(debris_id for debris_id, ids in result.tracking.items() if ids)


@dataclass(frozen=True)
class CoverageForecast:
    current_coverage: float
    predicted_coverage: float
    increase: float


def predict_coverage_increase(
    existing: list[Facility],
    new_facility: Facility,
    debris: list[Debris],
) -> CoverageForecast:
    """
    Coverage gain from adding one facility, treating it as operational.

    Uses the live predicate, so the forecast is exactly what tracking
    will report once the facility comes online with the same id.
    """
    current = compute_coverage(existing, debris)
    simulated = replace(new_facility, status=FacilityStatus.OPERATIONAL)
    predicted = compute_coverage([*existing, simulated], debris)
    return CoverageForecast(
        current_coverage=current.total_coverage,
        predicted_coverage=predicted.total_coverage,
        increase=predicted.total_coverage - current.total_coverage,
    )


def identify_gaps(result: CoverageResult, target_coverage: float = 0.8) -> list[OrbitalRegion]:
    """Regions whose tracking ratio is below the target, in band order."""
    return [region for region in OrbitalRegion if result.by_region[region] < target_coverage]


_REGION_RECOMMENDATIONS: dict[OrbitalRegion, tuple[FacilityType, ...]] = {
    OrbitalRegion.LEO_LOWER: (FacilityType.RADAR_SBAND, FacilityType.RADAR_CBAND),
    OrbitalRegion.LEO_UPPER: (FacilityType.RADAR_SBAND, FacilityType.RADAR_CBAND),
    OrbitalRegion.MEO: (FacilityType.RADAR_CBAND, FacilityType.SURVEILLANCE_SATELLITE),
    OrbitalRegion.GEO: (FacilityType.OPTICAL_TELESCOPE, FacilityType.SURVEILLANCE_SATELLITE),
}


def recommended_facility_types(gaps: list[OrbitalRegion]) -> list[FacilityType]:
    """Facility types suited to the gap regions, deduplicated in first-seen order."""
    recommendations: list[FacilityType] = []
    for region in gaps:
        for facility_type in _REGION_RECOMMENDATIONS[region]:
            if facility_type not in recommendations:
                recommendations.append(facility_type)
    return recommendations
