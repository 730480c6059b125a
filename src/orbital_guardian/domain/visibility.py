# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coverage predicate: can a facility detect a debris object?

Two variants share the same first three rules:

1. The facility is operational and has a monitoring capability.
2. Debris altitude lies in [min_altitude_km, max_altitude_km].
3. The debris size class, mapped to centimetres (large 100,
   medium 30, small 5), is at least the facility's minimum
   detectable size.

Placement variant (``can_cover_placement``), used for candidate bitmaps:

4. A ground facility cannot see orbits with inclination below
   |latitude| − 10°. Passing 1–4 means covered, unconditionally.

Live variant (``can_track``), used for per-turn tracking:

4'. A ground facility whose latitude exceeds the orbit inclination by
    the live threshold (inclination < 0.8·|latitude|) is marginal and
    its detection fraction is halved.
5.  A stable visibility roll in [0, 1) keyed by the (facility, debris)
    id pair is compared with min(1, base_fraction × adjustment × 3).

The roll is not a random draw. It is a fixed 32-bit string hash, so a
given pair resolves the same way in every call, process and language:

    h = 0
    for each UTF-16 code unit c of f"{facility_id}-{debris_id}":
        h = int32(h * 31 + c)
    roll = (|h| mod 1000) / 1000

The two variants deliberately differ: the placement rule is a
geometry-only planning estimate, the live rule is what the simulation
actually observes.
"""
from dataclasses import dataclass, field

from orbital_guardian.domain.debris import Debris, DebrisSize
from orbital_guardian.domain.facility import Facility, GroundLocation


@dataclass(frozen=True)
class _VisibilityConstants:
    """Tuning constants of the coverage predicate."""
    SIZE_CM: dict = field(default_factory=lambda: {
        DebrisSize.LARGE: 100.0,
        DebrisSize.MEDIUM: 30.0,
        DebrisSize.SMALL: 5.0,
    })
    PLACEMENT_LATITUDE_MARGIN_DEG: float = 10.0
    LIVE_LATITUDE_FACTOR: float = 0.8
    MARGINAL_ADJUSTMENT: float = 0.5
    COVERAGE_BOOST: float = 3.0
    HASH_MODULUS: int = 1000


VisibilityConstants: _VisibilityConstants = _VisibilityConstants()


def detectable_size_cm(size: DebrisSize) -> float:
    """Representative size in cm for a debris size class."""
    return VisibilityConstants.SIZE_CM[size]


def stable_hash(key: str) -> int:
    """
    Portable 32-bit polynomial string hash (multiplier 31).

    Iterates UTF-16 code units, wraps to a signed 32-bit integer after
    every step and returns the absolute value.
    """
    h = 0
    data = key.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def visibility_roll(facility_id: str, debris_id: str) -> float:
    """Deterministic value in [0, 1) for a facility/debris pair."""
    modulus = VisibilityConstants.HASH_MODULUS
    return (stable_hash(f"{facility_id}-{debris_id}") % modulus) / modulus


def _passes_sensor_limits(facility: Facility, debris: Debris) -> bool:
    """Rules 1–3, common to both variants."""
    monitoring = facility.monitoring
    if not facility.is_operational or monitoring is None:
        return False

    altitude = debris.altitude_km
    if altitude < monitoring.min_altitude_km or altitude > monitoring.max_altitude_km:
        return False

    return detectable_size_cm(debris.size) >= monitoring.min_detectable_size_cm


def can_cover_placement(facility: Facility, debris: Debris) -> bool:
    """Geometry-only coverage used to build candidate bitmaps."""
    if not _passes_sensor_limits(facility, debris):
        return False

    if isinstance(facility.location, GroundLocation):
        latitude = abs(facility.location.latitude_deg)
        if debris.orbit.inclination_deg < latitude - VisibilityConstants.PLACEMENT_LATITUDE_MARGIN_DEG:
            return False

    return True


def is_marginal_geometry(facility: Facility, debris: Debris) -> bool:
    """Live-variant latitude test: orbit inclination well below the site latitude."""
    if not isinstance(facility.location, GroundLocation):
        return False
    latitude = abs(facility.location.latitude_deg)
    return debris.orbit.inclination_deg < latitude * VisibilityConstants.LIVE_LATITUDE_FACTOR


def adjusted_coverage_fraction(facility: Facility, debris: Debris) -> float:
    """min(1, base × latitude adjustment × boost) for a monitoring facility."""
    if facility.monitoring is None:
        return 0.0
    adjustment = VisibilityConstants.MARGINAL_ADJUSTMENT if is_marginal_geometry(facility, debris) else 1.0
    return min(
        1.0,
        facility.monitoring.base_coverage_fraction * adjustment * VisibilityConstants.COVERAGE_BOOST,
    )


def can_track(facility: Facility, debris: Debris) -> bool:
    """Live tracking decision, stable for a given facility/debris pair."""
    if not _passes_sensor_limits(facility, debris):
        return False
    return visibility_roll(facility.id, debris.id) < adjusted_coverage_fraction(facility, debris)
