# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Keplerian element record plus the geometry queries the coverage model
consumes: altitude above the reference sphere, apsis altitudes, mean
motion, period and ECI position at a time offset from epoch.
Distances in km, angles in degrees unless the name says otherwise.
"""
import math
from dataclasses import dataclass
from datetime import datetime

import numpy as np


@dataclass(frozen=True)
class _OrbitalConstants:
    """Reference-body constants used throughout the game model."""
    R_EARTH_KM: float = 6371.0             # km — mean radius
    MU_EARTH_KM3_S2: float = 398600.4418   # km³/s² — gravitational parameter
    GEO_ALTITUDE_KM: float = 35786.0       # km — geostationary altitude


OrbitalConstants: _OrbitalConstants = _OrbitalConstants()


@dataclass(frozen=True)
class OrbitalElements:
    """Classical Keplerian elements of a debris object or space facility."""
    semi_major_axis_km: float
    eccentricity: float
    inclination_deg: float
    raan_deg: float = 0.0
    arg_periapsis_deg: float = 0.0
    mean_anomaly_deg: float = 0.0
    epoch: datetime | None = None


def altitude_to_radius(altitude_km: float) -> float:
    """Orbital radius (km) for an altitude above the mean Earth radius."""
    return OrbitalConstants.R_EARTH_KM + altitude_km


def radius_to_altitude(radius_km: float) -> float:
    """Altitude (km) above the mean Earth radius for an orbital radius."""
    return radius_km - OrbitalConstants.R_EARTH_KM


def altitude_km(elements: OrbitalElements) -> float:
    """Mean altitude: semi-major axis minus the reference radius."""
    return radius_to_altitude(elements.semi_major_axis_km)


def periapsis_altitude_km(elements: OrbitalElements) -> float:
    a, e = elements.semi_major_axis_km, elements.eccentricity
    return a * (1.0 - e) - OrbitalConstants.R_EARTH_KM


def apoapsis_altitude_km(elements: OrbitalElements) -> float:
    a, e = elements.semi_major_axis_km, elements.eccentricity
    return a * (1.0 + e) - OrbitalConstants.R_EARTH_KM


def mean_motion_rad_s(semi_major_axis_km: float) -> float:
    """
    Mean motion n = √(μ / a³).

    Raises:
        ValueError: If the semi-major axis is not positive.
    """
    if semi_major_axis_km <= 0:
        raise ValueError(f"Semi-major axis must be positive, got {semi_major_axis_km}")
    return float(np.sqrt(OrbitalConstants.MU_EARTH_KM3_S2 / semi_major_axis_km ** 3))


def orbital_period_s(semi_major_axis_km: float) -> float:
    """Orbital period T = 2π / n in seconds."""
    return 2.0 * math.pi / mean_motion_rad_s(semi_major_axis_km)


def solve_kepler_equation(
    mean_anomaly_rad: float,
    eccentricity: float,
    tolerance: float = 1e-8,
    max_iterations: int = 100,
) -> float:
    """
    Solve M = E − e·sin(E) for the eccentric anomaly E by Newton iteration.

    Args:
        mean_anomaly_rad: Mean anomaly M (radians).
        eccentricity: Orbit eccentricity, 0 ≤ e < 1.
        tolerance: Convergence threshold on the Newton step.
        max_iterations: Iteration cap.

    Returns:
        Eccentric anomaly E (radians).
    """
    if not 0.0 <= eccentricity < 1.0:
        raise ValueError(f"Eccentricity must be in [0, 1), got {eccentricity}")
    ecc_anomaly = mean_anomaly_rad
    for _ in range(max_iterations):
        step = (ecc_anomaly - eccentricity * math.sin(ecc_anomaly) - mean_anomaly_rad) / (
            1.0 - eccentricity * math.cos(ecc_anomaly)
        )
        ecc_anomaly -= step
        if abs(step) < tolerance:
            break
    return ecc_anomaly


def eccentric_to_true_anomaly(ecc_anomaly_rad: float, eccentricity: float) -> float:
    """True anomaly (radians) from eccentric anomaly."""
    denom = 1.0 - eccentricity * math.cos(ecc_anomaly_rad)
    sin_nu = math.sqrt(1.0 - eccentricity ** 2) * math.sin(ecc_anomaly_rad) / denom
    cos_nu = (math.cos(ecc_anomaly_rad) - eccentricity) / denom
    return math.atan2(sin_nu, cos_nu)


def position_at(elements: OrbitalElements, dt_s: float = 0.0) -> tuple[float, float, float]:
    """
    ECI position (km) after propagating the mean anomaly by dt_s seconds.

    Two-body motion only: the mean anomaly advances at n, the orbit plane
    is fixed, and the perifocal position is rotated into ECI by
    R3(−Ω)·R1(−i)·R3(−ω).

    Args:
        elements: Keplerian elements at epoch.
        dt_s: Time offset from epoch (seconds).

    Returns:
        (x, y, z) position in km.
    """
    a = elements.semi_major_axis_km
    e = elements.eccentricity
    n = mean_motion_rad_s(a)

    mean_anomaly = math.radians(elements.mean_anomaly_deg) + n * dt_s
    ecc_anomaly = solve_kepler_equation(mean_anomaly, e)
    nu = eccentric_to_true_anomaly(ecc_anomaly, e)
    r = a * (1.0 - e * math.cos(ecc_anomaly))

    pos_pqw = np.array([r * math.cos(nu), r * math.sin(nu), 0.0])

    cO = math.cos(math.radians(elements.raan_deg))
    sO = math.sin(math.radians(elements.raan_deg))
    co = math.cos(math.radians(elements.arg_periapsis_deg))
    so = math.sin(math.radians(elements.arg_periapsis_deg))
    ci = math.cos(math.radians(elements.inclination_deg))
    si = math.sin(math.radians(elements.inclination_deg))

    rotation = np.array([
        [cO * co - sO * so * ci, -cO * so - sO * co * ci, sO * si],
        [sO * co + cO * so * ci, -sO * so + cO * co * ci, -cO * si],
        [so * si, co * si, ci],
    ])

    pos_eci = rotation @ pos_pqw
    return float(pos_eci[0]), float(pos_eci[1]), float(pos_eci[2])


def elements_from_state(
    position_km: tuple[float, float, float],
    velocity_km_s: tuple[float, float, float],
    epoch: datetime | None = None,
) -> OrbitalElements:
    """
    Osculating Keplerian elements from an inertial state vector.

    Used to turn a propagated (e.g. SGP4 TEME) state back into the
    element record the coverage model works on.

    Raises:
        ValueError: If the state is not a bound elliptical orbit.
    """
    mu = OrbitalConstants.MU_EARTH_KM3_S2
    r_vec = np.array(position_km, dtype=float)
    v_vec = np.array(velocity_km_s, dtype=float)
    r = float(np.linalg.norm(r_vec))
    v = float(np.linalg.norm(v_vec))

    energy = v ** 2 / 2.0 - mu / r
    if energy >= 0:
        raise ValueError("State vector is not on a bound elliptical orbit")
    a = -mu / (2.0 * energy)

    h_vec = np.cross(r_vec, v_vec)
    h = float(np.linalg.norm(h_vec))
    inc = math.acos(max(-1.0, min(1.0, h_vec[2] / h)))

    node_vec = np.cross([0.0, 0.0, 1.0], h_vec)
    node = float(np.linalg.norm(node_vec))

    e_vec = ((v ** 2 - mu / r) * r_vec - float(np.dot(r_vec, v_vec)) * v_vec) / mu
    e = float(np.linalg.norm(e_vec))

    # Equatorial orbits: measure RAAN from the x axis
    if node > 1e-12:
        raan = math.acos(max(-1.0, min(1.0, node_vec[0] / node)))
        if node_vec[1] < 0:
            raan = 2.0 * math.pi - raan
    else:
        raan = 0.0
        node_vec = np.array([1.0, 0.0, 0.0])
        node = 1.0

    # Circular orbits: argument of latitude replaces argp + nu
    if e > 1e-10:
        argp = math.acos(max(-1.0, min(1.0, float(np.dot(node_vec, e_vec)) / (node * e))))
        if e_vec[2] < 0:
            argp = 2.0 * math.pi - argp
        nu = math.acos(max(-1.0, min(1.0, float(np.dot(e_vec, r_vec)) / (e * r))))
        if float(np.dot(r_vec, v_vec)) < 0:
            nu = 2.0 * math.pi - nu
    else:
        argp = 0.0
        nu = math.acos(max(-1.0, min(1.0, float(np.dot(node_vec, r_vec)) / (node * r))))
        if r_vec[2] < 0:
            nu = 2.0 * math.pi - nu

    ecc_anomaly = 2.0 * math.atan2(
        math.sqrt(1.0 - e) * math.sin(nu / 2.0),
        math.sqrt(1.0 + e) * math.cos(nu / 2.0),
    )
    mean_anomaly = (ecc_anomaly - e * math.sin(ecc_anomaly)) % (2.0 * math.pi)

    return OrbitalElements(
        semi_major_axis_km=a,
        eccentricity=e,
        inclination_deg=math.degrees(inc),
        raan_deg=math.degrees(raan),
        arg_periapsis_deg=math.degrees(argp),
        mean_anomaly_deg=math.degrees(mean_anomaly),
        epoch=epoch,
    )
