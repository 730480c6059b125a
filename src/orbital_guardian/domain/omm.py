# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
OMM (Orbit Mean-Elements Message) record parsing.

Converts CelesTrak JSON OMM records into domain objects and derives
semi-major axis from mean motion via Kepler's third law.
No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone

from orbital_guardian.domain.debris import Debris, DebrisSize, DebrisStatus, DebrisType
from orbital_guardian.domain.orbital_mechanics import OrbitalConstants, OrbitalElements


@dataclass(frozen=True)
class OmmRecord:
    """Parsed mean elements from an OMM record."""
    object_name: str
    object_id: str
    norad_cat_id: int
    epoch: str
    mean_motion_rev_per_day: float
    eccentricity: float
    inclination_deg: float
    raan_deg: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    bstar: float
    mean_motion_dot: float
    mean_motion_ddot: float
    semi_major_axis_km: float


def parse_omm_record(record: dict) -> OmmRecord:
    """
    Parse a CelesTrak OMM JSON record.

    Derives semi-major axis from mean motion:
        n (rad/s) = mean_motion × 2π / 86400
        a = (μ / n²)^(1/3)

    Raises:
        KeyError: If a required field is missing.
        ValueError: If mean motion is non-positive.
    """
    mean_motion_rpd = record["MEAN_MOTION"]
    if mean_motion_rpd <= 0:
        raise ValueError(f"Mean motion must be positive, got {mean_motion_rpd}")

    n_rad_s = mean_motion_rpd * 2.0 * math.pi / 86400.0
    a_km = (OrbitalConstants.MU_EARTH_KM3_S2 / (n_rad_s ** 2)) ** (1.0 / 3.0)

    return OmmRecord(
        object_name=record["OBJECT_NAME"],
        object_id=record["OBJECT_ID"],
        norad_cat_id=record["NORAD_CAT_ID"],
        epoch=record["EPOCH"],
        mean_motion_rev_per_day=mean_motion_rpd,
        eccentricity=record["ECCENTRICITY"],
        inclination_deg=record["INCLINATION"],
        raan_deg=record["RA_OF_ASC_NODE"],
        arg_perigee_deg=record["ARG_OF_PERICENTER"],
        mean_anomaly_deg=record["MEAN_ANOMALY"],
        bstar=record.get("BSTAR", 0.0),
        mean_motion_dot=record.get("MEAN_MOTION_DOT", 0.0),
        mean_motion_ddot=record.get("MEAN_MOTION_DDOT", 0.0),
        semi_major_axis_km=a_km,
    )


def parse_epoch(epoch_str: str) -> datetime:
    """ISO epoch string to an aware UTC datetime (naive and 'Z' treated as UTC)."""
    if epoch_str.endswith("Z"):
        epoch_str = epoch_str[:-1] + "+00:00"
    dt = datetime.fromisoformat(epoch_str)
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def classify_object(object_name: str) -> tuple[DebrisType, DebrisSize]:
    """
    Object type and size class from the catalog naming convention.

    "R/B" marks rocket bodies (large), "DEB" fragments (small); anything
    else is treated as a defunct payload (medium).
    """
    name = object_name.upper()
    if "R/B" in name:
        return DebrisType.ROCKET_BODY, DebrisSize.LARGE
    if "DEB" in name:
        return DebrisType.FRAGMENT, DebrisSize.SMALL
    return DebrisType.PAYLOAD, DebrisSize.MEDIUM


def omm_to_debris(
    omm: OmmRecord,
    orbit: OrbitalElements | None = None,
    size: DebrisSize | None = None,
) -> Debris:
    """
    Debris record for an OMM entry.

    Args:
        omm: Parsed OMM record.
        orbit: Elements to use instead of the OMM mean elements (e.g.
            after re-epoching).
        size: Size class override; inferred from the name otherwise.
    """
    debris_type, inferred_size = classify_object(omm.object_name)
    if orbit is None:
        orbit = OrbitalElements(
            semi_major_axis_km=omm.semi_major_axis_km,
            eccentricity=omm.eccentricity,
            inclination_deg=omm.inclination_deg,
            raan_deg=omm.raan_deg,
            arg_periapsis_deg=omm.arg_perigee_deg,
            mean_anomaly_deg=omm.mean_anomaly_deg,
            epoch=parse_epoch(omm.epoch),
        )
    return Debris(
        id=f"norad-{omm.norad_cat_id}",
        orbit=orbit,
        size=size or inferred_size,
        status=DebrisStatus.ACTIVE,
        debris_type=debris_type,
        name=omm.object_name,
        catalog_number=str(omm.norad_cat_id),
    )
