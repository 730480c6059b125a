# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CelesTrak adapter: fetches debris element sets and converts to domain objects.

External dependencies (urllib, json, sgp4) are confined to this layer.

Data sources:
    CelesTrak GP API — https://celestrak.org/NORAD/elements/gp.php
    Debris groups: COSMOS-2251-DEBRIS, IRIDIUM-33-DEBRIS,
    FENGYUN-1C-DEBRIS, COSMOS-1408-DEBRIS

Without an epoch, OMM mean elements are used as-is. With an epoch, each
record is propagated by SGP4 and the TEME state is converted back to
osculating elements, which requires the optional sgp4 package.
"""
import json
import logging
import math
import urllib.error
import urllib.request
from datetime import datetime, timezone
from typing import Any

from orbital_guardian.domain.debris import Debris, DebrisSize
from orbital_guardian.domain.omm import OmmRecord, omm_to_debris, parse_epoch, parse_omm_record
from orbital_guardian.domain.orbital_mechanics import OrbitalElements, elements_from_state
from orbital_guardian.ports.debris_data import DebrisDataSource

_log = logging.getLogger(__name__)

BASE_URL = "https://celestrak.org/NORAD/elements/gp.php"

DEBRIS_GROUPS = (
    "COSMOS-2251-DEBRIS",
    "IRIDIUM-33-DEBRIS",
    "FENGYUN-1C-DEBRIS",
    "COSMOS-1408-DEBRIS",
)


def _require_sgp4():
    """Import sgp4 lazily; raise clear error if not installed."""
    try:
        from sgp4.api import Satrec, WGS72, jday
    except ImportError:
        raise ImportError(
            "sgp4 is required to re-epoch debris elements. "
            "Install with: pip install orbital-guardian[live]"
        ) from None
    return Satrec, WGS72, jday


def _as_utc(dt: datetime) -> datetime:
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def propagate_omm(omm_record: dict[str, Any], epoch: datetime) -> OrbitalElements:
    """
    SGP4-propagate an OMM record to ``epoch`` and return osculating elements.

    Raises:
        ImportError: If sgp4 is not installed.
        RuntimeError: If SGP4 reports a propagation error.
    """
    Satrec, WGS72, jday = _require_sgp4()
    omm = parse_omm_record(omm_record)
    omm_epoch = parse_epoch(omm.epoch)

    sat = Satrec()
    sat.sgp4init(
        WGS72,
        'i',
        omm.norad_cat_id,
        _days_since_1949(omm_epoch),
        omm.bstar,
        omm.mean_motion_dot * 2.0 * math.pi / 1440.0 ** 2,
        omm.mean_motion_ddot * 2.0 * math.pi / 1440.0 ** 3,
        omm.eccentricity,
        math.radians(omm.arg_perigee_deg),
        math.radians(omm.inclination_deg),
        math.radians(omm.mean_anomaly_deg),
        omm.mean_motion_rev_per_day * 2.0 * math.pi / 1440.0,
        math.radians(omm.raan_deg),
    )

    target = _as_utc(epoch)
    jd, fr = jday(target.year, target.month, target.day, target.hour, target.minute,
                  target.second + target.microsecond / 1e6)
    error_code, position_km, velocity_km_s = sat.sgp4(jd, fr)
    if error_code != 0:
        raise RuntimeError(f"SGP4 propagation error {error_code} for {omm.object_name}")

    return elements_from_state(tuple(position_km), tuple(velocity_km_s), epoch=target)


def _days_since_1949(dt: datetime) -> float:
    """SGP4 epoch offset: fractional days since 1949-12-31 00:00 UTC."""
    delta = _as_utc(dt) - datetime(1949, 12, 31, tzinfo=timezone.utc)
    return delta.days + delta.seconds / 86400.0 + delta.microseconds / 86400e6


class CelesTrakDebrisAdapter(DebrisDataSource):
    """
    Fetches debris element sets from CelesTrak's GP API.

    Rate limiting: CelesTrak updates at most every 2 hours.
    """

    def __init__(self, base_url: str = BASE_URL, timeout: int = 30):
        self._base_url = base_url
        self._timeout = timeout

    def fetch_group(self, group_name: str) -> list[dict[str, Any]]:
        url = f"{self._base_url}?GROUP={group_name}&FORMAT=JSON"
        return self._fetch_json(url)

    def fetch_debris(
        self,
        group: str,
        epoch: datetime | None = None,
        size: DebrisSize | None = None,
    ) -> list[Debris]:
        """
        Fetch a debris group and convert records to Debris objects.

        Args:
            group: CelesTrak group name.
            epoch: Optional datetime to re-epoch all objects to (needs sgp4).
            size: Size class for every object; inferred from names otherwise.

        Returns:
            Debris records; malformed or non-propagatable entries are
            skipped with a warning.
        """
        if not group:
            raise ValueError("Specify a CelesTrak group")

        debris: list[Debris] = []
        for record in self.fetch_group(group):
            try:
                omm: OmmRecord = parse_omm_record(record)
                orbit = propagate_omm(record, epoch) if epoch is not None else None
                debris.append(omm_to_debris(omm, orbit=orbit, size=size))
            except (RuntimeError, ValueError, KeyError) as e:
                _log.warning("Skipping %s: %s", record.get('OBJECT_NAME', '?'), e)
                continue

        _log.info("Fetched %d debris objects from group %s", len(debris), group)
        return debris

    def _fetch_json(self, url: str) -> list[dict[str, Any]]:
        """Fetch JSON data from CelesTrak API."""
        req = urllib.request.Request(url, headers={"User-Agent": "OrbitalGuardian/1.0"})
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                text = response.read().decode('utf-8')
                if text.strip() == "No GP data found":
                    return []
                return json.loads(text)
        except urllib.error.HTTPError as e:
            raise ConnectionError(f"CelesTrak API error {e.code}: {e.reason}") from e
        except urllib.error.URLError as e:
            raise ConnectionError(f"CelesTrak connection failed: {e.reason}") from e
