# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for OMM parsing and the CelesTrak debris adapter."""
import logging
import urllib.error
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest

from orbital_guardian.domain.debris import Debris, DebrisSize, DebrisType
from orbital_guardian.domain.omm import classify_object, omm_to_debris, parse_epoch, parse_omm_record


SAMPLE_OMM = {
    "OBJECT_NAME": "COSMOS 2251 DEB",
    "OBJECT_ID": "1993-036AQE",
    "EPOCH": "2026-02-11T04:21:12.145248",
    "MEAN_MOTION": 14.3,
    "ECCENTRICITY": 0.0015,
    "INCLINATION": 74.03,
    "RA_OF_ASC_NODE": 203.3958,
    "ARG_OF_PERICENTER": 86.686,
    "MEAN_ANOMALY": 273.5395,
    "EPHEMERIS_TYPE": 0,
    "CLASSIFICATION_TYPE": "U",
    "NORAD_CAT_ID": 34427,
    "ELEMENT_SET_NO": 999,
    "REV_AT_EPOCH": 100,
    "BSTAR": 0.00022024123,
    "MEAN_MOTION_DOT": 0.00011529,
    "MEAN_MOTION_DDOT": 0,
}


def _records(count):
    return [
        {**SAMPLE_OMM, "NORAD_CAT_ID": 34427 + i, "MEAN_ANOMALY": (273.5395 + i * 10) % 360}
        for i in range(count)
    ]


# ── OMM parsing ──────────────────────────────────────────────────────

class TestParseOmm:

    def test_semi_major_axis_from_mean_motion(self):
        omm = parse_omm_record(SAMPLE_OMM)
        # 14.3 rev/day is roughly an 800 km orbit
        assert 7100.0 < omm.semi_major_axis_km < 7250.0
        assert omm.norad_cat_id == 34427
        assert omm.mean_motion_ddot == 0

    def test_optional_drag_terms_default(self):
        record = {k: v for k, v in SAMPLE_OMM.items() if k not in ("BSTAR", "MEAN_MOTION_DOT")}
        omm = parse_omm_record(record)
        assert omm.bstar == 0.0
        assert omm.mean_motion_dot == 0.0

    def test_missing_field(self):
        record = {k: v for k, v in SAMPLE_OMM.items() if k != "INCLINATION"}
        with pytest.raises(KeyError):
            parse_omm_record(record)

    def test_non_positive_mean_motion(self):
        with pytest.raises(ValueError):
            parse_omm_record({**SAMPLE_OMM, "MEAN_MOTION": 0})

    def test_epoch_is_utc(self):
        assert parse_epoch("2026-02-11T04:21:12.145248").tzinfo == timezone.utc
        assert parse_epoch("2026-02-11T04:21:12Z") == datetime(2026, 2, 11, 4, 21, 12, tzinfo=timezone.utc)


class TestOmmToDebris:

    def test_classification(self):
        assert classify_object("CZ-2C R/B") == (DebrisType.ROCKET_BODY, DebrisSize.LARGE)
        assert classify_object("Fengyun 1C deb") == (DebrisType.FRAGMENT, DebrisSize.SMALL)
        assert classify_object("IRIDIUM 33") == (DebrisType.PAYLOAD, DebrisSize.MEDIUM)

    def test_debris_record(self):
        debris = omm_to_debris(parse_omm_record(SAMPLE_OMM))
        assert debris.id == "norad-34427"
        assert debris.catalog_number == "34427"
        assert debris.size is DebrisSize.SMALL
        assert debris.orbit.inclination_deg == 74.03
        assert debris.orbit.epoch.year == 2026
        assert debris.is_active

    def test_size_override(self):
        debris = omm_to_debris(parse_omm_record(SAMPLE_OMM), size=DebrisSize.LARGE)
        assert debris.size is DebrisSize.LARGE


# ── Adapter ──────────────────────────────────────────────────────────

class TestCelesTrakDebrisAdapter:

    def test_implements_port(self):
        from orbital_guardian.adapters.celestrak import CelesTrakDebrisAdapter
        from orbital_guardian.ports.debris_data import DebrisDataSource

        assert isinstance(CelesTrakDebrisAdapter(), DebrisDataSource)

    def test_group_url(self):
        from orbital_guardian.adapters.celestrak import CelesTrakDebrisAdapter

        adapter = CelesTrakDebrisAdapter()
        with patch.object(adapter, '_fetch_json', return_value=[]) as fetch:
            adapter.fetch_group("COSMOS-2251-DEBRIS")
        fetch.assert_called_once_with(
            "https://celestrak.org/NORAD/elements/gp.php?GROUP=COSMOS-2251-DEBRIS&FORMAT=JSON"
        )

    def test_fetch_debris_without_epoch(self):
        from orbital_guardian.adapters.celestrak import CelesTrakDebrisAdapter

        adapter = CelesTrakDebrisAdapter()
        with patch.object(adapter, '_fetch_json', return_value=_records(5)):
            debris = adapter.fetch_debris("COSMOS-2251-DEBRIS")

        assert len(debris) == 5
        assert all(isinstance(d, Debris) for d in debris)
        assert [d.id for d in debris] == [f"norad-{34427 + i}" for i in range(5)]

    def test_bad_records_skipped(self, caplog):
        from orbital_guardian.adapters.celestrak import CelesTrakDebrisAdapter

        bad = {**SAMPLE_OMM, "OBJECT_NAME": "BROKEN", "MEAN_MOTION": -1}
        adapter = CelesTrakDebrisAdapter()
        with patch.object(adapter, '_fetch_json', return_value=[bad] + _records(3)):
            with caplog.at_level(logging.WARNING, logger="orbital_guardian.adapters.celestrak"):
                debris = adapter.fetch_debris("TEST")

        assert len(debris) == 3
        assert "BROKEN" in caplog.text

    def test_empty_group_name(self):
        from orbital_guardian.adapters.celestrak import CelesTrakDebrisAdapter

        with pytest.raises(ValueError):
            CelesTrakDebrisAdapter().fetch_debris("")

    def test_no_data_response(self):
        from orbital_guardian.adapters.celestrak import CelesTrakDebrisAdapter

        response = MagicMock()
        response.read.return_value = b"No GP data found"
        response.__enter__.return_value = response
        with patch("urllib.request.urlopen", return_value=response):
            assert CelesTrakDebrisAdapter().fetch_group("NOPE") == []

    def test_connection_failure(self):
        from orbital_guardian.adapters.celestrak import CelesTrakDebrisAdapter

        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("offline")):
            with pytest.raises(ConnectionError, match="offline"):
                CelesTrakDebrisAdapter().fetch_group("COSMOS-2251-DEBRIS")


class TestReEpoch:

    @pytest.fixture(autouse=True)
    def _needs_sgp4(self):
        pytest.importorskip("sgp4", reason="sgp4 not installed (pip install orbital-guardian[live])")

    def test_propagated_orbit_stays_in_band(self):
        from orbital_guardian.adapters.celestrak import propagate_omm

        target = parse_epoch(SAMPLE_OMM["EPOCH"]) + timedelta(hours=6)
        orbit = propagate_omm(SAMPLE_OMM, target)
        assert orbit.epoch == target
        assert 650.0 < orbit.semi_major_axis_km - 6371.0 < 950.0
        assert orbit.inclination_deg == pytest.approx(74.03, abs=0.5)
        assert orbit.eccentricity < 0.01

    def test_fetch_with_epoch(self):
        from orbital_guardian.adapters.celestrak import CelesTrakDebrisAdapter

        target = datetime(2026, 2, 12, tzinfo=timezone.utc)
        adapter = CelesTrakDebrisAdapter()
        with patch.object(adapter, '_fetch_json', return_value=_records(3)):
            debris = adapter.fetch_debris("TEST", epoch=target)

        assert len(debris) == 3
        assert all(d.orbit.epoch == target for d in debris)
