# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for placement candidate generation."""
import pytest

from orbital_guardian.domain.candidates import (
    CandidateGrid,
    FacilityCandidate,
    candidate_facility,
    generate_candidates,
)
from orbital_guardian.domain.debris import Debris, DebrisSize
from orbital_guardian.domain.facility import FacilityCategory, FacilityStatus, FacilityType
from orbital_guardian.domain.orbital_mechanics import OrbitalElements
from orbital_guardian.domain.visibility import can_cover_placement


def _debris(debris_id, alt_km, inc_deg=51.6, size=DebrisSize.MEDIUM):
    return Debris(
        id=debris_id,
        orbit=OrbitalElements(semi_major_axis_km=6371.0 + alt_km, eccentricity=0.001, inclination_deg=inc_deg),
        size=size,
    )


_MIXED = [
    _debris("leo", 800.0),
    _debris("meo", 20000.0, inc_deg=55.0, size=DebrisSize.LARGE),
    _debris("geo", 35786.0, inc_deg=0.1, size=DebrisSize.LARGE),
    _debris("tiny", 500.0, inc_deg=98.0, size=DebrisSize.SMALL),
]


class TestCandidateGrid:

    def test_grid(self):
        assert CandidateGrid.ALTITUDES_KM == (500.0, 800.0, 1200.0, 20000.0)
        assert CandidateGrid.INCLINATIONS_DEG == (28.0, 45.0, 63.0, 90.0)
        assert FacilityType.LASER_RANGING not in CandidateGrid.DEFAULT_FACILITY_TYPES


class TestGenerateCandidates:

    def test_empty_debris(self):
        assert generate_candidates([]) == []

    def test_no_dead_candidates(self):
        candidates = generate_candidates(_MIXED)
        assert candidates
        assert all(any(c.coverage) for c in candidates)

    def test_bitmap_length(self):
        for c in generate_candidates(_MIXED):
            assert len(c.coverage) == len(_MIXED)

    def test_bitmap_matches_predicate(self):
        for c in generate_candidates(_MIXED):
            facility = candidate_facility(c)
            assert facility.status is FacilityStatus.OPERATIONAL
            for i, d in enumerate(_MIXED):
                assert c.coverage[i] == can_cover_placement(facility, d)

    def test_sequential_ids(self):
        candidates = generate_candidates(_MIXED)
        assert [c.id for c in candidates] == [f"candidate-{i}" for i in range(len(candidates))]

    def test_ground_before_space(self):
        kinds = [c.location.kind for c in generate_candidates(_MIXED)]
        first_space = kinds.index(FacilityCategory.SPACE)
        assert all(k is FacilityCategory.GROUND for k in kinds[:first_space])
        assert all(k is FacilityCategory.SPACE for k in kinds[first_space:])

    def test_surveillance_grid_count(self):
        candidates = generate_candidates([_debris("leo", 800.0)], [FacilityType.SURVEILLANCE_SATELLITE])
        assert len(candidates) == 16
        assert all(c.cost == 150.0 for c in candidates)
        assert candidates[0].location.altitude_km == 500.0
        assert candidates[0].location.inclination_deg == 28.0
        assert candidates[0].location.name == "Surveillance satellite @ 500km/28°"

    def test_latitude_filters_ground_sites(self):
        candidates = generate_candidates([_debris("eq", 800.0, inc_deg=5.0)], [FacilityType.RADAR_SBAND])
        assert len(candidates) == 1
        assert candidates[0].location.name == "India - S-band radar"
        assert candidates[0].id == "candidate-0"

    def test_polar_orbit_seen_everywhere(self):
        candidates = generate_candidates([_debris("polar", 800.0, inc_deg=90.0)], [FacilityType.RADAR_SBAND])
        assert len(candidates) == 12

    def test_removal_types_produce_nothing(self):
        candidates = generate_candidates(
            _MIXED, [FacilityType.REMOVAL_NET, FacilityType.REMOVAL_LASER],
        )
        assert candidates == []

    def test_uncoverable_debris(self):
        out_of_range = [_debris("deep", 45000.0)]
        assert generate_candidates(out_of_range) == []

    def test_covered_indices(self):
        candidate = FacilityCandidate(
            id="c", facility_type=FacilityType.RADAR_SBAND, location=None,
            cost=50.0, coverage=(True, False, True),
        )
        assert candidate.covered_indices == (0, 2)
        assert candidate.covered_count == 2

    def test_frozen(self):
        candidate = generate_candidates([_debris("leo", 800.0)])[0]
        with pytest.raises(AttributeError):
            candidate.cost = 0.0
