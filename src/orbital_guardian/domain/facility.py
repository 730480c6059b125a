# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Facility catalog and facility records.

Defines the eight facility types (ground/space monitoring and space
removal), the candidate ground-site catalog, and the helpers that
create facilities and step their construction. Costs are abstract
cost units, shared with budgets; construction times are in turns.
"""
from dataclasses import dataclass, replace
from enum import Enum

from orbital_guardian.domain.orbital_mechanics import OrbitalElements, altitude_to_radius


class FacilityType(Enum):
    RADAR_SBAND = "radar_sband"
    RADAR_CBAND = "radar_cband"
    OPTICAL_TELESCOPE = "optical_telescope"
    LASER_RANGING = "laser_ranging"
    SURVEILLANCE_SATELLITE = "surveillance_satellite"
    REMOVAL_MAGNETIC = "removal_magnetic"
    REMOVAL_NET = "removal_net"
    REMOVAL_LASER = "removal_laser"


class FacilityCategory(Enum):
    GROUND = "ground"
    SPACE = "space"


class FacilityStatus(Enum):
    CONSTRUCTING = "constructing"
    OPERATIONAL = "operational"
    MAINTENANCE = "maintenance"
    DECOMMISSIONED = "decommissioned"


@dataclass(frozen=True)
class MonitoringCapability:
    """Altitude band, size threshold and base detection fraction of a sensor."""
    min_altitude_km: float
    max_altitude_km: float
    min_detectable_size_cm: float
    base_coverage_fraction: float


@dataclass(frozen=True)
class RemovalCapability:
    annual_capacity: int
    method: str  # "magnetic", "net", "laser", "harpoon"
    target_sizes: tuple[str, ...]


@dataclass(frozen=True)
class FacilityTypeDefinition:
    """Catalog entry for one facility type."""
    facility_type: FacilityType
    name: str
    description: str
    category: FacilityCategory
    construction_cost: float
    monthly_cost: float
    construction_turns: int
    monitoring: MonitoringCapability | None = None
    removal: RemovalCapability | None = None


@dataclass(frozen=True)
class GroundLocation:
    latitude_deg: float
    longitude_deg: float


@dataclass(frozen=True)
class SpaceLocation:
    orbit: OrbitalElements


@dataclass(frozen=True)
class GroundSite:
    """A candidate ground site for monitoring stations."""
    name: str
    latitude_deg: float
    longitude_deg: float
    country: str


@dataclass(frozen=True)
class Facility:
    """A built (or under construction) facility instance."""
    id: str
    facility_type: FacilityType
    name: str
    location: GroundLocation | SpaceLocation
    status: FacilityStatus
    monitoring: MonitoringCapability | None = None
    removal: RemovalCapability | None = None
    construction_remaining: int = 0
    construction_cost: float = 0.0
    monthly_cost: float = 0.0

    @property
    def is_ground(self) -> bool:
        return isinstance(self.location, GroundLocation)

    @property
    def is_operational(self) -> bool:
        return self.status is FacilityStatus.OPERATIONAL


FACILITY_TYPES: dict[FacilityType, FacilityTypeDefinition] = {
    FacilityType.RADAR_SBAND: FacilityTypeDefinition(
        facility_type=FacilityType.RADAR_SBAND,
        name="S-band radar",
        description="Tracks LEO debris of 10 cm and above; little weather impact.",
        category=FacilityCategory.GROUND,
        construction_cost=50.0,
        monthly_cost=0.5,
        construction_turns=1,
        monitoring=MonitoringCapability(200.0, 2000.0, 10.0, 0.25),
    ),
    FacilityType.RADAR_CBAND: FacilityTypeDefinition(
        facility_type=FacilityType.RADAR_CBAND,
        name="C-band radar",
        description="High-precision tracking of LEO to MEO debris of 5 cm and above.",
        category=FacilityCategory.GROUND,
        construction_cost=100.0,
        monthly_cost=1.0,
        construction_turns=3,
        monitoring=MonitoringCapability(200.0, 20000.0, 5.0, 0.35),
    ),
    FacilityType.OPTICAL_TELESCOPE: FacilityTypeDefinition(
        facility_type=FacilityType.OPTICAL_TELESCOPE,
        name="Optical telescope",
        description="Watches MEO to GEO; operates only on clear nights.",
        category=FacilityCategory.GROUND,
        construction_cost=30.0,
        monthly_cost=0.3,
        construction_turns=1,
        monitoring=MonitoringCapability(2000.0, 40000.0, 50.0, 0.2),
    ),
    FacilityType.LASER_RANGING: FacilityTypeDefinition(
        facility_type=FacilityType.LASER_RANGING,
        name="Laser ranging station",
        description="Millimetre orbit determination; cooperative targets only.",
        category=FacilityCategory.GROUND,
        construction_cost=80.0,
        monthly_cost=0.8,
        construction_turns=2,
        monitoring=MonitoringCapability(200.0, 40000.0, 1.0, 0.15),
    ),
    FacilityType.SURVEILLANCE_SATELLITE: FacilityTypeDefinition(
        facility_type=FacilityType.SURVEILLANCE_SATELLITE,
        name="Surveillance satellite",
        description="Space-based all-round monitoring; needs delta-V for station keeping.",
        category=FacilityCategory.SPACE,
        construction_cost=150.0,
        monthly_cost=2.0,
        construction_turns=6,
        monitoring=MonitoringCapability(200.0, 40000.0, 5.0, 0.4),
    ),
    FacilityType.REMOVAL_MAGNETIC: FacilityTypeDefinition(
        facility_type=FacilityType.REMOVAL_MAGNETIC,
        name="Removal satellite (magnetic)",
        description="Captures metallic debris magnetically.",
        category=FacilityCategory.SPACE,
        construction_cost=200.0,
        monthly_cost=3.0,
        construction_turns=6,
        removal=RemovalCapability(5, "magnetic", ("medium", "large")),
    ),
    FacilityType.REMOVAL_NET: FacilityTypeDefinition(
        facility_type=FacilityType.REMOVAL_NET,
        name="Removal satellite (net)",
        description="Captures debris in a net; handles irregular shapes.",
        category=FacilityCategory.SPACE,
        construction_cost=180.0,
        monthly_cost=2.5,
        construction_turns=5,
        removal=RemovalCapability(3, "net", ("small", "medium", "large")),
    ),
    FacilityType.REMOVAL_LASER: FacilityTypeDefinition(
        facility_type=FacilityType.REMOVAL_LASER,
        name="Removal satellite (laser)",
        description="Ablates small debris by laser; efficient but expensive.",
        category=FacilityCategory.SPACE,
        construction_cost=300.0,
        monthly_cost=5.0,
        construction_turns=8,
        removal=RemovalCapability(20, "laser", ("small",)),
    ),
}


GROUND_SITE_CANDIDATES: tuple[GroundSite, ...] = (
    GroundSite("Alaska", 64.8, -147.7, "USA"),
    GroundSite("Hawaii", 19.8, -155.5, "USA"),
    GroundSite("California", 34.0, -118.2, "USA"),
    GroundSite("Massachusetts", 42.4, -71.1, "USA"),
    GroundSite("United Kingdom", 51.5, -0.1, "UK"),
    GroundSite("Germany", 52.5, 13.4, "Germany"),
    GroundSite("Australia", -33.9, 151.2, "Australia"),
    GroundSite("Japan (Kamisaibara)", 35.2, 133.8, "Japan"),
    GroundSite("Japan (Bisei)", 34.7, 133.5, "Japan"),
    GroundSite("Chile", -33.4, -70.6, "Chile"),
    GroundSite("South Africa", -33.9, 18.4, "South Africa"),
    GroundSite("India", 13.0, 77.6, "India"),
)


def facility_definition(facility_type: FacilityType) -> FacilityTypeDefinition:
    return FACILITY_TYPES[facility_type]


def create_facility(
    facility_type: FacilityType,
    location: GroundLocation | SpaceLocation,
    facility_id: str,
    name: str | None = None,
    status: FacilityStatus = FacilityStatus.CONSTRUCTING,
) -> Facility:
    """
    Build a Facility from its catalog entry.

    Capabilities, costs and construction time are copied from the
    catalog. Identity is supplied by the caller; this module keeps no
    id counter.

    Raises:
        ValueError: If the location kind does not match the type's category.
    """
    definition = FACILITY_TYPES[facility_type]
    expects_ground = definition.category is FacilityCategory.GROUND
    if expects_ground != isinstance(location, GroundLocation):
        raise ValueError(
            f"{facility_type.value} is a {definition.category.value} facility, "
            f"got {type(location).__name__}"
        )

    remaining = definition.construction_turns if status is FacilityStatus.CONSTRUCTING else 0
    return Facility(
        id=facility_id,
        facility_type=facility_type,
        name=name or f"{definition.name} #{facility_id[-4:]}",
        location=location,
        status=status,
        monitoring=definition.monitoring,
        removal=definition.removal,
        construction_remaining=remaining,
        construction_cost=definition.construction_cost,
        monthly_cost=definition.monthly_cost,
    )


def space_facility_orbit(
    altitude_km: float,
    inclination_deg: float = 45.0,
    raan_deg: float = 0.0,
    mean_anomaly_deg: float = 0.0,
) -> OrbitalElements:
    """Near-circular orbit (e = 0.001) at the given altitude and inclination."""
    return OrbitalElements(
        semi_major_axis_km=altitude_to_radius(altitude_km),
        eccentricity=0.001,
        inclination_deg=inclination_deg,
        raan_deg=raan_deg,
        arg_periapsis_deg=0.0,
        mean_anomaly_deg=mean_anomaly_deg,
    )


def advance_construction(facility: Facility) -> Facility:
    """One turn of construction; becomes operational when none remain."""
    if facility.status is not FacilityStatus.CONSTRUCTING:
        return facility

    remaining = facility.construction_remaining - 1
    if remaining <= 0:
        return replace(facility, status=FacilityStatus.OPERATIONAL, construction_remaining=0)
    return replace(facility, construction_remaining=remaining)


def facilities_by_category(
    facilities: list[Facility],
    category: FacilityCategory,
) -> list[Facility]:
    return [f for f in facilities if FACILITY_TYPES[f.facility_type].category is category]


def monitoring_facilities(facilities: list[Facility]) -> list[Facility]:
    return [f for f in facilities if f.monitoring is not None]


def removal_facilities(facilities: list[Facility]) -> list[Facility]:
    return [f for f in facilities if f.removal is not None]
