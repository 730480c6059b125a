# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Debris records.

Read-only input to the coverage model and the placement optimizer.
Only ``active`` debris take part in coverage and optimization.
"""
from dataclasses import dataclass
from enum import Enum

from orbital_guardian.domain.orbital_mechanics import OrbitalElements, altitude_km


class DebrisSize(Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class DebrisStatus(Enum):
    ACTIVE = "active"
    REMOVED = "removed"
    DECAYED = "decayed"


class DebrisType(Enum):
    ROCKET_BODY = "rocket_body"
    PAYLOAD = "payload"
    FRAGMENT = "fragment"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Debris:
    """A tracked or untracked debris object."""
    id: str
    orbit: OrbitalElements
    size: DebrisSize
    status: DebrisStatus = DebrisStatus.ACTIVE
    debris_type: DebrisType = DebrisType.UNKNOWN
    name: str | None = None
    catalog_number: str | None = None

    @property
    def altitude_km(self) -> float:
        return altitude_km(self.orbit)

    @property
    def is_active(self) -> bool:
        return self.status is DebrisStatus.ACTIVE


def active_debris(debris: list[Debris]) -> list[Debris]:
    """Active debris in input order (order defines bitmap indexing)."""
    return [d for d in debris if d.is_active]
