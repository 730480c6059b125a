# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for external debris catalogs.

Adapters handle the actual HTTP/API calls.
"""
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from orbital_guardian.domain.debris import Debris, DebrisSize


@runtime_checkable
class DebrisDataSource(Protocol):
    """Port for fetching debris element sets from external sources."""

    def fetch_group(self, group_name: str) -> list[dict[str, Any]]:
        """Fetch OMM records for a named catalog group."""
        ...

    def fetch_debris(
        self,
        group: str,
        epoch: datetime | None = None,
        size: DebrisSize | None = None,
    ) -> list[Debris]:
        """Fetch and convert to Debris domain objects."""
        ...
