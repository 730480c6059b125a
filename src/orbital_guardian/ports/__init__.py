# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for scenario file I/O.

Adapters implement these to handle different file formats.
"""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ScenarioReader(Protocol):
    """Port for reading a debris/facility scenario."""

    def read_scenario(self, path: str) -> dict[str, Any]:
        """Read and parse a scenario file."""
        ...


@runtime_checkable
class ResultWriter(Protocol):
    """Port for writing optimization and coverage results."""

    def write_result(self, data: dict[str, Any], path: str) -> None:
        """Write result data to an output file."""
        ...
