# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON scenario I/O adapter.

Reads debris/facility scenarios and writes result documents in JSON.
"""
import json
from typing import Any

from orbital_guardian.ports import ResultWriter, ScenarioReader


class JsonScenarioReader(ScenarioReader):
    """Reads scenario data from JSON files."""

    def read_scenario(self, path: str) -> dict[str, Any]:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Scenario file {path} must contain a JSON object")
        return data


class JsonResultWriter(ResultWriter):
    """Writes result data to JSON files."""

    def write_result(self, data: dict[str, Any], path: str) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
