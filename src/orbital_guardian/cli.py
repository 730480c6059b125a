# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for facility placement.

Usage:
    # Cheapest facility set covering every debris in a scenario
    orbital-guardian -i scenario.json

    # Budget-capped, 80% coverage target, written to JSON
    orbital-guardian -i scenario.json --budget 400 --min-coverage 0.8 -o result.json

    # Most coverage for a budget
    orbital-guardian -i scenario.json --mode max-coverage --budget 300

    # Coverage report for the scenario's existing facilities
    orbital-guardian -i scenario.json --mode coverage

    # Live debris from CelesTrak (re-epoching requires sgp4)
    orbital-guardian --live-group COSMOS-2251-DEBRIS --budget 500
"""
import argparse
import logging
import sys
from datetime import datetime, timezone

from orbital_guardian.adapters.json_io import JsonResultWriter, JsonScenarioReader
from orbital_guardian.adapters.scipy_milp import ScipyMilpSolver
from orbital_guardian.domain.candidates import generate_candidates
from orbital_guardian.domain.coverage import (
    compute_coverage,
    identify_gaps,
    recommended_facility_types,
)
from orbital_guardian.domain.debris import Debris, active_debris
from orbital_guardian.domain.facility import Facility, FacilityType
from orbital_guardian.domain.formulation import explain_set_cover
from orbital_guardian.domain.serialization import (
    coverage_result_to_dict,
    debris_from_dict,
    facility_from_dict,
    set_cover_result_to_dict,
)
from orbital_guardian.domain.set_cover import (
    solve_max_coverage,
    solve_set_cover,
    summarize_result,
)

MODES = ("min-cost", "max-coverage", "coverage")


def parse_facility_types(text: str | None) -> tuple[FacilityType, ...] | None:
    """Comma-separated facility type values, e.g. ``radar_sband,optical_telescope``."""
    if not text:
        return None
    types = []
    for raw in text.split(","):
        raw = raw.strip()
        try:
            types.append(FacilityType(raw))
        except ValueError:
            allowed = ", ".join(t.value for t in FacilityType)
            raise ValueError(f"Unknown facility type '{raw}' (expected one of: {allowed})") from None
    return tuple(types)


def load_scenario(path: str) -> tuple[list[Debris], list[Facility], float | None]:
    """
    Read a scenario JSON file.

    Returns:
        (debris, facilities, budget) with budget None when absent.
    """
    data = JsonScenarioReader().read_scenario(path)
    debris = [debris_from_dict(d) for d in data.get("debris", [])]
    facilities = [facility_from_dict(f) for f in data.get("facilities", [])]
    budget = data.get("budget")
    return debris, facilities, float(budget) if budget is not None else None


def load_live_debris(group: str, reepoch: bool = False) -> list[Debris]:
    """Fetch a CelesTrak debris group; optionally re-epoch to now via SGP4."""
    from orbital_guardian.adapters.celestrak import CelesTrakDebrisAdapter

    epoch = datetime.now(tz=timezone.utc) if reepoch else None
    print(f"Fetching {group} from CelesTrak...")
    debris = CelesTrakDebrisAdapter().fetch_debris(group, epoch=epoch)
    print(f"Received {len(debris)} objects")
    return debris


def check_placement_args(mode: str, budget: float | None, min_coverage: float | None) -> None:
    """Reject placement arguments the chosen mode cannot use."""
    if mode == "max-coverage" and budget is None:
        raise ValueError("max-coverage mode needs a budget (--budget or scenario 'budget')")
    if min_coverage is not None and not 0.0 <= min_coverage <= 1.0:
        raise ValueError(f"Minimum coverage must be in [0, 1], got {min_coverage}")


def run_placement(
    debris: list[Debris],
    mode: str = "min-cost",
    budget: float | None = None,
    min_coverage: float | None = None,
    facility_types: tuple[FacilityType, ...] | None = None,
    time_limit: float | None = None,
) -> tuple[str, dict]:
    """
    Generate candidates and optimize placement for active debris.

    Returns:
        (summary line, result dict).

    Raises:
        ValueError: For max-coverage without a budget, or invalid inputs.
    """
    check_placement_args(mode, budget, min_coverage)
    targets = active_debris(debris)
    candidates = generate_candidates(targets, facility_types)
    solver = ScipyMilpSolver(time_limit=time_limit)

    if mode == "max-coverage":
        result = solve_max_coverage(targets, candidates, budget, solver)
    else:
        result = solve_set_cover(
            targets, candidates, solver,
            budget_limit=budget, min_coverage=min_coverage,
        )
    return summarize_result(result), set_cover_result_to_dict(result, candidates)


def run_coverage(debris: list[Debris], facilities: list[Facility]) -> tuple[str, dict]:
    """Coverage report for existing facilities, with gaps and recommendations."""
    result = compute_coverage(facilities, debris)
    gaps = identify_gaps(result)
    recommended = recommended_facility_types(gaps)

    data = coverage_result_to_dict(result)
    data["gaps"] = [region.value for region in gaps]
    data["recommended_facility_types"] = [t.value for t in recommended]

    summary = (
        f"Tracking {result.tracked_count}/{result.tracked_count + result.untracked_count} "
        f"debris ({result.total_coverage:.1%})"
    )
    if gaps:
        summary += f"; gaps in {', '.join(data['gaps'])}"
    return summary + ".", data


def main():
    parser = argparse.ArgumentParser(
        description="Optimize debris-monitoring facility placement (set cover MILP)"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--input', '-i', help="Path to scenario JSON (debris, facilities, budget)")
    source.add_argument(
        '--live-group',
        help="CelesTrak debris group (e.g. COSMOS-2251-DEBRIS, IRIDIUM-33-DEBRIS)"
    )
    parser.add_argument(
        '--reepoch', action='store_true', default=False,
        help="Propagate live elements to now with SGP4 (requires sgp4)"
    )
    parser.add_argument(
        '--mode', choices=MODES, default="min-cost",
        help="Optimization mode (default: min-cost)"
    )
    parser.add_argument('--budget', type=float, help="Budget limit (overrides scenario budget)")
    parser.add_argument(
        '--min-coverage', type=float,
        help="Minimum covered fraction in [0, 1] for min-cost mode (default: full coverage)"
    )
    parser.add_argument(
        '--facility-types',
        help="Comma-separated facility types to place (default: radar_sband,radar_cband,"
             "optical_telescope,surveillance_satellite)"
    )
    parser.add_argument('--time-limit', type=float, help="Solver time limit in seconds")
    parser.add_argument(
        '--explain', action='store_true', default=False,
        help="Print the mathematical formulation before solving"
    )
    parser.add_argument('--output', '-o', help="Write result JSON to this path")
    parser.add_argument('--verbose', '-v', action='store_true', default=False, help="Enable logging")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.live_group:
            debris = load_live_debris(args.live_group, reepoch=args.reepoch)
            facilities: list[Facility] = []
            budget = args.budget
        else:
            debris, facilities, scenario_budget = load_scenario(args.input)
            budget = args.budget if args.budget is not None else scenario_budget

        if args.mode == "coverage":
            summary, data = run_coverage(debris, facilities)
        else:
            facility_types = parse_facility_types(args.facility_types)
            check_placement_args(args.mode, budget, args.min_coverage)
            if args.explain:
                targets = active_debris(debris)
                candidate_count = len(generate_candidates(targets, facility_types))
                print(explain_set_cover(
                    len(targets), candidate_count,
                    budget_limit=budget,
                    min_coverage=args.min_coverage,
                    maximize=args.mode == "max-coverage",
                ))
                print()
            summary, data = run_placement(
                debris,
                mode=args.mode,
                budget=budget,
                min_coverage=args.min_coverage,
                facility_types=facility_types,
                time_limit=args.time_limit,
            )

        print(summary)
        if args.output:
            JsonResultWriter().write_result(data, args.output)
            print(f"Wrote {args.output}")

    except ImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, KeyError, ConnectionError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
