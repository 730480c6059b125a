# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Learning-mode explanation of the set-cover formulation.

Renders the model for a concrete problem size as Markdown with LaTeX
math blocks. Both placement modes are covered: the min-cost set cover
and the budget-constrained max-coverage variant.
"""
from orbital_guardian.domain.set_cover import required_covered_count


def _budget_row(row: int, budget_limit: float) -> list[str]:
    return [
        f"{row}. Budget:",
        f"$$\\sum_{{j \\in \\mathcal{{J}}}} c_j \\cdot x_j \\leq {budget_limit:g}$$",
        "",
    ]


def _min_cost_rows(debris_count: int, budget_limit: float | None, min_coverage: float | None) -> list[str]:
    partial = min_coverage is not None and min_coverage < 1.0
    required = required_covered_count(min_coverage, debris_count) if partial else debris_count
    linked = partial and required > 0

    lines = ["- $x_j \\in \\{0, 1\\}$: build candidate $j$"]
    if linked:
        lines.append("- $y_i \\in \\{0, 1\\}$: debris $i$ counts as covered")
    lines += [
        "",
        "**Objective**",
        "$$\\text{minimize} \\quad \\sum_{j \\in \\mathcal{J}} c_j \\cdot x_j$$",
        "",
        "**Constraints**",
    ]

    row = 1
    if not partial:
        lines += [
            f"{row}. Every debris is covered by at least one facility:",
            "$$\\sum_{j \\in \\mathcal{J}} a_{ij} \\cdot x_j \\geq 1 \\quad \\forall i \\in \\mathcal{I}$$",
            "",
        ]
        row += 1
    elif linked:
        lines += [
            f"{row}. A debris only counts as covered if a selected candidate sees it:",
            "$$y_i \\leq \\sum_{j \\in \\mathcal{J}} a_{ij} \\cdot x_j \\quad \\forall i \\in \\mathcal{I}$$",
            "",
            f"{row + 1}. At least {required} debris are covered:",
            f"$$\\sum_{{i \\in \\mathcal{{I}}}} y_i \\geq {required}$$",
            "",
        ]
        row += 2
    else:
        lines += ["- No coverage requirement: building nothing is feasible.", ""]

    if budget_limit is not None:
        lines += _budget_row(row, budget_limit)
    return lines


def _max_coverage_rows(budget_limit: float) -> list[str]:
    return [
        "- $x_j \\in \\{0, 1\\}$: build candidate $j$",
        "",
        "**Objective**",
        "$$\\text{maximize} \\quad \\sum_{j \\in \\mathcal{J}} "
        "\\Big( \\sum_{i \\in \\mathcal{I}} a_{ij} \\Big) \\cdot x_j$$",
        "",
        "A debris seen by several selected candidates counts once per candidate,",
        "so the objective overstates overlapping coverage. The reported coverage",
        "is the true number of distinct debris covered.",
        "",
        "**Constraints**",
        *_budget_row(1, budget_limit),
    ]


def explain_set_cover(
    debris_count: int,
    candidate_count: int,
    budget_limit: float | None = None,
    min_coverage: float | None = None,
    maximize: bool = False,
) -> str:
    """
    Markdown description of the set-cover model being solved.

    Args:
        debris_count: |I|, number of debris to monitor.
        candidate_count: |J|, number of placement candidates.
        budget_limit: Optional budget row; required when maximize is set.
        min_coverage: Optional fractional target for the min-cost model;
            below 1 the per-debris rows are replaced by the aggregate
            linking formulation.
        maximize: Describe the max-coverage model instead of min-cost.

    Returns:
        Markdown text.

    Raises:
        ValueError: If maximize is set without a budget.
    """
    if maximize and budget_limit is None:
        raise ValueError("max-coverage formulation needs a budget")

    title = "## Maximum Coverage Problem" if maximize else "## Set Covering Problem"
    lines = [
        title,
        "",
        "### Problem setting",
        f"- Debris to monitor: {debris_count}",
        f"- Facility candidates: {candidate_count}",
    ]
    if budget_limit is not None:
        lines.append(f"- Budget limit: {budget_limit:g}")
    if min_coverage is not None and not maximize:
        lines.append(f"- Minimum coverage: {min_coverage * 100:.0f}%")

    lines += [
        "",
        "### Mathematical formulation",
        "",
        "**Sets**",
        f"- $\\mathcal{{I}} = \\{{1, 2, \\ldots, {debris_count}\\}}$: debris",
        f"- $\\mathcal{{J}} = \\{{1, 2, \\ldots, {candidate_count}\\}}$: facility candidates",
        "",
        "**Parameters**",
        "- $c_j$: construction cost of candidate $j$",
        "- $a_{ij}$: 1 if candidate $j$ can monitor debris $i$, else 0",
        "",
        "**Decision variables**",
    ]
    if maximize:
        lines += _max_coverage_rows(budget_limit)
    else:
        lines += _min_cost_rows(debris_count, budget_limit, min_coverage)

    return "\n".join(lines)
