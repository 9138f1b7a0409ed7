"""Coverage, bounds, and overlap checks for placement plans."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from live_collage.constants import MAX_REPORTED_PROBLEMS
from live_collage.errors import PlanValidationError

if TYPE_CHECKING:  # pragma: no cover
    from live_collage.packing.models import PlacementPlan


def check_plan(plan: PlacementPlan, count: int) -> list[str]:
    """
    Return every problem found in ``plan`` for ``count`` photos.

    A valid plan has exactly one assignment per photo, keeps every
    rectangle inside the grid, and never claims a cell twice.
    """
    problems: list[str] = []
    if len(plan) != count:
        problems.append(
            f"expected {count} assignments, got {len(plan)}",
        )

    rows, cols = plan.shape.rows, plan.shape.cols
    # each cell holds the 1-based index of its owner, 0 when free
    owners = np.zeros((rows, cols), dtype=np.int32)
    for index, a in enumerate(plan):
        if a.row_span < 1 or a.col_span < 1:
            problems.append(
                f"photo {index} has non-positive span "
                f"{a.row_span}x{a.col_span}",
            )
            continue
        if a.row < 1 or a.col < 1 or a.row_end > rows or a.col_end > cols:
            problems.append(
                f"photo {index} at rows {a.row}-{a.row_end}, "
                f"cols {a.col}-{a.col_end} leaves the {rows}x{cols} grid",
            )
            continue
        block = owners[a.row - 1:a.row_end, a.col - 1:a.col_end]
        taken = np.unique(block[block > 0])
        problems.extend(
            f"photo {index} overlaps photo {int(other) - 1}"
            for other in taken
        )
        block[block == 0] = index + 1
    return problems


def validate_plan(plan: PlacementPlan, count: int) -> None:
    """
    Raise if ``plan`` is not a valid placement of ``count`` photos.

    Raises:
        PlanValidationError: Listing the first few problems found.

    """
    problems = check_plan(plan, count)
    if problems:
        raise PlanValidationError(problems[:MAX_REPORTED_PROBLEMS])
