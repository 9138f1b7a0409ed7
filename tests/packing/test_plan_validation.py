"""Tests for placement plan validation."""

from __future__ import annotations

import pytest

from live_collage.errors import PlanValidationError
from live_collage.packing.models import (
    CellAssignment,
    ContainerShape,
    PlacementPlan,
)
from live_collage.packing.validation import check_plan, validate_plan


def make_plan(*assignments: CellAssignment, rows: int = 3, cols: int = 3,
              ) -> PlacementPlan:
    return PlacementPlan(ContainerShape(rows, cols), assignments)


def test_valid_plan_has_no_problems() -> None:
    plan = make_plan(
        CellAssignment(1, 1, 2, 2, "large"),
        CellAssignment(1, 3, 3, 1, "tall"),
        CellAssignment(3, 1, 1, 2, "medium"),
    )
    assert check_plan(plan, 3) == []
    validate_plan(plan, 3)


def test_overlap_detected() -> None:
    plan = make_plan(
        CellAssignment(1, 1, 2, 2, "large"),
        CellAssignment(2, 2),
    )
    assert check_plan(plan, 2) == ["photo 1 overlaps photo 0"]


def test_out_of_bounds_detected() -> None:
    plan = make_plan(CellAssignment(3, 2, 1, 3, "wide"))
    problems = check_plan(plan, 1)
    assert len(problems) == 1
    assert "leaves the 3x3 grid" in problems[0]


def test_zero_row_detected() -> None:
    problems = check_plan(make_plan(CellAssignment(0, 1)), 1)
    assert "leaves the 3x3 grid" in problems[0]


def test_non_positive_span_detected() -> None:
    problems = check_plan(make_plan(CellAssignment(1, 1, 0, 1)), 1)
    assert problems == ["photo 0 has non-positive span 0x1"]


def test_count_mismatch_detected() -> None:
    problems = check_plan(make_plan(CellAssignment(1, 1)), 2)
    assert problems == ["expected 2 assignments, got 1"]


def test_validate_raises_with_problems() -> None:
    plan = make_plan(CellAssignment(1, 1), CellAssignment(1, 1))
    with pytest.raises(PlanValidationError) as exc_info:
        validate_plan(plan, 2)
    assert exc_info.value.problems == ["photo 1 overlaps photo 0"]


def test_validate_truncates_problem_list() -> None:
    plan = make_plan(*(CellAssignment(1, 1) for _ in range(10)))
    with pytest.raises(PlanValidationError) as exc_info:
        validate_plan(plan, 10)
    assert len(exc_info.value.problems) == 5


def test_reports_each_overlapped_owner_once() -> None:
    plan = make_plan(
        CellAssignment(1, 1),
        CellAssignment(1, 2),
        CellAssignment(1, 1, 1, 3, "wide"),
    )
    assert check_plan(plan, 3) == [
        "photo 2 overlaps photo 0",
        "photo 2 overlaps photo 1",
    ]
