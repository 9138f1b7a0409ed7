"""
Occupancy-tracked mosaic placement with variable-span size classes.

Counts of one to three photos use hand-authored layouts scaled to the
grid. Larger counts cycle through a fixed list of span patterns and
place each photo at the next free cell in row-major order. A pattern
that would leave the grid, collide with an earlier photo, or consume
cells later photos need shrinks to a single cell at its anchor.

The occupancy mask lives only for the duration of one call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from live_collage.constants import (
    MOSAIC_FIXED_LAYOUT_MAX,
    MOSAIC_TRIO_LARGE_FRACTION,
)
from live_collage.errors import CapacityViolation
from live_collage.packing.models import CellAssignment, SpanPattern

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from live_collage.packing.models import ContainerShape
    from live_collage.type_defs import Orientation

LARGE = SpanPattern("large", 2, 2)
WIDE = SpanPattern("wide", 1, 3)
TALL = SpanPattern("tall", 3, 1)
MEDIUM = SpanPattern("medium", 1, 2)
SMALL = SpanPattern("small", 1, 1)

DEFAULT_PATTERNS: tuple[SpanPattern, ...] = (LARGE, WIDE, TALL, MEDIUM, SMALL)
COMPACT_PATTERNS: tuple[SpanPattern, ...] = (MEDIUM, SMALL, WIDE)


def _single_layout(rows: int, cols: int) -> list[CellAssignment]:
    return [CellAssignment(1, 1, rows, cols, "large")]


def _pair_layout(rows: int, cols: int, *, stacked: bool) -> list[CellAssignment]:
    if stacked:
        top = max(1, rows // 2)
        return [
            CellAssignment(1, 1, top, cols, "large"),
            CellAssignment(top + 1, 1, rows - top, cols, "large"),
        ]
    left = max(1, cols // 2)
    return [
        CellAssignment(1, 1, rows, left, "large"),
        CellAssignment(1, left + 1, rows, cols - left, "large"),
    ]


def _trio_layout(rows: int, cols: int, *, stacked: bool) -> list[CellAssignment]:
    if stacked:
        # full-width band on top, two cells side by side below
        top = max(1, rows // 2)
        left = max(1, cols // 2)
        return [
            CellAssignment(1, 1, top, cols, "medium"),
            CellAssignment(top + 1, 1, rows - top, left, "small"),
            CellAssignment(top + 1, left + 1, rows - top, cols - left, "small"),
        ]
    large = max(1, int(min(rows, cols) * MOSAIC_TRIO_LARGE_FRACTION))
    strip = cols - large
    top = max(1, rows // 2)
    return [
        CellAssignment(1, 1, large, large, "large"),
        CellAssignment(1, large + 1, top, strip, "medium"),
        CellAssignment(top + 1, large + 1, rows - top, strip, "medium"),
    ]


def fixed_layout(
    count: int,
    shape: ContainerShape,
    *,
    stacked: bool = False,
) -> list[CellAssignment]:
    """
    Return the hand-authored layout for one to three photos.

    ``stacked`` splits along rows instead of columns, which suits the
    narrow mobile grid.
    """
    rows, cols = shape.rows, shape.cols
    if count == 1:
        return _single_layout(rows, cols)
    if count == 2:
        if rows < 2 and cols < 2:
            raise CapacityViolation(count, shape.capacity)
        if rows >= 2 and cols >= 2:
            split_rows = stacked
        else:
            split_rows = rows >= 2
        return _pair_layout(rows, cols, stacked=split_rows)
    if count == 3:
        if rows < 2 or cols < 2:
            raise CapacityViolation(count, shape.capacity,
                                    "three-photo layout needs a 2x2 grid")
        return _trio_layout(rows, cols, stacked=stacked)
    msg = f"No fixed layout for {count} photos"
    raise ValueError(msg)


def _orient(
    pattern: SpanPattern,
    orientation: Orientation | None,
) -> SpanPattern:
    """Swap wide and tall spans to follow the photo's orientation."""
    if orientation == "portrait" and pattern.size_class == "wide":
        return SpanPattern("tall", pattern.col_span, pattern.row_span)
    if orientation == "landscape" and pattern.size_class == "tall":
        return SpanPattern("wide", pattern.col_span, pattern.row_span)
    return pattern


class _Occupancy:
    """Boolean cell mask with a row-major free-cell cursor."""

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self.mask = np.zeros((rows, cols), dtype=bool)
        self.free = rows * cols
        self._cursor = 0

    def next_anchor(self) -> tuple[int, int] | None:
        """Advance past occupied cells; return the 1-based free anchor."""
        flat = self.mask.ravel()
        while self._cursor < flat.size and flat[self._cursor]:
            self._cursor += 1
        if self._cursor >= flat.size:
            return None
        row, col = divmod(self._cursor, self.cols)
        return row + 1, col + 1

    def step(self) -> None:
        self._cursor += 1

    def span_is_free(self, row: int, col: int, pattern: SpanPattern) -> bool:
        row_end = row + pattern.row_span - 1
        col_end = col + pattern.col_span - 1
        if row_end > self.rows or col_end > self.cols:
            return False
        block = self.mask[row - 1:row_end, col - 1:col_end]
        return not block.any()

    def claim(self, assignment: CellAssignment) -> None:
        self.mask[
            assignment.row - 1:assignment.row_end,
            assignment.col - 1:assignment.col_end,
        ] = True
        self.free -= assignment.area


def place_mosaic(  # noqa: C901
    count: int,
    shape: ContainerShape,
    *,
    patterns: Sequence[SpanPattern] = DEFAULT_PATTERNS,
    orientations: Sequence[Orientation] | None = None,
    stacked: bool = False,
) -> list[CellAssignment]:
    """
    Assign a variable-span rectangle to each of ``count`` photos.

    Photo ``i`` tries ``patterns[i % len(patterns)]`` at the next free
    cell. When orientations are given, wide and tall spans are swapped
    to follow each photo.

    Raises:
        CapacityViolation: If the grid has fewer cells than photos.
        ValueError: If ``patterns`` is empty or orientations do not
            match ``count``.

    """
    if count < 0:
        msg = f"Photo count must be non-negative, got {count}"
        raise ValueError(msg)
    if count > shape.capacity:
        raise CapacityViolation(count, shape.capacity)
    if orientations is not None and len(orientations) != count:
        msg = (f"Expected {count} orientations, "
               f"got {len(orientations)}")
        raise ValueError(msg)
    if count == 0:
        return []
    if count <= MOSAIC_FIXED_LAYOUT_MAX:
        return fixed_layout(count, shape, stacked=stacked)
    if not patterns:
        msg = "At least one span pattern is required"
        raise ValueError(msg)

    grid = _Occupancy(shape.rows, shape.cols)
    placed: list[CellAssignment] = []
    for index in range(count):
        anchor = grid.next_anchor()
        if anchor is None:
            raise CapacityViolation(count, shape.capacity,
                                    f"ran out of cells at photo {index}")
        row, col = anchor

        pattern = patterns[index % len(patterns)]
        if orientations is not None:
            pattern = _orient(pattern, orientations[index])

        remaining_after = count - index - 1
        fits = (
            grid.span_is_free(row, col, pattern)
            and grid.free - pattern.area >= remaining_after
        )
        if not fits:
            pattern = SMALL

        assignment = CellAssignment(
            row, col, pattern.row_span, pattern.col_span, pattern.size_class,
        )
        grid.claim(assignment)
        placed.append(assignment)
        grid.step()

    return placed
