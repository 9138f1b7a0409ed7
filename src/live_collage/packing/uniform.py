"""Equal-size, row-major grid placement."""

from __future__ import annotations

from typing import TYPE_CHECKING

from live_collage.errors import CapacityViolation
from live_collage.packing.models import CellAssignment

if TYPE_CHECKING:  # pragma: no cover
    from live_collage.packing.models import ContainerShape


def uniform_cell(index: int, cols: int) -> CellAssignment:
    """Return the 1-based cell for the photo at ``index``."""
    row, col = divmod(index, cols)
    return CellAssignment(row + 1, col + 1)


def place_uniform(count: int, shape: ContainerShape) -> list[CellAssignment]:
    """
    Assign each photo one cell, filling rows left to right.

    Cells never collide, so no occupancy tracking is needed.

    Raises:
        CapacityViolation: If ``count`` exceeds the grid's capacity.

    """
    if count < 0:
        msg = f"Photo count must be non-negative, got {count}"
        raise ValueError(msg)
    if count > shape.capacity:
        raise CapacityViolation(count, shape.capacity)
    return [uniform_cell(i, shape.cols) for i in range(count)]
