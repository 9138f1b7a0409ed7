"""
Size-class selectors mapping a photo count to a container shape.

Three selectors back the three packing strategies:

- ``fixed_step_shape``: hand-tuned rows x cols table, square beyond it.
- ``responsive_grid_size``: square grid scaled by a viewport density
  factor and clamped to per-viewport bounds.
- ``uniform_grid_size``: stepped square sizes up to a 6x6 ceiling.

Every selector guarantees ``rows * cols >= count``. The uniform selector
refuses counts it cannot hold instead of shrinking them.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from live_collage.constants import (
    FIXED_STEP_CEILING,
    UNIFORM_CAPACITY,
    UNIFORM_MAX_GRID,
)
from live_collage.errors import CapacityViolation
from live_collage.logging_utils import logger
from live_collage.packing.models import ContainerShape

if TYPE_CHECKING:  # pragma: no cover
    from live_collage.config import ResponsiveConfig, ViewportBounds
    from live_collage.type_defs import ViewportClass

# (max count, rows, cols); capacity is non-decreasing down the table
FIXED_STEPS: tuple[tuple[int, int, int], ...] = (
    (1, 1, 1),
    (4, 2, 2),
    (6, 2, 3),
    (9, 3, 3),
    (12, 3, 4),
    (16, 4, 4),
    (20, 4, 5),
    (25, 5, 5),
    (30, 5, 6),
    (FIXED_STEP_CEILING, 6, 6),
)

# (max count, grid size)
UNIFORM_STEPS: tuple[tuple[int, int], ...] = (
    (1, 1),
    (4, 2),
    (9, 3),
    (16, 4),
    (25, 5),
)

_DENSE_THRESHOLD = 12


def _check_count(count: int) -> None:
    if count < 0:
        msg = f"Photo count must be non-negative, got {count}"
        raise ValueError(msg)


def _layout_class(count: int, *, mosaic: bool = False) -> str:
    if count == 0:
        return "empty"
    if count == 1:
        return "single"
    if not mosaic:
        return "grid"
    return "mosaic-dense" if count > _DENSE_THRESHOLD else "mosaic"


def square_size_for(count: int) -> int:
    """Return the smallest square side holding ``count`` cells."""
    _check_count(count)
    return math.isqrt(count - 1) + 1 if count else 1


def fixed_step_shape(count: int) -> ContainerShape:
    """Return the fixed-strategy shape for ``count`` photos."""
    _check_count(count)
    for limit, rows, cols in FIXED_STEPS:
        if count <= limit:
            return ContainerShape(rows, cols, _layout_class(count))
    return ContainerShape.square(square_size_for(count), _layout_class(count))


def uniform_grid_size(count: int) -> int:
    """
    Return the uniform-strategy grid side for ``count`` photos.

    Raises:
        CapacityViolation: If ``count`` exceeds the 6x6 ceiling.

    """
    _check_count(count)
    for limit, size in UNIFORM_STEPS:
        if count <= limit:
            return size
    if count > UNIFORM_CAPACITY:
        raise CapacityViolation(
            count,
            UNIFORM_CAPACITY,
            "uniform strategy is limited to a "
            f"{UNIFORM_MAX_GRID}x{UNIFORM_MAX_GRID} grid",
        )
    return UNIFORM_MAX_GRID


def uniform_shape(count: int) -> ContainerShape:
    """Return the uniform-strategy square shape for ``count`` photos."""
    return ContainerShape.square(uniform_grid_size(count), _layout_class(count))


def responsive_grid_size(count: int, bounds: ViewportBounds) -> int:
    """
    Return the square grid side for ``count`` photos under ``bounds``.

    The density-scaled size is clamped to ``[min_grid, max_grid]``; if
    the clamped grid is still too small it grows to fit every photo.
    """
    _check_count(count)
    raw = math.ceil(math.sqrt(count * bounds.density))
    size = min(bounds.max_grid, max(bounds.min_grid, raw))
    needed = square_size_for(count)
    if size < needed:
        logger.debug(
            "Growing grid from %d to %d to hold %d photos",
            size, needed, count,
        )
        size = needed
    return size


def responsive_shape(
    count: int,
    viewport: ViewportClass,
    responsive: ResponsiveConfig,
) -> ContainerShape:
    """Return the mosaic-strategy square shape for ``viewport``."""
    size = responsive_grid_size(count, responsive.bounds_for(viewport))
    return ContainerShape.square(
        size,
        _layout_class(count, mosaic=True),
        viewport,
    )


def viewport_class_for_width(
    width_px: int,
    breakpoints: tuple[int, int, int],
) -> ViewportClass:
    """Bucket a viewport width in pixels into a viewport class."""
    if width_px < 0:
        msg = f"Viewport width must be non-negative, got {width_px}"
        raise ValueError(msg)
    mobile_max, tablet_max, laptop_max = breakpoints
    if width_px < mobile_max:
        return "mobile"
    if width_px < tablet_max:
        return "tablet"
    if width_px < laptop_max:
        return "laptop"
    return "desktop"
