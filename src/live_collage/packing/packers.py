"""
Packing strategies behind one interface.

Each packer pairs a size-class selector with a placer. ``get_packer``
chooses one by name so callers (and the invariant test suite) can treat
all strategies alike, and ``compute_placement_plan`` is the single entry
point that packs and then validates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from live_collage.config import LayoutConfig
from live_collage.logging_utils import logger
from live_collage.packing.models import PlacementPlan
from live_collage.packing.mosaic import (
    COMPACT_PATTERNS,
    DEFAULT_PATTERNS,
    place_mosaic,
)
from live_collage.packing.sizing import (
    fixed_step_shape,
    responsive_shape,
    uniform_shape,
)
from live_collage.packing.uniform import place_uniform
from live_collage.packing.validation import validate_plan

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from live_collage.type_defs import Orientation, PackerName, ViewportClass


class Packer(Protocol):
    """Pure function from photo count to placement plan."""

    name: PackerName

    def pack(
        self,
        count: int,
        *,
        viewport: ViewportClass | None = None,
        orientations: Sequence[Orientation] | None = None,
    ) -> PlacementPlan:
        """Return a plan with one assignment per photo."""
        ...


@dataclass(frozen=True, slots=True)
class UniformGridPacker:
    """Equal square cells on a stepped grid capped at 6x6."""

    name: PackerName = "uniform"

    def pack(
        self,
        count: int,
        *,
        viewport: ViewportClass | None = None,  # noqa: ARG002
        orientations: Sequence[Orientation] | None = None,  # noqa: ARG002
    ) -> PlacementPlan:
        """Place photos row-major on the uniform grid."""
        shape = uniform_shape(count)
        return PlacementPlan(shape, tuple(place_uniform(count, shape)),
                             self.name)


@dataclass(frozen=True, slots=True)
class FixedStepGridPacker:
    """Equal cells on the hand-tuned rows x cols step table."""

    name: PackerName = "fixed"

    def pack(
        self,
        count: int,
        *,
        viewport: ViewportClass | None = None,  # noqa: ARG002
        orientations: Sequence[Orientation] | None = None,  # noqa: ARG002
    ) -> PlacementPlan:
        """Place photos row-major on the step-table grid."""
        shape = fixed_step_shape(count)
        return PlacementPlan(shape, tuple(place_uniform(count, shape)),
                             self.name)


@dataclass(frozen=True, slots=True)
class MosaicPacker:
    """
    Variable-span mosaic on a viewport-sized square grid.

    Mobile viewports use the compact pattern list and stacked layouts
    for one to three photos.
    """

    layout: LayoutConfig = field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )
    name: PackerName = "mosaic"

    def pack(
        self,
        count: int,
        *,
        viewport: ViewportClass | None = None,
        orientations: Sequence[Orientation] | None = None,
    ) -> PlacementPlan:
        """Size the grid for ``viewport`` and place a mosaic."""
        view = viewport or self.layout.viewport
        shape = responsive_shape(count, view, self.layout.responsive)
        compact = view == "mobile"
        assignments = place_mosaic(
            count,
            shape,
            patterns=COMPACT_PATTERNS if compact else DEFAULT_PATTERNS,
            orientations=(
                orientations if self.layout.match_orientation else None
            ),
            stacked=compact,
        )
        return PlacementPlan(shape, tuple(assignments), self.name)


def get_packer(
    name: PackerName,
    layout: LayoutConfig | None = None,
) -> Packer:
    """Return the packer registered under ``name``."""
    if name == "mosaic":
        return MosaicPacker(layout or LayoutConfig.model_validate({}))
    if name == "fixed":
        return FixedStepGridPacker()
    if name == "uniform":
        return UniformGridPacker()
    msg = f"Unknown packing strategy: {name!r}"
    raise ValueError(msg)


def compute_placement_plan(
    photo_count: int,
    *,
    strategy: PackerName | None = None,
    viewport: ViewportClass | None = None,
    orientations: Sequence[Orientation] | None = None,
    layout: LayoutConfig | None = None,
) -> PlacementPlan:
    """
    Compute and validate the placement plan for ``photo_count`` photos.

    ``strategy`` and ``viewport`` default to the values in ``layout``.

    Raises:
        CapacityViolation: If the strategy cannot hold every photo.
        PlanValidationError: If the packer produced an invalid plan.

    """
    layout = layout or LayoutConfig.model_validate({})
    packer = get_packer(strategy or layout.strategy, layout)
    plan = packer.pack(
        photo_count,
        viewport=viewport or layout.viewport,
        orientations=orientations,
    )
    validate_plan(plan, photo_count)
    logger.debug(
        "Packed %d photos with %s on a %dx%d grid (%s)",
        photo_count, plan.strategy, plan.shape.rows, plan.shape.cols,
        plan.shape.layout_class,
    )
    return plan
