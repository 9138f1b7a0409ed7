"""Pixel geometry and composition of a placement plan onto a canvas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from PIL import Image, ImageOps

from live_collage.config_defaults import (
    DEFAULT_CELL_PX,
    DEFAULT_GAP_PX,
    DEFAULT_PADDING_PX,
)
from live_collage.constants import COLOR_MODE_RGB, COLOR_WHITE

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from live_collage.config import RenderConfig
    from live_collage.packing.models import (
        CellAssignment,
        ContainerShape,
        PlacementPlan,
    )

_RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Rect:
    """Simple rectangle with convenience accessors."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def w(self) -> int:
        """Width."""
        return self.x1 - self.x0

    @property
    def h(self) -> int:
        """Height."""
        return self.y1 - self.y0

    def size(self) -> tuple[int, int]:
        """Return (w, h)."""
        return self.w, self.h


@dataclass(frozen=True)
class CanvasParams:
    """Logical cell geometry plus the output scale factor."""

    cell_px: int = DEFAULT_CELL_PX
    gap_px: int = DEFAULT_GAP_PX
    padding_px: int = DEFAULT_PADDING_PX
    scale: int = 1
    bg_color: _RGB = COLOR_WHITE

    @classmethod
    def from_config(cls, render: RenderConfig, *, scale: int = 1) -> CanvasParams:
        """Build params from the render config section."""
        return cls(
            cell_px=render.cell_px,
            gap_px=render.gap_px,
            padding_px=render.padding_px,
            scale=scale,
        )


def _track_length(cells: int, params: CanvasParams) -> int:
    """Length in logical pixels of ``cells`` adjacent cells plus gaps."""
    return cells * params.cell_px + max(0, cells - 1) * params.gap_px


def canvas_size(shape: ContainerShape, params: CanvasParams) -> tuple[int, int]:
    """Return the scaled canvas size for ``shape``."""
    w = 2 * params.padding_px + _track_length(shape.cols, params)
    h = 2 * params.padding_px + _track_length(shape.rows, params)
    return w * params.scale, h * params.scale


def cell_box(assignment: CellAssignment, params: CanvasParams) -> Rect:
    """Return the scaled pixel box covered by ``assignment``."""
    pitch = params.cell_px + params.gap_px
    x0 = params.padding_px + (assignment.col - 1) * pitch
    y0 = params.padding_px + (assignment.row - 1) * pitch
    x1 = x0 + _track_length(assignment.col_span, params)
    y1 = y0 + _track_length(assignment.row_span, params)
    s = params.scale
    return Rect(x0 * s, y0 * s, x1 * s, y1 * s)


def _cover(img: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Resize and center-crop ``img`` so it fills ``size`` exactly."""
    if img.mode != COLOR_MODE_RGB:
        img = img.convert(COLOR_MODE_RGB)
    return ImageOps.fit(
        img,
        size,
        method=Image.Resampling.LANCZOS,
        centering=(0.5, 0.5),
    )


def render_collage(
    images: Sequence[Image.Image],
    plan: PlacementPlan,
    params: CanvasParams | None = None,
) -> Image.Image:
    """
    Compose ``images`` onto an opaque canvas following ``plan``.

    Each image is center-cropped to fill its box. ``images`` must be
    index-aligned with the plan.
    """
    if not images:
        msg = "No images provided"
        raise ValueError(msg)
    if len(images) != len(plan):
        msg = (f"Plan has {len(plan)} assignments for "
               f"{len(images)} images")
        raise ValueError(msg)

    params = params or CanvasParams()
    canvas = Image.new(COLOR_MODE_RGB, canvas_size(plan.shape, params),
                       params.bg_color)
    for im, assignment in zip(images, plan, strict=True):
        box = cell_box(assignment, params)
        canvas.paste(_cover(im, box.size()), (box.x0, box.y0))
    return canvas
