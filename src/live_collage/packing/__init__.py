"""
Layout packing: size selection, placement, and plan validation.

The package exposes the most commonly used entry points directly so
callers rarely need the submodules.
"""

from __future__ import annotations

from . import models, mosaic, packers, sizing, uniform, validation
from .models import CellAssignment, ContainerShape, PlacementPlan, SpanPattern
from .mosaic import place_mosaic
from .packers import (
    FixedStepGridPacker,
    MosaicPacker,
    Packer,
    UniformGridPacker,
    compute_placement_plan,
    get_packer,
)
from .sizing import (
    fixed_step_shape,
    responsive_grid_size,
    responsive_shape,
    uniform_grid_size,
    uniform_shape,
    viewport_class_for_width,
)
from .uniform import place_uniform
from .validation import check_plan, validate_plan

__all__ = [
    "CellAssignment",
    "ContainerShape",
    "FixedStepGridPacker",
    "MosaicPacker",
    "Packer",
    "PlacementPlan",
    "SpanPattern",
    "UniformGridPacker",
    "check_plan",
    "compute_placement_plan",
    "fixed_step_shape",
    "get_packer",
    "models",
    "mosaic",
    "packers",
    "place_mosaic",
    "place_uniform",
    "responsive_grid_size",
    "responsive_shape",
    "sizing",
    "uniform",
    "uniform_grid_size",
    "uniform_shape",
    "validate_plan",
    "validation",
    "viewport_class_for_width",
]
