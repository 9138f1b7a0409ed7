"""Public package exports for Live Collage."""

from __future__ import annotations

from .errors import (
    CameraUnavailable,
    CapacityViolation,
    CollageError,
    DecodeError,
    ExportFailure,
    PlanValidationError,
)
from .packing import (
    CellAssignment,
    ContainerShape,
    PlacementPlan,
    compute_placement_plan,
    get_packer,
)
from .session import CollageSession

__all__ = [
    "CameraUnavailable",
    "CapacityViolation",
    "CellAssignment",
    "CollageError",
    "CollageSession",
    "ContainerShape",
    "DecodeError",
    "ExportFailure",
    "PlacementPlan",
    "PlanValidationError",
    "compute_placement_plan",
    "get_packer",
]
