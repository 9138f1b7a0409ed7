"""
Defines shared type aliases for Live Collage.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from typing import Literal

Orientation = Literal["landscape", "portrait", "square"]
ViewportClass = Literal["mobile", "tablet", "laptop", "desktop"]
SizeClass = Literal["large", "wide", "tall", "medium", "small"]
PackerName = Literal["mosaic", "fixed", "uniform"]

VIEWPORT_CLASSES: tuple[ViewportClass, ...] = (
    "mobile",
    "tablet",
    "laptop",
    "desktop",
)
PACKER_NAMES: tuple[PackerName, ...] = ("mosaic", "fixed", "uniform")
