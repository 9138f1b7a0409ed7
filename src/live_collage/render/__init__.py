"""Render surface and exporter for placement plans."""

from __future__ import annotations

from . import canvas, export
from .canvas import CanvasParams, Rect, canvas_size, cell_box, render_collage
from .export import default_export_name, export_collage

__all__ = [
    "CanvasParams",
    "Rect",
    "canvas",
    "canvas_size",
    "cell_box",
    "default_export_name",
    "export",
    "export_collage",
    "render_collage",
]
