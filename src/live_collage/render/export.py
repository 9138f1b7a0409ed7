"""Rasterize the current collage to a timestamped PNG file."""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING

from live_collage.config_defaults import DEFAULT_APP_NAME, DEFAULT_EXPORT_SCALE
from live_collage.constants import EXPORT_FORMAT, EXPORT_SUFFIX
from live_collage.errors import ExportFailure
from live_collage.logging_utils import logger
from live_collage.render.canvas import CanvasParams, render_collage

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

    from PIL import Image

    from live_collage.config import RenderConfig
    from live_collage.packing.models import PlacementPlan


def default_export_name(app_name: str, timestamp_ms: int) -> str:
    """Return ``<app-name>-collage-<timestamp>.png``."""
    safe_name = app_name.strip().replace(" ", "-").lower()
    return f"{safe_name}-collage-{timestamp_ms}{EXPORT_SUFFIX}"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def export_collage(  # noqa: PLR0913
    images: Sequence[Image.Image],
    plan: PlacementPlan,
    output_dir: Path | str,
    *,
    render: RenderConfig | None = None,
    app_name: str = DEFAULT_APP_NAME,
    scale: int = DEFAULT_EXPORT_SCALE,
    clock: Callable[[], int] = _now_ms,
) -> Path:
    """
    Render ``images`` per ``plan`` and save the result as PNG.

    Output is rendered at ``scale`` times the logical size on a white
    background. Inputs are never modified, so a failed export can be
    retried as is.

    Raises:
        ExportFailure: If rendering or saving fails.

    """
    params = (
        CanvasParams.from_config(render, scale=scale)
        if render is not None
        else CanvasParams(scale=scale)
    )
    out_path = Path(output_dir) / default_export_name(app_name, clock())
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        collage = render_collage(images, plan, params)
        collage.save(out_path, format=EXPORT_FORMAT)
    except (OSError, ValueError, MemoryError) as exc:
        msg = f"Could not export collage to {out_path}: {exc!s}"
        raise ExportFailure(msg) from exc

    logger.info("Collage saved to: %s", out_path)
    return out_path
