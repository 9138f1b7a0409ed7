"""
Configuration schema and loader for Live Collage.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, model_validator

from live_collage.config_defaults import (
    DEFAULT_APP_NAME,
    DEFAULT_BREAKPOINTS,
    DEFAULT_CELL_PX,
    DEFAULT_EXPORT_SCALE,
    DEFAULT_GAP_PX,
    DEFAULT_MATCH_ORIENTATION,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PADDING_PX,
    DEFAULT_STRATEGY,
    DEFAULT_VIEWPORT,
    DEFAULT_VIEWPORT_BOUNDS,
)
from live_collage.type_defs import PackerName, ViewportClass


class ViewportBounds(BaseModel):
    """Density factor and grid size bounds for one viewport class."""

    density: float = Field(1.0, gt=0)
    min_grid: int = Field(1, ge=1)
    max_grid: int = Field(6, ge=1)

    @model_validator(mode="after")
    def _check_range(self) -> "ViewportBounds":
        if self.min_grid > self.max_grid:
            msg = (f"min_grid ({self.min_grid}) must not exceed "
                   f"max_grid ({self.max_grid})")
            raise ValueError(msg)
        return self


def _default_bounds(viewport: ViewportClass) -> ViewportBounds:
    density, low, high = DEFAULT_VIEWPORT_BOUNDS[viewport]
    return ViewportBounds(density=density, min_grid=low, max_grid=high)


class ResponsiveConfig(BaseModel):
    """Per-viewport sizing constants and width breakpoints."""

    mobile: ViewportBounds = Field(
        default_factory=lambda: _default_bounds("mobile"),
    )
    tablet: ViewportBounds = Field(
        default_factory=lambda: _default_bounds("tablet"),
    )
    laptop: ViewportBounds = Field(
        default_factory=lambda: _default_bounds("laptop"),
    )
    desktop: ViewportBounds = Field(
        default_factory=lambda: _default_bounds("desktop"),
    )
    breakpoints: tuple[int, int, int] = DEFAULT_BREAKPOINTS

    @model_validator(mode="after")
    def _check_breakpoints(self) -> "ResponsiveConfig":
        low, mid, high = self.breakpoints
        if not 0 < low < mid < high:
            msg = "breakpoints must be positive and strictly increasing"
            raise ValueError(msg)
        return self

    def bounds_for(self, viewport: ViewportClass) -> ViewportBounds:
        """Return the bounds configured for ``viewport``."""
        return getattr(self, viewport)


class LayoutConfig(BaseModel):
    """Select the packing strategy and viewport-dependent behavior."""

    strategy: PackerName = DEFAULT_STRATEGY
    viewport: ViewportClass = DEFAULT_VIEWPORT
    match_orientation: bool = DEFAULT_MATCH_ORIENTATION
    responsive: ResponsiveConfig = Field(
        default_factory=lambda: ResponsiveConfig.model_validate({}),
    )


class RenderConfig(BaseModel):
    """Logical pixel geometry of the rendered collage."""

    cell_px: int = Field(DEFAULT_CELL_PX, ge=1)
    gap_px: int = Field(DEFAULT_GAP_PX, ge=0)
    padding_px: int = Field(DEFAULT_PADDING_PX, ge=0)


class ExportConfig(BaseModel):
    """Configure the exported file name, scale, and location."""

    app_name: str = Field(DEFAULT_APP_NAME, min_length=1)
    scale: int = Field(DEFAULT_EXPORT_SCALE, ge=1, le=8)
    output: str = Field(DEFAULT_OUTPUT_DIR)


class CollageConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    layout: LayoutConfig = Field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )
    render: RenderConfig = Field(
        default_factory=lambda: RenderConfig.model_validate({}),
    )
    export: ExportConfig = Field(
        default_factory=lambda: ExportConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> CollageConfig:
        """
        Load a collage configuration from a TOML file.

        Returns a validated CollageConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return CollageConfig.model_validate(doc.unwrap())


# CLI destination name -> (section, field)
_CLI_OVERRIDES: dict[str, tuple[str, str]] = {
    "strategy": ("layout", "strategy"),
    "viewport": ("layout", "viewport"),
    "match_orientation": ("layout", "match_orientation"),
    "cell_px": ("render", "cell_px"),
    "gap_px": ("render", "gap_px"),
    "padding_px": ("render", "padding_px"),
    "app_name": ("export", "app_name"),
    "scale": ("export", "scale"),
    "output": ("export", "output"),
}


def build_config_from_cli(
    args: Mapping[str, Any],
    base_config: CollageConfig | None = None,
) -> CollageConfig:
    """
    Overlay CLI values on top of a base configuration.

    Only keys present in ``args`` with a non-None value are applied, so
    arguments left at ``argparse.SUPPRESS`` keep the config file value.
    """
    base = base_config or CollageConfig.model_validate({})
    data = base.model_dump()
    for key, (section, field) in _CLI_OVERRIDES.items():
        value = args.get(key)
        if value is not None:
            data[section][field] = value
    return CollageConfig.model_validate(data)
