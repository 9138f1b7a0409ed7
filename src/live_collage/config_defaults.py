"""Shared default values for user-facing configuration settings."""
from live_collage.type_defs import PackerName, ViewportClass

# Layout
DEFAULT_STRATEGY: PackerName = "mosaic"
DEFAULT_VIEWPORT: ViewportClass = "desktop"
DEFAULT_MATCH_ORIENTATION = False

# Responsive sizing: density factor and [min, max] grid size per viewport
DEFAULT_VIEWPORT_BOUNDS: dict[ViewportClass, tuple[float, int, int]] = {
    "mobile": (1.0, 2, 3),
    "tablet": (1.0, 3, 4),
    "laptop": (1.2, 4, 5),
    "desktop": (1.5, 4, 6),
}
# Upper widths (exclusive) for mobile, tablet and laptop
DEFAULT_BREAKPOINTS: tuple[int, int, int] = (480, 768, 1024)

# Render
DEFAULT_CELL_PX = 160
DEFAULT_GAP_PX = 8
DEFAULT_PADDING_PX = 16

# Export
DEFAULT_APP_NAME = "live"
DEFAULT_EXPORT_SCALE = 2
DEFAULT_OUTPUT_DIR = "out"
