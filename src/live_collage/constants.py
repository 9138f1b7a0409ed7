"""
Constants used internally by Live Collage.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Orientation detection. width / height rarely lands on exactly 1.0.
SQUARE_EPSILON = 1e-3

# Uniform strategy covers at most a 6x6 grid
UNIFORM_MAX_GRID = 6
UNIFORM_CAPACITY = UNIFORM_MAX_GRID * UNIFORM_MAX_GRID

# Fixed step table ceiling, beyond which square sizing takes over
FIXED_STEP_CEILING = 36

# Counts handled by hand-authored mosaic layouts
MOSAIC_FIXED_LAYOUT_MAX = 3
# Share of the grid given to the large photo in the three-photo layout
MOSAIC_TRIO_LARGE_FRACTION = 0.6

# Internal color constants
COLOR_MODE_RGB = "RGB"
COLOR_WHITE = (255, 255, 255)

# Export
EXPORT_FORMAT = "PNG"
EXPORT_SUFFIX = ".png"

# Validator reports at most this many problems in its message
MAX_REPORTED_PROBLEMS = 5
