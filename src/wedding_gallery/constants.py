"""
Constants used internally by the gallery layout engine.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

import math

# Category selector value that disables filtering
ALL_CATEGORIES = "all"

CATEGORY_DISPLAY_NAMES = {
    "pre_wedding": "Pre-Wedding",
    "engagement": "Engagement",
    "family": "Family",
    "couple": "Couple",
}

# Masonry
MASONRY_HEIGHTS: tuple[int, ...] = (200, 250, 300, 350, 400)

# Polaroid jitter tables
POLAROID_ROTATIONS: tuple[float, ...] = (
    -15, -10, -5, 0, 5, 10, 15, -8, 8, -12, 12, -3, 3,
)
POLAROID_POSITIONS: tuple[tuple[float, float], ...] = (
    (0, 0), (20, 15), (-15, 30), (35, -10),
    (-25, 20), (15, -15), (-10, 35), (30, 25),
    (-20, -20), (25, 10), (-30, -5), (10, 40),
)
POLAROID_ROTATION_JITTER = 3.0
POLAROID_OFFSET_JITTER = 10.0
POLAROID_CARD_SIZE = (240, 290)

# Collage reference canvas; generators scale from here
COLLAGE_REFERENCE_SIZE = (700, 500)
COLLAGE_ROTATION_MAX = 10.0
COLLAGE_Z_INDEX_MAX = 100
COLLAGE_CIRCLE_RADIUS = 50.0
COLLAGE_CORNER_RADIUS_MAX = 20.0

HEART_FILL = 0.8
HEART_SIZE_RANGE = (80.0, 120.0)
# Extent of the unscaled heart curve: x in [-16, 16], y in roughly [-17, 12]
HEART_EXTENT = (32.0, 30.0)

CIRCLE_RING_CAPACITY = 8
CIRCLE_OUTER_RADIUS = 200.0
CIRCLE_INNER_RADIUS = CIRCLE_OUTER_RADIUS * 0.5
CIRCLE_INNER_SIZE = 100.0
CIRCLE_OUTER_SIZE = 80.0

MOSAIC_GRID = (5, 4)
MOSAIC_ATTENUATION = (0.3, 1.0)
MOSAIC_JITTER = 10.0

SCATTERED_SIZE_RANGE = (60.0, 140.0)

GEOMETRIC_RING_SIZE = 6
GEOMETRIC_RING_OFFSET = math.pi / 6
GEOMETRIC_BASE_RADIUS = 60.0
GEOMETRIC_RADIUS_STEP = 80.0
GEOMETRIC_BASE_SIZE = 70.0
GEOMETRIC_SIZE_STEP = 10.0

# Collapsed timeline sections show this many images
TIMELINE_PREVIEW_COUNT = 4

# Viewer input
KEY_ESCAPE = "Escape"
KEY_ARROW_LEFT = "ArrowLeft"
KEY_ARROW_RIGHT = "ArrowRight"
KEY_SPACE_ALIASES = frozenset({" ", "Space", "Spacebar"})
