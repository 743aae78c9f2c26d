"""Shared default values for user-facing configuration settings."""

# Layout
DEFAULT_LAYOUT = "grid"
DEFAULT_CONTAINER_WIDTH = 1200
DEFAULT_CONTAINER_HEIGHT = 500
DEFAULT_GAP = 16
DEFAULT_COLLAGE_TEMPLATE = "heart"

# Responsive breakpoints (exclusive upper bounds, CSS pixels)
DEFAULT_MOBILE_MAX_WIDTH = 640
DEFAULT_TABLET_MAX_WIDTH = 1024
DEFAULT_RESIZE_DEBOUNCE_SECONDS = 0.15

# Viewer
DEFAULT_AUTOPLAY_INTERVAL = 4.0
DEFAULT_CAROUSEL_INTERVAL = 5.0
DEFAULT_CAROUSEL_AUTOPLAY = False
DEFAULT_SWIPE_THRESHOLD = 50
DEFAULT_DOWNLOAD_PROTECTION = True

# Randomness
DEFAULT_SEED = 0

# Logging
DEFAULT_LOG_LEVEL = "INFO"
