"""
Constants and configuration values for Brush Color.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Fill engine constants
OUTLINE_THRESHOLD = 80      # pixels darker than this on every channel are line art
FILL_TOLERANCE = 60         # per-channel difference still considered the same region
MATCH_TOLERANCE = 5         # per-channel difference considered "already that color"
FILL_ALPHA = 255

# History constants
MAX_UNDO_STATES = 15

# Image loading constants
MAX_IMAGE_SIZE = 1024
DEFAULT_DEVICE_PIXEL_RATIO = 1.0
BACKGROUND_COLOR = (255, 255, 255, 255)

# Palette
DEFAULT_COLOR = "#FF6B6B"
DEFAULT_PALETTE = (
    "#FF6B6B",
    "#FFA94D",
    "#FFD43B",
    "#69DB7C",
    "#38D9A9",
    "#4DABF7",
    "#748FFC",
    "#DA77F2",
    "#F783AC",
    "#A0522D",
    "#868E96",
    "#FFFFFF",
)

# Tap modes
MODE_FILL = "fill"
MODE_ERASE = "erase"

# UI constants
DEFAULT_WINDOW_WIDTH = 1100
DEFAULT_WINDOW_HEIGHT = 820
WORKING_INDICATOR_DELAY_MS = 10

# File naming
EXPORT_FILE_PREFIX = "colored_"
DEFAULT_EXPORT_FORMAT = "PNG"
CONFIG_FILE_NAME = "brush_color.json"

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
