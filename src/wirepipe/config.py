from __future__ import annotations

# Tolerance applied to every view-volume boundary test.
FLOAT_EPSILON = 1e-6

# Output surface
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
TARGET_FPS = 60

BACKGROUND_COLOR = (255, 255, 255)
LINE_COLOR = (0, 0, 0)
LINE_WIDTH = 1
ENDPOINT_COLOR = (255, 0, 0)
ENDPOINT_SIZE = 4
