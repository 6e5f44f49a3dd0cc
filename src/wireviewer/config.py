from __future__ import annotations

import math

WINDOW_TITLE = "Wireframe Viewer"

# Camera controls, applied while a key is held
TURN_SPEED = math.pi / 2  # radians per second
MOVE_SPEED = 10.0  # world units per second

# HUD
HUD_FONT = "consolas"
HUD_FONT_SIZE = 16
HUD_COLOR = (40, 40, 40)
HUD_MARGIN = 8
