"""
Color palette for Raycast Arena
"""

import math

from utils.constants import CELL_WALL, CELL_ACCENT_A, CELL_ACCENT_B

# 3D view background
COLOR_CEILING = (128, 128, 128)
COLOR_FLOOR = (0, 0, 255)

# 2D view background
COLOR_MAP_BG = (128, 128, 128)

# Wall colors (flat color mode)
COLOR_WALL_PRIMARY = (255, 0, 0)
COLOR_WALL_ACCENT_A = (0, 255, 0)
COLOR_WALL_ACCENT_B = (int(255 / math.sqrt(2)), 0, int(255 / math.sqrt(2)))
COLOR_BACKGROUND = (0, 0, 0)

# Player marker
COLOR_PLAYER = (25, 230, 25)
COLOR_HEADING = (255, 255, 0)

# Wall code -> flat color
WALL_COLORS = {
    CELL_WALL: COLOR_WALL_PRIMARY,
    CELL_ACCENT_A: COLOR_WALL_ACCENT_A,
    CELL_ACCENT_B: COLOR_WALL_ACCENT_B,
}

# Wall code -> procedural texture name
WALL_TEXTURES = {
    CELL_WALL: 'stone',
    CELL_ACCENT_A: 'brick',
    CELL_ACCENT_B: 'mossy',
}
