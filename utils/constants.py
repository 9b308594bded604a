"""
Global constants for Raycast Arena
"""

# Screen settings
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
FPS = 60

# Render modes (command-line switch)
MODE_2D = '2d'
MODE_3D = '3d'

# Cell codes
CELL_OPEN = 0
CELL_WALL = 1
CELL_ACCENT_A = 2
CELL_ACCENT_B = 3
MAX_CELL_CODE = 255

# Raycasting
NO_HIT_DISTANCE = 10000.0      # Sentinel distance when a ray leaves the world
MAX_RENDER_DISTANCE = 100.0    # Columns farther than this are not drawn
NEAR_CLIP = 1e-3               # Smallest corrected distance used for projection

# Shading (faux directional lighting)
HORIZONTAL_SHADE = 0.8
VERTICAL_SHADE = 1.0
TEXTURE_BRIGHTNESS = 0.5       # Texel scale applied on top of the shade

# Movement
CLEARANCE_FRACTION = 0.2       # Minimum wall clearance as a fraction of one cell

# Textures
TEXTURE_SIZE = 64
TEXTURE_SEED = 42

# Top-down (2D) view, in world units
PLAYER_MARKER_SIZE = 0.05
HEADING_LINE_LENGTH = 0.1
GRID_PADDING = 0.02
