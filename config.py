"""
Game configuration - presets and command-line overrides
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

from engine.errors import ConfigError
from engine.grid_map import GridMap
from engine.map_loader import load_map
from engine.movement import Pose
from engine.projector import ColorStyle, TextureStyle
from utils.colors import WALL_COLORS, WALL_TEXTURES
from utils.constants import CELL_OPEN

logger = logging.getLogger(__name__)

GAME_TITLE = "Raycast Arena"
GAME_VERSION = "1.0.0"

LOOK_SPEED = 2.0  # Radians per second


@dataclass(frozen=True)
class GameConfig:
    """One engine setup: map, ray fan, speeds and wall look"""
    name: str
    grid: GridMap
    start: Pose
    rays: int
    fov: float
    move_speed: float
    look_speed: float = LOOK_SPEED
    use_colors: bool = False
    min_clearance: Optional[float] = None

    def wall_styles(self):
        """Cell code -> WallStyle for the selected rendering strategy"""
        if self.use_colors:
            return {code: ColorStyle(rgb) for code, rgb in WALL_COLORS.items()}
        return {code: TextureStyle(name) for code, name in WALL_TEXTURES.items()}

    def validate(self):
        """
        Raises:
            ConfigError: if any setting is unusable
        """
        if not isinstance(self.rays, int) or self.rays < 1:
            raise ConfigError(f"Ray count must be a positive integer, got {self.rays!r}")
        if not 0.0 < self.fov < math.pi:
            raise ConfigError(f"Field of view must be between 0 and pi radians, got {self.fov}")
        if self.move_speed < 0 or self.look_speed < 0:
            raise ConfigError("Movement speeds must not be negative")
        if self.min_clearance is not None and self.min_clearance < 0:
            raise ConfigError("Minimum clearance must not be negative")

        x, y = self.start.x, self.start.y
        if not (-1.0 < x < 1.0 and -1.0 < y < 1.0):
            raise ConfigError(f"Start position ({x}, {y}) is outside the world")
        if self.grid.cell_at(x, y) != CELL_OPEN:
            raise ConfigError(f"Start position ({x}, {y}) is inside a wall")
        return self


ARENA12_CELLS = [
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    1, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 1,
    1, 0, 1, 0, 1, 1, 0, 0, 0, 3, 0, 1,
    1, 0, 0, 0, 1, 0, 0, 1, 0, 0, 0, 1,
    1, 3, 2, 0, 1, 0, 1, 1, 0, 0, 0, 1,
    1, 0, 0, 0, 1, 0, 0, 1, 0, 1, 1, 1,
    1, 0, 1, 0, 1, 1, 0, 1, 0, 1, 1, 1,
    1, 1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 1,
    1, 0, 0, 0, 0, 0, 0, 1, 0, 1, 1, 1,
    1, 0, 3, 1, 1, 1, 0, 1, 0, 1, 0, 1,
    1, 0, 0, 0, 0, 0, 2, 1, 0, 0, 0, 1,
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
]

ARENA8_CELLS = [
    1, 1, 1, 1, 1, 1, 1, 1,
    1, 0, 0, 0, 0, 0, 0, 1,
    1, 0, 2, 0, 0, 3, 0, 1,
    1, 0, 0, 0, 0, 0, 0, 1,
    1, 0, 0, 1, 1, 0, 0, 1,
    1, 0, 0, 0, 0, 0, 0, 1,
    1, 0, 0, 0, 0, 0, 0, 1,
    1, 1, 1, 1, 1, 1, 1, 1,
]

CORRIDOR8_CELLS = [
    1, 1, 1, 1, 1, 1, 1, 1,
    1, 0, 0, 0, 0, 0, 0, 1,
    1, 0, 1, 1, 1, 1, 0, 1,
    1, 0, 1, 0, 0, 0, 0, 1,
    1, 0, 1, 0, 0, 0, 0, 1,
    1, 0, 1, 0, 0, 0, 0, 1,
    1, 0, 3, 0, 0, 2, 0, 1,
    1, 1, 1, 1, 1, 1, 1, 1,
]

PRESETS = {
    'arena12': {
        'width': 12, 'height': 12, 'cells': ARENA12_CELLS,
        'start': (0.8, 0.8, 3.7), 'rays': 256, 'fov': 1.2, 'use_colors': False,
    },
    'arena8': {
        'width': 8, 'height': 8, 'cells': ARENA8_CELLS,
        'start': (-0.4, -0.6, 0.8), 'rays': 128, 'fov': 1.0, 'use_colors': True,
    },
    'corridor8': {
        'width': 8, 'height': 8, 'cells': CORRIDOR8_CELLS,
        'start': (0.35, 0.2, 1.0), 'rays': 60, 'fov': 1.5, 'use_colors': True,
    },
}

DEFAULT_PRESET = 'arena12'


def default_move_speed(grid):
    """Two cells per second (one cell is 2 / height world units)"""
    return 4.0 / grid.height


def first_open_pose(grid):
    """Pose at the centre of the first open cell, facing +x"""
    for row in range(grid.height):
        for col in range(grid.width):
            if grid.cell(col, row) == CELL_OPEN:
                x0, y0, x1, y1 = grid.cell_bounds(col, row)
                return Pose((x0 + x1) / 2.0, (y0 + y1) / 2.0, 0.0)
    raise ConfigError("Map has no open cell to start in")


def preset_config(name):
    """
    GameConfig for a built-in preset

    Raises:
        ConfigError: for an unknown preset name
    """
    try:
        p = PRESETS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown preset '{name}', choose from {', '.join(sorted(PRESETS))}"
        ) from None

    grid = GridMap(p['width'], p['height'], p['cells'])
    return GameConfig(
        name=name,
        grid=grid,
        start=Pose(*p['start']),
        rays=p['rays'],
        fov=p['fov'],
        move_speed=default_move_speed(grid),
        use_colors=p['use_colors'],
    )


def build_config(preset=DEFAULT_PRESET, map_path=None, rays=None, fov=None, use_colors=None):
    """
    Merge a preset with command-line overrides

    Args:
        preset: Preset name supplying defaults
        map_path: Optional JSON map file replacing the preset map
        rays, fov, use_colors: Optional overrides

    Returns:
        Validated GameConfig
    """
    config = preset_config(preset)

    if map_path is not None:
        grid, start, name = load_map(map_path)
        if start is None:
            start = config.start
            if not (-1.0 < start.x < 1.0 and -1.0 < start.y < 1.0) or \
                    grid.cell_at(start.x, start.y) != CELL_OPEN:
                start = first_open_pose(grid)
                logger.info("Map has no start pose, using %r", start)
        config = replace(config, name=name, grid=grid, start=start,
                         move_speed=default_move_speed(grid))

    if rays is not None:
        config = replace(config, rays=rays)
    if fov is not None:
        config = replace(config, fov=fov)
    if use_colors is not None:
        config = replace(config, use_colors=use_colors)

    return config.validate()
