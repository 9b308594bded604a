import math
import os

# Headless pygame for renderer tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from config import CORRIDOR8_CELLS, ARENA12_CELLS
from engine.grid_map import GridMap
from engine.raycaster import GridRaycaster


def closed_map(width, height):
    """Walls on the border, open inside"""
    cells = []
    for row in range(height):
        for col in range(width):
            border = row in (0, height - 1) or col in (0, width - 1)
            cells.append(1 if border else 0)
    return GridMap(width, height, cells)


def brute_force_distance(grid, x, y, angle):
    """
    Distance to the first wall cell along a ray, by testing the ray
    against every wall cell's box (slab method).
    """
    dx = math.cos(angle)
    dy = math.sin(angle)
    best = math.inf
    best_code = 0
    for col, row, code in grid.wall_cells():
        x0, y0, x1, y1 = grid.cell_bounds(col, row)
        t_near, t_far = -math.inf, math.inf
        for origin, d, lo, hi in ((x, dx, x0, x1), (y, dy, y0, y1)):
            if d == 0.0:
                if not lo <= origin <= hi:
                    t_near, t_far = math.inf, -math.inf
                continue
            t1 = (lo - origin) / d
            t2 = (hi - origin) / d
            t_near = max(t_near, min(t1, t2))
            t_far = min(t_far, max(t1, t2))
        if t_near <= t_far and t_far >= 0.0:
            t = max(t_near, 0.0)
            if t < best:
                best = t
                best_code = code
    return best, best_code


@pytest.fixture
def empty_arena():
    return closed_map(8, 8)


@pytest.fixture
def corridor_map():
    return GridMap(8, 8, CORRIDOR8_CELLS)


@pytest.fixture
def arena12():
    return GridMap(12, 12, ARENA12_CELLS)


@pytest.fixture
def open_map():
    return GridMap(4, 4, [0] * 16)


@pytest.fixture
def corridor_caster(corridor_map):
    return GridRaycaster(corridor_map)
