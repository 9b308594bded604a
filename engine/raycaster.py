"""
Raycaster Engine - grid-DDA against a GridMap
Casts one ray per screen column, stepping from grid line to grid line.
Optimized with Numba JIT compilation
"""

import math
from typing import NamedTuple, Tuple

import numpy as np
from numba import njit

from utils.constants import NO_HIT_DISTANCE
from .grid_map import _numba_at_wall

# Columns of the array returned by cast_array
RAY_ANGLE = 0
RAY_DIST = 1
RAY_HORIZONTAL = 2
RAY_CELL = 3
RAY_HIT_X = 4
RAY_HIT_Y = 5
RAY_FIELDS = 6

_NO_HIT = float(NO_HIT_DISTANCE)


class RayHit(NamedTuple):
    """Result of one cast ray"""
    index: int
    angle: float
    distance: float
    horizontal: bool
    cell: int
    point: Tuple[float, float]

    @property
    def hit(self):
        """False when the ray left the world without meeting a wall"""
        return self.cell != 0 and self.distance < _NO_HIT


@njit(cache=True)
def _numba_calc_dist_to_wall(cells, px, py, angle):
    """
    Distance to the nearest wall along one ray (Numba JIT compiled)

    Runs the DDA twice, once over horizontal grid lines and once over
    vertical ones, and keeps the nearer hit. The horizontal family only
    wins on a strict less-than.

    Args:
        cells: 2D int32 array indexed [row, col]
        px, py: Ray origin in world space
        angle: Ray angle in radians

    Returns:
        (distance, horizontal, cell, hit_x, hit_y)
    """
    height = cells.shape[0]
    width = cells.shape[1]

    sin_a = math.sin(angle)
    cos_a = math.cos(angle)

    # --- Horizontal grid lines ---
    dist_horz = _NO_HIT
    horz_wall = 0
    ray_x = px
    ray_y = py
    if sin_a != 0.0:
        y_step = 2.0 / height
        gy = (py + 1.0) * height / 2.0
        if sin_a > 0.0:
            ray_y = math.ceil(gy) * y_step - 1.0
        else:
            ray_y = math.floor(gy) * y_step - 1.0
            y_step = -y_step
        tan_a = math.tan(angle)
        ray_x = (ray_y - py) / tan_a + px
        x_step = y_step / tan_a

        while -1.0 <= ray_x <= 1.0 and -1.0 <= ray_y <= 1.0:
            horz_wall = _numba_at_wall(cells, ray_x, ray_y, True)
            if horz_wall > 0:
                dist_horz = math.sqrt((ray_y - py) ** 2 + (ray_x - px) ** 2)
                break
            ray_x += x_step
            ray_y += y_step
    hit_x_h = ray_x
    hit_y_h = ray_y

    # --- Vertical grid lines ---
    dist_vert = _NO_HIT
    vert_wall = 0
    ray_x = px
    ray_y = py
    if cos_a != 0.0:
        x_step = 2.0 / width
        gx = (px + 1.0) * width / 2.0
        if cos_a > 0.0:
            ray_x = math.ceil(gx) * x_step - 1.0
        else:
            ray_x = math.floor(gx) * x_step - 1.0
            x_step = -x_step
        tan_a = math.tan(angle)
        ray_y = (ray_x - px) * tan_a + py
        y_step = x_step * tan_a

        while -1.0 <= ray_x <= 1.0 and -1.0 <= ray_y <= 1.0:
            vert_wall = _numba_at_wall(cells, ray_x, ray_y, False)
            if vert_wall > 0:
                dist_vert = math.sqrt((ray_y - py) ** 2 + (ray_x - px) ** 2)
                break
            ray_x += x_step
            ray_y += y_step

    if dist_horz < dist_vert:
        return dist_horz, True, horz_wall, hit_x_h, hit_y_h
    return dist_vert, False, vert_wall, ray_x, ray_y


@njit(cache=True)
def _numba_cast_all_rays(cells, px, py, player_angle, fov, num_rays):
    """
    Cast a fan of rays evenly spread over the field of view (Numba JIT)

    Ray i is cast at player_angle - fov/2 + i*fov/num_rays.

    Returns:
        numpy array shape (num_rays, 6):
        [angle, dist, horizontal, cell, hit_x, hit_y]
    """
    results = np.empty((num_rays, 6), dtype=np.float64)

    for i in range(num_rays):
        ray_angle = player_angle - fov / 2.0 + i * fov / num_rays
        dist, horizontal, cell, hit_x, hit_y = _numba_calc_dist_to_wall(cells, px, py, ray_angle)

        results[i, 0] = ray_angle
        results[i, 1] = dist
        results[i, 2] = 1.0 if horizontal else 0.0
        results[i, 3] = cell
        results[i, 4] = hit_x
        results[i, 5] = hit_y

    return results


class GridRaycaster:
    """
    DDA raycasting engine bound to one GridMap.
    Holds no per-cast state: every call recomputes from the pose it is given.
    """

    # World-axis angles for east, north, west, south clearance rays
    CARDINAL_ANGLES = (0.0, math.pi / 2, math.pi, -math.pi / 2)

    def __init__(self, grid):
        """
        Args:
            grid: GridMap to cast against
        """
        self.grid = grid

    def calc_dist_to_wall(self, x, y, angle):
        """
        Cast one ray

        Args:
            x, y: Ray origin in world space
            angle: Ray angle in radians (0 = +x, counter-clockwise)

        Returns:
            (distance, horizontal, cell, (hit_x, hit_y)); distance is
            NO_HIT_DISTANCE and cell 0 when no wall is met inside the world
        """
        dist, horizontal, cell, hit_x, hit_y = _numba_calc_dist_to_wall(
            self.grid.cells, float(x), float(y), float(angle)
        )
        return float(dist), bool(horizontal), int(cell), (float(hit_x), float(hit_y))

    def cast_array(self, pose, rays, fov):
        """
        Cast all rays for a pose into a numpy array

        Returns:
            numpy array shape (rays, 6):
            [angle, dist, horizontal, cell, hit_x, hit_y]
        """
        return _numba_cast_all_rays(
            self.grid.cells, float(pose.x), float(pose.y), float(pose.dir),
            float(fov), int(rays)
        )

    def ray_cast(self, pose, rays, fov):
        """
        Cast a fan of rays across the field of view

        Args:
            pose: Viewer Pose
            rays: Number of rays
            fov: Field of view in radians

        Returns:
            list of RayHit, index 0 at angle pose.dir - fov/2
        """
        if rays <= 0:
            return []
        results = self.cast_array(pose, rays, fov)
        return [
            RayHit(
                index=i,
                angle=float(row[RAY_ANGLE]),
                distance=float(row[RAY_DIST]),
                horizontal=bool(row[RAY_HORIZONTAL]),
                cell=int(row[RAY_CELL]),
                point=(float(row[RAY_HIT_X]), float(row[RAY_HIT_Y])),
            )
            for i, row in enumerate(results)
        ]

    def clearances(self, x, y):
        """
        Distance to the nearest wall along each world axis

        Returns:
            (east, north, west, south)
        """
        return tuple(self.calc_dist_to_wall(x, y, a)[0] for a in self.CARDINAL_ANGLES)
