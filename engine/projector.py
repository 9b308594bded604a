"""
Projector - turns ray hits into screen column descriptors

Screen geometry is expressed in normalized device coordinates: x and y
both run from -1 to 1 with the horizon on y = 0.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple, Union

from utils.constants import (
    CELL_OPEN, MAX_RENDER_DISTANCE, NEAR_CLIP,
    HORIZONTAL_SHADE, VERTICAL_SHADE,
)
from utils.colors import COLOR_BACKGROUND


class ColorStyle(NamedTuple):
    """Flat RGB wall fill"""
    rgb: Tuple[int, int, int]


class TextureStyle(NamedTuple):
    """Textured wall, sampled by the renderer"""
    name: str


WallStyle = Union[ColorStyle, TextureStyle]

BACKGROUND_STYLE = ColorStyle(COLOR_BACKGROUND)


@dataclass(frozen=True)
class ColumnDescriptor:
    """Everything a renderer needs to draw one wall slice"""
    column: int
    left: float
    right: float
    half_height: float
    cell: int
    horizontal: bool
    style: WallStyle
    tex_offset: float
    slice_width: float
    shade: float
    distance: float

    @property
    def selector(self):
        """(cell code, hit family) pair the style was chosen from"""
        return self.cell, self.horizontal


def corrected_distance(distance, ray_angle, view_dir):
    """Fish-eye correction onto a flat projection plane"""
    return distance * math.cos(ray_angle - view_dir)


class Projector:
    """
    Perspective projection of RayHits for one map and ray fan
    """

    def __init__(self, grid, rays, fov, wall_styles=None,
                 background=BACKGROUND_STYLE, max_distance=MAX_RENDER_DISTANCE):
        """
        Args:
            grid: GridMap the hits were cast against
            rays: Rays per frame (one screen column each)
            fov: Field of view in radians
            wall_styles: dict of cell code -> WallStyle
            background: Style for codes missing from wall_styles
            max_distance: Hits farther than this are skipped
        """
        self.grid = grid
        self.rays = rays
        self.fov = fov
        self.wall_styles = dict(wall_styles or {})
        self.background = background
        self.max_distance = max_distance

        # One cell height, in world units and in screen units
        self.cell_size = 2.0 / grid.height
        self.k = self.cell_size

        # Angular width of one ray
        self._ray_span = math.sin(fov / rays)

    def half_height(self, corrected):
        """Half of the wall slice height, with distances clipped to NEAR_CLIP"""
        return self.k / max(corrected, NEAR_CLIP)

    def style_for(self, cell):
        return self.wall_styles.get(cell, self.background)

    def shade_for(self, horizontal):
        return HORIZONTAL_SHADE if horizontal else VERTICAL_SHADE

    def tex_offset(self, hit):
        """
        Fractional position of the hit along the cell edge it struck

        Mirrored so textures keep the same orientation whichever side
        the wall is seen from.
        """
        hx, hy = hit.point
        if hit.horizontal:
            g = (hx + 1.0) * self.grid.width / 2.0
            pos = g - math.floor(g)
            if math.sin(hit.angle) > 0.0:
                pos = 1.0 - pos
        else:
            g = (hy + 1.0) * self.grid.height / 2.0
            pos = g - math.floor(g)
            if math.cos(hit.angle) < 0.0:
                pos = 1.0 - pos
        return pos

    def column_for(self, index):
        """
        Screen column for a ray index; ray 0 lands on the rightmost column

        Returns:
            (column, left, right) with left/right in NDC
        """
        column = self.rays - 1 - index
        left = column * 2.0 / self.rays - 1.0
        right = (column + 1) * 2.0 / self.rays - 1.0
        return column, left, right

    def project(self, hit, pose):
        """
        Build the column for one hit

        Returns:
            ColumnDescriptor, or None when no wall is visible on that column
        """
        if hit.distance > self.max_distance or hit.cell == CELL_OPEN:
            return None

        dist = corrected_distance(hit.distance, hit.angle, pose.dir)

        column, left, right = self.column_for(hit.index)
        return ColumnDescriptor(
            column=column,
            left=left,
            right=right,
            half_height=self.half_height(dist),
            cell=hit.cell,
            horizontal=hit.horizontal,
            style=self.style_for(hit.cell),
            tex_offset=self.tex_offset(hit),
            slice_width=self._ray_span * dist / self.cell_size,
            shade=self.shade_for(hit.horizontal),
            distance=dist,
        )

    def project_all(self, hits, pose):
        """Columns for every visible hit, in ray order"""
        columns = []
        for hit in hits:
            col = self.project(hit, pose)
            if col is not None:
                columns.append(col)
        return columns
