"""
Top-down debug view - grid, player marker and the cast ray fan
"""

import math

import pygame

from engine.projector import ColorStyle, TextureStyle
from utils.colors import (
    COLOR_MAP_BG, COLOR_PLAYER, COLOR_HEADING, COLOR_BACKGROUND, WALL_COLORS
)
from utils.constants import (
    CELL_OPEN, GRID_PADDING, PLAYER_MARKER_SIZE, HEADING_LINE_LENGTH
)
from utils.helpers import world_to_screen
from .textures import TextureManager

# Rays that never hit are drawn this far (world units)
_MISS_RAY_LENGTH = 3.0


class TopDownView:
    """
    2D view of the arena drawn in world space, +y up
    """

    def __init__(self, texture_manager=None):
        """
        Args:
            texture_manager: TextureManager for textured wall styles
        """
        self.texture_manager = texture_manager or TextureManager()
        self._scaled_cache = {}

    def render(self, screen, grid, pose, hits, wall_styles):
        """
        Draw the map, the player and one line per ray

        Args:
            screen: pygame.Surface to render to
            grid: GridMap
            pose: Current Pose
            hits: RayHits for the pose
            wall_styles: dict of cell code -> WallStyle
        """
        screen.fill(COLOR_MAP_BG)
        self._draw_grid(screen, grid, wall_styles)
        self._draw_rays(screen, pose, hits)
        self._draw_player(screen, pose)

    def _cell_rect(self, screen, grid, col, row):
        """Padded pixel rect of a cell"""
        w, h = screen.get_size()
        pad_w = GRID_PADDING / grid.width
        pad_h = GRID_PADDING / grid.height
        x0, y0, x1, y1 = grid.cell_bounds(col, row)
        # World +y is up, so the top-left corner is (x0, y1)
        left, top = world_to_screen(x0 + pad_w, y1 - pad_h, w, h)
        right, bottom = world_to_screen(x1 - pad_w, y0 + pad_h, w, h)
        return pygame.Rect(left, top, max(1, right - left), max(1, bottom - top))

    def _draw_grid(self, screen, grid, wall_styles):
        for row in range(grid.height):
            for col in range(grid.width):
                code = grid.cell(col, row)
                rect = self._cell_rect(screen, grid, col, row)
                style = wall_styles.get(code) if code != CELL_OPEN else None

                if isinstance(style, TextureStyle):
                    screen.blit(self._scaled_texture(style.name, rect.size), rect)
                elif isinstance(style, ColorStyle):
                    pygame.draw.rect(screen, style.rgb, rect)
                else:
                    pygame.draw.rect(screen, COLOR_BACKGROUND, rect)

    def _scaled_texture(self, name, size):
        key = (name, size)
        if key not in self._scaled_cache:
            texture = self.texture_manager.get_texture(name)
            self._scaled_cache[key] = pygame.transform.scale(texture, size)
        return self._scaled_cache[key]

    def _draw_rays(self, screen, pose, hits):
        w, h = screen.get_size()
        start = world_to_screen(pose.x, pose.y, w, h)
        for hit in hits:
            if hit.hit:
                end_x, end_y = hit.point
            else:
                end_x = pose.x + _MISS_RAY_LENGTH * math.cos(hit.angle)
                end_y = pose.y + _MISS_RAY_LENGTH * math.sin(hit.angle)
            color = WALL_COLORS.get(hit.cell, COLOR_BACKGROUND)
            pygame.draw.line(screen, color, start, world_to_screen(end_x, end_y, w, h))

    def _draw_player(self, screen, pose):
        w, h = screen.get_size()
        half = PLAYER_MARKER_SIZE / 2.0
        left, top = world_to_screen(pose.x - half, pose.y + half, w, h)
        right, bottom = world_to_screen(pose.x + half, pose.y - half, w, h)
        pygame.draw.rect(screen, COLOR_PLAYER,
                         pygame.Rect(left, top, max(1, right - left), max(1, bottom - top)))

        dx, dy = pose.direction_vector()
        tip = world_to_screen(pose.x + HEADING_LINE_LENGTH * dx,
                              pose.y + HEADING_LINE_LENGTH * dy, w, h)
        pygame.draw.line(screen, COLOR_HEADING, world_to_screen(pose.x, pose.y, w, h), tip, 2)
