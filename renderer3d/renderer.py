"""
3D Scene Renderer - draws projected wall columns into a NumPy frame buffer
First-person view blitted with surfarray, column fill via Numba JIT
"""

import logging
import math

import numpy as np
import pygame
import pygame.surfarray
from numba import njit

from engine.projector import ColorStyle, TextureStyle
from utils.constants import TEXTURE_BRIGHTNESS
from utils.colors import COLOR_CEILING, COLOR_FLOOR
from utils.helpers import scale_color
from .textures import TextureManager

logger = logging.getLogger(__name__)


@njit(cache=True)
def _numba_draw_columns(frame_buffer, x_start, x_end, y_top, y_bottom,
                        tex_ids, colors, u_start, u_span, textures):
    """
    Draw wall slices to frame buffer (Numba JIT compiled)

    Args:
        frame_buffer: numpy array (width, height, 3) uint8
        x_start, x_end: Pixel column range of each slice
        y_top, y_bottom: Unclipped pixel rows of each slice
        tex_ids: Atlas index per slice, -1 for a flat color
        colors: (n, 3) float; flat RGB, or per-channel texel multiplier
        u_start, u_span: Horizontal texture coordinate start and width
        textures: numpy array (n_tex, tex_size, tex_size, 3) uint8
    """
    width = frame_buffer.shape[0]
    height = frame_buffer.shape[1]
    tex_size = textures.shape[1]

    for c in range(x_start.shape[0]):
        full_top = y_top[c]
        full_height = y_bottom[c] - full_top
        slice_w = x_end[c] - x_start[c]
        if full_height <= 0 or slice_w <= 0:
            continue

        x0 = max(x_start[c], 0)
        x1 = min(x_end[c], width)
        y0 = max(full_top, 0)
        y1 = min(y_bottom[c], height)
        tid = tex_ids[c]

        for x in range(x0, x1):
            tex_x = 0
            if tid >= 0:
                u = u_start[c] + u_span[c] * (x - x_start[c]) / slice_w
                u = u - math.floor(u)
                tex_x = int(u * tex_size)
                if tex_x >= tex_size:
                    tex_x = tex_size - 1
                elif tex_x < 0:
                    tex_x = 0

            for y in range(y0, y1):
                for ch in range(3):
                    if tid < 0:
                        v = colors[c, ch]
                    else:
                        tex_y = int((y - full_top) * tex_size / full_height)
                        if tex_y >= tex_size:
                            tex_y = tex_size - 1
                        v = textures[tid, tex_x, tex_y, ch] * colors[c, ch]
                    if v > 255.0:
                        v = 255.0
                    elif v < 0.0:
                        v = 0.0
                    frame_buffer[x, y, ch] = int(v)


class Renderer3D:
    """
    First-person renderer for ColumnDescriptors
    """

    def __init__(self, screen_width, screen_height, texture_manager=None):
        """
        Args:
            screen_width, screen_height: Render area in pixels
            texture_manager: TextureManager, created on demand
        """
        self.texture_manager = texture_manager or TextureManager()
        self._atlas, self._atlas_index = self.texture_manager.build_atlas(
            self.texture_manager.GENERATORS
        )
        self.set_render_area(screen_width, screen_height)
        logger.debug("Renderer3D %dx%d, textures: %s", screen_width, screen_height,
                     ", ".join(self._atlas_index))

    def set_render_area(self, width, height):
        """Update render area dimensions"""
        self.screen_width = width
        self.screen_height = height
        self.frame_buffer = np.zeros((width, height, 3), dtype=np.uint8)

    def _fill_background(self):
        """Ceiling on the upper half, floor on the lower half"""
        half = self.screen_height // 2
        self.frame_buffer[:, :half] = COLOR_CEILING
        self.frame_buffer[:, half:] = COLOR_FLOOR

    def ndc_to_pixels(self, left, right, half_height):
        """Pixel rectangle (x0, x1, y_top, y_bottom) of a slice"""
        w = self.screen_width
        h = self.screen_height
        x0 = int(round((left + 1.0) / 2.0 * w))
        x1 = int(round((right + 1.0) / 2.0 * w))
        y_top = int((1.0 - half_height) / 2.0 * h)
        y_bottom = int((1.0 + half_height) / 2.0 * h)
        return x0, x1, y_top, y_bottom

    def pack_columns(self, columns):
        """Flatten ColumnDescriptors into the arrays the JIT kernel reads"""
        n = len(columns)
        rects = np.zeros((n, 4), dtype=np.int64)
        tex_ids = np.full(n, -1, dtype=np.int64)
        colors = np.zeros((n, 3), dtype=np.float64)
        u_start = np.zeros(n, dtype=np.float64)
        u_span = np.zeros(n, dtype=np.float64)

        for i, col in enumerate(columns):
            rects[i] = self.ndc_to_pixels(col.left, col.right, col.half_height)
            style = col.style
            if isinstance(style, TextureStyle) and style.name in self._atlas_index:
                tex_ids[i] = self._atlas_index[style.name]
                colors[i] = col.shade * TEXTURE_BRIGHTNESS
                u_start[i] = col.tex_offset
                u_span[i] = col.slice_width
            elif isinstance(style, ColorStyle):
                colors[i] = scale_color(style.rgb, col.shade)

        return rects, tex_ids, colors, u_start, u_span

    def render(self, screen, columns):
        """
        Render one frame of the first-person view

        Args:
            screen: pygame.Surface to render to
            columns: ColumnDescriptors from the Projector
        """
        self._fill_background()

        if columns:
            rects, tex_ids, colors, u_start, u_span = self.pack_columns(columns)
            _numba_draw_columns(
                self.frame_buffer,
                np.ascontiguousarray(rects[:, 0]), np.ascontiguousarray(rects[:, 1]),
                np.ascontiguousarray(rects[:, 2]), np.ascontiguousarray(rects[:, 3]),
                tex_ids, colors, u_start, u_span, self._atlas
            )

        screen_w, screen_h = screen.get_size()
        if screen_w == self.screen_width and screen_h == self.screen_height:
            pygame.surfarray.blit_array(screen, self.frame_buffer)
        else:
            render_surface = pygame.Surface((self.screen_width, self.screen_height))
            pygame.surfarray.blit_array(render_surface, self.frame_buffer)
            screen.blit(render_surface, (0, 0))
