"""
Procedural Texture Generation for wall variants
Generates stone, brick and mossy textures without external files
"""

import random

import numpy as np
import pygame
import pygame.surfarray

from utils.constants import TEXTURE_SIZE, TEXTURE_SEED


class TextureManager:
    """
    Generates wall textures once and keeps them as surfaces and arrays
    """

    GENERATORS = ('stone', 'brick', 'mossy')

    def __init__(self, texture_size=TEXTURE_SIZE, seed=TEXTURE_SEED):
        """
        Args:
            texture_size: Size of textures (width and height)
            seed: Random seed, textures are reproducible
        """
        self.texture_size = texture_size
        self._seed = seed
        self._cache = {}

    def get_texture(self, name):
        """
        Get or generate a texture

        Args:
            name: 'stone', 'brick' or 'mossy'; anything else is solid black

        Returns:
            pygame.Surface with the texture
        """
        if name not in self._cache:
            if name == 'stone':
                self._cache[name] = self._generate_stone()
            elif name == 'brick':
                self._cache[name] = self._generate_brick()
            elif name == 'mossy':
                self._cache[name] = self._generate_mossy()
            else:
                self._cache[name] = self._generate_solid((0, 0, 0))
        return self._cache[name]

    def get_array(self, name):
        """Texture as a (size, size, 3) uint8 array indexed [x, y]"""
        return pygame.surfarray.array3d(self.get_texture(name)).astype(np.uint8)

    def build_atlas(self, names):
        """
        Stack textures for the renderer

        Args:
            names: Texture names in atlas order

        Returns:
            (uint8 array (n, size, size, 3), dict name -> atlas index)
        """
        names = list(dict.fromkeys(names))
        size = self.texture_size
        atlas = np.zeros((max(1, len(names)), size, size, 3), dtype=np.uint8)
        index = {}
        for i, name in enumerate(names):
            atlas[i] = self.get_array(name)
            index[name] = i
        return atlas, index

    def _generate_stone(self, base_color=(110, 110, 115)):
        """Irregular cobbles from nearest-centre cells, tiling seamlessly"""
        size = self.texture_size
        rng = random.Random(self._seed)

        centers = []
        for _ in range(8):
            cx = rng.randint(0, size - 1)
            cy = rng.randint(0, size - 1)
            shift = rng.randint(-30, 30)
            centers.append((cx, cy, shift))

        ys, xs = np.mgrid[0:size, 0:size]
        dists = []
        for cx, cy, _ in centers:
            dx = np.abs(xs - cx)
            dx = np.minimum(dx, size - dx)
            dy = np.abs(ys - cy)
            dy = np.minimum(dy, size - dy)
            dists.append(dx * dx + dy * dy)
        dists = np.stack(dists)

        order = np.argsort(dists, axis=0)
        nearest = order[0]
        shifts = np.array([s for _, _, s in centers])[nearest]

        noise = np.array([[rng.randint(-10, 10) for _ in range(size)] for _ in range(size)])
        pixels = np.empty((size, size, 3), dtype=np.int32)
        for ch in range(3):
            pixels[:, :, ch] = base_color[ch] + shifts + noise

        # Darken pixels near the boundary between two stones
        sorted_d = np.sort(dists, axis=0)
        cracks = (sorted_d[1] - sorted_d[0]) < 50
        pixels[cracks] -= 40

        return self._surface_from_rows(pixels)

    def _generate_brick(self, base_color=(140, 80, 60)):
        """Offset brick rows over mortar"""
        size = self.texture_size
        surface = pygame.Surface((size, size))
        surface.fill((60, 55, 50))

        brick_w = size // 4
        brick_h = size // 8
        mortar_gap = 2
        rng = random.Random(self._seed + 1)

        for row in range(size // brick_h + 1):
            # Offset every other row
            offset = (brick_w // 2) if row % 2 == 1 else 0

            for col in range(-1, size // brick_w + 2):
                x = col * brick_w + offset
                y = row * brick_h
                if x + brick_w < 0 or x >= size or y >= size:
                    continue

                r = max(0, min(255, base_color[0] + rng.randint(-20, 20)))
                g = max(0, min(255, base_color[1] + rng.randint(-15, 15)))
                b = max(0, min(255, base_color[2] + rng.randint(-15, 15)))

                rect = pygame.Rect(
                    x + mortar_gap // 2,
                    y + mortar_gap // 2,
                    brick_w - mortar_gap,
                    brick_h - mortar_gap
                ).clip(pygame.Rect(0, 0, size, size))
                if rect.width > 0 and rect.height > 0:
                    pygame.draw.rect(surface, (r, g, b), rect)

        return surface

    def _generate_mossy(self):
        """Stone with green moss patches"""
        stone = pygame.surfarray.array3d(self._generate_stone((95, 100, 90))).astype(np.int32)
        size = self.texture_size
        rng = random.Random(self._seed + 2)

        xs, ys = np.mgrid[0:size, 0:size]
        moss = np.zeros((size, size), dtype=bool)
        for _ in range(6):
            cx = rng.randint(0, size - 1)
            cy = rng.randint(0, size - 1)
            radius = rng.randint(size // 10, size // 4)
            dx = np.abs(xs - cx)
            dx = np.minimum(dx, size - dx)
            dy = np.abs(ys - cy)
            dy = np.minimum(dy, size - dy)
            moss |= dx * dx + dy * dy <= radius * radius

        stone[moss, 0] = stone[moss, 0] // 2
        stone[moss, 1] = np.minimum(255, stone[moss, 1] + 50)
        stone[moss, 2] = stone[moss, 2] // 2

        surface = pygame.Surface((size, size))
        pygame.surfarray.blit_array(surface, np.clip(stone, 0, 255).astype(np.uint8))
        return surface

    def _generate_solid(self, color):
        """Generate solid color texture"""
        surface = pygame.Surface((self.texture_size, self.texture_size))
        surface.fill(color)
        return surface

    def _surface_from_rows(self, pixels):
        """Surface from an int array indexed [y, x, channel]"""
        surface = pygame.Surface((self.texture_size, self.texture_size))
        data = np.clip(pixels, 0, 255).astype(np.uint8).transpose(1, 0, 2)
        pygame.surfarray.blit_array(surface, data)
        return surface
