"""
Frame Loop - timing, input and view dispatch around the raycast engine
"""

import logging
import time

import pygame

from config import GAME_TITLE, GAME_VERSION
from engine.errors import RendererError
from engine.movement import MovementController
from engine.projector import Projector
from engine.raycaster import GridRaycaster
from renderer3d import Renderer3D, TextureManager, TopDownView
from utils.constants import FPS, MODE_2D, MODE_3D, WINDOW_WIDTH, WINDOW_HEIGHT
from .input_state import intent_from_pressed

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Runs the game: one pose update, one ray fan and one draw per tick
    """

    def __init__(self, config, mode=MODE_3D, window_size=(WINDOW_WIDTH, WINDOW_HEIGHT)):
        """
        Args:
            config: GameConfig
            mode: MODE_3D (first-person) or MODE_2D (top-down debug view)
            window_size: (width, height) in pixels
        """
        self.config = config
        self.mode = mode
        self.window_size = window_size

        self.raycaster = GridRaycaster(config.grid)
        self.movement = MovementController(
            self.raycaster, config.move_speed, config.look_speed, config.min_clearance
        )
        self.wall_styles = config.wall_styles()
        self.projector = Projector(config.grid, config.rays, config.fov, self.wall_styles)

        self.pose = config.start
        self.ticks = 0

        # pygame state, created by open()
        self.screen = None
        self.clock = None
        self.renderer_3d = None
        self.topdown = None
        self.running = False

    def step(self, intent, frame_time):
        """
        Advance one tick without touching the window

        Args:
            intent: Intent snapshot for this tick
            frame_time: Elapsed seconds since the previous tick

        Returns:
            (hits, columns) for the new pose
        """
        self.pose = self.movement.update(self.pose, intent, frame_time)
        hits = self.raycaster.ray_cast(self.pose, self.config.rays, self.config.fov)
        columns = self.projector.project_all(hits, self.pose)
        self.ticks += 1
        return hits, columns

    def open(self):
        """
        Create the window and renderers

        Raises:
            RendererError: if pygame cannot set up the display or textures
        """
        try:
            pygame.init()
            self.screen = pygame.display.set_mode(self.window_size)
            pygame.display.set_caption(f"{GAME_TITLE} v{GAME_VERSION}")
            textures = TextureManager()
            if self.mode == MODE_2D:
                self.topdown = TopDownView(textures)
            else:
                self.renderer_3d = Renderer3D(*self.window_size, texture_manager=textures)
        except pygame.error as e:
            logger.error("Display setup failed: %s", e)
            pygame.quit()
            raise RendererError(f"Display setup failed: {e}") from e

        self.clock = pygame.time.Clock()
        logger.info("Opened %dx%d window in %s mode, map '%s' (%dx%d), %d rays",
                    self.window_size[0], self.window_size[1], self.mode.upper(),
                    self.config.name, self.config.grid.width, self.config.grid.height,
                    self.config.rays)

    def close(self):
        logger.info("Closing after %d ticks at %r", self.ticks, self.pose)
        pygame.quit()

    def handle_events(self):
        """Stop on window close or Escape"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False

    def render(self, hits, columns):
        if self.mode == MODE_2D:
            self.topdown.render(self.screen, self.config.grid, self.pose, hits, self.wall_styles)
        else:
            self.renderer_3d.render(self.screen, columns)
        pygame.display.flip()

    def run(self):
        """Main game loop, returns when the window is closed"""
        self.open()
        self.running = True
        last = time.perf_counter()

        try:
            while self.running:
                self.clock.tick(FPS)
                now = time.perf_counter()
                frame_time = now - last
                last = now

                self.handle_events()
                if not self.running:
                    break

                intent = intent_from_pressed(pygame.key.get_pressed())
                hits, columns = self.step(intent, frame_time)
                self.render(hits, columns)
        finally:
            self.close()
