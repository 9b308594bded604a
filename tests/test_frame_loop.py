"""Tests for the frame loop, key mapping and both views (headless)."""

import math
from collections import defaultdict

import pygame
import pytest

from config import GameConfig
from engine.movement import Intent, Pose
from engine.projector import Projector, TextureStyle
from engine.raycaster import GridRaycaster
from game.frame_loop import FrameLoop
from game.input_state import intent_from_pressed
from renderer3d import Renderer3D, TextureManager, TopDownView
from utils.colors import (
    COLOR_CEILING, COLOR_FLOOR, COLOR_PLAYER, COLOR_WALL_PRIMARY, WALL_COLORS,
)
from utils.constants import MODE_2D
from utils.helpers import world_to_screen

from conftest import closed_map


@pytest.fixture(autouse=True)
def pygame_headless():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def arena_config():
    return GameConfig(
        name="test",
        grid=closed_map(8, 8),
        start=Pose(0.0, 0.0, 0.0),
        rays=60,
        fov=1.0,
        move_speed=0.5,
        use_colors=True,
    )


def rgb(surface, x, y):
    return tuple(surface.get_at((x, y)))[:3]


def pressed(*keys):
    state = defaultdict(bool)
    for key in keys:
        state[key] = True
    return state


def test_no_keys_is_idle():
    assert intent_from_pressed(pressed()).idle


def test_key_mapping():
    intent = intent_from_pressed(pressed(pygame.K_w, pygame.K_d, pygame.K_LEFT))
    assert intent == Intent(forward=1, strafe=1, turn=1)

    intent = intent_from_pressed(pressed(pygame.K_s, pygame.K_a, pygame.K_RIGHT))
    assert intent == Intent(forward=-1, strafe=-1, turn=-1)


def test_opposite_keys_cancel():
    intent = intent_from_pressed(pressed(pygame.K_w, pygame.K_s, pygame.K_LEFT, pygame.K_RIGHT))
    assert intent.idle


def test_step_moves_and_casts(arena_config):
    loop = FrameLoop(arena_config)
    hits, columns = loop.step(Intent(forward=1), 0.1)

    assert loop.pose.x == pytest.approx(0.05)
    assert loop.ticks == 1
    assert len(hits) == 60
    assert len(columns) == 60
    assert all(h.hit for h in hits)


def test_step_against_wall_keeps_position(arena_config):
    loop = FrameLoop(arena_config)
    loop.pose = Pose(0.74, 0.1, 0.0)
    loop.step(Intent(forward=1), 0.1)
    assert loop.pose.x == 0.74


def test_run_renders_a_frame(arena_config, monkeypatch):
    loop = FrameLoop(arena_config, window_size=(64, 48))
    frames = []
    draw = loop.render

    def render_once(hits, columns):
        draw(hits, columns)
        frames.append(len(columns))
        loop.running = False

    monkeypatch.setattr(loop, "render", render_once)
    loop.run()
    assert frames == [60]
    assert loop.ticks == 1


def test_renderer_draws_wall_and_background(arena_config):
    screen = pygame.Surface((60, 40))
    projector = Projector(arena_config.grid, 60, 1.0, arena_config.wall_styles())
    pose = arena_config.start
    hits = GridRaycaster(arena_config.grid).ray_cast(pose, 60, 1.0)

    renderer = Renderer3D(60, 40)
    renderer.render(screen, projector.project_all(hits, pose))

    # East wall at distance 0.75: slice spans rows 13..26
    assert rgb(screen, 30, 20) == COLOR_WALL_PRIMARY
    assert rgb(screen, 30, 2) == COLOR_CEILING
    assert rgb(screen, 30, 38) == COLOR_FLOOR


def test_renderer_without_walls():
    screen = pygame.Surface((32, 24))
    Renderer3D(32, 24).render(screen, [])
    assert rgb(screen, 0, 0) == COLOR_CEILING
    assert rgb(screen, 31, 23) == COLOR_FLOOR


def test_renderer_textured(arena_config):
    pose = arena_config.start
    grid = arena_config.grid
    styles = {1: TextureStyle('stone')}
    projector = Projector(grid, 60, 1.0, styles)
    hits = GridRaycaster(grid).ray_cast(pose, 60, 1.0)

    screen = pygame.Surface((60, 40))
    Renderer3D(60, 40).render(screen, projector.project_all(hits, pose))
    assert rgb(screen, 30, 20) not in (COLOR_CEILING, COLOR_FLOOR)


def test_renderer_ndc_to_pixels():
    renderer = Renderer3D(100, 50)
    assert renderer.ndc_to_pixels(-1.0, 1.0, 1.0) == (0, 100, 0, 50)
    assert renderer.ndc_to_pixels(0.0, 0.5, 0.5) == (50, 75, 12, 37)


def test_topdown_view(arena_config):
    screen = pygame.Surface((400, 400))
    pose = Pose(0.0, 0.0, 0.0)
    hits = GridRaycaster(arena_config.grid).ray_cast(pose, 60, 1.0)
    TopDownView().render(screen, arena_config.grid, pose, hits, arena_config.wall_styles())

    cx, cy = world_to_screen(pose.x, pose.y, 400, 400)
    assert rgb(screen, cx - 3, cy + 3) == COLOR_PLAYER
    # Corner cell is a border wall
    assert rgb(screen, 10, 10) == WALL_COLORS[1]


def test_textures_are_reproducible():
    a = TextureManager(texture_size=16, seed=7)
    b = TextureManager(texture_size=16, seed=7)
    for name in TextureManager.GENERATORS:
        assert (a.get_array(name) == b.get_array(name)).all()


def test_texture_atlas():
    manager = TextureManager(texture_size=16)
    atlas, index = manager.build_atlas(['brick', 'stone', 'brick'])
    assert atlas.shape == (2, 16, 16, 3)
    assert index == {'brick': 0, 'stone': 1}
    assert (atlas[0] == manager.get_array('brick')).all()


def test_unknown_texture_is_black():
    array = TextureManager(texture_size=8).get_array('nope')
    assert not array.any()


def test_topdown_mode_constructs(arena_config):
    loop = FrameLoop(arena_config, mode=MODE_2D)
    assert loop.mode == MODE_2D
    assert math.isclose(loop.projector.k, 0.25)
