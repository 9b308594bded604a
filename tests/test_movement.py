"""Tests for pose integration and wall sliding."""

import math

import pytest

from engine.movement import IDLE, Intent, MovementController, Pose
from engine.raycaster import GridRaycaster

from conftest import closed_map

MOVE_SPEED = 0.5
LOOK_SPEED = 2.0


@pytest.fixture
def controller(empty_arena):
    return MovementController(GridRaycaster(empty_arena), MOVE_SPEED, LOOK_SPEED)


def test_default_clearance_is_fraction_of_cell(controller):
    assert controller.min_clearance == pytest.approx(0.2 / 8)


def test_forward_in_open_space(controller):
    pose = Pose(0.0, 0.1, math.pi / 3)
    new = controller.update(pose, Intent(forward=1), 0.1)
    assert new.x == pytest.approx(0.05 * math.cos(math.pi / 3))
    assert new.y == pytest.approx(0.1 + 0.05 * math.sin(math.pi / 3))
    assert new.dir == pose.dir


def test_backward_and_strafe(controller):
    pose = Pose(0.1, 0.1, 0.0)
    back = controller.update(pose, Intent(forward=-1), 0.1)
    assert back.x == pytest.approx(0.05)
    assert back.y == pytest.approx(0.1)

    right = controller.update(pose, Intent(strafe=1), 0.1)
    assert right.x == pytest.approx(0.1)
    assert right.y == pytest.approx(0.05)

    left = controller.update(pose, Intent(strafe=-1), 0.1)
    assert left.y == pytest.approx(0.15)


def test_blocked_axis_does_not_move(controller):
    limit = controller.min_clearance
    # East wall starts at x = 0.75
    pose = Pose(0.75 - 0.9 * limit, 0.1, 0.0)
    new = controller.update(pose, Intent(forward=1), 0.016)
    assert new.x == pose.x
    assert new.y == pose.y


def test_slides_along_wall(controller):
    limit = controller.min_clearance
    pose = Pose(0.75 - 0.5 * limit, 0.1, math.pi / 4)
    new = controller.update(pose, Intent(forward=1), 0.1)

    assert new.x == pose.x
    assert new.y == pytest.approx(0.1 + 0.05 * math.sin(math.pi / 4))


def test_corner_blocks_both_axes(controller):
    limit = controller.min_clearance
    pose = Pose(0.75 - 0.5 * limit, 0.75 - 0.5 * limit, math.pi / 4)
    new = controller.update(pose, Intent(forward=1), 0.1)
    assert (new.x, new.y) == (pose.x, pose.y)


def test_can_back_away_from_wall(controller):
    limit = controller.min_clearance
    pose = Pose(0.75 - 0.5 * limit, 0.1, 0.0)
    new = controller.update(pose, Intent(forward=-1), 0.1)
    assert new.x == pytest.approx(pose.x - 0.05)


def test_turning(controller):
    pose = Pose(0.0, 0.0, 1.0)
    left = controller.update(pose, Intent(turn=1), 0.25)
    right = controller.update(pose, Intent(turn=-1), 0.25)
    assert left.dir == pytest.approx(1.5)
    assert right.dir == pytest.approx(0.5)
    assert (left.x, left.y) == (pose.x, pose.y)


def test_turning_is_not_blocked_by_walls(controller):
    limit = controller.min_clearance
    pose = Pose(0.75 - 0.5 * limit, 0.1, 0.0)
    new = controller.update(pose, Intent(forward=1, turn=1), 0.1)
    assert new.x == pose.x
    assert new.dir == pytest.approx(0.2)


def test_idle_keeps_pose(controller):
    pose = Pose(0.2, -0.3, 2.0)
    assert IDLE.idle
    assert controller.update(pose, IDLE, 0.5) == pose


def test_movement_scales_with_frame_time(controller):
    pose = Pose(0.0, 0.0, 0.4)
    intent = Intent(forward=1, strafe=1)
    once = controller.update(pose, intent, 0.1)
    twice = controller.update(controller.update(pose, intent, 0.05), intent, 0.05)
    assert once.x == pytest.approx(twice.x)
    assert once.y == pytest.approx(twice.y)


def test_custom_clearance(empty_arena):
    controller = MovementController(GridRaycaster(empty_arena), MOVE_SPEED, LOOK_SPEED,
                                    min_clearance=0.2)
    pose = Pose(0.6, 0.0, 0.0)
    assert controller.update(pose, Intent(forward=1), 0.1).x == pose.x


@pytest.mark.parametrize("size", [8, 10, 12])
@pytest.mark.parametrize("side", ["east", "north", "west", "south"])
def test_exactly_at_clearance_limit_is_blocked(size, side):
    grid = closed_map(size, size)
    controller = MovementController(GridRaycaster(grid), MOVE_SPEED, LOOK_SPEED)
    limit = controller.min_clearance
    # Inner face of the border walls
    wall = 1.0 - 2.0 / size

    pose = {
        "east": Pose(wall - limit, 0.01, 0.0),
        "north": Pose(0.01, wall - limit, math.pi / 2),
        "west": Pose(-wall + limit, 0.01, math.pi),
        "south": Pose(0.01, -wall + limit, -math.pi / 2),
    }[side]
    new = controller.update(pose, Intent(forward=1), 0.016)

    if side in ("east", "west"):
        assert new.x == pose.x
    else:
        assert new.y == pose.y
