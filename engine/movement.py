"""
Movement - first-person pose integration with wall sliding
"""

import math
from dataclasses import dataclass

from utils.constants import CLEARANCE_FRACTION


def _clear(clearance, limit):
    """True when the clearance is above the limit by more than float noise"""
    return clearance > limit and not math.isclose(clearance, limit, rel_tol=1e-9, abs_tol=1e-12)


@dataclass(frozen=True)
class Pose:
    """
    Viewer position and heading

    x, y: World-space position in [-1, 1]
    dir: Heading in radians (0 = +x axis, counter-clockwise positive)
    """
    x: float
    y: float
    dir: float

    @property
    def position(self):
        return self.x, self.y

    def direction_vector(self):
        """Unit vector along the heading"""
        return math.cos(self.dir), math.sin(self.dir)

    def __repr__(self):
        return f"Pose(pos=({self.x:.3f}, {self.y:.3f}), dir={math.degrees(self.dir):.1f}°)"


@dataclass(frozen=True)
class Intent:
    """
    Input snapshot for one tick

    forward: +1 forward, -1 backward
    strafe: +1 right, -1 left
    turn: +1 counter-clockwise (left), -1 clockwise (right)
    """
    forward: float = 0.0
    strafe: float = 0.0
    turn: float = 0.0

    @property
    def idle(self):
        return self.forward == 0 and self.strafe == 0 and self.turn == 0


IDLE = Intent()


class MovementController:
    """
    Integrates the pose from an input intent.

    Before moving, four rays are cast along the world axes. Each axis of the
    displacement is applied only if the clearance in that direction is above
    min_clearance, so a diagonal move into a wall slides along it.
    """

    def __init__(self, raycaster, move_speed, look_speed, min_clearance=None):
        """
        Args:
            raycaster: GridRaycaster used for the clearance rays
            move_speed: World units per second
            look_speed: Radians per second
            min_clearance: Smallest allowed wall clearance, defaults to
                a fifth of one cell height
        """
        self.raycaster = raycaster
        self.move_speed = move_speed
        self.look_speed = look_speed
        if min_clearance is None:
            min_clearance = CLEARANCE_FRACTION / raycaster.grid.height
        self.min_clearance = min_clearance

    def displacement(self, pose, intent, frame_time):
        """
        Intended (dx, dy) before collision checks

        Forward follows (cos dir, sin dir); strafing right follows
        (sin dir, -cos dir).
        """
        step = self.move_speed * frame_time
        cos_a = math.cos(pose.dir)
        sin_a = math.sin(pose.dir)

        dx = step * (intent.forward * cos_a + intent.strafe * sin_a)
        dy = step * (intent.forward * sin_a - intent.strafe * cos_a)
        return dx, dy

    def clearances(self, pose):
        """(east, north, west, south) wall clearances from the pose"""
        return self.raycaster.clearances(pose.x, pose.y)

    def update(self, pose, intent, frame_time):
        """
        Move and turn for one tick

        Args:
            pose: Current Pose
            intent: Intent snapshot
            frame_time: Elapsed seconds since the previous tick

        Returns:
            New Pose
        """
        x, y = pose.x, pose.y
        dx, dy = self.displacement(pose, intent, frame_time)

        if dx != 0.0 or dy != 0.0:
            east, north, west, south = self.clearances(pose)
            limit = self.min_clearance

            if (dx > 0.0 and _clear(east, limit)) or (dx < 0.0 and _clear(west, limit)):
                x += dx
            if (dy > 0.0 and _clear(north, limit)) or (dy < 0.0 and _clear(south, limit)):
                y += dy

        heading = pose.dir + intent.turn * self.look_speed * frame_time
        return Pose(x, y, heading)
