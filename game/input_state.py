"""
Input State - turns held keys into a movement Intent
"""

import pygame

from engine.movement import Intent

# Key bindings
KEYS_FORWARD = (pygame.K_w,)
KEYS_BACKWARD = (pygame.K_s,)
KEYS_STRAFE_LEFT = (pygame.K_a,)
KEYS_STRAFE_RIGHT = (pygame.K_d,)
KEYS_TURN_LEFT = (pygame.K_LEFT,)
KEYS_TURN_RIGHT = (pygame.K_RIGHT,)


def _held(pressed, keys):
    return any(pressed[k] for k in keys)


def _axis(pressed, positive, negative):
    """+1, -1 or 0; opposite keys cancel out"""
    return float(_held(pressed, positive)) - float(_held(pressed, negative))


def intent_from_pressed(pressed):
    """
    Snapshot the held keys

    Args:
        pressed: Result of pygame.key.get_pressed(), or any mapping of
            key constant -> bool

    Returns:
        Intent
    """
    return Intent(
        forward=_axis(pressed, KEYS_FORWARD, KEYS_BACKWARD),
        strafe=_axis(pressed, KEYS_STRAFE_RIGHT, KEYS_STRAFE_LEFT),
        turn=_axis(pressed, KEYS_TURN_LEFT, KEYS_TURN_RIGHT),
    )
