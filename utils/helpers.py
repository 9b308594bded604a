"""
Helper utility functions for Raycast Arena
"""


def clamp(value, min_value, max_value):
    """Clamp a value between min and max"""
    return max(min_value, min(value, max_value))


def scale_color(color, factor):
    """Scale an RGB color by factor, clamped to 0-255"""
    return tuple(int(clamp(c * factor, 0, 255)) for c in color)


def world_to_screen(x, y, screen_w, screen_h):
    """
    Map a world-space point in [-1, 1] x [-1, 1] to pixel coordinates.
    World +y points up, screen +y points down.
    """
    sx = (x + 1.0) / 2.0 * screen_w
    sy = (1.0 - y) / 2.0 * screen_h
    return int(sx), int(sy)
