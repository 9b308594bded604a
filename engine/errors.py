"""
Exceptions raised while setting up the arena.

The per-frame core never raises: missing walls, degenerate rays and
blocked moves are all reported as plain values. These errors only come
out of map loading, configuration and renderer startup.
"""


class ArenaError(Exception):
    """Base class for all Raycast Arena errors"""


class MapError(ArenaError):
    """Grid map is malformed or could not be read"""


class ConfigError(ArenaError):
    """Invalid game configuration"""


class RendererError(ArenaError):
    """Window, display or texture setup failed"""
