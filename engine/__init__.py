"""
Raycast Engine - grid-DDA raycasting, projection and movement
"""

from .errors import ArenaError, MapError, ConfigError, RendererError
from .grid_map import GridMap
from .raycaster import GridRaycaster, RayHit
from .projector import Projector, ColumnDescriptor, ColorStyle, TextureStyle
from .movement import Pose, Intent, MovementController
from .map_loader import load_map, parse_map, save_map

__all__ = ['ArenaError', 'MapError', 'ConfigError', 'RendererError',
           'GridMap', 'GridRaycaster', 'RayHit',
           'Projector', 'ColumnDescriptor', 'ColorStyle', 'TextureStyle',
           'Pose', 'Intent', 'MovementController',
           'load_map', 'parse_map', 'save_map']
