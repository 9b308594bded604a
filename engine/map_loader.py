"""
Map Loader - reads grid maps from JSON files

File layout:
    {
        "name": "arena",
        "width": 8,
        "height": 8,
        "cells": [1, 1, 1, ...],
        "start": {"x": 0.1, "y": 0.2, "dir": 1.0}
    }
"name" and "start" are optional.
"""

import json
import logging
from pathlib import Path

from .errors import MapError
from .grid_map import GridMap
from .movement import Pose

logger = logging.getLogger(__name__)


def parse_map(data, default_name="map"):
    """
    Build a map from decoded JSON

    Args:
        data: dict as described in the module docstring
        default_name: Name used when the data has none

    Returns:
        (GridMap, Pose or None, name)
    """
    if not isinstance(data, dict):
        raise MapError("Map file must contain a JSON object")

    for key in ('width', 'height', 'cells'):
        if key not in data:
            raise MapError(f"Map is missing '{key}'")

    width, height, cells = data['width'], data['height'], data['cells']
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (width, height)):
        raise MapError("Map 'width' and 'height' must be integers")
    if not isinstance(cells, list) or \
            not all(isinstance(c, int) and not isinstance(c, bool) for c in cells):
        raise MapError("Map 'cells' must be a list of integers")

    grid = GridMap(width, height, cells)

    start = None
    if data.get('start') is not None:
        s = data['start']
        try:
            start = Pose(float(s['x']), float(s['y']), float(s.get('dir', 0.0)))
        except (KeyError, TypeError, ValueError) as e:
            raise MapError(f"Invalid start pose: {e}") from e

    name = str(data.get('name', default_name))
    return grid, start, name


def load_map(path):
    """
    Load a map file

    Args:
        path: Path to a JSON map file

    Returns:
        (GridMap, Pose or None, name)

    Raises:
        MapError: if the file cannot be read or is malformed
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except OSError as e:
        raise MapError(f"Cannot read map file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise MapError(f"Map file {path} is not valid JSON: {e}") from e

    grid, start, name = parse_map(data, default_name=path.stem)
    logger.info("Loaded map '%s' (%dx%d) from %s", name, grid.width, grid.height, path)
    return grid, start, name


def save_map(path, grid, start=None, name=None):
    """Write a map file readable by load_map"""
    path = Path(path)
    data = {
        'name': name or path.stem,
        'width': grid.width,
        'height': grid.height,
        'cells': grid.to_flat(),
    }
    if start is not None:
        data['start'] = {'x': start.x, 'y': start.y, 'dir': start.dir}

    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
