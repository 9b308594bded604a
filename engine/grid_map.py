"""
Grid Map - immutable tile grid in normalized world space

World space is [-1, 1] x [-1, 1]. Cell (col, row) covers
[-1 + col*2/width, -1 + (col+1)*2/width] horizontally and
[-1 + row*2/height, -1 + (row+1)*2/height] vertically.
Cell code 0 is open space, 1 a plain wall, 2 and up special walls.
"""

import logging
import math

import numpy as np
from numba import njit

from utils.constants import CELL_OPEN, MAX_CELL_CODE
from .errors import MapError

logger = logging.getLogger(__name__)


@njit(cache=True)
def _numba_at_wall(cells, x, y, horz):
    """
    Strongest cell code on either side of a grid-line crossing (Numba JIT)

    Args:
        cells: 2D int32 array indexed [row, col]
        x, y: World-space point lying on a grid line
        horz: True for a horizontal grid line, False for a vertical one

    Returns:
        max of the two adjacent cell codes, 0 when outside the grid
    """
    height = cells.shape[0]
    width = cells.shape[1]

    gx = (x + 1.0) * width / 2.0
    gy = (y + 1.0) * height / 2.0
    col = int(math.floor(gx))
    row = int(math.floor(gy))

    # Round along the crossing axis to cancel floating point drift
    if horz:
        row = int(math.floor(gy + 0.5))
    else:
        col = int(math.floor(gx + 0.5))

    if col < 0 or col >= width or row < 0 or row >= height:
        return 0

    v1 = cells[row, col]
    if horz:
        if row != 0:
            v2 = cells[row - 1, col]
        else:
            v2 = v1
    else:
        if col != 0:
            v2 = cells[row, col - 1]
        else:
            v2 = v1

    # Special walls win over plain walls, plain walls over open space.
    if v1 > v2:
        return int(v1)
    return int(v2)


class GridMap:
    """
    Read-only tile grid shared by the raycaster and the projector
    """

    def __init__(self, width, height, codes):
        """
        Args:
            width, height: Grid dimensions in cells
            codes: Flat row-major sequence of width * height cell codes

        Raises:
            MapError: if the dimensions or codes are invalid
        """
        if int(width) != width or int(height) != height or width < 1 or height < 1:
            raise MapError(f"Map dimensions must be positive integers, got {width}x{height}")

        width = int(width)
        height = int(height)
        try:
            flat = np.asarray(list(codes), dtype=np.int64)
        except (TypeError, ValueError) as e:
            raise MapError(f"Map cells must be integers: {e}") from e

        if flat.ndim != 1 or flat.shape[0] != width * height:
            raise MapError(
                f"Map {width}x{height} needs {width * height} cells, got {flat.size}"
            )
        if flat.size and (flat.min() < CELL_OPEN or flat.max() > MAX_CELL_CODE):
            raise MapError(f"Cell codes must be in 0..{MAX_CELL_CODE}")

        cells = flat.astype(np.int32).reshape((height, width))
        cells.flags.writeable = False

        self.width = width
        self.height = height
        self.cells = cells

        # Size of one cell in world units
        self.cell_width = 2.0 / width
        self.cell_height = 2.0 / height

        if not self.is_closed():
            logger.warning("Map %dx%d has open border cells; rays may leave the world",
                           width, height)

    @classmethod
    def from_flat(cls, width, height, codes):
        """Build from a flat row-major code list"""
        return cls(width, height, codes)

    @classmethod
    def from_rows(cls, rows):
        """
        Build from a list of rows (row 0 first)

        Args:
            rows: Sequence of equal-length sequences of cell codes
        """
        rows = [list(r) for r in rows]
        if not rows or not rows[0]:
            raise MapError("Map needs at least one row and one column")
        width = len(rows[0])
        for i, r in enumerate(rows):
            if len(r) != width:
                raise MapError(f"Row {i} has {len(r)} cells, expected {width}")
        return cls(width, len(rows), [c for r in rows for c in r])

    def at_wall(self, x, y, horz):
        """
        Cell code at a grid-line crossing.

        Args:
            x, y: World-space point on a grid line
            horz: True when the crossing is on a horizontal grid line

        Returns:
            The larger code of the two cells sharing that line, 0 off-grid
        """
        return _numba_at_wall(self.cells, float(x), float(y), bool(horz))

    def cell_index(self, x, y):
        """(col, row) containing a world-space point"""
        col = int(math.floor((x + 1.0) * self.width / 2.0))
        row = int(math.floor((y + 1.0) * self.height / 2.0))
        return col, row

    def in_grid(self, col, row):
        return 0 <= col < self.width and 0 <= row < self.height

    def cell(self, col, row):
        """Code of cell (col, row), open when outside the grid"""
        if not self.in_grid(col, row):
            return CELL_OPEN
        return int(self.cells[row, col])

    def cell_at(self, x, y):
        """Code of the cell containing a world-space point"""
        return self.cell(*self.cell_index(x, y))

    def cell_bounds(self, col, row):
        """
        World-space rectangle of a cell

        Returns:
            (x0, y0, x1, y1)
        """
        x0 = -1.0 + col * self.cell_width
        y0 = -1.0 + row * self.cell_height
        return x0, y0, x0 + self.cell_width, y0 + self.cell_height

    def is_closed(self):
        """True when every border cell is a wall"""
        cells = self.cells
        return bool(
            np.all(cells[0, :] != CELL_OPEN) and np.all(cells[-1, :] != CELL_OPEN)
            and np.all(cells[:, 0] != CELL_OPEN) and np.all(cells[:, -1] != CELL_OPEN)
        )

    def wall_cells(self):
        """Yield (col, row, code) for every non-open cell"""
        rows, cols = np.nonzero(self.cells)
        for row, col in zip(rows.tolist(), cols.tolist()):
            yield col, row, int(self.cells[row, col])

    def to_flat(self):
        """Row-major list of cell codes"""
        return self.cells.ravel().tolist()

    def __eq__(self, other):
        if not isinstance(other, GridMap):
            return NotImplemented
        return self.width == other.width and self.height == other.height and \
            np.array_equal(self.cells, other.cells)

    def __hash__(self):
        return hash((self.width, self.height, self.cells.tobytes()))

    def __repr__(self):
        return f"GridMap({self.width}x{self.height}, walls={int(np.count_nonzero(self.cells))})"
