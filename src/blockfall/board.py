"""Board representation for the playfield."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from .piece import Piece


# Default dimensions of the playfield.
WIDTH = 10
HEIGHT = 20

EMPTY = 0

Grid = NDArray[np.uint8]

LOGGER = logging.getLogger(__name__)


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Settled cells of the playfield.

    The grid is indexed ``[row, col]`` with row ``0`` at the top.  Its
    dimensions are fixed for the lifetime of the board; only cell contents
    change.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Board dimensions must be positive")
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_occupied(self, x: int, y: int) -> int:
        """Return the value at column ``x``, row ``y`` (``0`` when empty)."""

        return self.get_cell(y, x)

    def place(self, piece: "Piece") -> None:
        """Write the piece's identity into every cell it covers.

        No legality check is made; callers validate with ``Piece.fits_at``
        first.  Cells above the top row cannot be stored and are skipped.

        Raises:
            IndexError: If a block lies beside or below the board.
        """

        value = np.uint8(piece.identity)
        for cell in piece.cells():
            if cell.y < 0:
                continue
            if not (0 <= cell.x < self.width and cell.y < self.height):
                raise IndexError("Block out of bounds")
            self.grid[cell.y, cell.x] = value

    def full_rows(self) -> List[int]:
        """Return the indices of every completely filled row."""

        return [int(r) for r in np.flatnonzero(np.all(self.grid != EMPTY, axis=1))]

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Full rows are found against the grid as it is before any removal, then
        dropped together; the rows above fall by the number of cleared rows
        beneath them and empty rows are added at the top.
        """

        full_rows = self.full_rows()
        cleared = len(full_rows)
        if cleared:
            remaining = np.delete(self.grid, full_rows, axis=0)
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
            LOGGER.debug("Cleared rows %s", full_rows)
        return cleared

    def rows(self) -> List[List[int]]:
        """Return a copy of the grid as nested lists."""

        return self.grid.tolist()

    def reset(self) -> None:
        """Empty every cell."""

        self.grid = create_empty_grid(self.width, self.height)


__all__ = ["Board", "EMPTY", "HEIGHT", "WIDTH", "create_empty_grid"]
