"""The falling piece and its movement rules."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Tuple

from .board import Board
from .errors import ContractViolation
from .geometry import ORIGIN, Point, rotate, to_cell
from .tetromino import Shape, TetrominoType

LOGGER = logging.getLogger(__name__)

# Largest displacement, per axis, tried when a rotation collides.
MAX_KICK = 3


def build_kick_offsets(max_kick: int = MAX_KICK) -> Tuple[Tuple[int, int], ...]:
    """Return every ``(dx, dy)`` within ``max_kick`` ordered by distance.

    Candidates are scanned row by row (``dy`` outer, ``dx`` inner) and then
    stably sorted by squared magnitude, so ``(0, 0)`` comes first and ties keep
    the scan order.
    """

    span = range(-max_kick, max_kick + 1)
    candidates = [(dx, dy) for dy in span for dx in span]
    return tuple(sorted(candidates, key=lambda d: d[0] * d[0] + d[1] * d[1]))


KICK_OFFSETS = build_kick_offsets()


class DropResult(Enum):
    """Outcome of a single gravity step."""

    MOVED = "moved"
    LOCKED = "locked"


class Piece:
    """One tetromino in play on a :class:`Board`.

    ``blocks`` are offsets from ``position``, the grid coordinates of the
    piece's local origin.  The piece owns its own copy of the catalog blocks
    so rotating it never touches the shared :class:`Shape`.
    """

    def __init__(self, shape: Shape, board: Board, position: Point = ORIGIN) -> None:
        self.kind: TetrominoType = shape.kind
        self.identity: int = shape.identity
        self.blocks: List[Point] = list(shape.blocks)
        self.centroid: Point = shape.centroid
        self.position: Point = Point(int(position.x), int(position.y))
        self.board = board

    def clone(self) -> "Piece":
        other = Piece.__new__(Piece)
        other.kind = self.kind
        other.identity = self.identity
        other.blocks = list(self.blocks)
        other.centroid = self.centroid
        other.position = self.position
        other.board = self.board
        return other

    # Queries ----------------------------------------------------------
    def cells(self) -> List[Point]:
        """Return the absolute grid cells covered by the piece."""

        return [block + self.position for block in self.blocks]

    def fits_at(self, x: int, y: int) -> bool:
        """Return ``True`` if the piece could sit with its origin at ``(x, y)``.

        Every block must lie within the board's columns and above its floor,
        and must not overlap a settled cell.  Rows above the board are always
        passable so pieces can spawn and rotate partly out of view.
        """

        board = self.board
        for block in self.blocks:
            col = block.x + x
            row = block.y + y
            if col < 0 or col >= board.width or row >= board.height:
                return False
            if row < 0:
                continue
            if board.is_occupied(col, row):
                return False
        return True

    def ghost_y(self) -> int:
        """Return the lowest origin row reachable by dropping straight down."""

        x, y = self.position
        while self.fits_at(x, y + 1):
            y += 1
        return y

    def ghost_cells(self) -> List[Point]:
        """Return the cells the piece would cover after a hard drop."""

        offset = Point(self.position.x, self.ghost_y())
        return [block + offset for block in self.blocks]

    def above_grid(self) -> bool:
        """Return ``True`` if any block is above the top row."""

        return any(cell.y < 0 for cell in self.cells())

    # Movement ---------------------------------------------------------
    def move_down(self) -> DropResult:
        """Fall one row, or lock into the board if the row below is blocked."""

        x, y = self.position
        if self.fits_at(x, y + 1):
            self.position = Point(x, y + 1)
            return DropResult.MOVED
        self.board.place(self)
        LOGGER.debug("Locked %s at %s", self.kind.value, tuple(self.position))
        return DropResult.LOCKED

    def move_horiz(self, dx: int) -> bool:
        """Shift sideways by ``dx`` columns if the destination fits.

        Raises:
            ContractViolation: If ``dx`` is not an integer.
        """

        if isinstance(dx, bool) or not isinstance(dx, int):
            raise ContractViolation(f"dx must be an integer, got {dx!r}")
        x, y = self.position
        if self.fits_at(x + dx, y):
            self.position = Point(x + dx, y)
            return True
        return False

    def rotate(self, ccw: bool = False) -> None:
        """Turn every block a quarter turn about the pivot, unconditionally."""

        self.blocks = [to_cell(rotate(block, ccw, self.centroid)) for block in self.blocks]

    def kick_rotate(self, ccw: bool) -> bool:
        """Rotate, nudging the piece by the smallest offset that makes it fit.

        Offsets are tried in :data:`KICK_OFFSETS` order.  If none fits, the
        rotation is undone and ``False`` is returned.
        """

        self.rotate(ccw)
        x, y = self.position
        for dx, dy in KICK_OFFSETS:
            if self.fits_at(x + dx, y + dy):
                self.position = Point(x + dx, y + dy)
                if dx or dy:
                    LOGGER.debug("Kicked %s by (%d, %d)", self.kind.value, dx, dy)
                return True
        self.rotate(not ccw)
        return False


__all__ = ["DropResult", "KICK_OFFSETS", "MAX_KICK", "Piece", "build_kick_offsets"]
