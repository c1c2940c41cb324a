"""High level game session: spawn, gravity, lock, clear, repeat."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .board import HEIGHT, WIDTH, Board
from .errors import ContractViolation
from .geometry import Point
from .piece import DropResult, Piece
from .randomizer import BagRandomizer
from .tetromino import TetrominoType, shape_for

# Milliseconds between gravity ticks.  The cadence is fixed.
TICK_MS = 200

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionConfig:
    """Configuration for a game session."""

    width: int = WIDTH
    height: int = HEIGHT
    tick_ms: int = TICK_MS
    seed: Optional[int] = None


class SessionStatus(Enum):
    EMPTY = "empty"
    FALLING = "falling"
    TERMINATED = "terminated"


@dataclass
class GameState:
    """Mutable state for one game session.

    The session owns the board, the randomizer and the single active-piece
    slot.  It is driven from outside by a fixed-period timer calling
    :meth:`tick` and by input events calling the movement commands; every
    call is synchronous and completes one self-contained step.

    A randomizer passed in by the caller is kept across :meth:`reset`; one
    built by the session from ``config.seed`` is replaced with a fresh bag.
    """

    config: SessionConfig = field(default_factory=SessionConfig)
    randomizer: Optional[BagRandomizer] = None
    board: Board = field(init=False)
    active: Optional[Piece] = field(default=None, init=False)
    pieces: int = field(default=0, init=False)
    lines: int = field(default=0, init=False)
    ticks: int = field(default=0, init=False)
    _terminated: bool = field(default=False, init=False, repr=False)
    _owns_randomizer: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.board = Board(self.config.width, self.config.height)
        if self.randomizer is None:
            self.randomizer = BagRandomizer(seed=self.config.seed)
            self._owns_randomizer = True

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def status(self) -> SessionStatus:
        if self._terminated:
            return SessionStatus.TERMINATED
        if self.active is None:
            return SessionStatus.EMPTY
        return SessionStatus.FALLING

    @property
    def game_over(self) -> bool:
        return self._terminated

    @property
    def elapsed_ms(self) -> int:
        """Simulated time covered by the timer ticks so far."""

        return self.ticks * self.config.tick_ms

    def reset(self, seed: Optional[int] = None) -> None:
        """Start over with an empty board.

        Passing ``seed`` always starts a new bag from that seed.  Without it,
        an injected randomizer carries on where it was and a session-built one
        is rebuilt from ``config.seed``.
        """

        self.board.reset()
        if seed is not None:
            self.randomizer = BagRandomizer(seed=seed)
            self._owns_randomizer = True
        elif self._owns_randomizer:
            self.randomizer = BagRandomizer(seed=self.config.seed)
        self.active = None
        self.pieces = 0
        self.lines = 0
        self.ticks = 0
        self._terminated = False

    def _terminate(self, reason: str) -> None:
        LOGGER.info("Game over: %s (pieces=%d, lines=%d)", reason, self.pieces, self.lines)
        self.active = None
        self._terminated = True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def spawn(self) -> Optional[Piece]:
        """Deal the next kind and place it centred just above the board.

        Returns the new piece, or ``None`` if it cannot be placed and the
        session has ended.

        Raises:
            ContractViolation: If a piece is already active or the session has
                terminated.
        """

        if self._terminated:
            raise ContractViolation("spawning after the session has terminated")
        if self.active is not None:
            raise ContractViolation("spawning while a piece is already active")

        shape = shape_for(self.randomizer.next())
        spawn_x = (self.board.width - shape.max_block_x) // 2
        spawn_y = -1 - shape.max_block_y
        piece = Piece(shape, self.board, Point(spawn_x, spawn_y))
        if not piece.fits_at(spawn_x, spawn_y):
            self._terminate(f"{shape.kind.value} does not fit at spawn")
            return None
        self.active = piece
        LOGGER.debug("Spawned %s at (%d, %d)", shape.kind.value, spawn_x, spawn_y)
        return piece

    def spawn_if_empty(self) -> bool:
        """Spawn a piece if none is active; return ``True`` if one was spawned."""

        if self.status is not SessionStatus.EMPTY:
            return False
        return self.spawn() is not None

    def advance(self) -> Optional[DropResult]:
        """Apply one gravity step to the active piece.

        On lock, completed rows are cleared and the slot is emptied; a lock
        with any block still above the board ends the session.  Returns
        ``None`` when there is no active piece.
        """

        piece = self.active
        if piece is None:
            return None
        result = piece.move_down()
        if result is DropResult.LOCKED:
            self.active = None
            self.pieces += 1
            if piece.above_grid():
                self._terminate("topped out")
                return result
            cleared = self.board.clear_full_rows()
            if cleared:
                self.lines += cleared
                LOGGER.info("Cleared %d row(s), %d total", cleared, self.lines)
        return result

    def tick(self) -> Optional[DropResult]:
        """Timer entry point: spawn when empty, otherwise apply gravity."""

        status = self.status
        if status is SessionStatus.TERMINATED:
            return None
        self.ticks += 1
        if status is SessionStatus.EMPTY:
            self.spawn()
            return None
        return self.advance()

    # ------------------------------------------------------------------
    # Input commands
    # ------------------------------------------------------------------
    def move_left(self) -> bool:
        return self.active is not None and self.active.move_horiz(-1)

    def move_right(self) -> bool:
        return self.active is not None and self.active.move_horiz(1)

    def rotate_cw(self) -> bool:
        return self.active is not None and self.active.kick_rotate(False)

    def rotate_ccw(self) -> bool:
        return self.active is not None and self.active.kick_rotate(True)

    def soft_drop(self) -> bool:
        """One extra gravity step; ``True`` if a piece was active."""

        return self.advance() is not None

    def hard_drop(self) -> int:
        """Drop the active piece until it locks; return the rows fallen."""

        if self.active is None:
            return 0
        rows = 0
        while self.advance() is DropResult.MOVED:
            rows += 1
        return rows

    # ------------------------------------------------------------------
    # Queries for renderers
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> int:
        return self.board.get_cell(row, col)

    @property
    def active_identity(self) -> Optional[int]:
        return self.active.identity if self.active is not None else None

    @property
    def upcoming(self) -> TetrominoType:
        return self.randomizer.peek()

    def active_cells(self) -> List[Point]:
        return self.active.cells() if self.active is not None else []

    def ghost_y(self) -> Optional[int]:
        return self.active.ghost_y() if self.active is not None else None

    def ghost_cells(self) -> List[Point]:
        return self.active.ghost_cells() if self.active is not None else []


__all__ = ["GameState", "SessionConfig", "SessionStatus", "TICK_MS"]
