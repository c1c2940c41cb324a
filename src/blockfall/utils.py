"""Utility helpers for renderers built on the engine."""

from __future__ import annotations

from typing import List, Sequence

from .game_state import GameState

# Value written for ghost cells by ``render_grid``; real identities are 1..7.
GHOST = -1


def render_grid(state: GameState, ghost: bool = True) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state.  Cells covered by the active
    piece receive its identity; when ``ghost`` is set, the landing position is
    marked with :data:`GHOST` underneath it.  Cells above the board are not
    drawn.
    """

    board = state.board
    grid = board.rows()

    def _overlay(cells, value):
        for cell in cells:
            if 0 <= cell.y < board.height and 0 <= cell.x < board.width:
                grid[cell.y][cell.x] = value

    if ghost:
        _overlay(state.ghost_cells(), GHOST)
    if state.active is not None:
        _overlay(state.active_cells(), state.active.identity)
    return grid


def format_grid(grid: Sequence[Sequence[int]], active: Sequence[Sequence[bool]] = ()) -> str:
    """Return ``grid`` as ASCII art.

    ``.`` is empty, ``+`` a ghost cell and ``#`` any other cell; cells flagged
    in ``active`` are drawn as ``@``.
    """

    lines = []
    for r, row in enumerate(grid):
        chars = []
        for c, value in enumerate(row):
            if active and active[r][c]:
                chars.append("@")
            elif value == GHOST:
                chars.append("+")
            elif value:
                chars.append("#")
            else:
                chars.append(".")
        lines.append("".join(chars))
    return "\n".join(lines)


def active_mask(state: GameState) -> List[List[bool]]:
    """Return a boolean grid marking the visible cells of the active piece."""

    board = state.board
    mask = [[False] * board.width for _ in range(board.height)]
    for cell in state.active_cells():
        if 0 <= cell.y < board.height and 0 <= cell.x < board.width:
            mask[cell.y][cell.x] = True
    return mask


__all__ = ["GHOST", "active_mask", "format_grid", "render_grid"]
