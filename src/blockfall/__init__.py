"""Rules engine for a falling-block puzzle game."""

from .board import Board
from .errors import BlockfallError, ContractViolation, ShapeTemplateError
from .game_state import GameState, SessionConfig, SessionStatus
from .geometry import Point, rotate
from .piece import KICK_OFFSETS, DropResult, Piece
from .randomizer import BagRandomizer
from .tetromino import SHAPES, Shape, TetrominoType, parse_template, shape_for
from .utils import format_grid, render_grid

__all__ = [
    "BagRandomizer",
    "BlockfallError",
    "Board",
    "ContractViolation",
    "DropResult",
    "GameState",
    "KICK_OFFSETS",
    "Piece",
    "Point",
    "SHAPES",
    "SessionConfig",
    "SessionStatus",
    "Shape",
    "ShapeTemplateError",
    "TetrominoType",
    "format_grid",
    "parse_template",
    "render_grid",
    "rotate",
    "shape_for",
]
