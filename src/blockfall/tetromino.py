"""Tetromino catalog.

Every shape is described by a 4x4 text template so the rotation pivot can be
drawn alongside the blocks:

* ``#`` an occupied cell,
* ``O`` an occupied cell that also contributes to the pivot,
* ``:`` an empty cell that contributes to the pivot (only the ``I`` piece
  needs this, its pivot falls between two empty cells),
* a space is an empty cell.

The pivot is the exact average of all ``O`` and ``:`` cells.  The catalog is
built once at import time; pieces in play always work on their own copy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Dict, Tuple

from .errors import ShapeTemplateError
from .geometry import Point, is_half_integral

NUM_BLOCKS = 4
TEMPLATE_SIZE = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes, in catalog order."""

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    Z = "Z"
    T = "T"


# Rows of each template, top to bottom.
TEMPLATES: Dict[TetrominoType, str] = {
    TetrominoType.I: (
        "#   "
        "O:  "
        "O:  "
        "#   "
    ),
    TetrominoType.J: (
        " #  "
        " O  "
        "##  "
        "    "
    ),
    TetrominoType.L: (
        "#   "
        "O   "
        "##  "
        "    "
    ),
    TetrominoType.O: (
        "OO  "
        "OO  "
        "    "
        "    "
    ),
    TetrominoType.S: (
        " ## "
        "#O  "
        "    "
        "    "
    ),
    TetrominoType.Z: (
        "##  "
        " O# "
        "    "
        "    "
    ),
    TetrominoType.T: (
        "#O# "
        " #  "
        "    "
        "    "
    ),
}


@dataclass(frozen=True)
class Shape:
    """Immutable catalog entry for one tetromino kind."""

    kind: TetrominoType
    blocks: Tuple[Point, ...]
    centroid: Point
    identity: int

    @property
    def max_block_x(self) -> int:
        return max(int(p.x) for p in self.blocks)

    @property
    def max_block_y(self) -> int:
        return max(int(p.y) for p in self.blocks)


def parse_template(template: str, kind: TetrominoType, identity: int) -> Shape:
    """Build a :class:`Shape` from a text template.

    Blocks are collected in row-major scan order.

    Raises:
        ShapeTemplateError: If the template is not ``4x4``, does not contain
            exactly four blocks, has no pivot cell, or ``identity`` is not a
            positive integer.
    """

    if len(template) != TEMPLATE_SIZE * TEMPLATE_SIZE:
        raise ShapeTemplateError(
            f"{kind.value}: template must have {TEMPLATE_SIZE * TEMPLATE_SIZE} cells"
        )
    if isinstance(identity, bool) or not isinstance(identity, int) or identity <= 0:
        raise ShapeTemplateError(f"{kind.value}: identity must be a positive integer")

    blocks = []
    sum_x = sum_y = count = 0
    for i, marker in enumerate(template):
        x, y = i % TEMPLATE_SIZE, i // TEMPLATE_SIZE
        if marker in "#O":
            blocks.append(Point(x, y))
        if marker in "O:":
            sum_x += x
            sum_y += y
            count += 1

    if len(blocks) != NUM_BLOCKS:
        raise ShapeTemplateError(
            f"{kind.value}: expected {NUM_BLOCKS} blocks, found {len(blocks)}"
        )
    if count == 0:
        raise ShapeTemplateError(f"{kind.value}: template has no pivot cell")

    centroid = Point(Fraction(sum_x, count), Fraction(sum_y, count))
    if not (is_half_integral(centroid.x) and is_half_integral(centroid.y)):
        raise ShapeTemplateError(f"{kind.value}: pivot must be a multiple of 1/2")
    return Shape(kind=kind, blocks=tuple(blocks), centroid=centroid, identity=identity)


def _build_catalog() -> Dict[TetrominoType, Shape]:
    return {
        kind: parse_template(TEMPLATES[kind], kind, index + 1)
        for index, kind in enumerate(TetrominoType)
    }


SHAPES: Dict[TetrominoType, Shape] = _build_catalog()


def shape_for(kind: TetrominoType) -> Shape:
    """Return the catalog entry for ``kind``."""

    return SHAPES[kind]


__all__ = [
    "NUM_BLOCKS",
    "SHAPES",
    "Shape",
    "TEMPLATES",
    "TetrominoType",
    "parse_template",
    "shape_for",
]
