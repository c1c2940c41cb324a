"""Point arithmetic on the integer / half-integer lattice.

Rotation centres may sit between cells (e.g. the long ``I`` piece), so
coordinates are kept as exact rationals.  Block offsets always come back to
integers after a quarter turn, which :func:`to_cell` verifies.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from .errors import ContractViolation

Coord = Union[int, Fraction]


@dataclass(frozen=True)
class Point:
    """Immutable ``(x, y)`` pair; ``x`` is the column and ``y`` the row."""

    x: Coord
    y: Coord

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __iter__(self):
        yield self.x
        yield self.y


ORIGIN = Point(0, 0)


def is_half_integral(value: Coord) -> bool:
    """Return ``True`` if ``value`` is a multiple of ``1/2``."""

    return Fraction(value * 2).denominator == 1


def rotate(point: Point, ccw: bool, center: Point) -> Point:
    """Return ``point`` turned a quarter turn about ``center``.

    With ``y`` growing downwards, clockwise maps ``(x, y)`` to
    ``(cx - (y - cy), cy + (x - cx))`` and counter-clockwise is the inverse.
    """

    dx = point.x - center.x
    dy = point.y - center.y
    if ccw:
        return Point(center.x + dy, center.y - dx)
    return Point(center.x - dy, center.y + dx)


def to_cell(point: Point) -> Point:
    """Return ``point`` with plain ``int`` coordinates.

    Raises:
        ContractViolation: If a coordinate is not integral.
    """

    x = Fraction(point.x)
    y = Fraction(point.y)
    if x.denominator != 1 or y.denominator != 1:
        raise ContractViolation(f"Block coordinate is not on the grid: {point}")
    return Point(int(x), int(y))


__all__ = ["Coord", "ORIGIN", "Point", "is_half_integral", "rotate", "to_cell"]
