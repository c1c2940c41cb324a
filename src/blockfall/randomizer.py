"""Bag randomizer supplying upcoming tetromino kinds."""

from __future__ import annotations

import random
from typing import List, Optional

from .tetromino import TetrominoType


class BagRandomizer:
    """Deal tetromino kinds from shuffled bags of all seven shapes.

    Every kind appears exactly once per bag, so the longest possible streak of
    one kind is two (end of one bag, start of the next).
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self._bag: List[TetrominoType] = list(TetrominoType)
        self._index = 0
        self._shuffle()

    @property
    def bag_size(self) -> int:
        return len(self._bag)

    @property
    def index(self) -> int:
        return self._index

    def _shuffle(self) -> None:
        bag = self._bag
        for i in range(len(bag) - 1, 0, -1):
            j = self._rng.randint(0, i)
            bag[i], bag[j] = bag[j], bag[i]
        self._index = 0

    def peek(self) -> TetrominoType:
        """Return the kind the next call to :meth:`next` will deal."""

        return self._bag[self._index]

    def next(self) -> TetrominoType:
        """Deal the next kind, reshuffling once the bag is exhausted."""

        kind = self._bag[self._index]
        self._index += 1
        if self._index >= len(self._bag):
            self._shuffle()
        return kind


__all__ = ["BagRandomizer"]
