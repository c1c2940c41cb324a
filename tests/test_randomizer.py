from __future__ import annotations

import random

from blockfall.randomizer import BagRandomizer
from blockfall.tetromino import TetrominoType


def test_each_bag_deals_every_kind_once():
    rand = BagRandomizer(seed=1234)
    for _ in range(20):
        dealt = [rand.next() for _ in range(7)]
        assert sorted(dealt) == sorted(TetrominoType)


def test_cursor_stays_in_range_and_peek_matches_next():
    rand = BagRandomizer(seed=7)
    for _ in range(30):
        assert 0 <= rand.index < rand.bag_size
        expected = rand.peek()
        assert rand.next() is expected


def test_same_seed_same_sequence():
    a = BagRandomizer(seed=99)
    b = BagRandomizer(rng=random.Random(99))
    assert [a.next() for _ in range(21)] == [b.next() for _ in range(21)]


def test_no_kind_repeats_more_than_twice():
    rand = BagRandomizer(seed=5)
    seq = [rand.next() for _ in range(700)]
    for i in range(len(seq) - 2):
        assert not (seq[i] == seq[i + 1] == seq[i + 2])
