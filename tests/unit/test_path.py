"""路径长度与预言测试"""
import random

import pytest

from lesnura.cards import ALL_RANKS, NUM_RANKS, Rank
from lesnura.path import PathLength, PathLengthInfo


class TestPathLength:
    """PathLength 测试"""

    def test_value(self):
        assert PathLength(Rank(6)).value == 7

    def test_random_in_range(self):
        rng = random.Random(0)
        values = {PathLength.random(rng).value for _ in range(500)}
        assert values <= set(range(1, NUM_RANKS + 1))
        assert len(values) == NUM_RANKS


class TestPathLengthInfo:
    """PathLengthInfo 测试"""

    def test_initially_hidden(self):
        info = PathLengthInfo()
        assert info.count == 0
        assert info.revealed == []
        assert not any(info.is_showing(r) for r in ALL_RANKS)

    def test_random_reveal(self):
        length = PathLength(Rank(7))
        info = PathLengthInfo()
        rng = random.Random(3)

        for _ in range(NUM_RANKS - 1):
            old = info.copy()
            rank = info.reveal_random(length, rng)
            assert rank is not None
            assert not old.is_showing(rank)
            assert info.is_showing(rank)
            assert info.count == old.count + 1

        assert info.reveal_random(length, rng) is None
        assert info.count == NUM_RANKS - 1

    @pytest.mark.parametrize("true_index", range(NUM_RANKS))
    def test_true_length_never_revealed(self, true_index):
        length = PathLength(Rank(true_index))
        info = PathLengthInfo()
        rng = random.Random(true_index)

        while info.reveal_random(length, rng) is not None:
            assert not info.is_showing(length.rank)

        # 只剩真实值未公开
        assert info.revealed == [r for r in ALL_RANKS if r != length.rank]

    def test_reveal_is_uniform_over_candidates(self):
        length = PathLength(Rank(0))
        rng = random.Random(11)
        counts = {r: 0 for r in ALL_RANKS}
        for _ in range(2400):
            info = PathLengthInfo()
            counts[info.reveal_random(length, rng)] += 1

        assert counts[length.rank] == 0
        # 12 个候选，每个期望 200 次
        for rank, n in counts.items():
            if rank != length.rank:
                assert 120 < n < 280

    def test_skips_already_revealed(self):
        length = PathLength(Rank(5))
        # 除 Rank(2) 与真实值外全部已公开
        bits = 0
        for r in ALL_RANKS:
            if r not in (Rank(2), Rank(5)):
                bits |= 1 << r.index
        info = PathLengthInfo(bits)

        assert info.reveal_random(length, random.Random(0)) == Rank(2)
        assert info.reveal_random(length, random.Random(0)) is None
