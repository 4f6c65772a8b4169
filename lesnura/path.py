"""
路径长度与预言信息

每种花色有一个秘密的目标长度 (PathLength)。打出人头牌会随机公开一个
"不是目标长度" 的点数，公开的点数记录在位集中。
"""
from dataclasses import dataclass
from typing import List, Optional
import logging
import random

from .cards import ALL_RANKS, NUM_RANKS, Rank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathLength:
    """秘密目标长度，开局随机选定后不再改变"""
    rank: Rank

    @classmethod
    def random(cls, rng: random.Random) -> 'PathLength':
        return cls(Rank(rng.randrange(NUM_RANKS)))

    @property
    def value(self) -> int:
        return self.rank.value


class PathLengthInfo:
    """
    已公开的 "非目标长度" 点数

    使用整数位集存储，第 i 位表示索引为 i 的点数已公开。

    不变量:
    - 真实目标长度永远不会被公开
    - 未公开的点数只剩 1 个 (即真实值) 时不再公开
    """

    def __init__(self, bits: int = 0):
        self.bits = bits

    def is_showing(self, rank: Rank) -> bool:
        return (self.bits >> rank.index) & 1 == 1

    def _reveal(self, rank: Rank) -> None:
        self.bits |= 1 << rank.index

    @property
    def count(self) -> int:
        """已公开数量"""
        return bin(self.bits).count("1")

    @property
    def revealed(self) -> List[Rank]:
        return [r for r in ALL_RANKS if self.is_showing(r)]

    def reveal_random(self, true_length: PathLength, rng: random.Random) -> Optional[Rank]:
        """
        随机公开一个点数

        从既未公开、又不是真实长度的点数中均匀选择一个

        Args:
            true_length: 真实目标长度
            rng: 随机源

        Returns:
            公开的点数；无可公开时返回 None
        """
        not_showing = NUM_RANKS - self.count
        if not_showing <= 1:
            return None

        candidates = [
            r for r in ALL_RANKS
            if not self.is_showing(r) and r != true_length.rank
        ]
        rank = rng.choice(candidates)
        self._reveal(rank)
        return rank

    def copy(self) -> 'PathLengthInfo':
        return PathLengthInfo(self.bits)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PathLengthInfo):
            return NotImplemented
        return self.bits == other.bits

    def __repr__(self) -> str:
        return f"PathLengthInfo({[str(r) for r in self.revealed]})"
