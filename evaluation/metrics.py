"""
评估指标

统计批量模拟的胜率与对局长度
"""
from typing import TYPE_CHECKING, Dict, List, Optional
from collections import defaultdict
import numpy as np

from lesnura.cards import Suit

if TYPE_CHECKING:
    from .arena import MatchResult


class MetricsCollector:
    """
    指标收集器

    收集对局结果，按玩家数分组计算指标
    """

    def __init__(self):
        self.matches: List["MatchResult"] = []
        self._by_players: Dict[int, List["MatchResult"]] = defaultdict(list)

    def add_match(self, match: "MatchResult"):
        """添加对局结果"""
        self.matches.append(match)
        self._by_players[match.num_players].append(match)

    def add_matches(self, matches: List["MatchResult"]):
        for match in matches:
            self.add_match(match)

    def compute_metrics(self, num_players: Optional[int] = None) -> Dict[str, float]:
        """
        计算指标

        Args:
            num_players: 指定玩家数，None 表示全部对局

        Returns:
            指标字典
        """
        matches = self.matches if num_players is None else self._by_players[num_players]
        n_games = len(matches)
        if n_games == 0:
            return {}

        rounds = np.array([m.rounds for m in matches], dtype=np.float64)
        turns = np.array([m.turns for m in matches], dtype=np.float64)
        tokens = np.array([m.tokens for m in matches], dtype=np.float64)
        # 每局达到目标的花色数
        suits_made = np.array([
            sum(1 for s in Suit if m.progress[s] >= m.path_lengths[s])
            for m in matches
        ], dtype=np.float64)

        return {
            "total_games": n_games,
            "win_rate": float(np.mean([1.0 if m.won else 0.0 for m in matches])),
            "avg_rounds": float(np.mean(rounds)),
            "std_rounds": float(np.std(rounds)),
            "max_rounds": float(np.max(rounds)),
            "avg_turns": float(np.mean(turns)),
            "avg_final_tokens": float(np.mean(tokens)),
            "avg_suits_made": float(np.mean(suits_made)),
        }

    def reset(self):
        """重置"""
        self.matches.clear()
        self._by_players.clear()


class RunningStats:
    """
    运行时统计

    在线计算均值和方差
    """

    def __init__(self):
        self.n = 0
        self.mean = 0.0
        self.M2 = 0.0
        self.min_val = float('inf')
        self.max_val = float('-inf')

    def update(self, x: float):
        """更新统计"""
        self.n += 1
        delta = x - self.mean
        self.mean += delta / self.n
        delta2 = x - self.mean
        self.M2 += delta * delta2
        self.min_val = min(self.min_val, x)
        self.max_val = max(self.max_val, x)

    @property
    def variance(self) -> float:
        """样本方差"""
        if self.n < 2:
            return 0.0
        return self.M2 / (self.n - 1)

    @property
    def std(self) -> float:
        return float(np.sqrt(self.variance))

    def to_dict(self) -> Dict[str, float]:
        return {
            "count": self.n,
            "mean": self.mean,
            "std": self.std,
            "min": self.min_val if self.n > 0 else 0.0,
            "max": self.max_val if self.n > 0 else 0.0,
        }
