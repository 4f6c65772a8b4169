"""
模拟竞技场

驱动对局循环，批量运行模拟
"""
from typing import Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass, field
import logging

from lesnura.config import SimConfig
from lesnura.errors import GameStalledError
from lesnura.state import Game, Outcome
from lesnura.strategies import Strategy, make_strategy

from .metrics import RunningStats

logger = logging.getLogger(__name__)


def play_game(
    game: Game,
    strategies: Sequence[Strategy],
    max_actions: Optional[int] = None,
) -> Outcome:
    """
    运行一局直到结束

    每次由当前玩家的策略根据只读快照选择动作。错误 (非法动作、无牌可摸、
    不变量被破坏) 直接向上抛出。

    Args:
        game: 已加入玩家的对局
        strategies: 各玩家策略 (与玩家编号对应)
        max_actions: 动作上限 (None 表示不限)

    Returns:
        对局结果
    """
    while True:
        if max_actions is not None and game.actions >= max_actions:
            raise GameStalledError(f"game did not finish within {max_actions} actions")

        strategy = strategies[game.current_player]
        action = strategy.act(game.view())
        outcome = game.take_action(action)
        if outcome is not None:
            return outcome


@dataclass
class MatchResult:
    """对局结果"""
    outcome: Outcome
    num_players: int
    strategy: str
    rounds: int
    turns: int
    actions: int
    tokens: int
    progress: List[int]
    path_lengths: List[int]
    seed: Optional[int] = None

    @property
    def won(self) -> bool:
        return self.outcome == Outcome.WIN

    def to_dict(self) -> Dict:
        return {
            "outcome": self.outcome.value,
            "num_players": self.num_players,
            "strategy": self.strategy,
            "rounds": self.rounds,
            "turns": self.turns,
            "actions": self.actions,
            "tokens": self.tokens,
            "progress": self.progress,
            "path_lengths": self.path_lengths,
            "seed": self.seed,
        }


@dataclass
class SimulationResult:
    """批量模拟结果"""
    matches: List[MatchResult] = field(default_factory=list)

    @property
    def total_games(self) -> int:
        return len(self.matches)

    @property
    def wins(self) -> int:
        return sum(1 for m in self.matches if m.won)

    @property
    def losses(self) -> int:
        return self.total_games - self.wins

    @property
    def win_rate(self) -> float:
        if not self.matches:
            return 0.0
        return self.wins / self.total_games

    def __repr__(self) -> str:
        return (
            f"SimulationResult(games={self.total_games}, "
            f"wins={self.wins}, win_rate={self.win_rate:.2%})"
        )


class Arena:
    """
    模拟竞技场

    按配置创建对局、加入玩家，并用同一种策略驱动所有玩家
    """

    def __init__(
        self,
        config: SimConfig,
        strategy_fn: Optional[Callable[[], Strategy]] = None,
    ):
        """
        Args:
            config: 模拟配置
            strategy_fn: 策略工厂 (默认按配置的 strategy/draw_chance 创建)
        """
        self.config = config
        self.strategy_fn = strategy_fn or (
            lambda: make_strategy(config.strategy, config.draw_chance)
        )

    def _game_seed(self, game_idx: int) -> Optional[int]:
        if self.config.seed is None:
            return None
        return self.config.seed + game_idx

    def play_one(self, seed: Optional[int] = None) -> MatchResult:
        """进行一局"""
        game = Game(self.config.game, seed=seed)
        for _ in range(self.config.num_players):
            game.add_player()

        strategies = [self.strategy_fn() for _ in range(self.config.num_players)]
        for strategy in strategies:
            strategy.reset()

        outcome = play_game(game, strategies, max_actions=self.config.max_actions)

        return MatchResult(
            outcome=outcome,
            num_players=self.config.num_players,
            strategy=strategies[0].name if strategies else self.config.strategy,
            rounds=game.rounds,
            turns=game.turns,
            actions=game.actions,
            tokens=game.tokens,
            progress=list(game.progress),
            path_lengths=[p.value for p in game.path_lengths],
            seed=seed,
        )

    def run(self, n_games: Optional[int] = None) -> SimulationResult:
        """
        批量模拟

        Args:
            n_games: 对局数 (默认使用配置)

        Returns:
            模拟结果
        """
        if n_games is None:
            n_games = self.config.num_games

        result = SimulationResult()
        rounds = RunningStats()
        progress_every = self.config.progress_every

        for game_idx in range(n_games):
            match = self.play_one(seed=self._game_seed(game_idx))
            result.matches.append(match)
            rounds.update(match.rounds)

            if progress_every and (game_idx + 1) % progress_every == 0:
                logger.info(
                    f"Finished {game_idx + 1}/{n_games} games "
                    f"(win rate {result.win_rate:.2%}, "
                    f"rounds {rounds.mean:.1f} +- {rounds.std:.1f})"
                )

        return result
