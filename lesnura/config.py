"""
配置

定义游戏规则常数与模拟参数
"""
from dataclasses import dataclass, field
from typing import Optional


STRATEGIES = ("random", "momentum")


@dataclass
class GameConfig:
    """
    游戏规则配置

    Attributes:
        start_tokens: 疯狂科学标记初始值
        start_progress: 各花色进度初始值
        hand_size: 起手牌数
        num_decks: 使用的牌副数
        low_rank_limit: 点数值小于此值的牌打出时掷骰
        die_sides: 骰子面数
    """
    start_tokens: int = 15
    start_progress: int = -10
    hand_size: int = 5
    num_decks: int = 2
    low_rank_limit: int = 6
    die_sides: int = 6

    def __post_init__(self):
        if self.start_tokens == 0:
            raise ValueError("start_tokens must be non-zero")
        # 首个回合处于出牌阶段，手牌为空时没有合法动作
        if self.hand_size < 1:
            raise ValueError(f"hand_size must be >= 1, got {self.hand_size}")
        if self.num_decks < 1:
            raise ValueError(f"num_decks must be >= 1, got {self.num_decks}")
        if self.die_sides < 1:
            raise ValueError(f"die_sides must be >= 1, got {self.die_sides}")

    @classmethod
    def from_dict(cls, d: dict) -> 'GameConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)


@dataclass
class SimConfig:
    """
    模拟配置

    Attributes:
        num_players: 玩家数
        num_games: 对局数
        strategy: 玩家策略 ("random" 或 "momentum")
        draw_chance: 势头阶段摸牌概率 (0-1)
        seed: 随机种子 (第 i 局使用 seed + i)
        max_actions: 单局动作上限 (None 表示不限)
        progress_every: 每隔多少局输出进度 (0 表示不输出)
    """
    num_players: int = 1
    num_games: int = 1
    strategy: str = "momentum"
    draw_chance: float = 0.5
    seed: Optional[int] = None
    max_actions: Optional[int] = None
    progress_every: int = 0
    game: GameConfig = field(default_factory=GameConfig)

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy: {self.strategy}. Must be one of {STRATEGIES}")
        if not 0.0 <= self.draw_chance <= 1.0:
            raise ValueError(f"draw_chance must be in [0, 1], got {self.draw_chance}")
        if self.num_games < 0:
            raise ValueError(f"num_games must be >= 0, got {self.num_games}")

    @classmethod
    def from_dict(cls, d: dict) -> 'SimConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        if isinstance(filtered.get("game"), dict):
            filtered["game"] = GameConfig.from_dict(filtered["game"])
        return cls(**filtered)
