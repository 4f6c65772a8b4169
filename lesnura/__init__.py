"""
Game Layer - 纯游戏逻辑 (无 ML 依赖)

Modules:
    cards: 牌定义
    piles: 牌库与弃牌堆
    path: 路径长度与预言信息
    hand: 手牌
    actions: 动作
    state: 游戏状态机
    strategies: 策略
    config: 配置
    errors: 异常
"""
from .cards import (
    Rank,
    Suit,
    Card,
    NUM_RANKS,
    NUM_SUITS,
    CARDS_PER_DECK,
    DECK_TOTAL,
    make_deck,
    make_decks,
    cards_to_str,
)

from .piles import Library, Discard, draw

from .path import PathLength, PathLengthInfo

from .hand import Hand

from .actions import ActionType, Action

from .state import Phase, Outcome, GameView, Game

from .strategies import (
    Strategy,
    RandomStrategy,
    MomentumStrategy,
    make_strategy,
)

from .config import GameConfig, SimConfig, STRATEGIES

from .errors import (
    LesnuraError,
    IllegalActionError,
    NoMomentumError,
    CardNotHeldError,
    PilesExhaustedError,
    GameStalledError,
    CardCountError,
)

__all__ = [
    # cards
    "Rank",
    "Suit",
    "Card",
    "NUM_RANKS",
    "NUM_SUITS",
    "CARDS_PER_DECK",
    "DECK_TOTAL",
    "make_deck",
    "make_decks",
    "cards_to_str",
    # piles
    "Library",
    "Discard",
    "draw",
    # path
    "PathLength",
    "PathLengthInfo",
    # hand
    "Hand",
    # actions
    "ActionType",
    "Action",
    # state
    "Phase",
    "Outcome",
    "GameView",
    "Game",
    # strategies
    "Strategy",
    "RandomStrategy",
    "MomentumStrategy",
    "make_strategy",
    # config
    "GameConfig",
    "SimConfig",
    "STRATEGIES",
    # errors
    "LesnuraError",
    "IllegalActionError",
    "NoMomentumError",
    "CardNotHeldError",
    "PilesExhaustedError",
    "GameStalledError",
    "CardCountError",
]
