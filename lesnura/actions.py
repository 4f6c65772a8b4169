"""
动作定义

每次行动只有两种: 打出一张手牌，或 (势头阶段) 摸一张牌
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import Optional

from .cards import Card


class ActionType(IntEnum):
    """动作类型"""
    DRAW = 0  # 摸牌 (仅势头阶段)
    PLAY = 1  # 出牌


@dataclass(frozen=True, slots=True)
class Action:
    """
    不可变动作表示

    Attributes:
        action_type: 动作类型
        card: 打出的牌 (摸牌时为 None)
    """
    action_type: ActionType
    card: Optional[Card] = None

    def __post_init__(self):
        if self.action_type == ActionType.PLAY and self.card is None:
            raise ValueError("Play action requires a card")
        if self.action_type == ActionType.DRAW and self.card is not None:
            raise ValueError("Draw action takes no card")

    @classmethod
    def draw(cls) -> 'Action':
        """创建摸牌动作"""
        return cls(action_type=ActionType.DRAW)

    @classmethod
    def play(cls, card: Card) -> 'Action':
        """创建出牌动作"""
        return cls(action_type=ActionType.PLAY, card=card)

    @property
    def is_draw(self) -> bool:
        return self.action_type == ActionType.DRAW

    @property
    def is_play(self) -> bool:
        return self.action_type == ActionType.PLAY

    def __str__(self) -> str:
        if self.is_draw:
            return "Draw"
        return f"Play({self.card})"
