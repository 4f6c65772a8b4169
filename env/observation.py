"""
观察空间编码

将游戏快照转换为 numpy 特征表示，并在动作与索引之间转换
"""
from dataclasses import dataclass
from typing import Dict, List, Optional
import numpy as np

from lesnura.actions import Action
from lesnura.cards import Card, NUM_RANKS, NUM_SUITS, Rank, Suit
from lesnura.state import Game, GameView, Phase


# 52 种 (点数, 花色) + 1 个王
CARD_KINDS = NUM_RANKS * NUM_SUITS
DRAW_INDEX = 0
NUM_ACTIONS = 1 + CARD_KINDS


def card_kind(card: Card) -> int:
    """牌的种类编号 (rank * 4 + suit)；王为 CARD_KINDS"""
    if card.is_joker:
        return CARD_KINDS
    return card.rank.index * NUM_SUITS + int(card.suit)


def cards_to_array(cards) -> np.ndarray:
    """
    将牌转换为 (4, 13) 计数矩阵

    两副牌时每格取值 0-2；王不计入
    """
    matrix = np.zeros((NUM_SUITS, NUM_RANKS), dtype=np.float32)
    for card in cards:
        if not card.is_joker:
            matrix[card.suit, card.rank.index] += 1
    return matrix


@dataclass
class Observation:
    """
    结构化观测

    Attributes:
        hand: 当前玩家手牌 (4, 13)
        discard_top: 弃牌堆顶牌 one-hot (53,)，最后一维为王
        progress: 各花色进度 (4,)
        tokens: 疯狂科学标记 (1,)
        revealed: 已公开的非目标点数 (4, 13)
        phase: 阶段 one-hot (2,)
        position: 当前玩家 one-hot (num_players,)
        piles: 牌库与弃牌堆张数 (2,)
    """
    hand: np.ndarray
    discard_top: np.ndarray
    progress: np.ndarray
    tokens: np.ndarray
    revealed: np.ndarray
    phase: np.ndarray
    position: np.ndarray
    piles: np.ndarray

    def to_dict(self) -> Dict[str, np.ndarray]:
        """转换为字典格式"""
        return {
            "hand": self.hand,
            "discard_top": self.discard_top,
            "progress": self.progress,
            "tokens": self.tokens,
            "revealed": self.revealed,
            "phase": self.phase,
            "position": self.position,
            "piles": self.piles,
        }

    def to_flat_array(self) -> np.ndarray:
        """展平为单一向量"""
        return np.concatenate([v.flatten() for v in self.to_dict().values()])


class ObservationBuilder:
    """
    观测构建器

    负责将 GameView 转换为 Observation
    """

    def __init__(self, num_players: int):
        self.num_players = num_players

    def build(self, view: GameView) -> Observation:
        """
        从快照构建观测

        Args:
            view: 当前玩家视角的快照

        Returns:
            Observation 对象
        """
        discard_top = np.zeros(CARD_KINDS + 1, dtype=np.float32)
        if view.discard_top is not None:
            discard_top[card_kind(view.discard_top)] = 1

        revealed = np.zeros((NUM_SUITS, NUM_RANKS), dtype=np.float32)
        for suit, ranks in enumerate(view.revealed):
            for rank in ranks:
                revealed[suit, rank.index] = 1

        phase = np.zeros(2, dtype=np.float32)
        phase[0 if view.phase == Phase.PLAY else 1] = 1

        position = np.zeros(self.num_players, dtype=np.float32)
        position[view.current_player] = 1

        return Observation(
            hand=cards_to_array(view.hand),
            discard_top=discard_top,
            progress=np.array(view.progress, dtype=np.float32),
            tokens=np.array([view.tokens], dtype=np.float32),
            revealed=revealed,
            phase=phase,
            position=position,
            piles=np.array([view.library_size, view.discard_size], dtype=np.float32),
        )

    def build_from_game(self, game: Game) -> Observation:
        return self.build(game.view())


class ActionEncoder:
    """
    动作编码器

    索引 0 为摸牌，1 + rank * 4 + suit 为打出一张该点数花色的牌
    (两副牌中同样的牌任选一张)
    """

    num_actions = NUM_ACTIONS

    def encode(self, action: Action) -> int:
        if action.is_draw:
            return DRAW_INDEX
        return 1 + card_kind(action.card)

    def decode(self, idx: int, view: GameView) -> Optional[Action]:
        """
        将索引解码为动作

        Returns:
            动作；索引越界或手中没有对应的牌时返回 None
        """
        if idx == DRAW_INDEX:
            return Action.draw()
        if not 0 < idx < NUM_ACTIONS:
            return None
        rank = Rank((idx - 1) // NUM_SUITS)
        suit = Suit((idx - 1) % NUM_SUITS)
        for card in view.hand:
            if card.rank == rank and card.suit == suit:
                return Action.play(card)
        return None

    def build_legal_mask(self, view: GameView) -> np.ndarray:
        """合法动作掩码 (num_actions,)"""
        mask = np.zeros(NUM_ACTIONS, dtype=np.float32)
        if view.phase == Phase.MOMENTUM:
            mask[DRAW_INDEX] = 1
        for card in view.hand:
            mask[1 + card_kind(card)] = 1
        return mask

    def get_legal_action_indices(self, view: GameView) -> List[int]:
        return [int(i) for i in np.flatnonzero(self.build_legal_mask(view))]
