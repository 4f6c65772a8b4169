"""
游戏状态机

一局游戏的聚合根，负责:
- 回合与阶段 (出牌 / 势头) 的切换
- 进度与预言
- 疯狂科学标记及每轮结束时的随机游走
- 结束时的胜负判定
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple
from enum import Enum
import logging
import random

from .cards import CARDS_PER_DECK, NUM_SUITS, Card, Rank, Suit, make_decks
from .actions import Action
from .config import GameConfig
from .errors import CardCountError, IllegalActionError, NoMomentumError, PilesExhaustedError
from .hand import Hand
from .path import PathLength, PathLengthInfo
from .piles import Discard, Library, draw

logger = logging.getLogger(__name__)


class Phase(Enum):
    """回合阶段"""
    PLAY = "play"          # 出牌阶段 (每回合开始)
    MOMENTUM = "momentum"  # 势头阶段 (额外一次行动)


class Outcome(Enum):
    """对局结果"""
    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class GameView:
    """
    只读快照，供策略观察

    Attributes:
        phase: 当前阶段
        current_player: 当前玩家
        num_players: 玩家数
        hand: 当前玩家手牌 (副本)
        discard_top: 弃牌堆顶牌
        progress: 各花色进度
        tokens: 疯狂科学标记
        revealed: 各花色已公开的非目标点数
        library_size: 牌库剩余张数
        discard_size: 弃牌堆张数
        rng: 对局共享的随机源
    """
    phase: Phase
    current_player: int
    num_players: int
    hand: Hand
    discard_top: Optional[Card]
    progress: Tuple[int, ...]
    tokens: int
    revealed: Tuple[Tuple[Rank, ...], ...]
    library_size: int
    discard_size: int
    rng: random.Random

    @property
    def discard_top_suit(self) -> Optional[Suit]:
        return self.discard_top.suit if self.discard_top is not None else None


class Game:
    """
    游戏状态

    Attributes:
        tokens: 疯狂科学标记 (有符号，只减不增，跳过 0)
        progress: 各花色进度
        path_lengths: 各花色秘密目标长度
        path_info: 各花色已公开信息
        library: 牌库
        discard: 弃牌堆
        hands: 各玩家手牌 (下标即玩家编号)
        current_player: 当前行动玩家
        phase: 当前阶段
        rounds: 已完成的整轮数
        turns: 已完成的回合数
        actions: 已执行的动作数
        outcome: 对局结果 (未结束为 None)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            config: 规则配置
            seed: 随机种子 (rng 未提供时使用)
            rng: 共享随机源
        """
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(seed)
        self.deck_total = CARDS_PER_DECK * self.config.num_decks

        self.tokens = self.config.start_tokens
        self.progress: List[int] = [self.config.start_progress] * NUM_SUITS
        self.path_lengths: List[PathLength] = [PathLength.random(self.rng) for _ in Suit]
        self.path_info: List[PathLengthInfo] = [PathLengthInfo() for _ in Suit]

        self.library = Library.shuffled(make_decks(self.config.num_decks), self.rng)
        self.discard = Discard()
        self.hands: List[Hand] = []

        self.current_player = 0
        self.phase = Phase.PLAY
        self.rounds = 0
        self.turns = 0
        self.actions = 0
        self.outcome: Optional[Outcome] = None

    # ------------------------------------------------------------------
    # 玩家与摸牌
    # ------------------------------------------------------------------

    @property
    def num_players(self) -> int:
        return len(self.hands)

    @property
    def is_finished(self) -> bool:
        return self.outcome is not None

    def add_player(self) -> int:
        """
        加入一名玩家并发起手牌

        Returns:
            新玩家编号
        """
        self.hands.append(Hand())
        player = len(self.hands) - 1
        for _ in range(self.config.hand_size):
            self.draw_for_player(player)
        logger.debug("Player %d joined with %d cards", player, len(self.hands[player]))
        return player

    def draw_for_player(self, player: int) -> Card:
        """
        为玩家摸一张非王的牌

        摸到王时移除一个标记并把王放入弃牌堆，继续摸

        Raises:
            PilesExhaustedError: 牌库和弃牌堆都已摸空
        """
        while True:
            card = draw(self.library, self.discard, self.rng)
            if card is None:
                raise PilesExhaustedError(
                    f"no card available for player {player}: "
                    f"{self.deck_total} cards all held in hands"
                )
            if card.is_joker:
                self.remove_token()
                self.discard.push(card)
                logger.debug("Player %d drew a joker, tokens now %d", player, self.tokens)
                if not self._piles_hold_ranked_card():
                    # 只剩王在牌堆间循环
                    raise PilesExhaustedError(
                        f"no ranked card available for player {player}: "
                        f"only jokers left in library and discard"
                    )
                continue
            self.hands[player].add(card)
            return card

    def _piles_hold_ranked_card(self) -> bool:
        return any(not c.is_joker for c in self.library) or any(
            not c.is_joker for c in self.discard
        )

    # ------------------------------------------------------------------
    # 标记与随机游走
    # ------------------------------------------------------------------

    def remove_token(self) -> None:
        """移除一个疯狂科学标记 (跳过 0: 1 之后直接变为 -1)"""
        self.tokens -= 1
        while self.tokens == 0:
            self.tokens -= 1

    def mad_science_walk(self) -> bool:
        """
        每轮结束时的随机游走

        抛 |tokens| 枚硬币:
        - 标记为正: 全部正面才结束
        - 标记为负: 任一正面就结束 (全部反面才继续)

        Returns:
            是否结束游戏
        """
        n = abs(self.tokens)
        heads = [self.rng.getrandbits(1) == 1 for _ in range(n)]
        if self.tokens > 0:
            ends = all(heads)
        else:
            ends = any(heads)
        logger.debug(
            "Mad science walk: tokens=%d heads=%d/%d -> %s",
            self.tokens, sum(heads), n, "end" if ends else "continue",
        )
        return ends

    def score(self) -> Outcome:
        """任一花色进度达到目标长度即为胜利"""
        for suit in Suit:
            if self.progress[suit] >= self.path_lengths[suit].value:
                return Outcome.WIN
        return Outcome.LOSS

    # ------------------------------------------------------------------
    # 行动
    # ------------------------------------------------------------------

    def take_action(self, action: Action) -> Optional[Outcome]:
        """
        执行当前玩家的动作

        Args:
            action: 出牌或摸牌

        Returns:
            对局结束时返回结果，否则返回 None

        Raises:
            IllegalActionError: 非法动作 (状态不变)
            PilesExhaustedError: 需要摸牌但无牌可摸
            CardCountError: 牌数不变量被破坏
        """
        if self.is_finished:
            raise IllegalActionError("game is already over")

        if action.is_draw:
            if self.phase != Phase.MOMENTUM:
                raise NoMomentumError("draw is only allowed with momentum")
            self.actions += 1
            self.draw_for_player(self.current_player)
            return self._end_turn()

        card = action.card
        self.hands[self.current_player].remove(card)
        self.actions += 1

        if card.is_face:
            self._forecast(card.suit)
        else:
            self._make_progress(card)

        momentum = card.suit == self.discard.top_suit()
        self.discard.push(card)

        if self.phase == Phase.PLAY and momentum:
            self.phase = Phase.MOMENTUM
            return None
        return self._end_turn()

    def _forecast(self, suit: Suit) -> None:
        """预言: 公开该花色一个非目标点数"""
        rank = self.path_info[suit].reveal_random(self.path_lengths[suit], self.rng)
        logger.debug("Forecast %s: revealed %s", suit.name, rank)

    def _make_progress(self, card: Card) -> None:
        """推进进度，低点数牌可能消耗标记"""
        if card.rank.value < self.config.low_rank_limit:
            roll = self.rng.randint(1, self.config.die_sides)
            if roll > card.rank.index:
                self.remove_token()
                logger.debug("Rolled %d against %s, tokens now %d", roll, card, self.tokens)
        self.progress[card.suit] += 1

    def _end_turn(self) -> Optional[Outcome]:
        """结束回合，轮转玩家；一整轮结束时进行随机游走"""
        self.check_invariant()
        self.phase = Phase.PLAY
        self.turns += 1
        self.current_player = (self.current_player + 1) % len(self.hands)

        if self.current_player == 0:
            self.rounds += 1
            if self.mad_science_walk():
                self.outcome = self.score()
                logger.debug(
                    "Game over after %d rounds: %s (progress=%s, targets=%s)",
                    self.rounds, self.outcome.value, self.progress,
                    [p.value for p in self.path_lengths],
                )
                return self.outcome

        self.draw_for_player(self.current_player)
        self.check_invariant()
        return None

    # ------------------------------------------------------------------
    # 观察与校验
    # ------------------------------------------------------------------

    def card_count(self) -> int:
        """牌库、弃牌堆与所有手牌的总张数"""
        return len(self.library) + len(self.discard) + sum(len(h) for h in self.hands)

    def check_invariant(self) -> None:
        """
        Raises:
            CardCountError: 总张数不等于牌副总数
        """
        total = self.card_count()
        if total != self.deck_total:
            raise CardCountError(self.deck_total, total)

    def view(self) -> GameView:
        """当前玩家视角的只读快照"""
        return GameView(
            phase=self.phase,
            current_player=self.current_player,
            num_players=self.num_players,
            hand=Hand(self.hands[self.current_player]),
            discard_top=self.discard.top(),
            progress=tuple(self.progress),
            tokens=self.tokens,
            revealed=tuple(tuple(info.revealed) for info in self.path_info),
            library_size=len(self.library),
            discard_size=len(self.discard),
            rng=self.rng,
        )
