"""
牌的定义与编码

一副牌 54 张:
- 4 种花色 × 13 个点数 (A-K)
- 2 张王

一局游戏使用两副牌，共 108 张。每张牌记录所属的牌副，保证 108 张牌两两不同。
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import List, Optional, Dict


NUM_RANKS = 13
NUM_SUITS = 4
JOKERS_PER_DECK = 2
CARDS_PER_DECK = NUM_RANKS * NUM_SUITS + JOKERS_PER_DECK
NUM_DECKS = 2
DECK_TOTAL = CARDS_PER_DECK * NUM_DECKS

# 点数值大于此值为人头牌 (J/Q/K)
FACE_THRESHOLD = 10


class Suit(IntEnum):
    """花色"""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


SUIT_TO_STR: Dict[Suit, str] = {
    Suit.CLUBS: '♣',
    Suit.DIAMONDS: '♦',
    Suit.HEARTS: '♥',
    Suit.SPADES: '♠',
}

# 点数值到显示字符的映射
VALUE_TO_STR: Dict[int, str] = {
    1: 'A', 2: '2', 3: '3', 4: '4', 5: '5', 6: '6', 7: '7',
    8: '8', 9: '9', 10: '10', 11: 'J', 12: 'Q', 13: 'K',
}


@dataclass(frozen=True, order=True, slots=True)
class Rank:
    """
    点数

    内部使用 0-12 的索引，对外的点数值为索引 + 1 (1-13)
    """
    index: int

    def __post_init__(self):
        if not 0 <= self.index < NUM_RANKS:
            raise ValueError(f"Invalid rank index: {self.index}")

    @classmethod
    def from_value(cls, value: int) -> 'Rank':
        """从点数值 (1-13) 创建"""
        return cls(value - 1)

    @property
    def value(self) -> int:
        return self.index + 1

    @property
    def is_face(self) -> bool:
        return self.value > FACE_THRESHOLD

    def __str__(self) -> str:
        return VALUE_TO_STR[self.value]


ALL_RANKS = tuple(Rank(i) for i in range(NUM_RANKS))


@dataclass(frozen=True, slots=True)
class Card:
    """
    不可变的牌

    Attributes:
        rank: 点数 (王为 None)
        suit: 花色 (王为 None)
        deck: 所属牌副 (0 或 1)
        joker: 同一副牌中两张王的编号 (普通牌为 0)
    """
    rank: Optional[Rank]
    suit: Optional[Suit]
    deck: int = 0
    joker: int = 0

    @classmethod
    def standard(cls, rank: Rank, suit: Suit, deck: int = 0) -> 'Card':
        return cls(rank=rank, suit=Suit(suit), deck=deck)

    @classmethod
    def make_joker(cls, joker: int = 0, deck: int = 0) -> 'Card':
        return cls(rank=None, suit=None, deck=deck, joker=joker)

    @property
    def is_joker(self) -> bool:
        return self.rank is None

    @property
    def is_face(self) -> bool:
        return self.rank is not None and self.rank.is_face

    def __str__(self) -> str:
        if self.is_joker:
            return "Joker"
        return f"{self.rank}{SUIT_TO_STR[self.suit]}"


def make_deck(deck: int = 0, jokers: bool = True) -> List[Card]:
    """
    生成一副牌

    Args:
        deck: 牌副编号
        jokers: 是否包含两张王

    Returns:
        52 或 54 张牌
    """
    cards = [
        Card.standard(rank, suit, deck)
        for suit in Suit
        for rank in ALL_RANKS
    ]
    if jokers:
        cards.extend(Card.make_joker(j, deck) for j in range(JOKERS_PER_DECK))
    return cards


def make_decks(num_decks: int = NUM_DECKS) -> List[Card]:
    """生成多副牌 (默认两副 108 张)"""
    cards: List[Card] = []
    for deck in range(num_decks):
        cards.extend(make_deck(deck))
    return cards


def cards_to_str(cards) -> str:
    """将牌列表转换为可读字符串，如 "A♣ 7♠ Joker" """
    return ' '.join(str(c) for c in cards)
