"""玩家手牌"""
from typing import Iterable, Iterator, List, Optional
import random

from .cards import Card, Suit
from .errors import CardNotHeldError


class Hand:
    """
    手牌 (无序多重集)

    不保证顺序；移除时只移除一张相同的牌
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = list(cards) if cards is not None else []

    def add(self, card: Card) -> None:
        self._cards.append(card)

    def remove(self, card: Card) -> None:
        """
        移除一张牌

        Raises:
            CardNotHeldError: 手牌中没有这张牌
        """
        try:
            self._cards.remove(card)
        except ValueError:
            raise CardNotHeldError(card) from None

    def choice(self, rng: random.Random) -> Optional[Card]:
        """均匀随机选一张 (空手牌返回 None)"""
        if not self._cards:
            return None
        return rng.choice(self._cards)

    def filter_by_suit(self, suit: Suit) -> 'Hand':
        """只含指定花色的新手牌 (手牌中不应有王)"""
        return Hand(c for c in self._cards if c.suit == suit)

    @property
    def cards(self) -> tuple:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card: Card) -> bool:
        return card in self._cards

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __repr__(self) -> str:
        return f"Hand({' '.join(str(c) for c in self._cards)})"
