"""
牌库与弃牌堆

牌库为栈 (从末尾摸牌)。牌库摸空时，弃牌堆除顶牌外的所有牌洗混后成为新牌库，
顶牌留在弃牌堆上保持可见。
"""
from typing import Iterable, Iterator, List, Optional
import logging
import random

from .cards import Card, Suit

logger = logging.getLogger(__name__)


class Discard:
    """弃牌堆 (末尾为顶牌)"""

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self.cards: List[Card] = list(cards) if cards is not None else []

    def push(self, card: Card) -> None:
        self.cards.append(card)

    def top(self) -> Optional[Card]:
        return self.cards[-1] if self.cards else None

    def top_suit(self) -> Optional[Suit]:
        """顶牌花色 (空堆或顶牌为王时为 None)"""
        top = self.top()
        return top.suit if top is not None else None

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)


class Library:
    """牌库 (摸牌堆)"""

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self.cards: List[Card] = list(cards) if cards is not None else []

    @classmethod
    def shuffled(cls, cards: Iterable[Card], rng: random.Random) -> 'Library':
        """创建洗好的牌库"""
        library = cls(cards)
        rng.shuffle(library.cards)
        return library

    def pop(self) -> Optional[Card]:
        return self.cards.pop() if self.cards else None

    def recycle(self, discard: Discard, rng: random.Random) -> None:
        """
        用弃牌堆补充牌库

        弃牌堆顶牌被暂时拿开，其余牌洗混后成为新牌库，顶牌放回弃牌堆
        """
        top = discard.cards.pop()
        self.cards.extend(discard.cards)
        discard.cards.clear()
        rng.shuffle(self.cards)
        discard.push(top)
        logger.debug("Recycled discard into library: %d cards, %s stays on top", len(self.cards), top)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)


def draw(library: Library, discard: Discard, rng: random.Random) -> Optional[Card]:
    """
    摸一张牌

    Args:
        library: 牌库
        discard: 弃牌堆
        rng: 洗牌使用的随机源

    Returns:
        摸到的牌；两堆都为空时返回 None
    """
    if library.cards:
        return library.pop()
    if not discard.cards:
        return None

    library.recycle(discard, rng)
    card = library.pop()
    if card is None:
        # 弃牌堆只剩顶牌，直接摸走
        card = discard.cards.pop()
    return card
