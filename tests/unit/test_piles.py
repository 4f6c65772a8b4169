"""牌库与弃牌堆测试"""
import random

import pytest

from lesnura.cards import Card, Rank, Suit, make_decks
from lesnura.piles import Discard, Library, draw


def card(value: int, suit: Suit = Suit.CLUBS) -> Card:
    return Card.standard(Rank.from_value(value), suit)


class TestDiscard:
    """Discard 测试"""

    def test_empty(self):
        discard = Discard()
        assert len(discard) == 0
        assert discard.top() is None
        assert discard.top_suit() is None

    def test_push_and_top(self):
        discard = Discard()
        discard.push(card(3, Suit.HEARTS))
        discard.push(card(9, Suit.SPADES))
        assert len(discard) == 2
        assert discard.top() == card(9, Suit.SPADES)
        assert discard.top_suit() == Suit.SPADES

    def test_joker_top_has_no_suit(self):
        discard = Discard([card(3), Card.make_joker()])
        assert discard.top_suit() is None


class TestLibrary:
    """Library 测试"""

    def test_pop_from_end(self):
        library = Library([card(1), card(2)])
        assert library.pop() == card(2)
        assert library.pop() == card(1)
        assert library.pop() is None

    def test_shuffled_keeps_cards(self):
        cards = make_decks()
        library = Library.shuffled(cards, random.Random(0))
        assert len(library) == 108
        assert set(library) == set(cards)

    def test_shuffled_is_deterministic_with_seed(self):
        cards = make_decks()
        a = Library.shuffled(cards, random.Random(5))
        b = Library.shuffled(cards, random.Random(5))
        assert a.cards == b.cards


class TestDraw:
    """draw 测试"""

    def test_recycle_scenario(self):
        a, b, c = card(1), card(2), card(3)
        library = Library([a])
        discard = Discard([b, c])
        rng = random.Random(0)

        assert draw(library, discard, rng) == a

        # 牌库空: C 留在弃牌堆顶，B 成为新牌库
        assert draw(library, discard, rng) == b
        assert discard.cards == [c]
        assert len(library) == 0

        assert draw(library, discard, rng) == c
        assert draw(library, discard, rng) is None

    def test_both_empty(self):
        assert draw(Library(), Discard(), random.Random(0)) is None

    def test_recycle_keeps_top_visible(self):
        cards = [card(v) for v in range(1, 8)]
        library = Library()
        discard = Discard(cards)
        drawn = draw(library, discard, random.Random(1))

        assert drawn in cards[:-1]
        assert discard.top() == cards[-1]
        assert len(discard) == 1
        assert len(library) == len(cards) - 2

    def test_full_cycle_draws_every_card_once(self):
        rng = random.Random(42)
        cards = make_decks()
        library = Library.shuffled(cards, rng)
        discard = Discard()

        drawn = []
        for _ in range(len(cards)):
            c = draw(library, discard, rng)
            drawn.append(c)
            discard.push(c)

        assert len(drawn) == 108
        assert set(drawn) == set(cards)
        assert len(library) == 0

        # 下一次摸牌触发回收，最后弃的牌仍在顶上
        last = discard.top()
        c = draw(library, discard, rng)
        assert c is not None
        assert c != last
        assert discard.top() == last
        assert len(library) + len(discard) + 1 == 108

    @pytest.mark.parametrize("seed", range(5))
    def test_recycled_cards_are_conserved(self, seed):
        rng = random.Random(seed)
        cards = make_decks()
        library = Library.shuffled(cards, rng)
        discard = Discard()

        held = []
        for i in range(300):
            c = draw(library, discard, rng)
            # 每 3 张留一张在手中，其余弃掉
            if i % 3 == 0 and len(held) < 20:
                held.append(c)
            else:
                discard.push(c)
            assert len(library) + len(discard) + len(held) == 108

        assert set(library) | set(discard) | set(held) == set(cards)
