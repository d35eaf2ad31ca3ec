"""Three-card hands, their ranking and a dealing deck.

A card is encoded as ``suit * 100 + rank`` where the suit is 0 (spades),
1 (hearts), 2 (clubs) or 3 (diamonds) and the rank runs from 2 to 14 (ace).
"""

import threading
from dataclasses import dataclass

from scratchkit.randutil import rand_alphabet_str, rand_num

DECK_CARDS = tuple(suit * 100 + rank for suit in range(4) for rank in range(2, 15))
MAX_DEALS = 17
VERSION_LENGTH = 10


def _is_leopard(x, y, z):
    return x % 100 == y % 100 == z % 100


def _is_flush(x, y, z):
    return x // 100 == y // 100 == z // 100


def _is_straight(x, y, z):
    low, mid, high = sorted((x % 100, y % 100, z % 100))
    return low + 1 == mid and (low + 2 == high or low + 12 == high)


def _is_pair(x, y, z):
    return x == y or x == z or y == z


@dataclass(frozen=True)
class HandCard:
    """Three cards dealt to one player, tagged with the deck version."""

    cards: tuple
    version: str = ""

    def score(self):
        """Rank the hand; higher is better."""
        if self.is_leopard():
            kind = 500
        elif self.is_royal_flush():
            kind = 400
        elif self.is_flush():
            kind = 300
        elif self.is_straight():
            kind = 200
        elif self.is_pair():
            kind = 100
        else:
            kind = 0
        return (kind + self.base_score()) * 10

    def base_score(self):
        """Sum of ranks, with the ace counted low in an A-2-3 straight."""
        low, mid, high = sorted(card % 100 for card in self.cards)
        total = low + mid + high
        if _is_straight(low, mid, high) and low == 2:
            return total - 13
        return total

    def suit_score(self):
        """Suit of the card chosen as the highest-ranked one."""
        x, y, z = self.cards
        base_max = 0
        if x % 100 >= y % 100 and x % 100 >= z % 100:
            base_max = x
        if y % 100 >= x % 100 and y % 100 >= z % 100:
            base_max = y
        if x % 100 >= y % 100 and x % 100 >= z % 100:
            base_max = z

        suit_max = 0
        for card in (x, y, z):
            if card == base_max and card // 100 >= suit_max:
                suit_max = card // 100
        return suit_max

    def is_leopard(self):
        return _is_leopard(*self.cards)

    def is_royal_flush(self):
        return _is_flush(*self.cards) and _is_straight(*self.cards)

    def is_flush(self):
        return _is_flush(*self.cards) and not _is_straight(*self.cards)

    def is_straight(self):
        return _is_straight(*self.cards) and not _is_flush(*self.cards)

    def is_pair(self):
        ranks = tuple(card % 100 for card in self.cards)
        return _is_pair(*ranks) and not _is_leopard(*ranks)

    def to_json(self):
        """The wire form of the hand; the version is not sent."""
        return {"cards": list(self.cards)}


def compare(h1, h2):
    """True when ``h1`` beats ``h2``."""
    return h1.score() > h2.score()


class DealError(Exception):
    """Raised when the deck cannot deal another hand."""


class Deck:
    """A shuffled deck that deals three-card hands."""

    def __init__(self):
        self._lock = threading.Lock()
        self.cut_the_deck()

    @property
    def version(self):
        return self._version

    def cut_the_deck(self):
        """Gather all cards back and start a new deck version."""
        with self._lock:
            self._remaining = list(DECK_CARDS)
            self._version = rand_alphabet_str(VERSION_LENGTH)
            self._dealt = 0

    def deal(self):
        """Deal three random cards that have not been dealt since the last cut."""
        with self._lock:
            if self._dealt >= MAX_DEALS:
                raise DealError("超出发牌数量限制！")
            cards = tuple(
                self._remaining.pop(rand_num(len(self._remaining))) for _ in range(3)
            )
            self._dealt += 1
            return HandCard(cards=cards, version=self._version)