import string

import pytest

from scratchkit.cards import DECK_CARDS, DealError, Deck, HandCard, compare


@pytest.mark.parametrize(
    "cards, expected",
    [((14, 114, 314), 5420), ((14, 102, 3), 2060)],
)
def test_score(cards, expected):
    assert HandCard(cards=cards).score() == expected


@pytest.mark.parametrize(
    "cards, expected",
    [((14, 114, 314), True), ((14, 102, 3), False)],
)
def test_is_leopard(cards, expected):
    assert HandCard(cards=cards).is_leopard() is expected


@pytest.mark.parametrize(
    "cards, expected",
    [((102, 114, 103), True), ((2, 114, 3), False)],
)
def test_is_royal_flush(cards, expected):
    assert HandCard(cards=cards).is_royal_flush() is expected


@pytest.mark.parametrize(
    "cards, expected",
    [((14, 2, 4), True), ((14, 2, 3), False), ((2, 114, 3), False)],
)
def test_is_flush(cards, expected):
    assert HandCard(cards=cards).is_flush() is expected


@pytest.mark.parametrize(
    "cards, expected",
    [
        ((14, 102, 103), True),
        ((112, 314, 213), True),
        ((14, 111, 213), False),
        ((2, 14, 3), False),
    ],
)
def test_is_straight(cards, expected):
    assert HandCard(cards=cards).is_straight() is expected


@pytest.mark.parametrize(
    "cards, expected",
    [((14, 114, 302), True), ((14, 114, 314), False), ((14, 102, 3), False)],
)
def test_is_pair(cards, expected):
    assert HandCard(cards=cards).is_pair() is expected


def test_compare_leopard_beats_straight():
    leopard = HandCard(cards=(14, 114, 314))
    straight = HandCard(cards=(14, 102, 3))
    assert compare(leopard, straight) is True
    assert compare(straight, leopard) is False


def test_compare_equal_is_false():
    hand = HandCard(cards=(14, 102, 3))
    assert compare(hand, hand) is False


def test_suit_score():
    assert HandCard(cards=(214, 3, 105)).suit_score() == 1


def test_to_json_omits_version():
    hand = HandCard(cards=(14, 114, 314), version="abcdefghij")
    assert hand.to_json() == {"cards": [14, 114, 314]}


def test_deal_gives_three_cards_from_deck():
    dealer = Deck()
    hand = dealer.deal()
    assert len(hand.cards) == 3
    assert len(set(hand.cards)) == 3
    assert set(hand.cards) <= set(DECK_CARDS)


def test_deal_version_matches_deck():
    dealer = Deck()
    hand = dealer.deal()
    assert hand.version == dealer.version
    assert len(hand.version) == 10
    assert set(hand.version) <= set(string.ascii_lowercase)


def test_deal_limit_and_uniqueness():
    dealer = Deck()
    hands = [dealer.deal() for _ in range(17)]
    dealt = [card for hand in hands for card in hand.cards]
    assert len(dealt) == 51
    assert len(set(dealt)) == 51
    assert set(dealt) <= set(DECK_CARDS)
    assert len(set(DECK_CARDS) - set(dealt)) == 1
    with pytest.raises(DealError):
        dealer.deal()


def test_cut_the_deck_resets():
    dealer = Deck()
    for _ in range(17):
        dealer.deal()
    dealer.cut_the_deck()
    hand = dealer.deal()
    assert hand.version == dealer.version
    assert len(set(hand.cards)) == 3