"""Deck construction and card codes."""
from collections import Counter

import pytest

from guandan.deck import (
    BIG_JOKER,
    SMALL_JOKER,
    Card,
    Rank,
    Suit,
    format_cards,
    make_deck_108,
    parse_card,
    parse_cards,
)


def test_deck_108():
    deck = make_deck_108()
    assert len(deck) == 108
    counts = Counter(deck)
    assert counts[SMALL_JOKER] == 2
    assert counts[BIG_JOKER] == 2
    assert len(counts) == 54
    assert all(n == 2 for n in counts.values())


def test_joker_suit_is_enforced():
    with pytest.raises(ValueError):
        Card(Suit.JOKER, Rank.FIVE)
    with pytest.raises(ValueError):
        Card(Suit.HEART, Rank.SMALL_JOKER)


def test_parse_card_codes():
    assert parse_card("H5") == Card(Suit.HEART, Rank.FIVE)
    assert parse_card("s10") == Card(Suit.SPADE, Rank.TEN)
    assert parse_card("DT") == Card(Suit.DIAMOND, Rank.TEN)
    assert parse_card("CA") == Card(Suit.CLUB, Rank.ACE)
    assert parse_card("S2") == Card(Suit.SPADE, Rank.TWO)
    assert parse_card("JS") == SMALL_JOKER
    assert parse_card("jb") == BIG_JOKER


def test_parse_card_rejects_garbage():
    for token in ["", "X5", "H1", "H11", "J", "5H"]:
        with pytest.raises(ValueError):
            parse_card(token)


def test_every_card_code_parses_back():
    for card in set(make_deck_108()):
        assert parse_card(card.code) == card


def test_parse_cards_and_format():
    cards = parse_cards("H10 SQ JB")
    assert cards == parse_cards(["H10", "SQ", "JB"])
    assert format_cards(cards) == "10♥ Q♠ Joker-B"
    assert str(SMALL_JOKER) == "Joker-S"
