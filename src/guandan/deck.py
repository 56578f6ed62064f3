"""
Guandan deck: two standard 52-card decks plus four jokers (108 cards).
Ranks run 3 < 4 < ... < A < 2 < small joker < big joker (nominal order).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable


class Suit(IntEnum):
    """Suit order is also the tie-break order when sorting equal ranks."""
    SPADE = 0
    CLUB = 1
    DIAMOND = 2
    HEART = 3
    JOKER = 4


class Rank(IntEnum):
    """Nominal rank value. Trump elevation is applied by ``ranks.effective_value``."""
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14
    TWO = 15
    SMALL_JOKER = 16
    BIG_JOKER = 17

    def is_joker(self) -> bool:
        return self in (Rank.SMALL_JOKER, Rank.BIG_JOKER)


PLAIN_SUITS = (Suit.SPADE, Suit.CLUB, Suit.DIAMOND, Suit.HEART)
PLAIN_RANKS = tuple(r for r in Rank if not r.is_joker())
DECK_SIZE = 108

_RANK_TEXT = {
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
    Rank.TWO: "2",
}
_SUIT_CHAR = {Suit.SPADE: "S", Suit.CLUB: "C", Suit.DIAMOND: "D", Suit.HEART: "H"}
_SUIT_SYMBOL = {Suit.SPADE: "♠", Suit.CLUB: "♣", Suit.DIAMOND: "♦", Suit.HEART: "♥"}


@dataclass(frozen=True)
class Card:
    """
    A single card. Jokers always carry ``Suit.JOKER``; every other rank carries
    one of the four plain suits. The two physical copies of a card compare equal.
    """

    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        if self.rank.is_joker() != (self.suit == Suit.JOKER):
            raise ValueError(f"Invalid card: {self.suit.name} {self.rank.name}")

    def is_joker(self) -> bool:
        return self.rank.is_joker()

    @property
    def code(self) -> str:
        """Compact text form used by ``parse_card``: ``H5``, ``S10``, ``JS``, ``JB``."""
        if self.rank == Rank.SMALL_JOKER:
            return "JS"
        if self.rank == Rank.BIG_JOKER:
            return "JB"
        rank_str = _RANK_TEXT.get(self.rank) or str(int(self.rank))
        return f"{_SUIT_CHAR[self.suit]}{rank_str}"

    def __str__(self) -> str:
        if self.rank == Rank.SMALL_JOKER:
            return "Joker-S"
        if self.rank == Rank.BIG_JOKER:
            return "Joker-B"
        rank_str = _RANK_TEXT.get(self.rank) or str(int(self.rank))
        return f"{rank_str}{_SUIT_SYMBOL[self.suit]}"

    def __repr__(self) -> str:
        return str(self)


SMALL_JOKER = Card(Suit.JOKER, Rank.SMALL_JOKER)
BIG_JOKER = Card(Suit.JOKER, Rank.BIG_JOKER)


def make_deck_108() -> list[Card]:
    """Build both decks (52 plain cards and 2 jokers each), in a fixed order."""
    deck: list[Card] = []
    for _ in range(2):
        for s in PLAIN_SUITS:
            for rank in PLAIN_RANKS:
                deck.append(Card(s, rank))
        deck.append(SMALL_JOKER)
        deck.append(BIG_JOKER)
    return deck


_RANK_FROM_TEXT = {
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
    "2": Rank.TWO,
}
_SUIT_FROM_CHAR = {v: k for k, v in _SUIT_CHAR.items()}


def parse_card(token: str) -> Card:
    """
    Parse a card code such as ``H5``, ``s10``, ``DT``, ``JS`` (small joker) or
    ``JB`` (big joker). Raises ValueError on anything else.
    """
    text = token.strip().upper()
    if text == "JS":
        return SMALL_JOKER
    if text == "JB":
        return BIG_JOKER
    if len(text) < 2 or text[0] not in _SUIT_FROM_CHAR or text[1:] not in _RANK_FROM_TEXT:
        raise ValueError(f"Bad card: {token!r}")
    return Card(_SUIT_FROM_CHAR[text[0]], _RANK_FROM_TEXT[text[1:]])


def parse_cards(text: str | Iterable[str]) -> list[Card]:
    """Parse whitespace-separated codes (or an iterable of codes) into cards."""
    tokens = text.split() if isinstance(text, str) else list(text)
    return [parse_card(t) for t in tokens if t.strip()]


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(str(c) for c in cards)
