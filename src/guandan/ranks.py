"""
Effective rank values under the hand's trump rank, and the wild-card policy.

Every ordering decision in the engine goes through ``effective_value``:
  - small joker 16, big joker 17
  - the trump rank 15 (this includes Two when Two is trump)
  - Two 2 when it is not trump
  - everything else its nominal value 3..14
The wild card is the Heart card at the trump rank. It counts as 15 wherever it
is ranked and never stands in for a joker.
"""
from __future__ import annotations

from typing import Iterable

from .deck import Card, Rank, Suit

TRUMP_VALUE = 15
MIN_LEVEL = 2
MAX_LEVEL = 14


def effective_value(rank: Rank, trump_rank: Rank) -> int:
    if rank == Rank.SMALL_JOKER:
        return 16
    if rank == Rank.BIG_JOKER:
        return 17
    if rank == Rank.TWO:
        return TRUMP_VALUE if trump_rank == Rank.TWO else 2
    if rank == trump_rank:
        return TRUMP_VALUE
    return int(rank)


def card_value(card: Card, trump_rank: Rank) -> int:
    return effective_value(card.rank, trump_rank)


def is_wild(card: Card, trump_rank: Rank) -> bool:
    """True for the Heart card at the trump rank (at most two in the deck)."""
    return card.suit == Suit.HEART and card.rank == trump_rank


def split_wilds(cards: Iterable[Card], trump_rank: Rank) -> tuple[list[Card], list[Card]]:
    """Partition into (plain cards, wild cards), preserving order."""
    plain: list[Card] = []
    wilds: list[Card] = []
    for c in cards:
        (wilds if is_wild(c, trump_rank) else plain).append(c)
    return plain, wilds


def sort_key(card: Card, trump_rank: Rank) -> tuple[int, int]:
    """Effective value first, then suit (spade < club < diamond < heart < joker)."""
    return card_value(card, trump_rank), int(card.suit)


def sort_cards(cards: Iterable[Card], trump_rank: Rank) -> list[Card]:
    return sorted(cards, key=lambda c: sort_key(c, trump_rank))


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def level_to_rank(level: int) -> Rank:
    """Partnership level 2..14 to the rank it plays: 2 -> Two, 3..14 -> Three..Ace."""
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise ValueError(f"Level out of range: {level}")
    if level == 2:
        return Rank.TWO
    return Rank(level)


def rank_to_level(rank: Rank) -> int:
    if rank.is_joker():
        raise ValueError(f"Jokers have no level: {rank.name}")
    if rank == Rank.TWO:
        return 2
    return int(rank)
