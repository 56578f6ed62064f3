"""
Distribution for the four seats: 27 cards each from the shuffled 108-card pack.
Cards go out one at a time, starting with the leader and moving round the table.
Seats 0 & 2 form partnership 0, seats 1 & 3 partnership 1.
"""
from __future__ import annotations

import random
from typing import NamedTuple

from .deck import DECK_SIZE, Card, Rank, make_deck_108
from .ranks import sort_cards

NUM_SEATS = 4
HAND_SIZE = DECK_SIZE // NUM_SEATS


class Deal(NamedTuple):
    """Result of a deal. Hands are lists sorted low to high under the trump rank."""
    hands: tuple[list[Card], list[Card], list[Card], list[Card]]
    leader: int  # 0..3


def make_rng(seed: int | random.Random | None) -> random.Random:
    """Accept a ready Random, a seed, or nothing (fresh unseeded Random)."""
    if isinstance(seed, random.Random):
        return seed
    return random.Random(seed)


def deal_hands(
    trump_rank: Rank,
    leader: int = 0,
    deck: list[Card] | None = None,
    rng: random.Random | None = None,
) -> Deal:
    """Shuffle with ``rng`` and deal the whole pack round-robin from ``leader``."""
    if not 0 <= leader < NUM_SEATS:
        raise ValueError(f"Leader seat out of range: {leader}")
    if deck is None:
        deck = make_deck_108()
    if rng is None:
        rng = random.Random()
    deck = list(deck)
    if len(deck) != DECK_SIZE:
        raise ValueError(f"Expected {DECK_SIZE} cards, got {len(deck)}")
    rng.shuffle(deck)

    hands: list[list[Card]] = [[], [], [], []]
    for i, card in enumerate(deck):
        hands[(leader + i) % NUM_SEATS].append(card)

    sorted_hands = [sort_cards(h, trump_rank) for h in hands]
    return Deal(
        hands=(sorted_hands[0], sorted_hands[1], sorted_hands[2], sorted_hands[3]),
        leader=leader,
    )


def next_seat(seat: int) -> int:
    """Play always moves 0 -> 1 -> 2 -> 3 -> 0."""
    return (seat + 1) % NUM_SEATS


def partner_of(seat: int) -> int:
    return (seat + 2) % NUM_SEATS


def partnership_of(seat: int) -> int:
    return seat % 2
