"""
Observation / action encoding for learning agents.

Cards are encoded as counts over the 54 distinct card faces (52 plain cards
plus two jokers), so both physical copies of a card land on the same index
with a count of up to 2. Counts are scaled by 1/2 to stay in [0, 1].

Observation layout for one seat (``OBS_SIZE`` floats):
  [0:54)    own hand
  [54:108)  standing play
  [108:162) every card already played this hand (standing play included)
  [162:166) own seat one-hot
  [166:170) standing play owner: none / self / partner / opponent
  [170:183) trump rank one-hot (level 2..14)
  [183:185) partnership levels, own partnership first, scaled to [0, 1]
  [185:189) cards left per seat, starting from own seat, scaled by 1/27
  [189]     consecutive passes, scaled by 1/3
Actions are card-count vectors of the same 54-wide layout.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from .compare import Relation
from .deal import HAND_SIZE, NUM_SEATS
from .deck import Card, Rank, Suit
from .ranks import MAX_LEVEL, MIN_LEVEL, rank_to_level
from .table import TableState

NUM_CARD_FACES: int = 54
NUM_LEVELS: int = MAX_LEVEL - MIN_LEVEL + 1
OBS_SIZE: int = NUM_CARD_FACES * 3 + NUM_SEATS + 4 + NUM_LEVELS + 2 + NUM_SEATS + 1

_RELATION_INDEX = {None: 0, Relation.SELF: 1, Relation.PARTNER: 2, Relation.OPPONENT: 3}


def card_index(card: Card) -> int:
    """
    Stable index 0..53:
      - 0..51 : plain cards, suit-major (spade, club, diamond, heart), rank 3..2
      - 52    : small joker
      - 53    : big joker
    """
    if card.rank == Rank.SMALL_JOKER:
        return 52
    if card.rank == Rank.BIG_JOKER:
        return 53
    assert card.suit != Suit.JOKER
    return int(card.suit) * 13 + (int(card.rank) - int(Rank.THREE))


def encode_card_counts(cards: Iterable[Card]) -> np.ndarray:
    vec = np.zeros(NUM_CARD_FACES, dtype=np.float32)
    for c in cards:
        vec[card_index(c)] += 0.5
    return vec


def _one_hot(index: int | None, size: int) -> np.ndarray:
    vec = np.zeros(size, dtype=np.float32)
    if index is not None and 0 <= index < size:
        vec[index] = 1.0
    return vec


def encode_observation(table: TableState, seat: int) -> np.ndarray:
    """Flat float32 view of the table from ``seat``'s side."""
    hand_vec = encode_card_counts(table.seats[seat].hand)
    standing_cards = table.standing.cards if table.standing is not None else ()
    standing_vec = encode_card_counts(standing_cards)
    played_vec = encode_card_counts(table.played_cards())

    relation = table.relation_to_standing(seat) if table.standing is not None else None
    own_team = seat % 2
    levels = np.array(
        [table.levels[own_team], table.levels[1 - own_team]], dtype=np.float32
    )
    levels = (levels - MIN_LEVEL) / float(MAX_LEVEL - MIN_LEVEL)
    left = np.array(
        [len(table.seats[(seat + k) % NUM_SEATS].hand) for k in range(NUM_SEATS)],
        dtype=np.float32,
    ) / float(HAND_SIZE)

    obs = np.concatenate(
        [
            hand_vec,
            standing_vec,
            played_vec,
            _one_hot(seat, NUM_SEATS),
            _one_hot(_RELATION_INDEX[relation], 4),
            _one_hot(rank_to_level(table.trump_rank) - MIN_LEVEL, NUM_LEVELS),
            levels,
            left,
            np.array([table.pass_count / float(NUM_SEATS - 1)], dtype=np.float32),
        ]
    )
    assert obs.shape == (OBS_SIZE,)
    return obs


def encode_action(cards: Sequence[Card]) -> np.ndarray:
    """A play as card counts; the all-zero vector is a pass."""
    return encode_card_counts(cards)


def encode_actions(actions: Sequence[Sequence[Card]]) -> np.ndarray:
    """Stack of action vectors, shape (len(actions), 54)."""
    if not actions:
        return np.zeros((0, NUM_CARD_FACES), dtype=np.float32)
    return np.stack([encode_action(a) for a in actions])


def decode_card_counts(vec: np.ndarray) -> List[Card]:
    """Inverse of ``encode_card_counts`` (one Card per copy)."""
    cards: List[Card] = []
    for idx in np.flatnonzero(vec > 0):
        copies = int(round(float(vec[idx]) * 2))
        cards.extend([_card_for_index(int(idx))] * copies)
    return cards


def _card_for_index(idx: int) -> Card:
    if idx == 52:
        return Card(Suit.JOKER, Rank.SMALL_JOKER)
    if idx == 53:
        return Card(Suit.JOKER, Rank.BIG_JOKER)
    return Card(Suit(idx // 13), Rank(idx % 13 + int(Rank.THREE)))


__all__ = [
    "NUM_CARD_FACES",
    "OBS_SIZE",
    "card_index",
    "encode_card_counts",
    "encode_observation",
    "encode_action",
    "encode_actions",
    "decode_card_counts",
]
