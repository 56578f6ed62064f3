"""
Hand-shape classification with wild-card substitution.

Classification is a decision table: the card count selects an ordered list of
candidate shapes and the first shape whose matcher accepts the cards wins
(5 cards: three-with-pair > straight flush > straight > bomb; 6 cards:
plank > steel plate > bomb). A matcher sees the plain cards and the wild cards
separately and returns the value the shape is ranked by, or None.

Wild rules:
- a wild may fill any missing non-joker rank slot, including its own rank;
- a group that needs a joker can never be completed by a wild;
- more than one card with no plain card among them is not a shape;
- planks and steel plates take no substitution: a wild there only counts as
  its own natural rank.

Runs (straights, straight flushes, planks, steel plates) use nominal positions
3..A only to check contiguity. They are ranked by the highest effective value
among their plain cards, so a run through the trump rank ranks as 15.
"""
from __future__ import annotations

from collections import Counter
from enum import Enum
from itertools import permutations
from typing import Callable, Optional, Sequence

from .deck import Card, Rank, Suit
from .ranks import TRUMP_VALUE, card_value, effective_value, split_wilds

# Runs use nominal positions 3..14; Two and the jokers never appear in one.
RUN_LOW = int(Rank.THREE)
RUN_HIGH = int(Rank.ACE)
STRAIGHT_LENGTH = 5
MIN_BOMB = 4
MAX_BOMB = 8


class ShapeKind(Enum):
    SINGLE = "single"
    PAIR = "pair"
    TRIPLE = "triple"
    BOMB = "bomb"
    THREE_WITH_PAIR = "three_with_pair"
    STRAIGHT = "straight"
    STRAIGHT_FLUSH = "straight_flush"
    PLANK = "plank"
    STEEL_PLATE = "steel_plate"

    def is_bomb_class(self) -> bool:
        """Bombs and straight flushes may be played over any other shape."""
        return self in (ShapeKind.BOMB, ShapeKind.STRAIGHT_FLUSH)


Matcher = Callable[[list[Card], list[Card], Rank], Optional[int]]


def _match_single(plain: list[Card], wilds: list[Card], trump: Rank) -> Optional[int]:
    card = (plain or wilds)[0]
    return card_value(card, trump)


def _match_same_rank(plain: list[Card], wilds: list[Card], trump: Rank) -> Optional[int]:
    rank = plain[0].rank
    if any(c.rank != rank for c in plain):
        return None
    if rank.is_joker() and wilds:
        return None
    return effective_value(rank, trump)


def _match_bomb(plain: list[Card], wilds: list[Card], trump: Rank) -> Optional[int]:
    if plain[0].rank.is_joker():
        return None
    return _match_same_rank(plain, wilds, trump)


def _match_three_with_pair(plain: list[Card], wilds: list[Card], trump: Rank) -> Optional[int]:
    # Both groups need at least one plain card; a pure-wild group would be an all-wild grouping.
    counts = Counter(c.rank for c in plain)
    if len(counts) != 2:
        return None
    best: Optional[int] = None
    for triple, pair in permutations(counts, 2):
        if counts[triple] > 3 or counts[pair] > 2:
            continue
        if triple.is_joker() and counts[triple] < 3:
            continue
        if pair.is_joker() and counts[pair] < 2:
            continue
        value = effective_value(triple, trump)
        if best is None or value > best:
            best = value
    return best


def _fits_run(positions: Sequence[int]) -> bool:
    """True if the (distinct) positions fit inside one 5-wide window of 3..A."""
    if any(p < RUN_LOW or p > RUN_HIGH for p in positions):
        return False
    if len(set(positions)) != len(positions):
        return False
    return max(positions) - min(positions) < STRAIGHT_LENGTH


def _run_value(plain: list[Card], trump: Rank) -> int:
    """Highest effective value among the plain cards; all-wild falls back to the trump value."""
    if not plain:
        return TRUMP_VALUE
    return max(card_value(c, trump) for c in plain)


def _straight_readings(plain: list[Card], wilds: list[Card]):
    """
    Yield (fixed cards, substitutes) splits: wilds sitting on their own rank
    first, then progressively used as substitutes.
    """
    for natural in range(len(wilds), -1, -1):
        yield plain + wilds[:natural], len(wilds) - natural


def _match_straight(plain: list[Card], wilds: list[Card], trump: Rank) -> Optional[int]:
    for fixed, _ in _straight_readings(plain, wilds):
        if _fits_run([int(c.rank) for c in fixed]):
            return _run_value(plain, trump)
    return None


def _match_straight_flush(plain: list[Card], wilds: list[Card], trump: Rank) -> Optional[int]:
    for fixed, _ in _straight_readings(plain, wilds):
        if len({c.suit for c in fixed}) != 1 or fixed[0].suit == Suit.JOKER:
            continue
        if _fits_run([int(c.rank) for c in fixed]):
            return _run_value(plain, trump)
    return None


def _group_run(group_size: int, groups: int) -> Matcher:
    def match(plain: list[Card], wilds: list[Card], trump: Rank) -> Optional[int]:
        counts = Counter(int(c.rank) for c in plain + wilds)
        if len(counts) != groups or any(n != group_size for n in counts.values()):
            return None
        positions = sorted(counts)
        if positions[0] < RUN_LOW or positions[-1] > RUN_HIGH:
            return None
        if positions[-1] - positions[0] != groups - 1:
            return None
        return _run_value(plain, trump)

    return match


_MATCHERS: dict[ShapeKind, Matcher] = {
    ShapeKind.SINGLE: _match_single,
    ShapeKind.PAIR: _match_same_rank,
    ShapeKind.TRIPLE: _match_same_rank,
    ShapeKind.BOMB: _match_bomb,
    ShapeKind.THREE_WITH_PAIR: _match_three_with_pair,
    ShapeKind.STRAIGHT: _match_straight,
    ShapeKind.STRAIGHT_FLUSH: _match_straight_flush,
    ShapeKind.PLANK: _group_run(2, 3),
    ShapeKind.STEEL_PLATE: _group_run(3, 2),
}

# card count -> candidate shapes in priority order
SHAPE_TABLE: dict[int, tuple[ShapeKind, ...]] = {
    1: (ShapeKind.SINGLE,),
    2: (ShapeKind.PAIR,),
    3: (ShapeKind.TRIPLE,),
    4: (ShapeKind.BOMB,),
    5: (
        ShapeKind.THREE_WITH_PAIR,
        ShapeKind.STRAIGHT_FLUSH,
        ShapeKind.STRAIGHT,
        ShapeKind.BOMB,
    ),
    6: (ShapeKind.PLANK, ShapeKind.STEEL_PLATE, ShapeKind.BOMB),
    7: (ShapeKind.BOMB,),
    8: (ShapeKind.BOMB,),
}


def _reading(cards: Sequence[Card], kind: ShapeKind, trump_rank: Rank) -> Optional[int]:
    if len(cards) not in SHAPE_TABLE or kind not in SHAPE_TABLE[len(cards)]:
        return None
    plain, wilds = split_wilds(cards, trump_rank)
    if not plain and len(cards) > 1:
        return None
    return _MATCHERS[kind](plain, wilds, trump_rank)


def describe(cards: Sequence[Card], trump_rank: Rank) -> Optional[tuple[ShapeKind, int]]:
    """Return ``(shape, ranking value)`` for the first matching shape, or None."""
    for kind in SHAPE_TABLE.get(len(cards), ()):
        value = _reading(cards, kind, trump_rank)
        if value is not None:
            return kind, value
    return None


def classify(cards: Sequence[Card], trump_rank: Rank) -> Optional[ShapeKind]:
    """Shape formed by ``cards`` under ``trump_rank``, or None if they form none."""
    found = describe(cards, trump_rank)
    return found[0] if found else None


def defining_value(cards: Sequence[Card], kind: ShapeKind, trump_rank: Rank) -> Optional[int]:
    """
    Value a shape is ranked by among plays of the same shape:
    - single / pair / triple / bomb: effective value of the rank
    - three-with-pair: effective value of the triple's rank
    - straight / straight flush / plank / steel plate: highest effective value
      among the plain cards (15 when the run passes through the trump rank)
    """
    return _reading(cards, kind, trump_rank)
