"""
Enumerate the plays a hand can make, shape by shape.

Generators prefer plain cards and only reach for wild cards when the plain
cards fall short. Every candidate is re-checked with ``classify`` so a play is
only ever listed under the shape the classifier gives it.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .compare import BeatContext, can_beat
from .deck import Card, Rank, Suit, PLAIN_SUITS
from .ranks import sort_cards, split_wilds
from .shapes import (
    MAX_BOMB,
    MIN_BOMB,
    RUN_HIGH,
    RUN_LOW,
    STRAIGHT_LENGTH,
    ShapeKind,
    classify,
)
from .table import TableState

CardsTuple = tuple[Card, ...]


def group_by_rank(cards: Iterable[Card], trump_rank: Rank) -> tuple[Dict[Rank, List[Card]], List[Card]]:
    """(plain cards grouped by rank, low to high; wild cards)."""
    plain, wilds = split_wilds(cards, trump_rank)
    groups: Dict[Rank, List[Card]] = {}
    for c in sort_cards(plain, trump_rank):
        groups.setdefault(c.rank, []).append(c)
    return groups, wilds


def _fill(group: Sequence[Card], wilds: Sequence[Card], size: int) -> Optional[CardsTuple]:
    """``size`` cards of one rank, topping up with wilds (never for jokers)."""
    if len(group) >= size:
        return tuple(group[:size])
    if not group or group[0].is_joker():
        return None
    missing = size - len(group)
    if missing > len(wilds):
        return None
    return tuple(group) + tuple(wilds[:missing])


def singles(hand: Sequence[Card], trump_rank: Rank) -> List[CardsTuple]:
    seen: set[Card] = set()
    out: List[CardsTuple] = []
    for c in sort_cards(hand, trump_rank):
        if c not in seen:
            seen.add(c)
            out.append((c,))
    return out


def same_rank_sets(hand: Sequence[Card], trump_rank: Rank, size: int) -> List[CardsTuple]:
    groups, wilds = group_by_rank(hand, trump_rank)
    out: List[CardsTuple] = []
    for group in groups.values():
        cards = _fill(group, wilds, size)
        if cards is not None:
            out.append(cards)
    return out


def bombs(hand: Sequence[Card], trump_rank: Rank) -> List[CardsTuple]:
    groups, wilds = group_by_rank(hand, trump_rank)
    out: List[CardsTuple] = []
    for rank, group in groups.items():
        if rank.is_joker():
            continue
        for size in range(MIN_BOMB, min(MAX_BOMB, len(group) + len(wilds)) + 1):
            cards = _fill(group, wilds, size)
            if cards is not None:
                out.append(cards)
    return out


def three_with_pairs(hand: Sequence[Card], trump_rank: Rank) -> List[CardsTuple]:
    groups, wilds = group_by_rank(hand, trump_rank)
    out: List[CardsTuple] = []
    for t_rank, t_group in groups.items():
        triple = _fill(t_group, wilds, 3)
        if triple is None:
            continue
        remaining = list(wilds[max(0, 3 - len(t_group)):])
        for p_rank, p_group in groups.items():
            if p_rank == t_rank:
                continue
            pair = _fill(p_group, remaining, 2)
            if pair is not None:
                out.append(triple + pair)
    return out


def _runs(
    groups: Dict[Rank, List[Card]],
    wilds: Sequence[Card],
    suit: Optional[Suit] = None,
) -> List[CardsTuple]:
    out: List[CardsTuple] = []
    for top in range(RUN_LOW + STRAIGHT_LENGTH - 1, RUN_HIGH + 1):
        chosen: List[Card] = []
        missing = 0
        for pos in range(top - STRAIGHT_LENGTH + 1, top + 1):
            pool = [c for c in groups.get(Rank(pos), []) if suit is None or c.suit == suit]
            if pool:
                chosen.append(pool[0])
            else:
                missing += 1
        if missing <= len(wilds) and missing < STRAIGHT_LENGTH:
            out.append(tuple(chosen) + tuple(wilds[:missing]))
    return out


def straights(hand: Sequence[Card], trump_rank: Rank) -> List[CardsTuple]:
    groups, wilds = group_by_rank(hand, trump_rank)
    return _runs(groups, wilds)


def straight_flushes(hand: Sequence[Card], trump_rank: Rank) -> List[CardsTuple]:
    groups, wilds = group_by_rank(hand, trump_rank)
    out: List[CardsTuple] = []
    for suit in PLAIN_SUITS:
        out.extend(_runs(groups, wilds, suit=suit))
    return out


def _group_runs(hand: Sequence[Card], group_size: int, length: int) -> List[CardsTuple]:
    # No substitution here: wild cards only count as their own rank.
    by_rank: Dict[int, List[Card]] = {}
    for c in hand:
        by_rank.setdefault(int(c.rank), []).append(c)
    out: List[CardsTuple] = []
    for top in range(RUN_LOW + length - 1, RUN_HIGH + 1):
        ranks = range(top - length + 1, top + 1)
        if all(len(by_rank.get(r, [])) >= group_size for r in ranks):
            out.append(tuple(c for r in ranks for c in by_rank[r][:group_size]))
    return out


def planks(hand: Sequence[Card], trump_rank: Rank) -> List[CardsTuple]:
    return _group_runs(hand, 2, 3)


def steel_plates(hand: Sequence[Card], trump_rank: Rank) -> List[CardsTuple]:
    return _group_runs(hand, 3, 2)


_GENERATORS = {
    ShapeKind.SINGLE: singles,
    ShapeKind.PAIR: lambda hand, trump: same_rank_sets(hand, trump, 2),
    ShapeKind.TRIPLE: lambda hand, trump: same_rank_sets(hand, trump, 3),
    ShapeKind.BOMB: bombs,
    ShapeKind.THREE_WITH_PAIR: three_with_pairs,
    ShapeKind.STRAIGHT: straights,
    ShapeKind.STRAIGHT_FLUSH: straight_flushes,
    ShapeKind.PLANK: planks,
    ShapeKind.STEEL_PLATE: steel_plates,
}


def candidate_plays(hand: Sequence[Card], trump_rank: Rank, kind: ShapeKind) -> List[CardsTuple]:
    """Distinct plays of shape ``kind`` available from ``hand``."""
    seen: set[tuple] = set()
    out: List[CardsTuple] = []
    for cards in _GENERATORS[kind](hand, trump_rank):
        key = tuple(sorted((int(c.suit), int(c.rank)) for c in cards))
        if key in seen:
            continue
        seen.add(key)
        if classify(cards, trump_rank) == kind:
            out.append(cards)
    return out


def all_candidate_plays(hand: Sequence[Card], trump_rank: Rank) -> List[CardsTuple]:
    out: List[CardsTuple] = []
    for kind in ShapeKind:
        out.extend(candidate_plays(hand, trump_rank, kind))
    return out


def legal_plays(table: TableState, seat: int) -> List[CardsTuple]:
    """Every candidate from ``seat``'s hand that the engine would accept now."""
    hand = table.seats[seat].hand
    trump = table.trump_rank
    standing = table.standing
    if standing is None:
        return all_candidate_plays(hand, trump)
    context = BeatContext(trump, table.relation_to_standing(seat))
    return [
        cards
        for cards in all_candidate_plays(hand, trump)
        if can_beat(cards, classify(cards, trump), standing.cards, standing.shape, context)
    ]
