"""
Rule-based computer player.

``choose_action`` looks at one seat and the table and returns either a play or
``PASS``; it never raises and never mutates the table.

Responding to a standing play:
- leave a strong play by the partner alone;
- otherwise play the cheapest same-shape play that wins (plain cards before
  wild cards, whole groups before split ones), then the cheapest bomb, then
  the cheapest straight flush;
- while an opponent is nearly out, answer singles and pairs with the biggest
  winning cards instead of the cheapest.

Leading:
- go out in one play when the whole hand is a shape;
- shed combinations first (steel plate, plank, straight, three-with-pair,
  triple, pair), then the smallest single that leaves every bomb whole;
- lead the smallest bomb once only bomb cards remain;
- while an opponent is nearly out, play a bomb or else the biggest single
  rather than a small single.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .compare import BeatContext, Relation, can_beat
from .deck import Card, Rank
from .moves import candidate_plays
from .ranks import is_wild
from .shapes import ShapeKind, classify, defining_value
from .table import Play, Seat, TableState

LEAD_ORDER = (
    ShapeKind.STEEL_PLATE,
    ShapeKind.PLANK,
    ShapeKind.STRAIGHT,
    ShapeKind.THREE_WITH_PAIR,
    ShapeKind.TRIPLE,
    ShapeKind.PAIR,
)


@dataclass
class StrategyConfig:
    """Thresholds are effective values (J=11, Q=12, K=13, A=14, trump=15)."""

    strong_rank: int = 13
    strong_straight_top: int = 10
    near_empty_cards: int = 2


@dataclass(frozen=True)
class Action:
    """A play of ``cards``; no cards means pass."""

    cards: tuple[Card, ...] = ()

    @property
    def is_pass(self) -> bool:
        return not self.cards


PASS = Action()

CardsTuple = tuple[Card, ...]


def is_strong(play: Play, trump_rank: Rank, config: StrategyConfig) -> bool:
    """Whether a partner's play is good enough to be left standing."""
    if play.shape.is_bomb_class():
        return True
    value = defining_value(play.cards, play.shape, trump_rank)
    if value is None:
        return False
    if play.shape == ShapeKind.STRAIGHT:
        return value >= config.strong_straight_top
    return value >= config.strong_rank


def opponent_near_empty(table: TableState, seat: int, config: StrategyConfig) -> bool:
    return any(0 < s.cards_left() <= config.near_empty_cards for s in table.opponents_of(seat))


def _wilds_used(cards: Iterable[Card], trump_rank: Rank) -> int:
    return sum(1 for c in cards if is_wild(c, trump_rank))


def _split_groups(cards: Sequence[Card], hand: Sequence[Card], trump_rank: Rank, min_group: int = 2) -> int:
    """Ranks the play takes only part of, among groups of at least ``min_group`` cards."""
    held = Counter(c.rank for c in hand if not is_wild(c, trump_rank))
    used = Counter(c.rank for c in cards if not is_wild(c, trump_rank))
    return sum(1 for r, n in used.items() if held[r] >= min_group and n < held[r])


def _value(cards: CardsTuple, trump_rank: Rank) -> int:
    kind = classify(cards, trump_rank)
    if kind is None:
        return 0
    return defining_value(cards, kind, trump_rank) or 0


def _cheapest(
    options: List[CardsTuple],
    hand: Sequence[Card],
    trump_rank: Rank,
) -> Optional[CardsTuple]:
    if not options:
        return None
    return min(
        options,
        key=lambda c: (
            _wilds_used(c, trump_rank),
            _split_groups(c, hand, trump_rank),
            _value(c, trump_rank),
            len(c),
        ),
    )


def _biggest(options: List[CardsTuple], trump_rank: Rank) -> Optional[CardsTuple]:
    if not options:
        return None
    return min(options, key=lambda c: (-_value(c, trump_rank), _wilds_used(c, trump_rank)))


def _smallest_bomb(options: List[CardsTuple], trump_rank: Rank) -> Optional[CardsTuple]:
    if not options:
        return None
    return min(options, key=lambda c: (len(c), _wilds_used(c, trump_rank), _value(c, trump_rank)))


def _winning(
    hand: Sequence[Card],
    kind: ShapeKind,
    standing: Play,
    context: BeatContext,
) -> List[CardsTuple]:
    return [
        cards
        for cards in candidate_plays(hand, context.trump_rank, kind)
        if can_beat(cards, kind, standing.cards, standing.shape, context)
    ]


def _respond(
    hand: Sequence[Card],
    standing: Play,
    context: BeatContext,
    pressure: bool,
) -> Action:
    trump = context.trump_rank
    same = _winning(hand, standing.shape, standing, context)
    if same:
        if pressure and standing.shape in (ShapeKind.SINGLE, ShapeKind.PAIR):
            choice = _biggest(same, trump)
        elif standing.shape.is_bomb_class():
            choice = _smallest_bomb(same, trump)
        else:
            choice = _cheapest(same, hand, trump)
        if choice is not None:
            return Action(choice)

    for kind in (ShapeKind.BOMB, ShapeKind.STRAIGHT_FLUSH):
        if kind == standing.shape:
            continue
        choice = _smallest_bomb(_winning(hand, kind, standing, context), trump)
        if choice is not None:
            return Action(choice)
    return PASS


def _clean(cards: CardsTuple, hand: Sequence[Card], trump_rank: Rank) -> bool:
    """No wild card spent and no bomb broken up."""
    return _wilds_used(cards, trump_rank) == 0 and _split_groups(cards, hand, trump_rank, min_group=4) == 0


def _lead(hand: Sequence[Card], trump_rank: Rank, pressure: bool) -> Action:
    if classify(hand, trump_rank) is not None:
        return Action(tuple(hand))

    for kind in LEAD_ORDER:
        options = [c for c in candidate_plays(hand, trump_rank, kind) if _clean(c, hand, trump_rank)]
        if options:
            best = min(options, key=lambda c: (_split_groups(c, hand, trump_rank), _value(c, trump_rank)))
            return Action(best)

    singles = candidate_plays(hand, trump_rank, ShapeKind.SINGLE)
    loose = [c for c in singles if _split_groups(c, hand, trump_rank, min_group=4) == 0]
    bomb = _smallest_bomb(candidate_plays(hand, trump_rank, ShapeKind.BOMB), trump_rank)
    if bomb is not None and (pressure or not loose):
        return Action(bomb)
    singles = loose or singles
    if pressure:
        choice = _biggest(singles, trump_rank)
    else:
        choice = _cheapest(singles, hand, trump_rank)
    if choice is None:
        return PASS
    return Action(choice)


def choose_action(
    seat: Seat,
    table: TableState,
    config: StrategyConfig | None = None,
) -> Action:
    """Pick the action for ``seat`` on the current table."""
    config = config or StrategyConfig()
    hand = seat.hand
    if not hand or not table.is_active:
        return PASS
    trump = table.trump_rank
    pressure = opponent_near_empty(table, seat.index, config)

    standing = table.standing
    if standing is None:
        return _lead(hand, trump, pressure)

    relation = table.relation_to_standing(seat.index)
    if relation == Relation.PARTNER and is_strong(standing, trump, config):
        return PASS
    return _respond(hand, standing, BeatContext(trump, relation), pressure)


__all__ = [
    "Action",
    "PASS",
    "StrategyConfig",
    "choose_action",
    "is_strong",
    "opponent_near_empty",
    "LEAD_ORDER",
]
