"""
Beat comparison: may a candidate play go over the standing play?

Rules, in order:
1. A bomb may not be played over the candidate owner's partner.
2. Across shapes only bombs and straight flushes can win: a straight flush
   beats a bomb with no more cards than itself, a bomb beats a straight flush
   only with strictly more cards, and either beats every other shape.
3. Within a shape the defining value decides (strictly greater). Bombs compare
   card count first, then rank.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .deck import Card, Rank
from .shapes import ShapeKind, defining_value


class Relation(Enum):
    """Owner of the standing play, seen from the candidate's owner."""
    SELF = "self"
    PARTNER = "partner"
    OPPONENT = "opponent"


def relation_between(candidate_seat: int, standing_seat: int) -> Relation:
    if candidate_seat == standing_seat:
        return Relation.SELF
    if candidate_seat % 2 == standing_seat % 2:
        return Relation.PARTNER
    return Relation.OPPONENT


@dataclass(frozen=True)
class BeatContext:
    trump_rank: Rank
    relation: Relation = Relation.OPPONENT


def _cross_shape(
    candidate: Sequence[Card],
    candidate_shape: ShapeKind,
    standing: Sequence[Card],
    standing_shape: ShapeKind,
) -> bool:
    if candidate_shape == ShapeKind.STRAIGHT_FLUSH:
        if standing_shape == ShapeKind.BOMB:
            return len(candidate) >= len(standing)
        return True
    if candidate_shape == ShapeKind.BOMB:
        if standing_shape == ShapeKind.STRAIGHT_FLUSH:
            return len(candidate) > len(standing)
        return True
    return False


def can_beat(
    candidate: Sequence[Card],
    candidate_shape: Optional[ShapeKind],
    standing: Sequence[Card] | None,
    standing_shape: Optional[ShapeKind],
    context: BeatContext,
) -> bool:
    """True if ``candidate`` (already classified) legally goes over ``standing``."""
    if candidate_shape is None or not candidate:
        return False
    if not standing:
        return True
    if standing_shape is None:
        return False

    if context.relation == Relation.PARTNER and candidate_shape == ShapeKind.BOMB:
        return False

    if candidate_shape != standing_shape:
        return _cross_shape(candidate, candidate_shape, standing, standing_shape)

    if candidate_shape == ShapeKind.BOMB and len(candidate) != len(standing):
        return len(candidate) > len(standing)

    mine = defining_value(candidate, candidate_shape, context.trump_rank)
    theirs = defining_value(standing, standing_shape, context.trump_rank)
    if mine is None or theirs is None:
        return False
    return mine > theirs
