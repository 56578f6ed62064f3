"""
End-of-hand scoring: finishing order and partnership level progression.

Seats are ranked by cards left (fewer is better). The first seat's partnership
wins the hand and climbs by how well the partner did:
  partner 2nd -> +3, partner 3rd -> +2, partner 4th -> +1
Levels are clamped at 14 (Ace). A partnership already on 14 clears the top
rank by winning with its partner out of last place; winning with the partner
last is the "failed to clear the top rank" outcome.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .deal import NUM_SEATS, partner_of, partnership_of
from .ranks import MAX_LEVEL, clamp_level

LEVEL_INCREMENT = {2: 3, 3: 2, 4: 1}


@dataclass(frozen=True)
class HandResult:
    """Outcome of one hand. Places are 1-based."""

    finishing_order: tuple[int, ...]
    leader_finisher: int
    winning_partnership: int
    partner_place: int
    increment: int
    levels_before: tuple[int, int]
    levels_after: tuple[int, int]
    failed_top_rank: bool = False
    cleared_top_rank: bool = False

    @property
    def next_leader(self) -> int:
        return self.leader_finisher

    def place_of(self, seat: int) -> int:
        return self.finishing_order.index(seat) + 1


def finishing_order(cards_left: Sequence[int]) -> list[int]:
    """
    Seats sorted by remaining cards. Ties keep turn order counted from the seat
    with the fewest cards (lowest seat index if that is itself tied).
    """
    if len(cards_left) != NUM_SEATS:
        raise ValueError(f"Expected {NUM_SEATS} seats, got {len(cards_left)}")
    first = min(range(NUM_SEATS), key=lambda s: (cards_left[s], s))
    return sorted(range(NUM_SEATS), key=lambda s: (cards_left[s], (s - first) % NUM_SEATS))


def level_increment(partner_place: int) -> int:
    return LEVEL_INCREMENT[partner_place]


def advance_levels(levels: Sequence[int], partnership: int, increment: int) -> tuple[int, int]:
    updated = [levels[0], levels[1]]
    updated[partnership] = clamp_level(updated[partnership] + increment)
    return updated[0], updated[1]


def score_hand(cards_left: Sequence[int], levels: Sequence[int]) -> HandResult:
    """Rank the seats and apply the winning partnership's level increment."""
    order = finishing_order(cards_left)
    first = order[0]
    team = partnership_of(first)
    partner_place = order.index(partner_of(first)) + 1
    inc = level_increment(partner_place)
    before = (levels[0], levels[1])
    after = advance_levels(before, team, inc)
    at_top = before[team] == MAX_LEVEL
    return HandResult(
        finishing_order=tuple(order),
        leader_finisher=first,
        winning_partnership=team,
        partner_place=partner_place,
        increment=inc,
        levels_before=before,
        levels_after=after,
        failed_top_rank=at_top and partner_place == NUM_SEATS,
        cleared_top_rank=at_top and partner_place < NUM_SEATS,
    )
