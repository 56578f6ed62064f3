"""
Table and seat state for one hand.

``TableState`` is owned and mutated by ``GuandanEngine``; everything else reads it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .compare import Relation, relation_between
from .deck import Card, Rank
from .deal import NUM_SEATS, partner_of, partnership_of
from .scoring import HandResult
from .shapes import ShapeKind


class HandPhase(Enum):
    """
    OPEN: no standing play, the current seat leads freely.
    LED: a standing play must be beaten or passed.
    OVER: a seat has emptied its hand, not yet scored.
    SCORED: scoring has run; further scoring requests return the stored result.
    """
    OPEN = "open"
    LED = "led"
    OVER = "over"
    SCORED = "scored"


@dataclass(frozen=True)
class Play:
    owner: int
    cards: tuple[Card, ...]
    shape: ShapeKind

    def __len__(self) -> int:
        return len(self.cards)


@dataclass
class Seat:
    """
    One of the four seats. ``is_current_turn`` is maintained by the engine.
    The tribute fields are carried for callers that run the card exchange
    between hands; the engine itself never reads them.
    """

    index: int
    name: str
    is_human: bool = False
    hand: List[Card] = field(default_factory=list)
    is_current_turn: bool = False
    score: int = 0
    need_tribute: bool = False
    tribute_card: Optional[Card] = None
    receive_tribute_card: Optional[Card] = None

    @property
    def partnership(self) -> int:
        return partnership_of(self.index)

    @property
    def partner(self) -> int:
        return partner_of(self.index)

    def cards_left(self) -> int:
        return len(self.hand)


@dataclass
class TableState:
    """Mutable state of one hand: seats, turn, standing play, trump rank, levels."""

    seats: List[Seat]
    trump_rank: Rank
    levels: tuple[int, int]
    leader: int
    current: int
    standing: Optional[Play] = None
    pass_count: int = 0
    phase: HandPhase = HandPhase.OPEN
    previous_leader_finisher: Optional[int] = None
    discarded: List[Play] = field(default_factory=list)
    result: Optional[HandResult] = None

    def seat(self, index: int) -> Seat:
        return self.seats[index]

    @property
    def is_active(self) -> bool:
        return self.phase in (HandPhase.OPEN, HandPhase.LED)

    def cards_left(self) -> list[int]:
        return [len(s.hand) for s in self.seats]

    def relation_to_standing(self, seat: int) -> Relation:
        if self.standing is None:
            return Relation.OPPONENT
        return relation_between(seat, self.standing.owner)

    def opponents_of(self, seat: int) -> list[Seat]:
        return [s for s in self.seats if s.partnership != partnership_of(seat)]

    def played_cards(self) -> list[Card]:
        """Every card that has left a hand this deal, oldest first."""
        cards = [c for p in self.discarded for c in p.cards]
        if self.standing is not None:
            cards.extend(self.standing.cards)
        return cards

    def cards_accounted(self) -> int:
        return sum(self.cards_left()) + len(self.played_cards())

    def current_turn_seats(self) -> list[int]:
        return [s.index for s in self.seats if s.is_current_turn]


def empty_seats(names: list[str], human_seats: set[int]) -> list[Seat]:
    if len(names) != NUM_SEATS:
        raise ValueError(f"Expected {NUM_SEATS} seat names, got {len(names)}")
    return [Seat(index=i, name=names[i], is_human=i in human_seats) for i in range(NUM_SEATS)]
