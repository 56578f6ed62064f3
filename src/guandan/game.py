"""
Hand orchestration: deal, turn order, plays and passes, hand end, scoring.

``GuandanEngine`` owns one ``TableState`` at a time. Illegal requests never
raise: ``play`` returns False and ``pass_turn`` does nothing, and in both cases
the table is left untouched and a rejection event is emitted. Partnership
levels and the next leader are kept on the engine between hands.
"""
from __future__ import annotations

import random
from collections import Counter
from typing import Iterable, Optional, Sequence

from .compare import BeatContext, can_beat
from .deal import NUM_SEATS, deal_hands, make_rng, next_seat, partnership_of
from .deck import Card, Rank
from .events import (
    EventSink,
    HandEnded,
    HandScored,
    HandStarted,
    NullSink,
    Passed,
    PassIgnored,
    PlayAccepted,
    PlayRejected,
    TrickCleared,
    TurnChanged,
)
from .moves import legal_plays
from .ranks import MAX_LEVEL, MIN_LEVEL, level_to_rank
from .scoring import HandResult, score_hand
from .shapes import classify
from .strategy import StrategyConfig, choose_action
from .table import HandPhase, Play, Seat, TableState, empty_seats

DEFAULT_NAMES = ("Player", "AI1", "AI2", "AI3")


def _holds(hand: Sequence[Card], cards: Sequence[Card]) -> bool:
    have = Counter(hand)
    return all(have[c] >= n for c, n in Counter(cards).items())


def _remove(hand: list[Card], cards: Iterable[Card]) -> None:
    for c in cards:
        hand.remove(c)


class GuandanEngine:
    """
    Rules engine for one table of four seats.

    Typical loop:
        engine = GuandanEngine(sink=LoggingSink())
        engine.start_hand(0, (2, 2), rng=random.Random(7))
        while not engine.is_hand_over():
            seat = engine.current_seat
            ... engine.play(seat, cards) or engine.pass_turn(seat) / engine.auto_play_one_turn(seat)
        winner = engine.get_winner()
    """

    def __init__(
        self,
        seat_names: Sequence[str] = DEFAULT_NAMES,
        human_seats: Iterable[int] = (0,),
        sink: EventSink | None = None,
        strategy_config: StrategyConfig | None = None,
    ) -> None:
        self.seat_names = list(seat_names)
        if len(self.seat_names) != NUM_SEATS:
            raise ValueError(f"Expected {NUM_SEATS} seat names, got {len(self.seat_names)}")
        self.human_seats = set(human_seats)
        self.sink: EventSink = sink or NullSink()
        self.strategy_config = strategy_config or StrategyConfig()
        self.state: Optional[TableState] = None
        self._levels: tuple[int, int] = (MIN_LEVEL, MIN_LEVEL)
        self._last_leader_finisher: Optional[int] = None

    # ---- Hand setup ----

    def start_hand(
        self,
        leader_seat: int | None = None,
        partnership_levels: Sequence[int] | None = None,
        rng: random.Random | int | None = None,
    ) -> TableState:
        """
        Shuffle and deal a new hand. Defaults: the previous hand's first-out
        seat leads (seat 0 for the first hand) and the stored levels apply.
        The trump rank is the leader's partnership level.
        """
        if leader_seat is None:
            leader_seat = self._last_leader_finisher if self._last_leader_finisher is not None else 0
        if not 0 <= leader_seat < NUM_SEATS:
            raise ValueError(f"Leader seat out of range: {leader_seat}")
        levels = tuple(partnership_levels) if partnership_levels is not None else self._levels
        if len(levels) != 2 or any(not MIN_LEVEL <= lv <= MAX_LEVEL for lv in levels):
            raise ValueError(f"Partnership levels must be two values in [{MIN_LEVEL}, {MAX_LEVEL}]: {levels}")
        self._levels = (levels[0], levels[1])

        trump = level_to_rank(self._levels[partnership_of(leader_seat)])
        deal = deal_hands(trump, leader=leader_seat, rng=make_rng(rng))
        seats = empty_seats(self.seat_names, self.human_seats)
        for seat, hand in zip(seats, deal.hands):
            seat.hand = hand

        self.state = TableState(
            seats=seats,
            trump_rank=trump,
            levels=self._levels,
            leader=leader_seat,
            current=leader_seat,
            previous_leader_finisher=self._last_leader_finisher,
        )
        seats[leader_seat].is_current_turn = True
        self.sink.emit(HandStarted(leader=leader_seat, trump_rank=trump, levels=self._levels))
        self.sink.emit(TurnChanged(seat=leader_seat))
        return self.state

    # ---- Actions ----

    def _reject(self, seat_id: int, cards: Sequence[Card], reason: str) -> bool:
        self.sink.emit(PlayRejected(seat=seat_id, cards=tuple(cards), reason=reason))
        return False

    def play(self, seat_id: int, cards: Sequence[Card]) -> bool:
        """Play ``cards`` for ``seat_id``. Returns False (and changes nothing) if illegal."""
        state = self.state
        cards = list(cards)
        if state is None or not state.is_active:
            return self._reject(seat_id, cards, "no hand in progress")
        if seat_id != state.current:
            return self._reject(seat_id, cards, "not this seat's turn")
        seat = state.seats[seat_id]
        if not cards or not _holds(seat.hand, cards):
            return self._reject(seat_id, cards, "cards not held")
        shape = classify(cards, state.trump_rank)
        if shape is None:
            return self._reject(seat_id, cards, "not a valid shape")
        standing = state.standing
        if standing is not None:
            context = BeatContext(state.trump_rank, state.relation_to_standing(seat_id))
            if not can_beat(cards, shape, standing.cards, standing.shape, context):
                return self._reject(seat_id, cards, f"does not beat {standing.shape.value}")
            state.discarded.append(standing)

        _remove(seat.hand, cards)
        state.standing = Play(owner=seat_id, cards=tuple(cards), shape=shape)
        state.pass_count = 0
        state.phase = HandPhase.LED
        self.sink.emit(PlayAccepted(seat=seat_id, cards=tuple(cards), shape=shape.value, cards_left=len(seat.hand)))
        self._advance()
        if not seat.hand:
            state.phase = HandPhase.OVER
            self.sink.emit(HandEnded(first_out=seat_id))
        return True

    def pass_turn(self, seat_id: int) -> None:
        """Pass for ``seat_id``; ignored unless it is that seat's turn."""
        state = self.state
        if state is None or not state.is_active:
            self.sink.emit(PassIgnored(seat=seat_id, reason="no hand in progress"))
            return
        if seat_id != state.current:
            self.sink.emit(PassIgnored(seat=seat_id, reason="not this seat's turn"))
            return

        state.pass_count += 1
        self.sink.emit(Passed(seat=seat_id, pass_count=state.pass_count))
        if state.pass_count >= NUM_SEATS - 1:
            if state.standing is not None:
                state.discarded.append(state.standing)
            state.standing = None
            state.pass_count = 0
            state.phase = HandPhase.OPEN
            self.sink.emit(TrickCleared(leader=next_seat(seat_id)))
        self._advance()

    def auto_play_one_turn(self, seat_id: int) -> Optional[Card]:
        """
        Let the computer strategy act for ``seat_id``. Returns the first card
        played, or None when the seat passed (or it was not its turn).
        """
        state = self.state
        if state is None or not state.is_active or seat_id != state.current:
            return None
        action = choose_action(state.seats[seat_id], state, self.strategy_config)
        if not action.is_pass and self.play(seat_id, action.cards):
            return action.cards[0]
        self.pass_turn(seat_id)
        return None

    def _advance(self) -> None:
        state = self.state
        assert state is not None
        state.seats[state.current].is_current_turn = False
        state.current = next_seat(state.current)
        state.seats[state.current].is_current_turn = True
        self.sink.emit(TurnChanged(seat=state.current))

    # ---- Hand end ----

    def is_hand_over(self) -> bool:
        if self.state is None:
            return False
        return any(not s.hand for s in self.state.seats)

    def get_winner(self) -> Optional[Seat]:
        """
        First-out seat of a finished hand, or None while the hand is running.
        The first call scores the hand; later calls return the same seat.
        """
        state = self.state
        if state is None or not self.is_hand_over():
            return None
        if state.phase != HandPhase.SCORED:
            result = score_hand(state.cards_left(), state.levels)
            state.result = result
            state.phase = HandPhase.SCORED
            self._levels = result.levels_after
            self._last_leader_finisher = result.leader_finisher
            self.sink.emit(
                HandScored(
                    winning_partnership=result.winning_partnership,
                    increment=result.increment,
                    levels_before=result.levels_before,
                    levels_after=result.levels_after,
                    failed_top_rank=result.failed_top_rank,
                    cleared_top_rank=result.cleared_top_rank,
                )
            )
        assert state.result is not None
        return state.seats[state.result.leader_finisher]

    # ---- Read-only views ----

    @property
    def current_seat(self) -> Optional[int]:
        if self.state is None or not self.state.is_active:
            return None
        return self.state.current

    @property
    def standing_play(self) -> tuple[Card, ...]:
        if self.state is None or self.state.standing is None:
            return ()
        return self.state.standing.cards

    @property
    def standing_owner(self) -> Optional[int]:
        if self.state is None or self.state.standing is None:
            return None
        return self.state.standing.owner

    @property
    def trump_rank(self) -> Optional[Rank]:
        return self.state.trump_rank if self.state is not None else None

    @property
    def levels(self) -> tuple[int, int]:
        return self._levels

    def level_of(self, partnership: int) -> int:
        return self._levels[partnership]

    @property
    def last_leader_finisher(self) -> Optional[int]:
        return self._last_leader_finisher

    @property
    def hand_result(self) -> Optional[HandResult]:
        return self.state.result if self.state is not None else None

    def legal_plays(self, seat_id: int) -> list[tuple[Card, ...]]:
        """Plays ``seat_id`` could make right now (empty when it is not its turn)."""
        state = self.state
        if state is None or not state.is_active or seat_id != state.current:
            return []
        return legal_plays(state, seat_id)
