"""
Run whole hands and matches with one policy per seat.

A match threads two things from hand to hand: the partnership levels and the
seat that went out first (it leads the next hand). It ends after
``num_hands`` hands or, optionally, as soon as a partnership clears the top
rank. A failed attempt at the top rank keeps that partnership on 14; whether
to send it back down is left to the caller.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .agents import HeuristicAgent, Policy
from .deal import NUM_SEATS
from .events import EventSink
from .game import GuandanEngine
from .scoring import HandResult

MAX_TURNS_PER_HAND = 5000


@dataclass
class MatchConfig:
    """Configuration for a series of hands."""

    num_hands: int = 10
    seed: int | None = None
    starting_levels: tuple[int, int] = (2, 2)
    first_leader: int = 0
    stop_when_top_rank_cleared: bool = True
    max_turns_per_hand: int = MAX_TURNS_PER_HAND


@dataclass
class MatchRecord:
    """What happened in a match, hand by hand."""

    hands: List[HandResult] = field(default_factory=list)
    levels: tuple[int, int] = (2, 2)
    next_leader: int = 0
    champion: Optional[int] = None  # partnership that cleared the top rank

    @property
    def hands_played(self) -> int:
        return len(self.hands)


def default_policies() -> list[Policy]:
    return [HeuristicAgent() for _ in range(NUM_SEATS)]


def run_hand(
    engine: GuandanEngine,
    policies: Sequence[Policy] | None = None,
    rng: random.Random | int | None = None,
    leader: int | None = None,
    levels: Sequence[int] | None = None,
    max_turns: int = MAX_TURNS_PER_HAND,
) -> HandResult:
    """
    Deal and play one hand to its end, then score it. A policy's play that the
    engine refuses is turned into a pass.
    """
    if policies is None:
        policies = default_policies()
    if len(policies) != NUM_SEATS:
        raise ValueError(f"Expected {NUM_SEATS} policies, got {len(policies)}")

    engine.start_hand(leader, levels, rng=rng)
    turns = 0
    while not engine.is_hand_over():
        if turns >= max_turns:
            raise RuntimeError(f"Hand did not finish within {max_turns} turns")
        state = engine.state
        assert state is not None
        seat = state.seats[state.current]
        action = policies[seat.index].act(seat, state)
        if action.is_pass or not engine.play(seat.index, action.cards):
            engine.pass_turn(seat.index)
        turns += 1

    engine.get_winner()
    result = engine.hand_result
    assert result is not None
    return result


def run_match(
    config: MatchConfig | None = None,
    policies: Sequence[Policy] | None = None,
    sink: EventSink | None = None,
    engine: GuandanEngine | None = None,
) -> MatchRecord:
    """Play up to ``config.num_hands`` hands, carrying levels and leader forward."""
    config = config or MatchConfig()
    rng = random.Random(config.seed)
    if engine is None:
        engine = GuandanEngine(human_seats=(), sink=sink)
    record = MatchRecord(levels=tuple(config.starting_levels), next_leader=config.first_leader)

    for _ in range(config.num_hands):
        result = run_hand(
            engine,
            policies,
            rng=rng,
            leader=record.next_leader,
            levels=record.levels,
            max_turns=config.max_turns_per_hand,
        )
        record.hands.append(result)
        record.levels = result.levels_after
        record.next_leader = result.next_leader
        if result.cleared_top_rank:
            record.champion = result.winning_partnership
            if config.stop_when_top_rank_cleared:
                break
    return record
