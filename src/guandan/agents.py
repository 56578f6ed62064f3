"""
Seat policies and the generic policy interface.

A ``Policy`` is asked for one decision at a time: ``act(seat, table) -> Action``.
``HeuristicAgent`` wraps the rule-based strategy; ``RandomAgent`` is a seeded
baseline that picks uniformly among legal plays (and passing, when allowed).
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Protocol

from .moves import legal_plays
from .strategy import PASS, Action, StrategyConfig, choose_action
from .table import Seat, TableState


class Policy(Protocol):
    """Decision policy for a single seat."""

    def act(self, seat: Seat, table: TableState) -> Action:
        """
        Choose a play (or PASS) for ``seat``. Implementations should only return
        plays the engine accepts; callers fall back to passing otherwise.
        """


@dataclass
class HeuristicAgent:
    """The built-in computer player."""

    config: StrategyConfig = field(default_factory=StrategyConfig)

    def act(self, seat: Seat, table: TableState) -> Action:
        return choose_action(seat, table, self.config)


@dataclass
class RandomAgent:
    """
    Baseline policy that samples uniformly among legal actions.

    Usage:
        agent = RandomAgent(seed=42)
        action = agent.act(seat, table)
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def act(self, seat: Seat, table: TableState) -> Action:
        options: List[Action] = [Action(cards) for cards in legal_plays(table, seat.index)]
        if table.standing is not None:
            options.append(PASS)
        if not options:
            return PASS
        return self._rng.choice(options)


__all__ = ["Policy", "HeuristicAgent", "RandomAgent"]
