"""
Environment wrapper around the engine for learning agents.

Design:
- Single-agent view: one learning seat per env instance; the other three
  seats are driven by policies (the rule-based player by default).
- Episode = one hand. The reward arrives when the hand is scored: the level
  increment for the learning seat's partnership if it won, minus the
  opponents' increment if it lost.
- Actions are indices into ``StepResult.legal_actions``; index 0 is PASS
  whenever passing is allowed (there is a standing play).
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .agents import HeuristicAgent, Policy
from .deal import NUM_SEATS, partnership_of
from .deck import Card
from .env import NUM_CARD_FACES, OBS_SIZE, encode_actions, encode_observation
from .game import GuandanEngine

CardsTuple = tuple[Card, ...]


@dataclass
class StepResult:
    """Container returned by GuandanEnv.reset/step."""

    obs: np.ndarray
    reward: float
    done: bool
    info: dict
    legal_actions: List[CardsTuple] = field(default_factory=list)
    action_features: np.ndarray = field(
        default_factory=lambda: np.zeros((0, NUM_CARD_FACES), dtype=np.float32)
    )


class GuandanEnv:
    """
    Public API (Gym-like, without the dependency):
      - reset() -> StepResult
      - step(action_index: int) -> StepResult
    """

    def __init__(
        self,
        learning_seat: int = 0,
        opponents: Optional[Sequence[Policy]] = None,
        levels: tuple[int, int] = (2, 2),
        rng: Optional[random.Random] = None,
    ) -> None:
        assert 0 <= learning_seat < NUM_SEATS
        self.learning_seat = learning_seat
        self.policies: List[Optional[Policy]] = []
        others = list(opponents) if opponents is not None else [HeuristicAgent() for _ in range(NUM_SEATS - 1)]
        if len(others) != NUM_SEATS - 1:
            raise ValueError(f"Expected {NUM_SEATS - 1} opponent policies, got {len(others)}")
        it = iter(others)
        for seat in range(NUM_SEATS):
            self.policies.append(None if seat == learning_seat else next(it))
        self.levels = levels
        self.rng = rng or random.Random()
        self.engine = GuandanEngine(human_seats=(learning_seat,))
        self._legal: List[CardsTuple] = []
        self._done = True

    # ---- Public API ----

    def reset(self, leader: int = 0) -> StepResult:
        self.engine.start_hand(leader, self.levels, rng=self.rng)
        self._done = False
        return self._advance_to_learner()

    def step(self, action_index: int) -> StepResult:
        if self._done:
            return self._terminal(0.0)
        if not 0 <= action_index < len(self._legal):
            raise ValueError(f"Action index {action_index} out of range (0..{len(self._legal) - 1})")
        cards = self._legal[action_index]
        seat = self.learning_seat
        if not cards or not self.engine.play(seat, cards):
            self.engine.pass_turn(seat)
        return self._advance_to_learner()

    # ---- Internal helpers ----

    def _advance_to_learner(self) -> StepResult:
        engine = self.engine
        while not engine.is_hand_over():
            state = engine.state
            assert state is not None
            seat = state.current
            if seat == self.learning_seat:
                return self._decision_point()
            policy = self.policies[seat]
            assert policy is not None
            action = policy.act(state.seats[seat], state)
            if action.is_pass or not engine.play(seat, action.cards):
                engine.pass_turn(seat)
        return self._finish()

    def _decision_point(self) -> StepResult:
        state = self.engine.state
        assert state is not None
        legal: List[CardsTuple] = []
        if state.standing is not None:
            legal.append(())
        legal.extend(self.engine.legal_plays(self.learning_seat))
        self._legal = legal
        return StepResult(
            obs=encode_observation(state, self.learning_seat),
            reward=0.0,
            done=False,
            info={"seat": self.learning_seat, "trump": state.trump_rank.name},
            legal_actions=list(legal),
            action_features=encode_actions(legal),
        )

    def _finish(self) -> StepResult:
        self.engine.get_winner()
        result = self.engine.hand_result
        assert result is not None
        won = result.winning_partnership == partnership_of(self.learning_seat)
        reward = float(result.increment if won else -result.increment)
        self.levels = result.levels_after
        return self._terminal(reward, {"result": result})

    def _terminal(self, reward: float, info: Optional[dict] = None) -> StepResult:
        self._done = True
        self._legal = []
        return StepResult(
            obs=np.zeros(OBS_SIZE, dtype=np.float32),
            reward=reward,
            done=True,
            info=info or {"phase": "done"},
        )
