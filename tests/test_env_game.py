"""Smoke tests for GuandanEnv."""
import random

import pytest

from guandan.agents import RandomAgent
from guandan.env import NUM_CARD_FACES, OBS_SIZE
from guandan.env_game import GuandanEnv


def test_env_episode_with_random_choices():
    rng = random.Random(42)
    env = GuandanEnv(learning_seat=0, rng=random.Random(1))

    step = env.reset()
    assert not step.done
    assert step.obs.shape == (OBS_SIZE,)

    steps = 0
    while not step.done and steps < 2000:
        assert step.legal_actions, "There should always be at least one legal action"
        assert step.action_features.shape == (len(step.legal_actions), NUM_CARD_FACES)
        step = env.step(rng.randrange(len(step.legal_actions)))
        steps += 1

    assert step.done
    assert abs(step.reward) in (1.0, 2.0, 3.0)
    assert env.levels == step.info["result"].levels_after


def test_env_pass_is_first_when_allowed():
    env = GuandanEnv(learning_seat=2, opponents=[RandomAgent(seed=i) for i in range(3)], rng=random.Random(3))
    step = env.reset()
    state = env.engine.state
    if state.standing is not None:
        assert step.legal_actions[0] == ()
    else:
        assert () not in step.legal_actions


def test_env_rejects_bad_index_and_bad_opponents():
    env = GuandanEnv(rng=random.Random(0))
    step = env.reset()
    with pytest.raises(ValueError):
        env.step(len(step.legal_actions))
    with pytest.raises(ValueError):
        GuandanEnv(opponents=[RandomAgent()])
