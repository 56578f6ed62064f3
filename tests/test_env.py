"""Observation and action encoding."""
import numpy as np

from guandan.deck import make_deck_108, parse_cards
from guandan.env import (
    NUM_CARD_FACES,
    OBS_SIZE,
    card_index,
    decode_card_counts,
    encode_actions,
    encode_card_counts,
    encode_observation,
)
from guandan.game import GuandanEngine


def test_card_index_covers_54_faces():
    indices = {card_index(c) for c in make_deck_108()}
    assert indices == set(range(NUM_CARD_FACES))


def test_card_counts_roundtrip():
    cards = parse_cards("S3 S3 HA JS JB JB")
    vec = encode_card_counts(cards)
    assert vec.shape == (NUM_CARD_FACES,)
    assert float(vec.max()) == 1.0
    assert sorted(decode_card_counts(vec), key=card_index) == sorted(cards, key=card_index)


def test_observation_layout():
    engine = GuandanEngine(human_seats=())
    state = engine.start_hand(1, (4, 7), rng=6)
    obs = encode_observation(state, 1)
    assert obs.shape == (OBS_SIZE,)
    assert obs.dtype == np.float32
    assert np.isclose(obs[:54].sum(), 27 * 0.5)
    assert obs[54:162].sum() == 0.0
    assert obs[162 + 1] == 1.0
    assert obs[166] == 1.0  # no standing play
    assert obs[170 + (7 - 2)] == 1.0  # trump Seven
    assert np.allclose(obs[183:185], [(7 - 2) / 12, (4 - 2) / 12])


def test_observation_after_a_play():
    engine = GuandanEngine(human_seats=())
    state = engine.start_hand(0, (2, 2), rng=6)
    card = state.seats[0].hand[0]
    assert engine.play(0, [card])
    obs = encode_observation(state, 2)
    assert obs[54 + card_index(card)] == 0.5
    assert obs[108 + card_index(card)] == 0.5
    assert obs[166 + 2] == 1.0  # standing play is the partner's


def test_encode_actions_shape():
    assert encode_actions([]).shape == (0, NUM_CARD_FACES)
    stacked = encode_actions([(), tuple(parse_cards("S9 C9"))])
    assert stacked.shape == (2, NUM_CARD_FACES)
    assert stacked[0].sum() == 0.0
    assert stacked[1].sum() == 1.0
