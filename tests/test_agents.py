"""Seat policies."""
from guandan.agents import HeuristicAgent, RandomAgent
from guandan.deck import parse_cards
from guandan.game import GuandanEngine
from guandan.strategy import PASS


def _engine_with_hands(hands):
    engine = GuandanEngine(human_seats=())
    engine.start_hand(0, (2, 2), rng=9)
    for seat, codes in zip(engine.state.seats, hands):
        seat.hand = parse_cards(codes)
    return engine


def test_random_agent_only_picks_legal_actions():
    engine = _engine_with_hands(["S5 S6", "S3 S4 SK CK", "S9 SQ", "D3 D4 D5"])
    engine.play(0, parse_cards("S5"))
    state = engine.state
    legal = set(engine.legal_plays(1))
    agent = RandomAgent(seed=0)
    for _ in range(30):
        action = agent.act(state.seats[1], state)
        assert action == PASS or action.cards in legal
    assert legal == {tuple(parse_cards("SK")), tuple(parse_cards("CK"))}


def test_random_agent_never_passes_on_lead():
    engine = _engine_with_hands(["S5 S6", "S3 S4", "S9 SQ", "D3 D4 D5"])
    state = engine.state
    agent = RandomAgent(seed=1)
    for _ in range(20):
        assert not agent.act(state.seats[0], state).is_pass


def test_random_agent_is_reproducible():
    engine = GuandanEngine(human_seats=())
    state = engine.start_hand(0, (2, 2), rng=2)
    a = RandomAgent(seed=5)
    b = RandomAgent(seed=5)
    assert [a.act(state.seats[0], state) for _ in range(5)] == [b.act(state.seats[0], state) for _ in range(5)]


def test_heuristic_agent_matches_strategy():
    engine = _engine_with_hands(["S3 S9 SK", "C3 C4 C5", "S9 SK SQ", "D3 D4 D5"])
    state = engine.state
    action = HeuristicAgent().act(state.seats[0], state)
    assert action.cards == tuple(parse_cards("S3"))
