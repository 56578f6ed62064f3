"""Rule-based computer player decisions."""
from collections import Counter

from guandan.deck import parse_cards
from guandan.events import RecordingSink
from guandan.game import GuandanEngine
from guandan.strategy import PASS, StrategyConfig, choose_action


def _engine_with_hands(hands, leader=0, levels=(2, 2)):
    engine = GuandanEngine(human_seats=(), sink=RecordingSink())
    engine.start_hand(leader, levels, rng=5)
    for seat, codes in zip(engine.state.seats, hands):
        seat.hand = parse_cards(codes)
    return engine


def _decide(engine, seat, config=None):
    state = engine.state
    return choose_action(state.seats[seat], state, config)


def _same_cards(action, codes):
    return Counter(action.cards) == Counter(parse_cards(codes))


def test_never_bombs_over_partner_bomb():
    engine = _engine_with_hands(
        ["S7 C7 D7 H7 S3", "C3 S5 C6", "S9 C9 D9 H9 S4", "S8 S10 C10"]
    )
    engine.play(0, parse_cards("S7 C7 D7 H7"))
    engine.pass_turn(1)
    assert _decide(engine, 2) == PASS


def test_opponent_answers_bomb_with_bigger_bomb():
    engine = _engine_with_hands(
        ["S7 C7 D7 H7 S3", "S9 C9 D9 H9 S4", "C3 S5 C6", "S8 S10 C10"]
    )
    engine.play(0, parse_cards("S7 C7 D7 H7"))
    assert _same_cards(_decide(engine, 1), "S9 C9 D9 H9")


def test_leaves_strong_partner_play_alone():
    engine = _engine_with_hands(["SA S4 S5 S6", "C3 C4 C5", "S9 SK S2", "D3 D4 D5"])
    engine.play(0, parse_cards("SA"))
    engine.pass_turn(1)
    assert _decide(engine, 2) == PASS
    assert _same_cards(_decide(engine, 2, StrategyConfig(strong_rank=15)), "S2")


def test_helps_out_over_weak_partner_play():
    engine = _engine_with_hands(["S3 S4 S5", "C3 C4 C5", "S9 SK", "D3 D4 D5"])
    engine.play(0, parse_cards("S3"))
    engine.pass_turn(1)
    assert _same_cards(_decide(engine, 2), "S9")


def test_leads_whole_hand_when_it_is_one_shape():
    engine = _engine_with_hands(["S7 C7", "C3 C4 C5", "S9 SK", "D3 D4 D5"])
    assert _same_cards(_decide(engine, 0), "S7 C7")


def test_leads_combination_before_singles():
    engine = _engine_with_hands(["S3 S7 C7 D7 SK", "C3 C4 C5", "S9 SK", "D3 D4 D5"])
    assert _same_cards(_decide(engine, 0), "S7 C7 D7")


def test_leads_smallest_single():
    engine = _engine_with_hands(["S3 S9 SK", "C3 C4 C5", "S9 SK", "D3 D4 D5"])
    assert _same_cards(_decide(engine, 0), "S3")


def test_leads_big_when_opponent_nearly_out():
    engine = _engine_with_hands(["S3 S9 SK", "C4", "S9 SK", "D3 D4 D5"])
    assert _same_cards(_decide(engine, 0), "SK")


def test_leads_bomb_when_opponent_nearly_out():
    engine = _engine_with_hands(["S3 S9 C9 D9 H9 SK", "C4", "S9 SK", "D3 D4 D5"])
    assert _same_cards(_decide(engine, 0), "S9 C9 D9 H9")


def test_leads_smallest_bomb_when_every_single_breaks_one():
    engine = _engine_with_hands(["S9 C9 D9 H9 SK CK DK HK", "C3 C4 C5", "S9 SK SQ", "D3 D4 D5"])
    assert _same_cards(_decide(engine, 0), "S9 C9 D9 H9")


def test_answers_with_cheapest_winning_card():
    engine = _engine_with_hands(["S5 S6 S7 S8", "S6 SK S2 C8", "S9 SK SQ", "D3 D4 D5"])
    engine.play(0, parse_cards("S5"))
    assert _same_cards(_decide(engine, 1), "S6")


def test_answers_with_biggest_card_when_opponent_nearly_out():
    engine = _engine_with_hands(["S5 S6", "S6 SK S2 C8", "S9 SK SQ", "D3 D4 D5"])
    engine.play(0, parse_cards("S5"))
    assert _same_cards(_decide(engine, 1), "S2")


def test_bombs_when_nothing_else_wins():
    engine = _engine_with_hands(["SA S6 S7 S8", "S3 C3 D3 H3 S4", "S9 SK SQ", "D3 D4 D5"])
    engine.play(0, parse_cards("SA"))
    assert _same_cards(_decide(engine, 1), "S3 C3 D3 H3")


def test_falls_back_to_straight_flush_when_no_bomb_wins():
    engine = _engine_with_hands(["SA S6 S7 S8", "S3 S4 S5 S6 S7 C9", "S9 SK SQ", "D3 D4 D5"])
    engine.play(0, parse_cards("SA"))
    assert _same_cards(_decide(engine, 1), "S3 S4 S5 S6 S7")


def test_answers_pair_with_biggest_pair_when_opponent_nearly_out():
    engine = _engine_with_hands(["S5 C5 S6 S7", "S9 C9 SK CK S3", "S9 SK SQ", "D3 D4 D5"])
    engine.play(0, parse_cards("S5 C5"))
    assert _same_cards(_decide(engine, 1), "SK CK")


def test_answers_without_splitting_a_pair():
    engine = _engine_with_hands(["S5 S9 S10 SJ", "S6 C6 S8", "S9 SK SQ", "D3 D4 D5"])
    engine.play(0, parse_cards("S5"))
    assert _same_cards(_decide(engine, 1), "S8")


def test_passes_when_nothing_wins():
    engine = _engine_with_hands(["SA S6 S7 S8", "S3 S4", "S9 SK SQ", "D3 D4 D5"])
    engine.play(0, parse_cards("SA"))
    assert _decide(engine, 1) == PASS


def test_no_action_once_hand_is_over():
    engine = _engine_with_hands(["S3", "S4 S5", "S9 SK", "D3 D4 D5"])
    engine.play(0, parse_cards("S3"))
    assert _decide(engine, 1) == PASS
