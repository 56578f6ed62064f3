"""Finishing order and level progression."""
import pytest

from guandan.scoring import (
    advance_levels,
    finishing_order,
    level_increment,
    score_hand,
)


def test_finishing_order_by_cards_left():
    assert finishing_order([0, 5, 3, 8]) == [0, 2, 1, 3]


def test_finishing_order_ties_follow_turn_order():
    assert finishing_order([3, 0, 3, 3]) == [1, 2, 3, 0]
    assert finishing_order([4, 4, 0, 4]) == [2, 3, 0, 1]


def test_finishing_order_needs_four_seats():
    with pytest.raises(ValueError):
        finishing_order([0, 1, 2])


def test_level_increments():
    assert level_increment(2) == 3
    assert level_increment(3) == 2
    assert level_increment(4) == 1


def test_advance_levels_clamps():
    assert advance_levels((5, 9), 1, 3) == (5, 12)
    assert advance_levels((13, 9), 0, 3) == (14, 9)


def test_partner_second_gains_three():
    result = score_hand([0, 5, 3, 8], (2, 2))
    assert result.finishing_order == (0, 2, 1, 3)
    assert result.winning_partnership == 0
    assert result.partner_place == 2
    assert result.increment == 3
    assert result.levels_after == (5, 2)
    assert result.next_leader == 0
    assert result.place_of(3) == 4


def test_odd_partnership_wins():
    result = score_hand([6, 0, 9, 2], (7, 4))
    assert result.finishing_order == (1, 3, 0, 2)
    assert result.winning_partnership == 1
    assert result.increment == 3
    assert result.levels_after == (7, 7)


def test_failed_top_rank_keeps_level():
    result = score_hand([0, 3, 9, 5], (14, 6))
    assert result.partner_place == 4
    assert result.increment == 1
    assert result.levels_after == (14, 6)
    assert result.failed_top_rank
    assert not result.cleared_top_rank


def test_cleared_top_rank():
    result = score_hand([0, 5, 1, 9], (14, 6))
    assert result.cleared_top_rank
    assert not result.failed_top_rank
    assert result.levels_after == (14, 6)


def test_reaching_ace_is_not_clearing_it():
    result = score_hand([0, 5, 1, 9], (13, 2))
    assert result.levels_after == (14, 2)
    assert not result.cleared_top_rank
    assert not result.failed_top_rank
