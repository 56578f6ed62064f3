"""Beat comparison across and within shapes."""
from guandan.compare import BeatContext, Relation, can_beat, relation_between
from guandan.deck import Rank, parse_cards
from guandan.shapes import ShapeKind, classify


def _beats(candidate: str, standing: str, trump: Rank = Rank.TWO, relation: Relation = Relation.OPPONENT) -> bool:
    cand = parse_cards(candidate)
    stand = parse_cards(standing)
    return can_beat(
        cand,
        classify(cand, trump),
        stand,
        classify(stand, trump),
        BeatContext(trump, relation),
    )


def test_relation_between_seats():
    assert relation_between(0, 0) == Relation.SELF
    assert relation_between(0, 2) == Relation.PARTNER
    assert relation_between(3, 1) == Relation.PARTNER
    assert relation_between(0, 1) == Relation.OPPONENT
    assert relation_between(2, 3) == Relation.OPPONENT


def test_trump_bomb_beats_plain_bomb():
    assert _beats("SQ CQ DQ HQ", "SJ CJ DJ HJ", trump=Rank.QUEEN)
    assert not _beats("SJ CJ DJ HJ", "SQ CQ DQ HQ", trump=Rank.QUEEN)


def test_straight_flush_against_bombs():
    sf = "S10 SJ SQ SK SA"
    assert _beats(sf, "S10 C10 D10 H10")
    assert _beats(sf, "S3 C3 D3 H3 S3")
    assert not _beats(sf, "S3 C3 D3 H3 S3 C3")
    assert not _beats("SA CA DA HA", sf)
    assert not _beats("SA CA DA HA SA", sf)
    assert _beats("S9 C9 D9 H9 S9 C9", sf)


def test_bombs_compare_size_then_rank():
    assert _beats("S3 C3 D3 H3 S3", "SA CA DA HA")
    assert _beats("SA CA DA HA", "SK CK DK HK")
    assert not _beats("SK CK DK HK", "SA CA DA HA")
    assert not _beats("SK CK DK HK", "SK CK DK HK")


def test_bomb_beats_any_ordinary_shape():
    assert _beats("S3 C3 D3 H3", "JB")
    assert _beats("S3 C3 D3 H3", "S10 CJ DQ HK SA")
    assert _beats("S3 S4 S5 S6 S7", "SA CA DA SK CK")


def test_no_bomb_over_partner():
    assert not _beats("S9 C9 D9 H9", "S7 C7 D7 H7", relation=Relation.PARTNER)
    assert not _beats("S9 C9 D9 H9", "S7", relation=Relation.PARTNER)
    assert _beats("S9", "S7", relation=Relation.PARTNER)


def test_same_shape_needs_strictly_higher_value():
    assert _beats("S9 C9", "S7 C7")
    assert not _beats("S7 C7", "S7 D7")
    assert _beats("S4 C5 D6 H7 S8", "S3 C4 D5 H6 S7")
    assert _beats("S2", "SA")
    assert not _beats("S2", "S3", trump=Rank.NINE)
    assert _beats("S9", "SA", trump=Rank.NINE)
    assert _beats("JS", "S2")
    assert _beats("JB", "JS")


def test_wild_straight_ranks_by_its_plain_cards():
    assert _beats("H5 S6 C7 D8 S9", "S3 C4 H5 D6 S7", trump=Rank.FIVE)
    assert not _beats("H5 S6 C7 D8 S9", "S3 C4 D5 H6 S7", trump=Rank.FIVE)


def test_run_through_trump_rank_beats_ace_high_run():
    assert _beats("S5 C6 D7 H8 C9", "S10 CJ DQ HK SA", trump=Rank.NINE)
    assert not _beats("S10 CJ DQ HK SA", "S5 C6 D7 H8 C9", trump=Rank.NINE)
    assert not _beats("S7 C7 S8 C8 S9 C9", "S8 C8 S9 C9 S10 C10", trump=Rank.EIGHT)
    assert not _beats("S8 C8 S9 C9 S10 C10", "S7 C7 S8 C8 S9 C9", trump=Rank.EIGHT)


def test_different_ordinary_shapes_never_beat():
    assert not _beats("S9 C9", "S3")
    assert not _beats("SA CA DA", "S3 C3")
    assert not _beats("S7 C7 S8 C8 S9 C9", "S3 C3 D3 S4 C4 D4")


def test_beats_is_antisymmetric():
    plays = [
        "S9", "SA", "S2", "JS",
        "S7 C7", "SK CK",
        "S3 C3 D3 H3", "SA CA DA HA", "S5 C5 D5 H5 S5",
        "S3 S4 S5 S6 S7", "S9 S10 SJ SQ SK",
        "S3 C4 D5 H6 S7", "S8 C9 D10 HJ SQ",
    ]
    for a in plays:
        for b in plays:
            assert not (_beats(a, b) and _beats(b, a)), (a, b)


def test_empty_standing_and_invalid_candidate():
    ctx = BeatContext(Rank.TWO)
    cards = parse_cards("S7")
    assert can_beat(cards, ShapeKind.SINGLE, (), None, ctx)
    bad = parse_cards("S7 C8")
    assert not can_beat(bad, classify(bad, Rank.TWO), cards, ShapeKind.SINGLE, ctx)
