"""Guandan rules engine (two decks, four seats, partnership levels)."""

__version__ = "0.1.0"

from .deck import Card, Rank, Suit, make_deck_108, parse_card, parse_cards, format_cards
from .ranks import effective_value, is_wild, level_to_rank, rank_to_level
from .deal import deal_hands, Deal, next_seat, partner_of, partnership_of
from .shapes import ShapeKind, classify, describe, defining_value
from .compare import BeatContext, Relation, can_beat, relation_between
from .scoring import HandResult, finishing_order, score_hand
from .table import HandPhase, Play, Seat, TableState
from .events import EventSink, LoggingSink, NullSink, RecordingSink
from .strategy import PASS, Action, StrategyConfig, choose_action
from .game import GuandanEngine
from .agents import HeuristicAgent, Policy, RandomAgent
from .match import MatchConfig, MatchRecord, run_hand, run_match
