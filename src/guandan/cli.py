"""
Command-line interface for simulating Guandan hands and matches.

Usage examples (after installing in editable mode):

    python -m guandan.cli simulate --seed 7 --verbose
    python -m guandan.cli match --hands 20 --seed 1 --output runs/match.json
    python -m guandan.cli classify --trump 5 H5 S6 S7 C8 D9
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .agents import HeuristicAgent, RandomAgent
from .deck import format_cards, parse_cards
from .events import LoggingSink
from .game import GuandanEngine
from .match import MatchConfig, run_hand, run_match
from .persistence import match_to_json
from .ranks import level_to_rank
from .shapes import describe
from .strategy import StrategyConfig


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _make_policies(kind: str, seed: int, strategy: StrategyConfig) -> list:
    if kind == "random":
        return [RandomAgent(seed=seed + i) for i in range(4)]
    if kind == "mixed":
        return [
            HeuristicAgent(strategy),
            RandomAgent(seed=seed + 1),
            HeuristicAgent(strategy),
            RandomAgent(seed=seed + 3),
        ]
    return [HeuristicAgent(strategy) for _ in range(4)]


def _add_policy_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--policies",
        choices=["heuristic", "random", "mixed"],
        default="heuristic",
        help="Who sits at the table: rule-based players, random players, or heuristic (0,2) vs random (1,3).",
    )
    parser.add_argument(
        "--strong-rank",
        type=int,
        default=StrategyConfig.strong_rank,
        help="Effective value from which a partner's play is left standing.",
    )
    parser.add_argument(
        "--strong-straight-top",
        type=int,
        default=StrategyConfig.strong_straight_top,
        help="Straight value from which a partner's straight is left standing.",
    )
    parser.add_argument(
        "--near-empty",
        type=int,
        default=StrategyConfig.near_empty_cards,
        help="Opponent hand size that switches the computer player to defensive play.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every turn, not only hand results.",
    )


def _strategy_from_args(args: argparse.Namespace) -> StrategyConfig:
    return StrategyConfig(
        strong_rank=args.strong_rank,
        strong_straight_top=args.strong_straight_top,
        near_empty_cards=args.near_empty,
    )


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("simulate", help="Play one hand with four computer seats.")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for the shuffle.")
    parser.add_argument("--leader", type=int, default=0, help="Seat that leads (0..3).")
    parser.add_argument(
        "--levels",
        type=int,
        nargs=2,
        default=[2, 2],
        metavar=("TEAM0", "TEAM1"),
        help="Partnership levels (2..14) before the hand.",
    )
    _add_policy_arguments(parser)
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    _configure_logging(args.verbose)
    strategy = _strategy_from_args(args)
    engine = GuandanEngine(human_seats=(), sink=LoggingSink(), strategy_config=strategy)
    policies = _make_policies(args.policies, args.seed, strategy)
    result = run_hand(engine, policies, rng=args.seed, leader=args.leader, levels=args.levels)
    order = " > ".join(f"seat {s}" for s in result.finishing_order)
    print(f"Finishing order: {order}")
    print(
        f"Partnership {result.winning_partnership} wins +{result.increment}; "
        f"levels {result.levels_before[0]}/{result.levels_before[1]} -> "
        f"{result.levels_after[0]}/{result.levels_after[1]}"
    )
    if result.failed_top_rank:
        print("The winners failed to clear the top rank.")
    if result.cleared_top_rank:
        print("The winners cleared the top rank.")


def _add_match_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("match", help="Play several hands, carrying levels forward.")
    parser.add_argument("--hands", type=int, default=10, help="Maximum number of hands.")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for the match.")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Keep playing after a partnership clears the top rank.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Optional path for a JSON export of the match.",
    )
    _add_policy_arguments(parser)
    parser.set_defaults(func=_cmd_match)


def _cmd_match(args: argparse.Namespace) -> None:
    _configure_logging(args.verbose)
    strategy = _strategy_from_args(args)
    cfg = MatchConfig(
        num_hands=args.hands,
        seed=args.seed,
        stop_when_top_rank_cleared=not args.keep_going,
    )
    engine = GuandanEngine(human_seats=(), sink=LoggingSink(), strategy_config=strategy)
    record = run_match(cfg, _make_policies(args.policies, args.seed, strategy), engine=engine)

    for i, hand in enumerate(record.hands, start=1):
        print(
            f"[hand {i}/{record.hands_played}] first out: seat {hand.leader_finisher}, "
            f"partnership {hand.winning_partnership} +{hand.increment}, "
            f"levels {hand.levels_after[0]}/{hand.levels_after[1]}",
            flush=True,
        )
    if record.champion is not None:
        print(f"Partnership {record.champion} cleared the top rank.")

    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(match_to_json(record, metadata={"seed": args.seed}), encoding="utf-8")
        print(f"Saved match to {out.resolve()}")


def _add_classify_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("classify", help="Show the shape a set of cards forms.")
    parser.add_argument("--trump", type=int, default=2, help="Trump level (2..14).")
    parser.add_argument("cards", nargs="+", help="Card codes such as H5 S10 DQ JS JB.")
    parser.set_defaults(func=_cmd_classify)


def _cmd_classify(args: argparse.Namespace) -> None:
    trump = level_to_rank(args.trump)
    cards = parse_cards(args.cards)
    found = describe(cards, trump)
    if found is None:
        print(f"[{format_cards(cards)}] is not a valid shape (trump {trump.name})")
    else:
        kind, value = found
        print(f"[{format_cards(cards)}] -> {kind.value} (value {value}, trump {trump.name})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="guandan", description="Guandan rules engine CLI.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    _add_match_parser(subparsers)
    _add_classify_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
