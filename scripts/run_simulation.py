#!/usr/bin/env python3
"""Play many simulated rounds and report how often each side wins."""

import argparse
import logging
import random
import sys
from collections import Counter
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from undercover.game.session import GameSession
from undercover.game.state import StateManager
from undercover.storage.history import HistoryStore
from undercover.testing.simulation import SimulatedTable


def run_simulation(args: argparse.Namespace) -> None:
    names = [f"Player {i + 1}" for i in range(args.num_players)]
    undercover, mister_white = GameSession.auto_adjust(args.num_players, args.undercover, args.mister_white)
    if (undercover, mister_white) != (args.undercover, args.mister_white):
        print(f"Adjusted roles to {undercover} undercover / {mister_white} Mister White")

    store = HistoryStore(args.data_dir) if args.data_dir else HistoryStore()
    session = GameSession(store=store)
    table = SimulatedTable(
        session,
        accuracy=args.accuracy,
        guess_accuracy=args.guess_accuracy,
        rng=random.Random(args.seed),
    )
    if args.seed is not None:
        random.seed(args.seed)

    table.start(names, undercover, mister_white)
    results = table.play_rounds(args.rounds)

    winners = Counter(state.winner.value for state in results)
    print(f"Played {len(results)} rounds with {args.num_players} players")
    for winner, count in winners.most_common():
        print(f"  {winner:<13} {count:>5} ({count / len(results) * 100:.1f}%)")

    print("Leaderboard:")
    for player in StateManager.get_leaderboard(session.state.players):
        print(f"  {player.name:<16} {player.score:>6}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate Undercover rounds with scripted players."
    )
    parser.add_argument("--num-players", type=int, default=6, help="Players at the table")
    parser.add_argument("--undercover", type=int, default=1, help="Requested undercover count")
    parser.add_argument("--mister-white", type=int, default=1, help="Requested Mister White count")
    parser.add_argument("--rounds", type=int, default=100, help="Rounds to play")
    parser.add_argument("--accuracy", type=float, default=0.5, help="Chance a vote hits an infiltrator")
    parser.add_argument("--guess-accuracy", type=float, default=0.2, help="Chance Mister White guesses right")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--data-dir", default=None, help="Persist the outcome history here")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    run_simulation(args)


if __name__ == "__main__":
    main()
