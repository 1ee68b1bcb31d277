"""Terminal front end: one device passed around the table."""

import argparse
import logging
import sys
import time
from typing import List, Optional

from undercover.config import Settings
from undercover.errors.handler import ConfigurationError
from undercover.game.session import GameSession
from undercover.game.state import StateManager
from undercover.storage.history import HistoryStore
from undercover.types.game import GamePhase, PlayerConfig, Role, Winner

logger = logging.getLogger(__name__)

SCREEN_CLEAR = "\n" * 40

WINNER_LABELS = {
    Winner.CIVIL: "The civilians",
    Winner.UNDERCOVER: "The undercovers",
    Winner.MISTER_WHITE: "Mister White",
}


def _prompt_names() -> List[str]:
    print("Enter player names, one per line. Leave empty to finish.")
    names = []
    while True:
        name = input(f"Player {len(names) + 1}: ").strip()
        if not name:
            return names
        names.append(name)


def _wait_for_transition(session: GameSession) -> None:
    if session.has_pending_transition:
        time.sleep(session.transition_delay)
        session.complete_transition()


def _show_card(session: GameSession) -> None:
    player = session.state.current_player
    input(f"{SCREEN_CLEAR}Pass the device to {player.name} and press Enter...")
    if player.role == Role.MISTER_WHITE:
        print("You are Mister White. You have no word: listen and blend in.")
    else:
        print(f"Your word is: {player.word}")
    input("Press Enter to hide your card.")
    print(SCREEN_CLEAR)
    session.reveal_word(player.id)
    _wait_for_transition(session)


def _show_table(session: GameSession) -> None:
    state = session.state
    starter = state.players[state.starting_player_index]
    print(f"\nRound {state.round_number} - {starter.name} starts the discussion.")
    for index, player in enumerate(state.players):
        status = f"out ({player.role.value})" if player.is_eliminated else "in"
        print(f"  [{index + 1}] {player.name:<16} {status}")


def _play_turn(session: GameSession) -> bool:
    _show_table(session)
    choice = input("Vote out [number], re-read card [a number], skip round [s], quit [q]: ").strip().lower()
    state = session.state

    if choice == "q":
        return False
    if choice == "s":
        session.skip_round()
        return True

    amnesic = choice.startswith("a")
    digits = choice[1:].strip() if amnesic else choice
    if not digits.isdigit() or not 1 <= int(digits) <= len(state.players):
        print("Unknown choice.")
        return True

    player = state.players[int(digits) - 1]
    if amnesic:
        session.enable_amnesic_mode(player.id)
    else:
        session.eliminate_player(player.id)
        print(f"{player.name} was {player.role.value}.")
    return True


def _show_results(session: GameSession) -> bool:
    state = session.state
    print(f"\n{WINNER_LABELS[state.winner]} win!")
    print(f"Civilian word: {state.civilian_word} / Undercover word: {state.undercover_word}")
    for player in StateManager.get_leaderboard(state.players):
        print(f"  {player.name:<16} {player.score:>4} pts")

    choice = input("New round [n], quit [q]: ").strip().lower()
    if choice == "n":
        session.start_new_round()
        return True
    return False


def run(session: GameSession) -> None:
    """Run the game loop until the table quits."""
    while True:
        phase = session.state.phase

        if phase in (GamePhase.WORD_DISTRIBUTION, GamePhase.AMNESIC_MODE):
            _show_card(session)
        elif phase == GamePhase.STARTING_PLAYER_SELECTION:
            session.select_random_starting_player()
        elif phase == GamePhase.PLAYING:
            if not _play_turn(session):
                return
        elif phase == GamePhase.VOTING:
            guess = input("Mister White, guess the civilian word: ")
            session.submit_mister_white_guess(guess)
        elif phase == GamePhase.GAME_OVER:
            if not _show_results(session):
                return
        else:
            return


def _print_stats(store: HistoryStore) -> None:
    stats = store.get_stats()
    print(f"Games played: {stats.total_games}")
    for winner in Winner:
        print(f"  {WINNER_LABELS[winner]:<16} {stats.win_rate(winner):5.1f}%")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play Undercover / Mister White on a single shared device."
    )
    parser.add_argument("names", nargs="*", help="Player names in seating order")
    parser.add_argument("--undercover", type=int, default=1, help="Number of undercover players")
    parser.add_argument("--mister-white", type=int, default=1, help="Number of Mister White players")
    parser.add_argument(
        "--auto-adjust",
        action="store_true",
        help="Correct the role counts to the closest valid configuration",
    )
    parser.add_argument("--data-dir", default=None, help="Directory for the outcome history")
    parser.add_argument("--delay", type=float, default=None, help="Seconds before automatic phase changes")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING...)")
    parser.add_argument("--stats", action="store_true", help="Print win statistics and exit")
    parser.add_argument("--clear-stats", action="store_true", help="Forget the recorded history and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    store = HistoryStore(args.data_dir or settings.data_dir, limit=settings.history_limit)
    if args.clear_stats:
        store.clear()
        return 0
    if args.stats:
        _print_stats(store)
        return 0

    names = args.names or _prompt_names()
    undercover, mister_white = args.undercover, args.mister_white
    if args.auto_adjust:
        undercover, mister_white = GameSession.auto_adjust(len(names), undercover, mister_white)
        print(f"Playing with {undercover} undercover and {mister_white} Mister White.")

    delay = settings.transition_delay if args.delay is None else args.delay
    session = GameSession(store=store, transition_delay=delay)
    try:
        session.start_game([PlayerConfig(name=name) for name in names], undercover, mister_white)
    except ConfigurationError as e:
        print(f"Cannot start the game: {e}", file=sys.stderr)
        return 2

    try:
        run(session)
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
