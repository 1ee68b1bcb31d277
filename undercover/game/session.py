"""Session object owning the authoritative game state"""

import logging
from typing import Optional, Sequence, Tuple

from undercover.game.engine import GameEngine
from undercover.game.rules import MisterWhiteSetting, RulesValidator
from undercover.game.state import StateManager
from undercover.storage.history import HistoryStore
from undercover.types.command import CommandType, GameCommand
from undercover.types.game import GamePhase, GameState, PlayerConfig

logger = logging.getLogger(__name__)


class GameSession:
    """
    Holds the current GameState and processes one command at a time.

    Deferred transitions (the pause after the last card is read, or after an
    amnesic re-read) are exposed through ``state.pending_transition``. With a
    zero ``transition_delay`` they are applied right away; otherwise the host
    runs its own timer and calls :meth:`complete_transition`, which is a
    no-op if another command replaced the state in the meantime.
    """

    def __init__(
        self,
        store: Optional[HistoryStore] = None,
        engine: Optional[GameEngine] = None,
        transition_delay: float = 0.0
    ):
        self.store = store or HistoryStore()
        self.engine = engine or GameEngine()
        self.transition_delay = transition_delay
        self.state: GameState = self.engine.initial_state()

    @property
    def has_pending_transition(self) -> bool:
        return self.state.pending_transition is not None

    def dispatch(self, command: GameCommand) -> GameState:
        """Apply a command, persist a finished round and return the new state."""
        previous = self.state
        used_pairs = ()
        if command.command_type in (
            CommandType.START_GAME, CommandType.SKIP_ROUND, CommandType.START_NEW_ROUND
        ):
            used_pairs = self.store.get_used_word_pairs()

        self.state = self.engine.apply(previous, command, used_pairs)

        if self.state.phase == GamePhase.GAME_OVER and previous.phase != GamePhase.GAME_OVER:
            self.store.record_outcome(self.state.winner, self.state.word_pair)

        if self.has_pending_transition and self.transition_delay <= 0:
            self.state = self.engine.complete_transition(self.state)

        return self.state

    # Setup helpers, not authoritative

    @staticmethod
    def validate(
        player_count: int,
        undercover_count: int,
        mister_white_setting: MisterWhiteSetting
    ) -> Tuple[bool, Optional[str]]:
        return RulesValidator.validate_config(player_count, undercover_count, mister_white_setting)

    @staticmethod
    def auto_adjust(
        player_count: int,
        undercover_count: int,
        mister_white_setting: MisterWhiteSetting
    ) -> Tuple[int, int]:
        return RulesValidator.auto_adjust(player_count, undercover_count, mister_white_setting)

    # Commands

    def start_game(
        self,
        player_configs: Sequence[PlayerConfig],
        undercover_count: int,
        mister_white_setting: MisterWhiteSetting
    ) -> GameState:
        """Deal the first round. Raises ConfigurationError and keeps the state on a bad setup."""
        return self.dispatch(GameCommand(
            command_type=CommandType.START_GAME,
            player_configs=list(player_configs),
            undercover_count=undercover_count,
            mister_white_count=RulesValidator.normalize_mister_white(mister_white_setting),
        ))

    def restart(
        self,
        player_configs: Sequence[PlayerConfig],
        undercover_count: int,
        mister_white_setting: MisterWhiteSetting
    ) -> GameState:
        """Start over with a new roster or new settings; scores are discarded."""
        fresh = self.engine.initial_state()
        saved, self.state = self.state, fresh
        try:
            return self.start_game(player_configs, undercover_count, mister_white_setting)
        except Exception:
            self.state = saved
            raise

    def reveal_word(self, player_id: str) -> GameState:
        return self.dispatch(GameCommand(command_type=CommandType.REVEAL_WORD, player_id=player_id))

    def select_starting_player(self, player_index: int) -> GameState:
        return self.dispatch(GameCommand(
            command_type=CommandType.SELECT_STARTING_PLAYER, player_index=player_index
        ))

    def select_random_starting_player(self) -> GameState:
        if self.state.phase != GamePhase.STARTING_PLAYER_SELECTION:
            return self.state
        return self.select_starting_player(StateManager.pick_random_starting_player(self.state.players))

    def eliminate_player(self, player_id: str) -> GameState:
        return self.dispatch(GameCommand(command_type=CommandType.ELIMINATE_PLAYER, player_id=player_id))

    def submit_mister_white_guess(self, guess: str) -> GameState:
        return self.dispatch(GameCommand(command_type=CommandType.MISTER_WHITE_GUESS, guess=guess))

    def skip_round(self) -> GameState:
        return self.dispatch(GameCommand(command_type=CommandType.SKIP_ROUND))

    def start_new_round(self) -> GameState:
        return self.dispatch(GameCommand(command_type=CommandType.START_NEW_ROUND))

    def enable_amnesic_mode(self, player_id: str) -> GameState:
        return self.dispatch(GameCommand(command_type=CommandType.ENABLE_AMNESIC_MODE, player_id=player_id))

    def complete_transition(self) -> GameState:
        """Called by the host's timer once the presentation delay has elapsed."""
        return self.dispatch(GameCommand(command_type=CommandType.COMPLETE_TRANSITION))

    def reset_game(self) -> GameState:
        return self.dispatch(GameCommand(command_type=CommandType.RESET_GAME))

    def get_visible_state(self, player_id: Optional[str] = None) -> dict:
        return StateManager.get_visible_state(self.state, player_id)
