"""Main game engine for the Undercover game"""

import logging
from collections import Counter
from typing import Callable, Dict, Optional, Sequence

from undercover.errors.handler import (
    ConfigurationError,
    ErrorHandler,
    ErrorType,
    InvariantViolation,
)
from undercover.game.rules import MisterWhiteSetting, RulesValidator
from undercover.game.state import StateManager
from undercover.types.command import CommandType, GameCommand
from undercover.types.game import (
    GamePhase,
    GameSettings,
    GameState,
    Player,
    PlayerConfig,
    Role,
    Winner,
    WordPair,
)

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Pure state-transition function for the game.

    Every command takes the current snapshot and returns the next one. A
    command that does not apply returns the very same snapshot.
    """

    def __init__(self):
        self.rules_validator = RulesValidator()
        self.state_manager = StateManager()

    @staticmethod
    def initial_state() -> GameState:
        return GameState()

    def apply(
        self,
        game_state: GameState,
        command: GameCommand,
        used_pairs: Sequence[WordPair] = ()
    ) -> GameState:
        """Apply a command and return the resulting state."""
        is_valid, error_msg = self.rules_validator.is_command_valid(command, game_state)
        if not is_valid:
            return self._ignore(game_state, command, error_msg)

        handlers: Dict[CommandType, Callable[[], GameState]] = {
            CommandType.START_GAME: lambda: self._start_game(
                command.player_configs,
                command.undercover_count,
                command.mister_white_count,
                used_pairs,
            ),
            CommandType.REVEAL_WORD: lambda: self._reveal_word(game_state, command.player_id),
            CommandType.SELECT_STARTING_PLAYER: lambda: self._select_starting_player(
                game_state, command.player_index
            ),
            CommandType.ELIMINATE_PLAYER: lambda: self._eliminate_player(game_state, command.player_id),
            CommandType.MISTER_WHITE_GUESS: lambda: self._resolve_guess(game_state, command.guess),
            CommandType.SKIP_ROUND: lambda: self._next_round(game_state, used_pairs, completed=False),
            CommandType.START_NEW_ROUND: lambda: self._next_round(game_state, used_pairs, completed=True),
            CommandType.ENABLE_AMNESIC_MODE: lambda: self._enable_amnesic_mode(game_state, command.player_id),
            CommandType.COMPLETE_TRANSITION: lambda: self._complete_transition(game_state),
            CommandType.RESET_GAME: self.initial_state,
        }

        new_state = handlers[command.command_type]()
        if new_state.phase != game_state.phase:
            logger.info(
                f"{command.command_type.value}: {game_state.phase.value} -> {new_state.phase.value} "
                f"(round {new_state.round_number})"
            )
        return new_state

    # Convenience wrappers mirroring the commands

    def start_game(
        self,
        game_state: GameState,
        player_configs: Sequence[PlayerConfig],
        undercover_count: int,
        mister_white_setting: MisterWhiteSetting,
        used_pairs: Sequence[WordPair] = ()
    ) -> GameState:
        """Deal the first round. Raises ConfigurationError on an invalid setup."""
        return self.apply(game_state, GameCommand(
            command_type=CommandType.START_GAME,
            player_configs=list(player_configs),
            undercover_count=undercover_count,
            mister_white_count=self.rules_validator.normalize_mister_white(mister_white_setting),
        ), used_pairs)

    def reveal_word(self, game_state: GameState, player_id: str) -> GameState:
        return self.apply(game_state, GameCommand(command_type=CommandType.REVEAL_WORD, player_id=player_id))

    def select_starting_player(self, game_state: GameState, player_index: int) -> GameState:
        return self.apply(game_state, GameCommand(
            command_type=CommandType.SELECT_STARTING_PLAYER, player_index=player_index
        ))

    def eliminate_player(self, game_state: GameState, player_id: str) -> GameState:
        return self.apply(game_state, GameCommand(command_type=CommandType.ELIMINATE_PLAYER, player_id=player_id))

    def submit_mister_white_guess(self, game_state: GameState, guess: str) -> GameState:
        return self.apply(game_state, GameCommand(command_type=CommandType.MISTER_WHITE_GUESS, guess=guess))

    def skip_round(self, game_state: GameState, used_pairs: Sequence[WordPair] = ()) -> GameState:
        return self.apply(game_state, GameCommand(command_type=CommandType.SKIP_ROUND), used_pairs)

    def start_new_round(self, game_state: GameState, used_pairs: Sequence[WordPair] = ()) -> GameState:
        return self.apply(game_state, GameCommand(command_type=CommandType.START_NEW_ROUND), used_pairs)

    def enable_amnesic_mode(self, game_state: GameState, player_id: str) -> GameState:
        return self.apply(game_state, GameCommand(
            command_type=CommandType.ENABLE_AMNESIC_MODE, player_id=player_id
        ))

    def complete_transition(self, game_state: GameState) -> GameState:
        return self.apply(game_state, GameCommand(command_type=CommandType.COMPLETE_TRANSITION))

    def reset_game(self, game_state: GameState) -> GameState:
        return self.apply(game_state, GameCommand(command_type=CommandType.RESET_GAME))

    # Command handlers

    def _start_game(
        self,
        player_configs: Sequence[PlayerConfig],
        undercover_count: int,
        mister_white_count: int,
        used_pairs: Sequence[WordPair]
    ) -> GameState:
        configs = self.state_manager.validate_player_configs(player_configs)

        is_valid, error_msg = self.rules_validator.validate_config(
            len(configs), undercover_count, mister_white_count
        )
        if not is_valid:
            logger.warning(f"Rejected game configuration: {error_msg}")
            raise ConfigurationError(error_msg)

        settings = GameSettings(
            undercover_count=undercover_count,
            mister_white_count=mister_white_count,
        )
        logger.info(
            f"Starting game with {len(configs)} players, {undercover_count} undercover, "
            f"{mister_white_count} Mister White"
        )
        return self._deal_round(configs, settings, used_pairs, previous_players=(), round_number=1)

    def _deal_round(
        self,
        player_configs: Sequence[PlayerConfig],
        settings: GameSettings,
        used_pairs: Sequence[WordPair],
        previous_players: Sequence[Player],
        round_number: int
    ) -> GameState:
        roles = self.state_manager.allocate_roles(
            len(player_configs), settings.undercover_count, settings.mister_white_count
        )
        word_pair = self.state_manager.draw_word_pair(used_pairs)
        players = self.state_manager.assign_players(player_configs, roles, word_pair, previous_players)

        self._check_round_invariants(players, settings, word_pair)

        return GameState(
            phase=GamePhase.WORD_DISTRIBUTION,
            players=tuple(players),
            current_player_index=0,
            civilian_word=word_pair.civilian,
            undercover_word=word_pair.undercover,
            round_number=round_number,
            game_settings=settings,
        )

    def _reveal_word(self, game_state: GameState, player_id: str) -> GameState:
        players = self.state_manager.set_has_seen_word(game_state.players, player_id, True)

        if game_state.phase == GamePhase.AMNESIC_MODE:
            return game_state.model_copy(update={
                "players": tuple(players),
                "pending_transition": GamePhase.PLAYING,
            })

        if all(p.has_seen_word for p in players):
            return game_state.model_copy(update={
                "players": tuple(players),
                "pending_transition": GamePhase.STARTING_PLAYER_SELECTION,
            })

        return game_state.model_copy(update={
            "players": tuple(players),
            "current_player_index": self.state_manager.next_unseen_index(
                players, game_state.current_player_index
            ),
        })

    def _select_starting_player(self, game_state: GameState, player_index: int) -> GameState:
        return game_state.model_copy(update={
            "phase": GamePhase.PLAYING,
            "starting_player_index": player_index,
        })

    def _eliminate_player(self, game_state: GameState, player_id: str) -> GameState:
        target = game_state.find_player(player_id)
        players = self.state_manager.eliminate_player(game_state.players, player_id)
        logger.info(f"{target.name} eliminated in round {game_state.round_number}")

        # Win checks wait until the Mister White has had a chance to guess
        if target.role == Role.MISTER_WHITE:
            return game_state.model_copy(update={
                "players": tuple(players),
                "phase": GamePhase.VOTING,
                "guessing_player_id": player_id,
            })

        return self._settle(game_state, players)

    def _resolve_guess(self, game_state: GameState, guess: str) -> GameState:
        guesser_id = game_state.guessing_player_id
        resolved = game_state.model_copy(update={"guessing_player_id": None})

        if not self.rules_validator.is_guess_correct(guess, game_state.civilian_word):
            logger.info("Mister White guessed wrong")
            return self._settle(resolved, game_state.players)

        players = self.state_manager.update_scores(game_state.players, Winner.MISTER_WHITE, guesser_id)
        guesser = next(p for p in players if p.id == guesser_id)
        logger.info(f"Mister White {guesser.name} guessed the civilian word")

        return resolved.model_copy(update={
            "players": tuple(players),
            "phase": GamePhase.GAME_OVER,
            "winner": Winner.MISTER_WHITE,
            "winner_players": (guesser,),
        })

    def _settle(self, game_state: GameState, players: Sequence[Player]) -> GameState:
        """Run the win check against the roster and score if the round is decided"""
        winner, winner_players = self.rules_validator.check_win_condition(players)

        if winner is None:
            return game_state.model_copy(update={
                "players": tuple(players),
                "phase": GamePhase.PLAYING,
            })

        scored = self.state_manager.update_scores(players, winner)
        winner_ids = {p.id for p in winner_players}
        logger.info(f"Round {game_state.round_number} won by {winner.value}")

        return game_state.model_copy(update={
            "players": tuple(scored),
            "phase": GamePhase.GAME_OVER,
            "winner": winner,
            "winner_players": tuple(p for p in scored if p.id in winner_ids),
        })

    def _next_round(self, game_state: GameState, used_pairs: Sequence[WordPair], completed: bool) -> GameState:
        """
        Re-deal the same table with fresh roles and words.

        Scores and profile images carry over by name. Only a completed
        round advances the round counter.
        """
        settings = game_state.game_settings
        configs = [
            PlayerConfig(name=p.name, profile_image=p.profile_image)
            for p in game_state.players
        ]

        is_valid, error_msg = self.rules_validator.validate_config(
            len(configs), settings.undercover_count, settings.mister_white_count
        )
        if not is_valid:
            raise InvariantViolation(f"Session settings became invalid: {error_msg}")

        excluded = list(used_pairs)
        if game_state.word_pair is not None:
            excluded.append(game_state.word_pair)

        round_number = game_state.round_number + 1 if completed else game_state.round_number
        return self._deal_round(configs, settings, excluded, game_state.players, round_number)

    def _enable_amnesic_mode(self, game_state: GameState, player_id: str) -> GameState:
        players = self.state_manager.set_has_seen_word(game_state.players, player_id, False)
        return game_state.model_copy(update={
            "players": tuple(players),
            "current_player_index": game_state.index_of(player_id),
            "phase": GamePhase.AMNESIC_MODE,
            "pending_transition": None,
        })

    def _complete_transition(self, game_state: GameState) -> GameState:
        return game_state.model_copy(update={
            "phase": game_state.pending_transition,
            "pending_transition": None,
        })

    def _ignore(self, game_state: GameState, command: GameCommand, error_msg: Optional[str]) -> GameState:
        """Log a command that does not apply and keep the state as is."""
        error_type = ErrorHandler.classify_validation_error(error_msg or "")
        log_entry = ErrorHandler.format_error_log(
            error_type,
            phase=game_state.phase.value,
            round_number=game_state.round_number,
            details=error_msg,
            player_id=command.player_id,
        )

        if error_type == ErrorType.OUT_OF_TURN:
            logger.debug(f"Ignored {command.command_type.value}: {log_entry}")
        else:
            logger.warning(f"Ignored {command.command_type.value}: {log_entry}")
        return game_state

    @staticmethod
    def _check_round_invariants(
        players: Sequence[Player],
        settings: GameSettings,
        word_pair: WordPair
    ) -> None:
        """Fail loudly if a freshly dealt round breaks the composition rules."""
        if word_pair.civilian == word_pair.undercover:
            raise InvariantViolation(f"Word pair uses the same word twice: {word_pair.civilian!r}")

        counts = Counter(p.role for p in players)
        if counts[Role.UNDERCOVER] != settings.undercover_count:
            raise InvariantViolation("Undercover count does not match the settings")
        if counts[Role.MISTER_WHITE] != settings.mister_white_count:
            raise InvariantViolation("Mister White count does not match the settings")
        if counts[Role.CIVIL] < counts[Role.UNDERCOVER] + 1:
            raise InvariantViolation("Civilians do not outnumber undercovers")

        for player in players:
            expected = {
                Role.CIVIL: word_pair.civilian,
                Role.UNDERCOVER: word_pair.undercover,
                Role.MISTER_WHITE: None,
            }[player.role]
            if player.word != expected:
                raise InvariantViolation(f"{player.name} holds the wrong word for role {player.role.value}")
