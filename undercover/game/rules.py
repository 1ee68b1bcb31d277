"""Rules validation for the Undercover game"""

from typing import Dict, List, Optional, Sequence, Set, Tuple, Union

from undercover.types.command import CommandType, GameCommand
from undercover.types.game import (
    GamePhase,
    GameState,
    Player,
    Role,
    Winner,
    MAX_PLAYERS,
    MIN_PLAYERS,
)


MisterWhiteSetting = Union[bool, int]


class RulesValidator:
    """Validates role configurations and commands against the Undercover rules"""

    ALLOWED_PHASES: Dict[CommandType, Set[GamePhase]] = {
        CommandType.START_GAME: {GamePhase.SETUP},
        CommandType.REVEAL_WORD: {GamePhase.WORD_DISTRIBUTION, GamePhase.AMNESIC_MODE},
        CommandType.SELECT_STARTING_PLAYER: {GamePhase.STARTING_PLAYER_SELECTION},
        CommandType.ELIMINATE_PLAYER: {GamePhase.PLAYING},
        CommandType.MISTER_WHITE_GUESS: {GamePhase.VOTING},
        CommandType.SKIP_ROUND: {GamePhase.PLAYING, GamePhase.GAME_OVER},
        CommandType.START_NEW_ROUND: {GamePhase.PLAYING, GamePhase.GAME_OVER},
        CommandType.ENABLE_AMNESIC_MODE: {GamePhase.PLAYING},
        CommandType.COMPLETE_TRANSITION: set(GamePhase),
        CommandType.RESET_GAME: set(GamePhase),
    }

    @staticmethod
    def normalize_mister_white(setting: MisterWhiteSetting) -> int:
        """Accept either the legacy boolean flag or an explicit count."""
        if isinstance(setting, bool):
            return 1 if setting else 0
        return int(setting)

    @staticmethod
    def validate_config(
        player_count: int,
        undercover_count: int,
        mister_white_count: MisterWhiteSetting
    ) -> Tuple[bool, Optional[str]]:
        """
        Check a role configuration against the balance rules.
        Returns (is_valid, error_message)
        """
        mister_white_count = RulesValidator.normalize_mister_white(mister_white_count)

        if player_count < MIN_PLAYERS:
            return False, f"At least {MIN_PLAYERS} players are required"
        if player_count > MAX_PLAYERS:
            return False, f"At most {MAX_PLAYERS} players are allowed"

        if undercover_count < 0 or mister_white_count < 0:
            return False, "Role counts must be non-negative"
        if undercover_count + mister_white_count == 0:
            return False, "At least one undercover or Mister White is required"

        civil_count = player_count - undercover_count - mister_white_count
        if civil_count < undercover_count + 1:
            return False, "Civilians must outnumber undercovers"

        max_infiltrators = player_count // 2
        if undercover_count + mister_white_count > max_infiltrators:
            return False, (
                f"Undercovers and Mister Whites must not exceed half of the table "
                f"(max {max_infiltrators})"
            )

        if undercover_count == 0 and mister_white_count > player_count // 4:
            return False, (
                f"Without undercovers, at most {player_count // 4} Mister White "
                f"can be dealt at this table size"
            )

        return True, None

    @staticmethod
    def auto_adjust(
        player_count: int,
        undercover_count: int,
        mister_white_count: MisterWhiteSetting
    ) -> Tuple[int, int]:
        """
        Correct a requested configuration into the closest valid one.

        Undercovers are reduced before Mister Whites. Applying the correction
        to its own output returns the same pair.
        Returns (undercover_count, mister_white_count)
        """
        if player_count <= MIN_PLAYERS:
            # Three players only support a single undercover
            return 1, 0

        undercover = max(0, int(undercover_count))
        mister_white = max(0, RulesValidator.normalize_mister_white(mister_white_count))
        if undercover == 0 and mister_white == 0:
            undercover = 1

        mister_white_cap = player_count // 4
        if undercover == 0:
            mister_white = min(mister_white, mister_white_cap)

        while undercover > 0 and player_count - undercover - mister_white < undercover + 1:
            undercover -= 1
        if undercover == 0:
            mister_white = min(mister_white, mister_white_cap)

        excess = undercover + mister_white - player_count // 2
        if excess > 0:
            cut = min(undercover, excess)
            undercover -= cut
            mister_white = max(0, mister_white - (excess - cut))

        if undercover == 0:
            mister_white = min(mister_white, mister_white_cap)
            if mister_white == 0:
                undercover = 1

        return undercover, mister_white

    @staticmethod
    def is_command_valid(
        command: GameCommand,
        game_state: GameState
    ) -> Tuple[bool, Optional[str]]:
        """
        Check if a command may be applied to the current state.
        Returns (is_valid, error_message)
        """
        allowed = RulesValidator.ALLOWED_PHASES.get(command.command_type, set())
        if game_state.phase not in allowed:
            return False, f"{command.command_type.value} not allowed during {game_state.phase.value}"

        command_validators = {
            CommandType.REVEAL_WORD: RulesValidator._validate_reveal,
            CommandType.SELECT_STARTING_PLAYER: RulesValidator._validate_starting_player,
            CommandType.ELIMINATE_PLAYER: RulesValidator._validate_elimination,
            CommandType.MISTER_WHITE_GUESS: RulesValidator._validate_guess,
            CommandType.ENABLE_AMNESIC_MODE: RulesValidator._validate_amnesic_mode,
            CommandType.COMPLETE_TRANSITION: RulesValidator._validate_transition,
        }

        validator = command_validators.get(command.command_type)
        if not validator:
            return True, None

        return validator(command, game_state)

    @staticmethod
    def _validate_reveal(command: GameCommand, game_state: GameState) -> Tuple[bool, Optional[str]]:
        """Only the seat at current_player_index may flip their card"""
        if game_state.find_player(command.player_id) is None:
            return False, "Unknown player"

        current = game_state.current_player
        if current is None or current.id != command.player_id:
            return False, "It is not this player's turn to look at their card"

        if current.has_seen_word:
            return False, "Player has already seen their word"

        return True, None

    @staticmethod
    def _validate_starting_player(command: GameCommand, game_state: GameState) -> Tuple[bool, Optional[str]]:
        index = command.player_index
        if index is None or not 0 <= index < len(game_state.players):
            return False, "Starting player index out of range"

        player = game_state.players[index]
        if player.role == Role.MISTER_WHITE:
            return False, "Mister White cannot open the discussion"

        return True, None

    @staticmethod
    def _validate_elimination(command: GameCommand, game_state: GameState) -> Tuple[bool, Optional[str]]:
        player = game_state.find_player(command.player_id)
        if player is None:
            return False, "Unknown player"
        if player.is_eliminated:
            return False, "Player is already eliminated"
        return True, None

    @staticmethod
    def _validate_guess(command: GameCommand, game_state: GameState) -> Tuple[bool, Optional[str]]:
        if command.guess is None:
            return False, "Guess cannot be empty"
        if game_state.find_player(game_state.guessing_player_id) is None:
            return False, "Unknown player"
        return True, None

    @staticmethod
    def _validate_amnesic_mode(command: GameCommand, game_state: GameState) -> Tuple[bool, Optional[str]]:
        player = game_state.find_player(command.player_id)
        if player is None:
            return False, "Unknown player"
        if player.is_eliminated:
            return False, "Eliminated players cannot look at their card again"
        return True, None

    @staticmethod
    def _validate_transition(command: GameCommand, game_state: GameState) -> Tuple[bool, Optional[str]]:
        """Deferred transitions re-check their preconditions when they fire"""
        target = game_state.pending_transition
        if target is None:
            return False, "No scheduled transition is pending"

        if target == GamePhase.STARTING_PLAYER_SELECTION:
            if game_state.phase != GamePhase.WORD_DISTRIBUTION:
                return False, "Scheduled transition no longer applies"
            if not all(p.has_seen_word for p in game_state.players):
                return False, "Scheduled transition no longer applies"
            return True, None

        if target == GamePhase.PLAYING:
            current = game_state.current_player
            if game_state.phase != GamePhase.AMNESIC_MODE or current is None or not current.has_seen_word:
                return False, "Scheduled transition no longer applies"
            return True, None

        return False, "Scheduled transition no longer applies"

    @staticmethod
    def count_alive_roles(players: Sequence[Player]) -> Dict[Role, int]:
        """Count non-eliminated players per role"""
        counts = {role: 0 for role in Role}
        for player in players:
            if not player.is_eliminated:
                counts[player.role] += 1
        return counts

    @staticmethod
    def check_win_condition(players: Sequence[Player]) -> Tuple[Optional[Winner], List[Player]]:
        """
        Check if the round has been decided.
        Returns (winner, winner_players); winner is None while the game continues.
        """
        counts = RulesValidator.count_alive_roles(players)
        alive_civil = counts[Role.CIVIL]
        infiltrators = counts[Role.UNDERCOVER] + counts[Role.MISTER_WHITE]

        # Civilians win once every undercover and Mister White is out
        if infiltrators == 0:
            return Winner.CIVIL, [
                p for p in players if p.role == Role.CIVIL and not p.is_eliminated
            ]

        # Parity is enough for the infiltrators
        if infiltrators >= alive_civil:
            return Winner.UNDERCOVER, [
                p for p in players
                if p.role in (Role.UNDERCOVER, Role.MISTER_WHITE) and not p.is_eliminated
            ]

        return None, []

    @staticmethod
    def normalize_guess(text: str) -> str:
        return text.strip().lower()

    @staticmethod
    def is_guess_correct(guess: str, civilian_word: str) -> bool:
        """Exact match after trimming and lowercasing both sides"""
        return RulesValidator.normalize_guess(guess) == RulesValidator.normalize_guess(civilian_word)
