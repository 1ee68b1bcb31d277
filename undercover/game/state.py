"""State management for the Undercover game"""

import logging
import random
from typing import Any, Dict, List, Optional, Sequence

from undercover.data.word_pairs import WORD_PAIRS
from undercover.errors.handler import ConfigurationError, ErrorType, InvariantViolation
from undercover.game.rules import RulesValidator
from undercover.types.game import (
    GamePhase,
    GameState,
    Player,
    PlayerConfig,
    Role,
    Scores,
    Winner,
    WordPair,
    MAX_NAME_LENGTH,
    PALETTE_SIZE,
)

logger = logging.getLogger(__name__)

RECENT_PAIR_WINDOW = 10


class StateManager:
    """Builds rosters, deals roles and words, and settles scores"""

    @staticmethod
    def allocate_roles(player_count: int, undercover_count: int, mister_white_count: int) -> List[Role]:
        """Build the role multiset and return it in random seat order"""
        civil_count = player_count - undercover_count - mister_white_count
        if player_count <= 0 or undercover_count < 0 or mister_white_count < 0 or civil_count < 0:
            raise InvariantViolation(
                f"Role counts do not fit the table: {player_count} players, "
                f"{undercover_count} undercover, {mister_white_count} Mister White"
            )

        roles = (
            [Role.UNDERCOVER] * undercover_count
            + [Role.MISTER_WHITE] * mister_white_count
            + [Role.CIVIL] * civil_count
        )

        random.shuffle(roles)
        return roles

    @staticmethod
    def draw_word_pair(
        used_pairs: Sequence[WordPair] = (),
        dictionary: Sequence[WordPair] = WORD_PAIRS
    ) -> WordPair:
        """
        Pick a word pair, avoiding the civilian words already played.

        When every pair has been used, only the most recent ten are avoided;
        if that still leaves nothing, any pair may come back.
        """
        used_words = {pair.civilian for pair in used_pairs}
        available = [pair for pair in dictionary if pair.civilian not in used_words]
        if available:
            return random.choice(available)

        recent_words = {pair.civilian for pair in list(used_pairs)[-RECENT_PAIR_WINDOW:]}
        reusable = [pair for pair in dictionary if pair.civilian not in recent_words]
        if reusable:
            logger.info(f"Word dictionary exhausted, reusing pairs older than the last {RECENT_PAIR_WINDOW}")
            return random.choice(reusable)

        logger.info("Word dictionary exhausted, allowing repeats")
        return random.choice(list(dictionary))

    @staticmethod
    def normalize_name(name: str) -> str:
        return name.strip()[:MAX_NAME_LENGTH]

    @staticmethod
    def validate_player_configs(player_configs: Sequence[PlayerConfig]) -> List[PlayerConfig]:
        """Trim names and reject empty or duplicate ones"""
        cleaned = []
        seen = set()
        for config in player_configs:
            name = StateManager.normalize_name(config.name)
            if not name:
                raise ConfigurationError("Player names must not be empty", ErrorType.INVALID_PLAYER_NAMES)

            key = name.casefold()
            if key in seen:
                raise ConfigurationError(f"Player names must be unique: {name!r}", ErrorType.INVALID_PLAYER_NAMES)
            seen.add(key)

            cleaned.append(PlayerConfig(name=name, profile_image=config.profile_image))
        return cleaned

    @staticmethod
    def assign_players(
        player_configs: Sequence[PlayerConfig],
        roles: Sequence[Role],
        word_pair: WordPair,
        previous_players: Sequence[Player] = ()
    ) -> List[Player]:
        """
        Seat players in order with their dealt role and word.

        Players found in previous_players (matched by name) keep their id,
        cumulative score and profile image.
        """
        if len(player_configs) != len(roles):
            raise InvariantViolation(
                f"{len(roles)} roles dealt for {len(player_configs)} players"
            )

        previous_by_name = {player.name: player for player in previous_players}
        players = []

        for seat, (config, role) in enumerate(zip(player_configs, roles)):
            name = StateManager.normalize_name(config.name)
            previous = previous_by_name.get(name)

            if role == Role.CIVIL:
                word = word_pair.civilian
            elif role == Role.UNDERCOVER:
                word = word_pair.undercover
            else:
                word = None

            players.append(Player(
                id=previous.id if previous else f"player-{seat}",
                name=name,
                role=role,
                word=word,
                profile_image=config.profile_image if config.profile_image is not None
                else (previous.profile_image if previous else None),
                score=previous.score if previous else 0,
                is_eliminated=False,
                has_seen_word=False,
                color_index=(seat % PALETTE_SIZE) + 1,
            ))

        return players

    @staticmethod
    def eliminate_player(players: Sequence[Player], player_id: str) -> List[Player]:
        """Return a new roster with the given player voted out"""
        return [
            p.model_copy(update={"is_eliminated": True}) if p.id == player_id else p
            for p in players
        ]

    @staticmethod
    def set_has_seen_word(players: Sequence[Player], player_id: str, seen: bool) -> List[Player]:
        return [
            p.model_copy(update={"has_seen_word": seen}) if p.id == player_id else p
            for p in players
        ]

    @staticmethod
    def next_unseen_index(players: Sequence[Player], current_index: int) -> int:
        """Next seat after current_index (cyclic) that has not seen its word"""
        count = len(players)
        next_index = (current_index + 1) % count
        while next_index != current_index and players[next_index].has_seen_word:
            next_index = (next_index + 1) % count
        return next_index

    @staticmethod
    def update_scores(
        players: Sequence[Player],
        winner: Winner,
        guessing_player_id: Optional[str] = None
    ) -> List[Player]:
        """
        Credit the winning side.

        Only players still in the game score, except the Mister White who
        won by guessing the civilian word after being voted out.
        """
        if winner == Winner.MISTER_WHITE and guessing_player_id:
            return [
                p.model_copy(update={"score": p.score + Scores.MISTER_WHITE_GUESS})
                if p.id == guessing_player_id else p
                for p in players
            ]

        coalition_points = Scores.UNDERCOVER_WIN
        if winner == Winner.UNDERCOVER:
            living_undercovers = [
                p for p in players if p.role == Role.UNDERCOVER and not p.is_eliminated
            ]
            if not living_undercovers:
                coalition_points = Scores.MISTER_WHITE_WIN

        updated = []
        for player in players:
            points = 0
            if not player.is_eliminated:
                if winner == Winner.CIVIL and player.role == Role.CIVIL:
                    points = Scores.CIVIL_WIN
                elif winner == Winner.UNDERCOVER and player.role in (Role.UNDERCOVER, Role.MISTER_WHITE):
                    points = coalition_points

            updated.append(player.model_copy(update={"score": player.score + points}) if points else player)

        return updated

    @staticmethod
    def eligible_starting_players(players: Sequence[Player]) -> List[int]:
        """Seats allowed to open the discussion"""
        return [
            index for index, player in enumerate(players)
            if player.role != Role.MISTER_WHITE
        ]

    @staticmethod
    def pick_random_starting_player(players: Sequence[Player]) -> int:
        return random.choice(StateManager.eligible_starting_players(players))

    @staticmethod
    def get_leaderboard(players: Sequence[Player]) -> List[Player]:
        """Players by score, highest first; ties keep seating order"""
        return sorted(players, key=lambda p: p.score, reverse=True)

    @staticmethod
    def get_visible_state(game_state: GameState, player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Get the game state as the table may see it.

        Roles are only shown for eliminated players and once the round is
        over. The holder of the device only sees their own word while it is
        their turn to look at their card.
        """
        round_over = game_state.winner is not None

        visible_state = {
            "phase": game_state.phase.value,
            "round_number": game_state.round_number,
            "current_player_index": game_state.current_player_index,
            "starting_player_index": game_state.starting_player_index,
            "players": [
                {
                    "id": p.id,
                    "name": p.name,
                    "score": p.score,
                    "color_index": p.color_index,
                    "is_eliminated": p.is_eliminated,
                    "has_seen_word": p.has_seen_word,
                    "role": p.role.value if (p.is_eliminated or round_over) else None,
                }
                for p in game_state.players
            ],
            "alive_counts": {
                role.value: count
                for role, count in RulesValidator.count_alive_roles(game_state.players).items()
            },
        }

        current = game_state.current_player
        looking = game_state.phase in (GamePhase.WORD_DISTRIBUTION, GamePhase.AMNESIC_MODE)
        if looking and player_id and current is not None and current.id == player_id:
            visible_state["your_role_is_mister_white"] = current.role == Role.MISTER_WHITE
            visible_state["your_word"] = current.word

        if round_over:
            visible_state["winner"] = game_state.winner.value
            visible_state["winner_player_ids"] = [p.id for p in game_state.winner_players]
            visible_state["civilian_word"] = game_state.civilian_word
            visible_state["undercover_word"] = game_state.undercover_word
            visible_state["leaderboard"] = [
                {"name": p.name, "score": p.score}
                for p in StateManager.get_leaderboard(game_state.players)
            ]

        return visible_state
