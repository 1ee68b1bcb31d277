"""Shared test fixtures for Undercover game logic."""

from collections.abc import Callable
from typing import Optional, Sequence

import pytest

from undercover.types.game import (
    GamePhase,
    GameSettings,
    GameState,
    Player,
    Role,
)

CIVILIAN_WORD = "Chat"
UNDERCOVER_WORD = "Chien"


@pytest.fixture
def game_state_factory() -> Callable[..., GameState]:
    """Factory fixture that builds customizable game states for tests."""

    def _factory(
        *,
        roles: Optional[Sequence[Role]] = None,
        phase: GamePhase = GamePhase.PLAYING,
        eliminated: Sequence[int] = (),
        seen: Optional[bool] = None,
        scores: Optional[Sequence[int]] = None,
        current_player_index: int = 0,
        round_number: int = 1,
    ) -> GameState:
        roles = list(roles or [Role.CIVIL, Role.CIVIL, Role.CIVIL, Role.UNDERCOVER, Role.MISTER_WHITE])
        if seen is None:
            seen = phase not in (GamePhase.SETUP, GamePhase.WORD_DISTRIBUTION)

        words = {
            Role.CIVIL: CIVILIAN_WORD,
            Role.UNDERCOVER: UNDERCOVER_WORD,
            Role.MISTER_WHITE: None,
        }
        players = tuple(
            Player(
                id=f"player-{i}",
                name=f"P{i}",
                role=role,
                word=words[role],
                score=scores[i] if scores else 0,
                is_eliminated=i in eliminated,
                has_seen_word=seen,
                color_index=i % 8 + 1,
            )
            for i, role in enumerate(roles)
        )

        return GameState(
            phase=phase,
            players=players,
            current_player_index=current_player_index,
            starting_player_index=0 if phase == GamePhase.PLAYING else None,
            civilian_word=CIVILIAN_WORD,
            undercover_word=UNDERCOVER_WORD,
            round_number=round_number,
            game_settings=GameSettings(
                undercover_count=roles.count(Role.UNDERCOVER),
                mister_white_count=roles.count(Role.MISTER_WHITE),
            ),
        )

    return _factory
