"""End-to-end tests for the Undercover game engine."""

from collections import Counter
import random

import pytest

from undercover.errors.handler import ConfigurationError, ErrorType
from undercover.game.engine import GameEngine
from undercover.types.game import GamePhase, GameState, PlayerConfig, Role, Scores, Winner, WordPair


NAMES = ["Ann", "Bob", "Cy", "Dee", "Eve"]


def _configs(names=NAMES) -> list[PlayerConfig]:
    return [PlayerConfig(name=name) for name in names]


def _reveal_all(engine: GameEngine, state: GameState) -> GameState:
    while state.pending_transition is None:
        state = engine.reveal_word(state, state.current_player.id)
    return engine.complete_transition(state)


def test_initial_state_is_empty_setup():
    state = GameEngine.initial_state()
    assert state.phase == GamePhase.SETUP
    assert state.players == ()
    assert state.round_number == 1
    assert state.winner is None


def test_start_game_deals_first_round():
    engine = GameEngine()
    state = engine.start_game(GameEngine.initial_state(), _configs(), 1, True)

    assert state.phase == GamePhase.WORD_DISTRIBUTION
    assert state.current_player_index == 0
    assert state.round_number == 1
    assert state.game_settings.undercover_count == 1
    assert state.game_settings.mister_white_count == 1
    assert state.civilian_word != state.undercover_word

    counts = Counter(p.role for p in state.players)
    assert counts == {Role.CIVIL: 3, Role.UNDERCOVER: 1, Role.MISTER_WHITE: 1}
    for player in state.players:
        if player.role == Role.CIVIL:
            assert player.word == state.civilian_word
        elif player.role == Role.UNDERCOVER:
            assert player.word == state.undercover_word
        else:
            assert player.word is None


def test_start_game_rejects_invalid_configuration():
    engine = GameEngine()
    initial = GameEngine.initial_state()

    with pytest.raises(ConfigurationError) as excinfo:
        engine.start_game(initial, _configs(NAMES[:3]), 1, True)
    assert excinfo.value.error_type == ErrorType.INVALID_ROLE_COUNTS

    with pytest.raises(ConfigurationError) as excinfo:
        engine.start_game(initial, _configs(NAMES[:2]), 1, False)
    assert excinfo.value.error_type == ErrorType.TOO_FEW_PLAYERS

    assert initial == GameEngine.initial_state()


def test_start_game_ignored_once_started():
    engine = GameEngine()
    state = engine.start_game(GameEngine.initial_state(), _configs(), 1, 1)
    assert engine.start_game(state, _configs(), 1, 1) is state


def test_start_game_avoids_used_pairs(monkeypatch):
    engine = GameEngine()
    monkeypatch.setattr(random, "choice", lambda seq: seq[0])

    first = engine.start_game(GameEngine.initial_state(), _configs(), 1, 1)
    second = engine.start_game(
        GameEngine.initial_state(), _configs(), 1, 1,
        used_pairs=[WordPair(civilian=first.civilian_word, undercover=first.undercover_word)],
    )
    assert second.civilian_word != first.civilian_word


def test_reveal_out_of_turn_is_a_no_op(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(phase=GamePhase.WORD_DISTRIBUTION, current_player_index=0)
    snapshot = state.model_copy(deep=True)

    result = engine.reveal_word(state, "player-2")

    assert result is state
    assert result == snapshot


def test_reveal_advances_to_next_unseen_player(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(phase=GamePhase.WORD_DISTRIBUTION)

    state = engine.reveal_word(state, "player-0")
    assert state.players[0].has_seen_word
    assert state.current_player_index == 1
    assert state.phase == GamePhase.WORD_DISTRIBUTION

    # Same player again is ignored
    assert engine.reveal_word(state, "player-0") is state


def test_last_reveal_schedules_starting_player_selection(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(phase=GamePhase.WORD_DISTRIBUTION)

    for index in range(4):
        state = engine.reveal_word(state, f"player-{index}")
    assert state.current_player_index == 4
    assert state.pending_transition is None

    state = engine.reveal_word(state, "player-4")
    assert state.phase == GamePhase.WORD_DISTRIBUTION
    assert state.pending_transition == GamePhase.STARTING_PLAYER_SELECTION
    assert state.current_player_index == 4

    state = engine.complete_transition(state)
    assert state.phase == GamePhase.STARTING_PLAYER_SELECTION
    assert state.pending_transition is None
    assert state.current_player_index == 4


def test_stale_transition_is_ignored_after_reset(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(phase=GamePhase.WORD_DISTRIBUTION)
    for index in range(5):
        state = engine.reveal_word(state, f"player-{index}")
    assert state.pending_transition is not None

    reset = engine.reset_game(state)
    assert engine.complete_transition(reset) is reset
    assert reset.phase == GamePhase.SETUP


def test_select_starting_player(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(phase=GamePhase.STARTING_PLAYER_SELECTION)

    assert engine.select_starting_player(state, 4) is state

    state = engine.select_starting_player(state, 2)
    assert state.phase == GamePhase.PLAYING
    assert state.starting_player_index == 2


def test_mister_white_elimination_then_wrong_guess_then_civil_win(game_state_factory):
    engine = GameEngine()
    state = game_state_factory()

    state = engine.eliminate_player(state, "player-4")
    assert state.phase == GamePhase.VOTING
    assert state.players[4].is_eliminated

    state = engine.submit_mister_white_guess(state, "Chien")
    assert state.phase == GamePhase.PLAYING
    assert state.winner is None

    state = engine.eliminate_player(state, "player-3")
    assert state.phase == GamePhase.GAME_OVER
    assert state.winner == Winner.CIVIL
    assert [p.score for p in state.players] == [Scores.CIVIL_WIN] * 3 + [0, 0]
    assert [p.id for p in state.winner_players] == ["player-0", "player-1", "player-2"]


def test_mister_white_correct_guess_wins_outright(game_state_factory):
    engine = GameEngine()
    state = game_state_factory()

    state = engine.eliminate_player(state, "player-4")
    state = engine.submit_mister_white_guess(state, "  cHAT ")

    assert state.phase == GamePhase.GAME_OVER
    assert state.winner == Winner.MISTER_WHITE
    assert [p.id for p in state.winner_players] == ["player-4"]
    assert state.players[4].score == Scores.MISTER_WHITE_GUESS
    assert all(p.score == 0 for p in state.players[:4])
    # Undercover is still alive; the guess wins regardless
    assert not state.players[3].is_eliminated


def test_mister_white_gets_a_guess_even_when_last_infiltrator(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(eliminated=[3])

    state = engine.eliminate_player(state, "player-4")
    assert state.phase == GamePhase.VOTING

    state = engine.submit_mister_white_guess(state, "nope")
    assert state.phase == GamePhase.GAME_OVER
    assert state.winner == Winner.CIVIL


def test_civil_elimination_can_hand_victory_to_infiltrators(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(eliminated=[0])

    state = engine.eliminate_player(state, "player-1")
    assert state.phase == GamePhase.GAME_OVER
    assert state.winner == Winner.UNDERCOVER
    assert [p.score for p in state.players] == [0, 0, 0, Scores.UNDERCOVER_WIN, Scores.UNDERCOVER_WIN]


def test_eliminating_twice_is_a_no_op(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(roles=[Role.CIVIL] * 5 + [Role.UNDERCOVER] * 2)
    state = engine.eliminate_player(state, "player-0")
    assert state.phase == GamePhase.PLAYING

    assert engine.eliminate_player(state, "player-0") is state


def test_guess_outside_voting_is_ignored(game_state_factory):
    engine = GameEngine()
    state = game_state_factory()
    assert engine.submit_mister_white_guess(state, "Chat") is state


def test_amnesic_mode_round_trip(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(eliminated=[0], scores=[3, 3, 3, 3, 3])

    amnesic = engine.enable_amnesic_mode(state, "player-2")
    assert amnesic.phase == GamePhase.AMNESIC_MODE
    assert amnesic.current_player_index == 2
    assert not amnesic.players[2].has_seen_word

    # Other players cannot flip during the re-read
    assert engine.reveal_word(amnesic, "player-1") is amnesic

    revealed = engine.reveal_word(amnesic, "player-2")
    assert revealed.pending_transition == GamePhase.PLAYING

    back = engine.complete_transition(revealed)
    assert back.phase == GamePhase.PLAYING
    assert back.players == state.players


def test_amnesic_mode_rejects_eliminated_players(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(eliminated=[0])
    assert engine.enable_amnesic_mode(state, "player-0") is state


def test_start_new_round_carries_scores(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(eliminated=[4], scores=[5, 0, 10, 2, 0])
    finished = engine.eliminate_player(state, "player-3")
    assert finished.phase == GamePhase.GAME_OVER
    assert [p.score for p in finished.players] == [10, 5, 15, 2, 0]

    new_round = engine.start_new_round(finished)

    assert new_round.phase == GamePhase.WORD_DISTRIBUTION
    assert new_round.round_number == 2
    assert new_round.winner is None
    assert new_round.winner_players == ()
    assert new_round.civilian_word != finished.civilian_word
    previous_scores = {p.name: p.score for p in finished.players}
    for player in new_round.players:
        assert player.score == previous_scores[player.name]
        assert not player.is_eliminated
        assert not player.has_seen_word
    assert Counter(p.role for p in new_round.players) == Counter(p.role for p in finished.players)


def test_skip_round_keeps_round_number(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(round_number=3, scores=[1, 2, 3, 4, 5])

    skipped = engine.skip_round(state)

    assert skipped.phase == GamePhase.WORD_DISTRIBUTION
    assert skipped.round_number == 3
    assert skipped.civilian_word != state.civilian_word
    assert sorted(p.score for p in skipped.players) == [1, 2, 3, 4, 5]
    assert skipped.starting_player_index is None


def test_reset_game_discards_everything(game_state_factory):
    engine = GameEngine()
    state = game_state_factory(round_number=4, scores=[1, 2, 3, 4, 5])

    assert engine.reset_game(state) == GameEngine.initial_state()


def test_full_round_through_engine():
    engine = GameEngine()
    state = engine.start_game(GameEngine.initial_state(), _configs(), 1, 1)
    state = _reveal_all(engine, state)
    assert state.phase == GamePhase.STARTING_PLAYER_SELECTION

    opener = next(i for i, p in enumerate(state.players) if p.role != Role.MISTER_WHITE)
    state = engine.select_starting_player(state, opener)
    assert state.phase == GamePhase.PLAYING

    for player in [p for p in state.players if p.role != Role.CIVIL]:
        state = engine.eliminate_player(state, player.id)
        if state.phase == GamePhase.VOTING:
            state = engine.submit_mister_white_guess(state, "definitely not it")

    assert state.phase == GamePhase.GAME_OVER
    assert state.winner == Winner.CIVIL
    assert sorted(p.score for p in state.players) == [0, 0, 5, 5, 5]
