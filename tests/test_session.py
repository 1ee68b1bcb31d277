"""Tests for the GameSession command surface."""

import pytest

from undercover.errors.handler import ConfigurationError
from undercover.game.session import GameSession
from undercover.storage.history import HistoryStore
from undercover.types.game import GamePhase, PlayerConfig, Role, Winner


NAMES = ["Ann", "Bob", "Cy", "Dee", "Eve"]


def _configs(names=NAMES) -> list[PlayerConfig]:
    return [PlayerConfig(name=name) for name in names]


def _distribute(session: GameSession) -> None:
    while session.state.phase == GamePhase.WORD_DISTRIBUTION and not session.has_pending_transition:
        session.reveal_word(session.state.current_player.id)


def _win_as_civilians(session: GameSession) -> None:
    for player in [p for p in session.state.players if p.role != Role.CIVIL]:
        session.eliminate_player(player.id)
        if session.state.phase == GamePhase.VOTING:
            session.submit_mister_white_guess("wrong")


def test_invalid_start_leaves_session_untouched():
    session = GameSession()
    before = session.state

    with pytest.raises(ConfigurationError):
        session.start_game(_configs(NAMES[:3]), 2, False)

    assert session.state is before


def test_immediate_transitions_without_delay():
    session = GameSession()
    session.start_game(_configs(), 1, True)

    _distribute(session)

    assert session.state.phase == GamePhase.STARTING_PLAYER_SELECTION
    assert not session.has_pending_transition


def test_delayed_transition_waits_for_host():
    session = GameSession(transition_delay=1.5)
    session.start_game(_configs(), 1, True)

    _distribute(session)
    assert session.state.phase == GamePhase.WORD_DISTRIBUTION
    assert session.state.pending_transition == GamePhase.STARTING_PLAYER_SELECTION

    session.complete_transition()
    assert session.state.phase == GamePhase.STARTING_PLAYER_SELECTION


def test_delayed_transition_after_reset_does_nothing():
    session = GameSession(transition_delay=1.5)
    session.start_game(_configs(), 1, True)
    _distribute(session)

    session.reset_game()
    session.complete_transition()

    assert session.state.phase == GamePhase.SETUP
    assert session.state.players == ()


def test_random_starting_player_is_never_mister_white():
    for _ in range(20):
        session = GameSession()
        session.start_game(_configs(), 1, True)
        _distribute(session)

        session.select_random_starting_player()

        state = session.state
        assert state.phase == GamePhase.PLAYING
        assert state.players[state.starting_player_index].role != Role.MISTER_WHITE


def test_finished_round_is_recorded_once():
    store = HistoryStore()
    session = GameSession(store=store)
    session.start_game(_configs(), 1, True)
    _distribute(session)
    session.select_random_starting_player()
    words = (session.state.civilian_word, session.state.undercover_word)

    _win_as_civilians(session)
    assert session.state.winner == Winner.CIVIL

    session.eliminate_player(session.state.players[0].id)

    stats = store.get_stats()
    assert stats.total_games == 1
    assert stats.civil_wins == 1
    assert [(p.civilian, p.undercover) for p in stats.used_word_pairs] == [words]


def test_skip_round_records_nothing():
    store = HistoryStore()
    session = GameSession(store=store)
    session.start_game(_configs(), 1, True)
    _distribute(session)
    session.select_random_starting_player()
    previous_word = session.state.civilian_word

    session.skip_round()

    assert store.get_stats().total_games == 0
    assert session.state.round_number == 1
    assert session.state.civilian_word != previous_word


def test_new_round_uses_history_and_keeps_scores():
    session = GameSession()
    session.start_game(_configs(), 1, True)
    _distribute(session)
    session.select_random_starting_player()
    _win_as_civilians(session)
    scores = {p.name: p.score for p in session.state.players}
    played = session.state.civilian_word

    session.start_new_round()

    state = session.state
    assert state.phase == GamePhase.WORD_DISTRIBUTION
    assert state.round_number == 2
    assert state.civilian_word != played
    assert {p.name: p.score for p in state.players} == scores


def test_persistence_failure_does_not_block_the_game(tmp_path):
    blocker = tmp_path / "not_a_directory"
    blocker.write_text("occupied")
    session = GameSession(store=HistoryStore(blocker))
    session.start_game(_configs(), 1, True)
    _distribute(session)
    session.select_random_starting_player()

    _win_as_civilians(session)

    assert session.state.phase == GamePhase.GAME_OVER
    assert session.store.get_stats().total_games == 1


def test_restart_replaces_roster_and_scores():
    session = GameSession()
    session.start_game(_configs(), 1, True)
    _distribute(session)
    session.select_random_starting_player()
    _win_as_civilians(session)

    session.restart(_configs(["Zed", "Yan", "Xia", "Wil"]), 1, False)

    state = session.state
    assert state.phase == GamePhase.WORD_DISTRIBUTION
    assert [p.name for p in state.players] == ["Zed", "Yan", "Xia", "Wil"]
    assert all(p.score == 0 for p in state.players)
    assert state.game_settings.mister_white_count == 0


def test_restart_with_bad_settings_keeps_current_game():
    session = GameSession()
    session.start_game(_configs(), 1, True)
    current = session.state

    with pytest.raises(ConfigurationError):
        session.restart(_configs(["Zed", "Yan"]), 1, False)

    assert session.state is current


def test_setup_helpers():
    assert GameSession.auto_adjust(3, 2, True) == (1, 0)
    assert GameSession.validate(5, 1, True) == (True, None)
