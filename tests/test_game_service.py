from __future__ import annotations

import base64
import threading

import pytest

from hud_wordle.models.game import GamePhase, LetterResult, LetterState
from hud_wordle.services.game_service import (
    GameService, evaluate_guess, extract_guess_candidate, update_keyboard_state
)

C, P, A = LetterState.CORRECT, LetterState.PRESENT, LetterState.ABSENT

LOSING_GUESSES = ["SLATE", "ABOUT", "BLOCK", "PHONE", "MIGHT", "WORLD"]


def _states(results: list[LetterResult]) -> list[LetterState]:
    return [r.state for r in results]


# -- scoring -----------------------------------------------------------------

def test_evaluate_slate_against_crane() -> None:
    results = evaluate_guess("SLATE", "CRANE")
    assert [r.letter for r in results] == list("SLATE")
    assert _states(results) == [A, A, C, A, C]


def test_evaluate_exact_match() -> None:
    assert _states(evaluate_guess("CRANE", "CRANE")) == [C] * 5


def test_evaluate_duplicate_letters_speed_erase() -> None:
    # Both E's in ERASE find an unconsumed E in SPEED; R and A do not appear
    assert _states(evaluate_guess("ERASE", "SPEED")) == [P, A, A, P, P]


def test_evaluate_extra_duplicates_are_absent() -> None:
    # CRANE has a single E, consumed by the exact match in the last position
    assert _states(evaluate_guess("EERIE", "CRANE")) == [A, A, P, A, C]


def test_evaluate_correct_takes_priority_over_earlier_present() -> None:
    # Both L's in HELLO are consumed by exact matches before the leading L's are scored
    assert _states(evaluate_guess("LLLLL", "HELLO")) == [A, A, C, C, A]
    assert _states(evaluate_guess("ALLOW", "HELLO")) == [A, P, C, P, A]


def test_keyboard_precedence() -> None:
    keyboard: dict[str, LetterState] = {}
    update_keyboard_state(keyboard, [LetterResult("E", A), LetterResult("R", P)])
    assert keyboard == {"E": A, "R": P}

    update_keyboard_state(keyboard, [LetterResult("E", P), LetterResult("R", C)])
    assert keyboard == {"E": P, "R": C}

    update_keyboard_state(keyboard, [LetterResult("E", A), LetterResult("R", P), LetterResult("R", A)])
    assert keyboard == {"E": P, "R": C}

    update_keyboard_state(keyboard, [LetterResult("E", C)])
    assert keyboard["E"] == C


# -- transcript parsing ------------------------------------------------------

@pytest.mark.parametrize("text,expected", [
    ("CRANE", "CRANE"),
    ("MY GUESS IS CRANE.", "CRANE"),
    ("SLATE NO WAIT CRANE!", "CRANE"),
    ("CRANE, OR MAYBE SLATE?", "SLATE"),
    ("HELLO", "HELLO"),
    ("I THINK IT IS", "THINK"),
    ("I SAY IT IS", None),
    ("CRANES", None),
    ("CR4NE", None),
    ("", None),
])
def test_extract_guess_candidate(text: str, expected) -> None:
    assert extract_guess_candidate(text) == expected


# -- state machine -----------------------------------------------------------

def test_first_input_creates_game_and_reports_change(service: GameService) -> None:
    assert service.get_session("u1") is None
    assert service.process_input("u1", "hmm let me see") is True

    session = service.get_session("u1")
    assert session is not None
    assert session.phase == GamePhase.PLAYING
    assert session.current_row == 0
    assert len(session.guesses) == 6
    assert all(cell == LetterResult() for row in session.guesses for cell in row)

    assert service.process_input("u1", "hmm let me see") is False


def test_interim_input_is_ignored(service: GameService) -> None:
    assert service.process_input("u1", "crane", is_final=False) is False
    assert service.get_session("u1") is None


def test_valid_guess_is_scored(service: GameService) -> None:
    service.create_new_game("u1")
    assert service.process_input("u1", "  slate ") is True

    session = service.get_session("u1")
    assert session.current_row == 1
    assert _states(session.guesses[0]) == [A, A, C, A, C]
    assert session.keyboard_state == {"S": A, "L": A, "A": C, "T": A, "E": C}
    assert session.previous_guesses == {"SLATE"}
    assert session.phase == GamePhase.PLAYING


def test_winning_guess(service: GameService) -> None:
    service.create_new_game("u1")
    service.process_input("u1", "slate")
    assert service.process_input("u1", "is it crane") is True

    session = service.get_session("u1")
    assert _states(session.guesses[1]) == [C] * 5
    assert session.phase == GamePhase.WAITING_RESTART
    assert session.won


@pytest.mark.parametrize("text", ["qqqqq", "zzzzz please", "four", "", "12345"])
def test_rejected_input_changes_nothing(service: GameService, text: str) -> None:
    service.create_new_game("u1")
    service.process_input("u1", "slate")

    # Rejection is idempotent: repeating the same bad input never consumes a row
    for _ in range(2):
        assert service.process_input("u1", text) is False

    session = service.get_session("u1")
    assert session.current_row == 1
    assert session.previous_guesses == {"SLATE"}
    assert session.phase == GamePhase.PLAYING


def test_last_valid_token_wins(service: GameService) -> None:
    service.create_new_game("u1")
    # WORDS is the last five-letter token but is not a known word, so nothing is committed
    assert service.process_input("u1", "crane slate words") is False
    assert service.get_session("u1").current_row == 0

    assert service.process_input("u1", "crane or slate") is True
    assert service.get_session("u1").previous_guesses == {"SLATE"}


def test_duplicate_guess_is_rejected(service: GameService) -> None:
    service.create_new_game("u1")
    assert service.process_input("u1", "slate") is True
    assert service.process_input("u1", "slate") is False
    assert service.process_input("u1", "SLATE!") is False

    session = service.get_session("u1")
    assert session.current_row == 1
    assert session.guesses[1] == [LetterResult()] * 5


def test_duplicate_guess_allowed_when_rejection_disabled(service_factory) -> None:
    service = service_factory("CRANE", reject_repeated_guesses=False)
    service.create_new_game("u1")
    assert service.process_input("u1", "slate") is True
    assert service.process_input("u1", "slate") is True
    assert service.get_session("u1").current_row == 2


def test_six_misses_lose_the_game(service: GameService) -> None:
    service.create_new_game("u1")
    for guess in LOSING_GUESSES:
        assert service.process_input("u1", guess) is True

    session = service.get_session("u1")
    assert session.current_row == 6
    assert session.phase == GamePhase.WAITING_RESTART
    assert not session.won

    state = service.get_game_state("u1")
    assert state.game_over
    assert state.answer == "CRANE"
    assert state.guesses == LOSING_GUESSES


def test_waiting_restart_ignores_guesses(service: GameService) -> None:
    service.create_new_game("u1")
    service.process_input("u1", "crane")

    assert service.process_input("u1", "slate") is False
    assert service.process_input("u1", "play") is False
    assert service.get_session("u1").current_row == 1


@pytest.mark.parametrize("phrase", ["new game", "OK let's start a New Game please", "play again!"])
def test_restart_phrase_starts_fresh_game(seeded_service: GameService, phrase: str) -> None:
    service = seeded_service
    service.create_new_game("u1")
    session = service.get_session("u1")
    target = session.target_word

    guesses = [w for w in ["SLATE", "ABOUT", "BLOCK", "PHONE", "MIGHT", "WORLD", "CRANE"] if w != target][:6]
    for guess in guesses:
        service.process_input("u1", guess)
    assert service.get_session("u1").phase == GamePhase.WAITING_RESTART

    assert service.process_input("u1", phrase) is True

    fresh = service.get_session("u1")
    assert fresh is not session
    assert fresh.phase == GamePhase.PLAYING
    assert fresh.current_row == 0
    assert fresh.previous_guesses == set()
    assert fresh.keyboard_state == {}
    assert fresh.target_word in service.word_service.targets

    # Words from the previous game can be guessed again
    assert service.process_input("u1", guesses[0]) is True


def test_restart_phrase_does_nothing_mid_game(service: GameService) -> None:
    service.create_new_game("u1")
    service.process_input("u1", "slate")
    assert service.process_input("u1", "new game") is False
    assert service.get_session("u1").current_row == 1


def test_get_game_state_hides_answer_while_playing(service: GameService) -> None:
    assert service.get_game_state("nobody") is None

    service.create_new_game("u1")
    service.process_input("u1", "slate")
    state = service.get_game_state("u1")

    assert state.phase == "PLAYING"
    assert state.answer is None
    assert state.guess_results == [[("S", "ABSENT"), ("L", "ABSENT"), ("A", "CORRECT"), ("T", "ABSENT"), ("E", "CORRECT")]]
    assert state.keyboard_state == {"A": "CORRECT", "E": "CORRECT", "L": "ABSENT", "S": "ABSENT", "T": "ABSENT"}


def test_delete_session_is_idempotent(service: GameService) -> None:
    service.create_new_game("u1")
    assert service.delete_session("u1") is True
    assert service.delete_session("u1") is False
    assert service.get_session("u1") is None


def test_sessions_are_isolated_per_user(service: GameService) -> None:
    service.process_input("alice", "slate")
    service.process_input("bob", "about")

    assert service.get_session("alice").previous_guesses == {"SLATE"}
    assert service.get_session("bob").previous_guesses == {"ABOUT"}


def test_concurrent_guesses_for_one_user_never_interleave(service: GameService) -> None:
    service.create_new_game("u1")
    words = ["SLATE", "ABOUT", "BLOCK", "PHONE", "MIGHT", "WORLD", "HEART", "LIGHT"]
    barrier = threading.Barrier(len(words))

    def guess(word: str) -> None:
        barrier.wait()
        service.process_input("u1", word)

    threads = [threading.Thread(target=guess, args=(w,)) for w in words]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    session = service.get_session("u1")
    assert session.current_row == 6
    assert len(session.previous_guesses) == 6
    committed = {"".join(cell.letter for cell in row) for row in session.guesses}
    assert committed == session.previous_guesses


def test_lock_map_drains_after_sessions_end(service: GameService) -> None:
    for i in range(50):
        assert service.get_game_state(f"stranger{i}") is None
    for i in range(50):
        service.process_input(f"player{i}", "crane")
        service.delete_session(f"player{i}")

    assert len(service.store) == 0
    assert len(service.store._locks) == 0


def test_live_sessions_hold_no_idle_locks(service: GameService) -> None:
    service.process_input("u1", "slate")
    service.render("u1")
    service.get_game_state("u1")

    assert "u1" in service.store
    assert len(service.store._locks) == 0


@pytest.mark.parametrize("max_guesses", [0, -1, 7, 20])
def test_guess_limit_must_fit_the_board(service_factory, max_guesses: int) -> None:
    with pytest.raises(ValueError):
        service_factory("CRANE", max_guesses=max_guesses)


@pytest.mark.parametrize("max_guesses", [1, 6])
def test_guess_limit_bounds_are_accepted(service_factory, max_guesses: int) -> None:
    svc = service_factory("CRANE", max_guesses=max_guesses)
    svc.process_input("u1", "slate")
    assert svc.get_session("u1").current_row == 1
    assert svc.get_session("u1").is_over is (max_guesses == 1)


def test_initialize_rejects_guess_limit_the_board_cannot_show(monkeypatch) -> None:
    from hud_wordle.config import TestingConfig
    from hud_wordle.services import game_service as game_service_module

    monkeypatch.setattr(game_service_module, "_game_service", None)
    monkeypatch.setattr(TestingConfig, "MAX_GUESSES", 7)
    with pytest.raises(ValueError):
        game_service_module.initialize_game_service(TestingConfig)
    assert game_service_module.get_game_service() is None


def test_render_is_base64_of_the_bitmap(service: GameService) -> None:
    service.process_input("u1", "slate")
    assert base64.b64decode(service.render("u1")) == service.render_bitmap("u1")
