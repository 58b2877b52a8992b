"""
Game Service

Contains the core game logic for voice-controlled Wordle on the HUD.
"""

import re
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import (
    CANVAS_HEIGHT, CANVAS_WIDTH, GRID_COLUMN_X, GRID_ROWS_PER_COLUMN, MAX_GUESSES, RESTART_PHRASES,
    TRAILING_PUNCTUATION, WORD_LENGTH
)
from ..models.game import GamePhase, GameSession, GameState, LetterResult, LetterState
from ..rendering.board import render_board
from ..rendering.bmp import encode_1bit, encode_base64
from ..rendering.canvas import Canvas
from ..utils.game_logger import game_logger
from .session_store import SessionStore
from .word_service import WordService

# Rows the board layout has room for
MAX_DISPLAY_ROWS = GRID_ROWS_PER_COLUMN * len(GRID_COLUMN_X)

_CANDIDATE_PATTERN = re.compile(rf'[A-Z]{{{WORD_LENGTH}}}')


def extract_guess_candidate(normalized_input: str) -> Optional[str]:
    """
    Finds the word a transcript is most likely guessing.

    Transcripts often carry filler before the real guess ("my guess is
    crane"), so the LAST five-letter alphabetic token wins.

    Args:
        normalized_input: Trimmed, uppercased transcript

    Returns:
        The candidate word, or None if the transcript has no five-letter token
    """
    candidate = None
    for token in normalized_input.split(' '):
        cleaned = token.rstrip(TRAILING_PUNCTUATION)
        if _CANDIDATE_PATTERN.fullmatch(cleaned):
            candidate = cleaned
    return candidate


def evaluate_guess(guess: str, target: str) -> List[LetterResult]:
    """
    Scores a guess with the standard Wordle duplicate-letter rules.

    Exact matches are marked first and consume their target letter; the
    remaining letters are then marked PRESENT while unconsumed copies of
    them remain in the target, otherwise ABSENT.
    """
    target_chars: List[Optional[str]] = list(target)
    states: List[Optional[LetterState]] = [None] * len(guess)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == target_chars[i]:
            states[i] = LetterState.CORRECT
            target_chars[i] = None

    # Second pass: present letters and misses
    for i, letter in enumerate(guess):
        if states[i] is not None:
            continue
        if letter in target_chars:
            states[i] = LetterState.PRESENT
            target_chars[target_chars.index(letter)] = None
        else:
            states[i] = LetterState.ABSENT

    return [LetterResult(letter, state) for letter, state in zip(guess, states)]


def update_keyboard_state(keyboard_state: Dict[str, LetterState], evaluations: List[LetterResult]) -> None:
    """
    Folds a scored row into the keyboard hints.

    CORRECT always wins, PRESENT upgrades anything but CORRECT, and ABSENT is
    only recorded for letters with no hint yet.
    """
    for result in evaluations:
        current = keyboard_state.get(result.letter)
        if result.state == LetterState.CORRECT:
            keyboard_state[result.letter] = LetterState.CORRECT
        elif result.state == LetterState.PRESENT and current != LetterState.CORRECT:
            keyboard_state[result.letter] = LetterState.PRESENT
        elif result.state == LetterState.ABSENT and current is None:
            keyboard_state[result.letter] = LetterState.ABSENT


class GameService:
    """
    Core game service managing one game per display user.

    This class handles:
    - Session lifecycle (lazy creation, restart, deletion)
    - Transcript parsing and guess validation
    - Guess evaluation and keyboard hint tracking
    - Rendering the board to a base64 1-bit BMP
    """

    def __init__(self,
                 word_service: Optional[WordService] = None,
                 store: Optional[SessionStore] = None,
                 max_guesses: int = MAX_GUESSES,
                 reject_repeated_guesses: bool = True,
                 canvas_width: int = CANVAS_WIDTH,
                 canvas_height: int = CANVAS_HEIGHT):
        if not 1 <= max_guesses <= MAX_DISPLAY_ROWS:
            raise ValueError(f"max_guesses must be between 1 and {MAX_DISPLAY_ROWS}, got {max_guesses}")

        self.word_service = word_service or WordService()
        self.store = store if store is not None else SessionStore()
        self.max_guesses = max_guesses
        self.reject_repeated_guesses = reject_repeated_guesses
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height

    def _new_session(self) -> GameSession:
        return GameSession(target_word=self.word_service.random_target(), max_guesses=self.max_guesses)

    def create_new_game(self, user_id: str) -> GameSession:
        """
        Starts a fresh game for the user, replacing any existing one.

        Args:
            user_id: Sanitized user identifier

        Returns:
            GameSession: The new session
        """
        with self.store.locked(user_id):
            session = self.store.create(user_id, self._new_session)
        game_logger.log_game_event(user_id, 'game_created', max_guesses=session.max_guesses)
        return session

    def get_session(self, user_id: str) -> Optional[GameSession]:
        return self.store.get(user_id)

    def get_or_create_session(self, user_id: str) -> GameSession:
        with self.store.locked(user_id):
            session = self.store.get(user_id)
            if session is None:
                session = self.create_new_game(user_id)
            return session

    def process_input(self, user_id: str, raw_text: str, is_final: bool = True) -> bool:
        """
        Applies one transcript to the user's game.

        Args:
            user_id: Sanitized user identifier
            raw_text: Free-form transcription text
            is_final: Interim transcripts are ignored entirely

        Returns:
            bool: True if anything visible changed and the display should be redrawn
        """
        if not is_final:
            return False

        with self.store.locked(user_id):
            state_changed = False
            session = self.store.get(user_id)
            if session is None:
                session = self.create_new_game(user_id)
                state_changed = True

            normalized = (raw_text or '').strip().upper()

            if session.phase == GamePhase.WAITING_RESTART:
                if any(phrase in normalized for phrase in RESTART_PHRASES):
                    self.create_new_game(user_id)
                    return True
                return state_changed

            if session.phase != GamePhase.PLAYING:
                return state_changed

            candidate = extract_guess_candidate(normalized)
            is_valid, error = self.is_valid_guess(session, candidate)
            if not is_valid:
                game_logger.log_game_event(user_id, 'guess_rejected', candidate=candidate, reason=error)
                return state_changed

            self._submit_guess(user_id, session, candidate)
            return True

    def is_valid_guess(self, session: GameSession, guess: Optional[str]) -> Tuple[bool, str]:
        """
        Validates a guess candidate for a specific session.

        Args:
            session: The session the guess is for
            guess: Candidate word, already normalized

        Returns:
            Tuple of (is_valid, error_message)
        """
        if session.phase != GamePhase.PLAYING:
            return False, "Game is already over"

        if not guess:
            return False, "No five-letter word found"

        if not self.word_service.is_valid_guess(guess):
            return False, "Word not in word list"

        if self.reject_repeated_guesses and guess in session.previous_guesses:
            return False, "Word has already been guessed"

        return True, ""

    def _submit_guess(self, user_id: str, session: GameSession, guess: str) -> None:
        session.previous_guesses.add(guess)

        evaluations = evaluate_guess(guess, session.target_word)
        update_keyboard_state(session.keyboard_state, evaluations)

        session.guesses[session.current_row] = evaluations
        session.current_row += 1

        game_logger.log_game_event(
            user_id, 'guess_accepted',
            guess=guess, row=session.current_row,
            result=[result.state.value for result in evaluations]
        )

        # WON and LOST are transient; the display only cares that the game is over
        if guess == session.target_word:
            session.phase = GamePhase.WON
            game_logger.log_game_event(user_id, 'game_won', guesses_used=session.current_row)
            session.phase = GamePhase.WAITING_RESTART
        elif session.current_row >= session.max_guesses:
            session.phase = GamePhase.LOST
            game_logger.log_game_event(user_id, 'game_lost', answer=session.target_word)
            session.phase = GamePhase.WAITING_RESTART

    def _render_canvas(self, user_id: str) -> Canvas:
        with self.store.locked(user_id):
            session = self.get_or_create_session(user_id)
            return render_board(session, self.canvas_width, self.canvas_height)

    def render_bitmap(self, user_id: str) -> bytes:
        """Renders the user's board to raw BMP bytes, creating a game if needed."""
        canvas = self._render_canvas(user_id)
        return encode_1bit(canvas.width, canvas.height, canvas)

    def render(self, user_id: str) -> str:
        """
        Renders the user's board for the display.

        Args:
            user_id: Sanitized user identifier

        Returns:
            str: Base64 text of a 1-bit BMP
        """
        return encode_base64(self._render_canvas(user_id))

    def get_game_state(self, user_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a user (without revealing the answer).

        Args:
            user_id: Sanitized user identifier

        Returns:
            GameState object or None if the user has no game
        """
        if self.store.get(user_id) is None:
            return None

        with self.store.locked(user_id):
            session = self.store.get(user_id)
            if session is None:
                return None

            committed = session.guesses[:session.current_row]
            return GameState(
                user_id=user_id,
                phase=session.phase.value,
                current_row=session.current_row,
                max_guesses=session.max_guesses,
                game_over=session.is_over,
                won=session.won,
                guesses=[''.join(cell.letter for cell in row) for row in committed],
                guess_results=[[(cell.letter, cell.state.value) for cell in row] for row in committed],
                keyboard_state={letter: state.value for letter, state in sorted(session.keyboard_state.items())},
                answer=session.target_word if session.is_over else None
            )

    def delete_session(self, user_id: str) -> bool:
        """
        Removes a user's game from memory.

        Args:
            user_id: Sanitized user identifier

        Returns:
            bool: True if a game was deleted, False if none existed
        """
        with self.store.locked(user_id):
            deleted = self.store.delete(user_id)
        if deleted:
            game_logger.log_game_event(user_id, 'session_deleted')
        return deleted


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(config_class=None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    if config_class is None:
        from ..config.app_config import Config
        config_class = Config
    _game_service = GameService(
        max_guesses=config_class.MAX_GUESSES,
        reject_repeated_guesses=config_class.REJECT_REPEATED_GUESSES,
        canvas_width=config_class.CANVAS_WIDTH,
        canvas_height=config_class.CANVAS_HEIGHT
    )
    return _game_service
