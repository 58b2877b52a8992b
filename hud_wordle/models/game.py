"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from ..config.game_settings import MAX_GUESSES, WORD_LENGTH


class GamePhase(Enum):
    """Lifecycle phase of a single user's game."""
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"
    WAITING_RESTART = "WAITING_RESTART"


class LetterState(Enum):
    """Letter evaluation status for a grid cell or keyboard hint."""
    EMPTY = "EMPTY"
    CORRECT = "CORRECT"    # right letter, right position
    PRESENT = "PRESENT"    # right letter, wrong position
    ABSENT = "ABSENT"      # letter not in word


@dataclass(frozen=True)
class LetterResult:
    """One cell of the guess grid."""
    letter: str = ""
    state: LetterState = LetterState.EMPTY


GuessRow = List[LetterResult]


def empty_row(length: int = WORD_LENGTH) -> GuessRow:
    return [LetterResult() for _ in range(length)]


@dataclass
class GameSession:
    """
    Server-side game state for one user.

    The target word is fixed for the lifetime of the session; starting a new
    game replaces the whole session rather than resetting it.
    """
    target_word: str
    max_guesses: int = MAX_GUESSES
    guesses: List[GuessRow] = field(default_factory=list)
    current_row: int = 0
    phase: GamePhase = GamePhase.PLAYING
    keyboard_state: Dict[str, LetterState] = field(default_factory=dict)
    previous_guesses: Set[str] = field(default_factory=set)

    def __post_init__(self):
        # Pre-fill the grid so every row can be drawn before it is guessed
        if not self.guesses:
            self.guesses = [empty_row(len(self.target_word)) for _ in range(self.max_guesses)]

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.WAITING_RESTART

    @property
    def won(self) -> bool:
        """True when the last committed row matched the target exactly."""
        if self.current_row == 0:
            return False
        return all(cell.state == LetterState.CORRECT for cell in self.guesses[self.current_row - 1])


@dataclass
class GameState:
    """Read-only snapshot of a session, safe to serialize for clients."""
    user_id: str
    phase: str
    current_row: int
    max_guesses: int
    game_over: bool
    won: bool
    guesses: List[str]
    guess_results: List[List[Tuple[str, str]]]  # Letter state as string for JSON serialization
    keyboard_state: Dict[str, str]
    answer: Optional[str] = None  # Only included when game is over
