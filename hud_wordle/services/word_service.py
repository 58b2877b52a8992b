"""
Word Service

Picks target words and validates guesses against the loaded word lists.
"""

import random
from typing import FrozenSet, Iterable, Optional, Tuple

from ..config.game_settings import ALLOWED_GUESSES, WORD_LENGTH, WORD_LIST


class WordService:
    """
    Read-only view over the target and allowed-guess vocabularies.

    The guess vocabulary always includes every target word, so a player can
    never be handed a target they are unable to type.
    """

    def __init__(self,
                 targets: Iterable[str] = WORD_LIST,
                 allowed_guesses: Iterable[str] = ALLOWED_GUESSES,
                 rng: Optional[random.Random] = None):
        self.targets: Tuple[str, ...] = tuple(word.upper() for word in targets)
        if not self.targets:
            raise ValueError("Target word list cannot be empty")
        self.allowed_guesses: FrozenSet[str] = frozenset(
            word.upper() for word in allowed_guesses
        ) | frozenset(self.targets)
        self.rng = rng or random.Random()

    def random_target(self) -> str:
        """Returns a target word chosen uniformly at random."""
        return self.rng.choice(self.targets)

    def is_valid_guess(self, word: str) -> bool:
        """True iff ``word`` is exactly five uppercase letters and in the guess vocabulary."""
        if not isinstance(word, str) or len(word) != WORD_LENGTH:
            return False
        if not (word.isascii() and word.isalpha() and word.isupper()):
            return False
        return word in self.allowed_guesses
