"""
Game Configuration Constants Module

This module defines the game and display constants used by the HUD Wordle
engine and loads the word lists it plays with. All game parameters are
centralized here to enable easy modification.
"""

import json
import os
from typing import Dict, Final, FrozenSet, List, Tuple

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5
"""
Number of letters in every target and guess word.
Type: Final[int] - The whole engine assumes a fixed word length
"""

MAX_GUESSES: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
Type: Final[int] - Immutable to prevent accidental modification
"""

RESTART_PHRASES: Final[Tuple[str, ...]] = ("PLAY AGAIN", "NEW GAME")
"""
Phrases that start a new game once the current one is over.
Matched as substrings of the normalized transcript.
"""

TRAILING_PUNCTUATION: Final[str] = ".,!?"

# Display Layout Constants (pixels)
CANVAS_WIDTH: Final[int] = 526
CANVAS_HEIGHT: Final[int] = 100

GRID_CELL_SIZE: Final[int] = 18
GRID_CELL_SPACING: Final[int] = 3
GRID_TOP: Final[int] = 10
GRID_ROWS_PER_COLUMN: Final[int] = 3
GRID_COLUMN_X: Final[Tuple[int, int]] = (10, 125)
GRID_LETTER_INSET: Final[int] = 4

TEXT_SCALE: Final[int] = 2
LINE_HEIGHT: Final[int] = 18

HINTS_X: Final[int] = 240
HINTS_Y: Final[int] = 10
HINTS_LIST_OFFSET: Final[int] = 50
HINTS_CHARS_PER_LINE: Final[int] = 15

STATUS_X: Final[int] = 10
STATUS_Y: Final[int] = 85


def _load_json_words(filename: str) -> List[str]:
    """
    Load a word list from a JSON file stored next to this module.

    Args:
        filename: Name of the JSON file holding an array of words

    Returns:
        List[str]: List of uppercase 5-letter words

    Raises:
        FileNotFoundError: If the file is not found
        ValueError: If the JSON is malformed, the list is empty, or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, filename)

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {filename}: {e}") from e

    if not isinstance(word_list, list):
        raise ValueError(f"{filename} must contain an array of words")

    if not word_list:
        raise ValueError(f"Word list in {filename} cannot be empty")

    # Convert all words to uppercase and validate
    uppercase_words = [word.upper() for word in word_list]

    for word in uppercase_words:
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word '{word}' is not {WORD_LENGTH} characters long")
        if not (word.isascii() and word.isalpha()):
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")

    return uppercase_words


# Curated target words, loaded from JSON
WORD_LIST: Final[Tuple[str, ...]] = tuple(_load_json_words('wordles.json'))

# Every word accepted as a guess; always a superset of the targets
ALLOWED_GUESSES: Final[FrozenSet[str]] = frozenset(WORD_LIST) | frozenset(_load_json_words('allowed_guesses.json'))


def validate_word_list_integrity() -> bool:
    """
    Validates the integrity and consistency of the word database.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly WORD_LENGTH characters
    2. Character validation: Only alphabetic characters allowed
    3. Uniqueness validation: No duplicate target entries
    4. Format validation: Consistent uppercase formatting
    5. Coverage validation: Every target is an accepted guess

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not WORD_LIST:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(WORD_LIST):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if not word.isalpha():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.isupper():
            raise ValueError(f"Word at index {index} '{word}' is not in uppercase format")

    if len(WORD_LIST) != len(set(WORD_LIST)):
        duplicates = sorted({word for word in WORD_LIST if WORD_LIST.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    missing = set(WORD_LIST) - ALLOWED_GUESSES
    if missing:
        raise ValueError(f"Target words missing from allowed guesses: {sorted(missing)}")

    return True


def get_word_statistics() -> Dict:
    """
    Analyzes the target list and returns statistical information.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of target words
            - total_guesses: Number of accepted guess words
            - avg_vowel_count: Average vowels per target word
            - letter_frequency: Distribution of letters across all targets
            - most_common_letters: Five most frequent letters
    """
    if not WORD_LIST:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in WORD_LIST)

    letter_frequency: Dict[str, int] = {}
    for word in WORD_LIST:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(WORD_LIST),
        "total_guesses": len(ALLOWED_GUESSES),
        "avg_vowel_count": round(total_vowels / len(WORD_LIST), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        validate_word_list_integrity()
        print(" Word list validation passed")

        stats = get_word_statistics()
        print(f" Game statistics: {stats}")

        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
