from __future__ import annotations

import random

import pytest

from hud_wordle.config.game_settings import (
    ALLOWED_GUESSES, WORD_LIST, get_word_statistics, validate_word_list_integrity
)
from hud_wordle.services.word_service import WordService


def test_shipped_word_lists_are_consistent() -> None:
    assert validate_word_list_integrity() is True
    assert set(WORD_LIST) <= ALLOWED_GUESSES
    assert all(len(word) == 5 and word.isupper() for word in ALLOWED_GUESSES)


def test_word_statistics() -> None:
    stats = get_word_statistics()
    assert stats["total_words"] == len(WORD_LIST)
    assert stats["total_guesses"] == len(ALLOWED_GUESSES)
    assert len(stats["most_common_letters"]) == 5


def test_random_target_comes_from_targets() -> None:
    words = WordService(rng=random.Random(7))
    for _ in range(50):
        assert words.random_target() in WORD_LIST


def test_random_target_is_reproducible_with_a_seed() -> None:
    first = WordService(rng=random.Random(42))
    second = WordService(rng=random.Random(42))
    assert [first.random_target() for _ in range(10)] == [second.random_target() for _ in range(10)]


@pytest.mark.parametrize("word", ["CRANE", "SLATE", "ZEBRA", "EERIE"])
def test_valid_guesses(word: str) -> None:
    assert WordService().is_valid_guess(word)


@pytest.mark.parametrize("word", ["crane", "CRAN", "CRANES", "CR4NE", "QQQQQ", "", "ÉCRAN", None])
def test_invalid_guesses(word) -> None:
    assert not WordService().is_valid_guess(word)


def test_targets_are_always_guessable() -> None:
    words = WordService(targets=["xylyl"], allowed_guesses=["CRANE"])
    assert words.random_target() == "XYLYL"
    assert words.is_valid_guess("XYLYL")
    assert words.is_valid_guess("CRANE")


def test_empty_target_list_is_rejected() -> None:
    with pytest.raises(ValueError):
        WordService(targets=[])
