from pathlib import Path

import pytest

from wordle_entropy.engine import Lexicon

SOLUTIONS = [
    "crane", "trace", "grape", "slate", "stare", "raise", "arise", "cared",
    "racer", "scoop", "level", "belle", "lemon", "adieu", "alone", "brave",
    "crate", "react", "trade", "drape",
]
EXTRA_GUESSES = ["salet", "roate", "speed", "erase", "geese", "eerie"]


@pytest.fixture
def lexicon() -> Lexicon:
    return Lexicon.build(SOLUTIONS, SOLUTIONS + EXTRA_GUESSES, N=5)


@pytest.fixture
def tiny_lexicon() -> Lexicon:
    return Lexicon.build(["crane", "trace", "grape"], ["crane", "trace", "grape", "slate", "adieu"], N=5)


def write_words(p: Path, words) -> str:
    p.write_text("\n".join(words) + "\n", encoding="utf-8")
    return str(p)
