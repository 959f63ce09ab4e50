"""
Feedback scoring for a single (guess, answer) pair.

A feedback pattern is an int in [0, 3**N - 1]. Digit i (weight 3**i, so the
first letter is the least significant digit) classifies position i:

  0 : absent   ('-')  letter not in the answer, or present fewer times than guessed
  1 : present  ('Y')  correct letter in the wrong position
  2 : correct  ('G')  correct letter in the correct position

The all-correct pattern is therefore 3**N - 1 (242 for N=5).

Algorithm (two-pass, duplicate-safe):
  1) First pass marks all correct positions and counts the remaining
     (unmatched) letters of the answer.
  2) Second pass marks a position present only while that letter still has
     remaining count, consuming one per use.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional

from wordle_entropy.errors import InvalidLength

ABSENT = 0
PRESENT = 1
CORRECT = 2

# Readable form used in logs and the CSV 'guess' trail
_CHARS = "-YG"


def n_patterns(N: int) -> int:
    """Number of distinct feedback patterns for word length N."""
    return 3 ** N


def solved_pattern(N: int) -> int:
    """The all-correct pattern for word length N."""
    return 3 ** N - 1


def score(guess: str, answer: str, N: Optional[int] = None) -> int:
    """
    Compute the feedback pattern of `guess` against `answer`.

    Raises:
      InvalidLength if the words differ in length, or if N is given and
      either word is not of length N.

    Examples:
      decode_pattern(score("belle", "level")) -> "-GYYY"
      decode_pattern(score("lemon", "level")) -> "GG---"
    """
    n = len(answer) if N is None else N
    if len(answer) != n:
        raise InvalidLength(answer, n)
    if len(guess) != n:
        raise InvalidLength(guess, n)

    digits = [ABSENT] * n

    # Pass 1: correct positions; everything else goes into the leftover pool
    remaining: Counter = Counter()
    for i, (g, a) in enumerate(zip(guess, answer)):
        if g == a:
            digits[i] = CORRECT
        else:
            remaining[a] += 1

    # Pass 2: present only while the pool still holds the letter
    for i, g in enumerate(guess):
        if digits[i] == CORRECT:
            continue
        if remaining[g] > 0:
            digits[i] = PRESENT
            remaining[g] -= 1

    pattern = 0
    for i in range(n - 1, -1, -1):
        pattern = pattern * 3 + digits[i]
    return pattern


def decode_pattern(pattern: int, N: int = 5) -> str:
    """Render a pattern int as 'G'/'Y'/'-' characters, e.g. 242 -> 'GGGGG'."""
    out = []
    for _ in range(N):
        pattern, d = divmod(pattern, 3)
        out.append(_CHARS[d])
    return "".join(out)


def encode_pattern(text: str) -> int:
    """Inverse of decode_pattern: 'GG---' -> int."""
    pattern = 0
    for ch in reversed(text.upper()):
        try:
            d = _CHARS.index(ch)
        except ValueError:
            raise ValueError(f"invalid feedback character {ch!r} in {text!r}; use G, Y or -") from None
        pattern = pattern * 3 + d
    return pattern
