"""
Vectorised feedback patterns (numpy).

The scalar `score` is fine for a handful of pairs, but guess selection scores
every allowed word against every remaining candidate on every turn. Here the
same two-pass rule is evaluated for one guess against a whole block of
answers at once, and stacked into a (guesses x answers) matrix computed once
per run.

Present marking without the explicit letter pool: position i (not correct)
is present iff the answer holds more unmatched copies of guess[i] than there
are earlier non-correct positions in the guess using the same letter, since
each of those consumed one copy first. This yields exactly the same patterns
as `scoring.score`.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
from tqdm import tqdm

from wordle_entropy.errors import InvalidLength


def pattern_dtype(N: int) -> np.dtype:
    """Smallest unsigned dtype that holds every pattern of length N."""
    top = 3 ** N - 1
    if top <= np.iinfo(np.uint8).max:
        return np.dtype(np.uint8)
    if top <= np.iinfo(np.uint16).max:
        return np.dtype(np.uint16)
    return np.dtype(np.uint32)


def encode_words(words: Sequence[str], N: int) -> np.ndarray:
    """
    Encode words as a (len(words), N) uint8 array of byte codes.

    Raises InvalidLength for any word that is not N letters long.
    """
    out = np.empty((len(words), N), dtype=np.uint8)
    for r, w in enumerate(words):
        if len(w) != N:
            raise InvalidLength(w, N)
        out[r] = np.frombuffer(w.encode("ascii"), dtype=np.uint8)
    return out


def pattern_row(guess: np.ndarray, answers: np.ndarray) -> np.ndarray:
    """
    Feedback of one encoded guess (shape (N,)) against many encoded answers
    (shape (m, N)). Returns an int64 array of shape (m,).
    """
    m, n = answers.shape
    if guess.shape[0] != n:
        raise InvalidLength(bytes(guess).decode("ascii", "replace"), n)

    correct = answers == guess
    open_slot = ~correct
    out = np.zeros(m, dtype=np.int64)

    for i in range(n):
        letter = guess[i]
        unmatched = ((answers == letter) & open_slot).sum(axis=1)
        consumed = np.zeros(m, dtype=np.int64)
        for j in range(i):
            if guess[j] == letter:
                consumed += open_slot[:, j]
        present = open_slot[:, i] & (unmatched > consumed)
        digit = np.where(correct[:, i], 2, np.where(present, 1, 0))
        out += digit * (3 ** i)

    return out


def build_pattern_matrix(
        guesses: np.ndarray,
        answers: np.ndarray,
        *,
        progress: bool = False,
) -> np.ndarray:
    """
    Stack pattern_row for every guess.

    Args:
      guesses : (G, N) encoded guesses
      answers : (m, N) encoded answers
      progress: show a tqdm bar while building

    Returns:
      (G, m) array of patterns in the smallest dtype that fits.
    """
    n = answers.shape[1]
    mat = np.empty((guesses.shape[0], answers.shape[0]), dtype=pattern_dtype(n))
    rows: Iterable[int] = range(guesses.shape[0])
    if progress:
        rows = tqdm(rows, ncols=80, desc="Patterns", unit="guess")
    for r in rows:
        mat[r] = pattern_row(guesses[r], answers)
    return mat
