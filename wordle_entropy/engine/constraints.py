"""
Candidate partitioning and filtering.

Given a candidate set and a guess, every candidate falls into exactly one
bucket: the feedback pattern the guess would produce if that candidate were
the secret. Scoring a guess looks at the bucket sizes; playing a turn keeps
only the bucket matching the feedback actually observed.

Two flavours live here:
  - partition / filter_candidates work on plain word lists (scalar scoring).
  - bucket_of works on the precomputed pattern matrix and numpy index arrays,
    which is what the game simulator uses turn by turn.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .scoring import score

# History is a sequence of (guess, pattern) tuples produced by the engine.
History = Iterable[Tuple[str, int]]


def partition(candidates: Sequence[str], guess: str) -> Dict[int, List[str]]:
    """
    Group `candidates` by the pattern `guess` produces against each of them.

    Buckets keep the input order, and together they contain every candidate
    exactly once. Cost is O(len(candidates) * N).
    """
    buckets: Dict[int, List[str]] = {}
    for w in candidates:
        buckets.setdefault(score(guess, w), []).append(w)
    return buckets


def filter_candidates(words: Iterable[str], history: History) -> List[str]:
    """
    Keep only words that would have produced exactly the recorded pattern
    for every (guess, pattern) in `history`. Order is preserved.
    """
    history = list(history)
    out: List[str] = []
    for w in words:
        if all(score(g, w) == patt for g, patt in history):
            out.append(w)
    return out


def bucket_of(row: np.ndarray, candidates: np.ndarray, pattern: int) -> np.ndarray:
    """
    Select the candidates (solution indices) that share `pattern`.

    Args:
      row       : one pattern-matrix row, i.e. the guess scored against every solution
      candidates: sorted solution indices still in play
      pattern   : the feedback observed for the guess
    """
    return candidates[row[candidates] == pattern]
