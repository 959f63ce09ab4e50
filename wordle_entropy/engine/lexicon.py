"""
Lexicon: the immutable dictionaries plus their precomputed pattern matrix.

One Lexicon is built per run and shared read-only by every worker:
  - allowed   : every word that may be guessed (sorted, unique)
  - solutions : every word that may be the secret (sorted, unique, subset of allowed)
  - matrix    : matrix[g, s] = score(allowed[g], solutions[s])

Candidate sets are numpy arrays of solution indices, ascending. Because both
lists are sorted, index order is lexicographic order, which the selector
relies on for its tie-break.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from wordle_entropy.errors import DictionaryLoadError, InvalidLength
from .patterns import build_pattern_matrix, encode_words
from .scoring import n_patterns, solved_pattern


@dataclass(frozen=True, eq=False)
class Lexicon:
    N: int
    allowed: Tuple[str, ...]
    solutions: Tuple[str, ...]
    matrix: np.ndarray
    solution_rows: np.ndarray  # row in `matrix` (index in `allowed`) of each solution
    _row_of: Dict[str, int] = field(default_factory=dict, repr=False)
    _column_of: Dict[str, int] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "_row_of", {w: i for i, w in enumerate(self.allowed)})
        object.__setattr__(self, "_column_of", {w: i for i, w in enumerate(self.solutions)})

    @classmethod
    def build(
            cls,
            solutions: Iterable[str],
            allowed: Optional[Iterable[str]] = None,
            *,
            N: int = 5,
            progress: bool = False,
    ) -> "Lexicon":
        """
        Normalise both lists, check them and precompute the pattern matrix.

        If `allowed` is None, the solutions double as the allowed guesses.

        Raises:
          InvalidLength       : a word is not N letters long
          DictionaryLoadError : empty solutions, or solutions not a subset of allowed
        """
        sol = sorted({w.strip().lower() for w in solutions if w.strip()})
        alw = sol if allowed is None else sorted({w.strip().lower() for w in allowed if w.strip()})

        if not sol:
            raise DictionaryLoadError("solutions list is empty")
        for w in alw:
            if len(w) != N:
                raise InvalidLength(w, N)

        row_of = {w: i for i, w in enumerate(alw)}
        missing = [w for w in sol if w not in row_of]
        if missing:
            raise DictionaryLoadError(f"solutions not subset of allowed guesses (e.g., {missing[:5]})")

        matrix = build_pattern_matrix(encode_words(alw, N), encode_words(sol, N), progress=progress)
        matrix.setflags(write=False)
        solution_rows = np.array([row_of[w] for w in sol], dtype=np.int64)
        solution_rows.setflags(write=False)
        return cls(N=N, allowed=tuple(alw), solutions=tuple(sol),
                   matrix=matrix, solution_rows=solution_rows)

    @property
    def n_patterns(self) -> int:
        return n_patterns(self.N)

    @property
    def solved(self) -> int:
        return solved_pattern(self.N)

    def row(self, guess: str) -> int:
        """Matrix row of an allowed guess (KeyError if it is not allowed)."""
        return self._row_of[guess]

    def column(self, secret: str) -> int:
        """Matrix column (solution index) of a secret (KeyError if it is not a solution)."""
        return self._column_of[secret]

    def all_candidates(self) -> np.ndarray:
        """The turn-1 candidate set: every solution index."""
        return np.arange(len(self.solutions), dtype=np.int64)

    def words(self, candidates: np.ndarray) -> List[str]:
        return [self.solutions[i] for i in candidates]
