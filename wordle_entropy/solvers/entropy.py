"""
Entropy Solver (expected information gain).

Main idea:
  - For each allowed guess g, partition the CURRENT candidates by feedback pattern.
  - Compute Shannon entropy H over those buckets; pick g with max H.
  - The whole allowed list is scanned, not just the candidates: a word that
    cannot be the secret may still split the remaining candidates best.

Short-circuits:
  - one candidate left: guess it, no scan.
  - turn 1 with the full solution list and a precomputed opening: reuse it.

Tie-break (deterministic, so shards and reruns agree):
  - prefer a guess that is itself a candidate, then the lexicographically
    smallest word. Scores within TIE_EPS of the best count as tied.
"""

from __future__ import annotations

import numpy as np

from wordle_entropy.engine import entropies, entropy_from_counts, pattern_counts
from .base import BaseSolver, Choice, register

TIE_EPS = 1e-12


@register
class EntropySolver(BaseSolver):
    id = "entropy"
    name = "Entropy (Expected Information Gain)"
    version = "2.0.0"

    def _scores(self, counts: np.ndarray, candidates: np.ndarray) -> np.ndarray:
        """Higher is better. Row g of `counts` holds the bucket sizes of allowed[g]."""
        return entropies(counts)

    def _pick(self, scores: np.ndarray, candidates: np.ndarray) -> int:
        """Row index of the best-scoring guess after the tie-break."""
        top = scores.max()
        tied = np.flatnonzero(scores >= top - TIE_EPS)
        if tied.size > 1:
            members = np.isin(tied, self.lexicon.solution_rows[candidates])
            if members.any():
                tied = tied[members]
        # rows are in lexicographic order, so the first is the smallest word
        return int(tied[0])

    def choose(self, candidates: np.ndarray, turn: int) -> Choice:
        """Pick the guess with maximum expected information gain."""
        lex = self.lexicon
        if lex is None:
            raise RuntimeError(f"{self.id}: reset() must be called before choose()")
        if candidates.size == 0:
            raise ValueError("cannot choose a guess for an empty candidate set")

        # Only one word left: it is the answer
        if candidates.size == 1:
            return Choice(lex.solutions[int(candidates[0])], 0.0)

        if turn == 1 and self.opening is not None and candidates.size == len(lex.solutions):
            return self.opening

        counts = pattern_counts(lex.matrix[:, candidates], lex.n_patterns)
        best = self._pick(self._scores(counts, candidates), candidates)

        # report the canonical value, not the vectorised ranking score
        return Choice(lex.allowed[best], entropy_from_counts(counts[best].tolist()))
