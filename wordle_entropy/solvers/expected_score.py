"""
Expected Score Solver.

Instead of maximising information alone, estimate the total number of
guesses each option leads to:

    score(g) = 1 + (1 - p(g)) * f(log2(|C|) - H(g))

  - p(g)  : chance g is the secret itself (1/|C| if g is a candidate, else 0)
  - H(g)  : entropy of g over the candidates C
  - f     : expected-moves curve learned from training shards; the
            uncertainty left after the guess maps to guesses still needed

Minimise the score. Same short-circuits and tie-break as the entropy solver.
Without a curve, f is the identity, which still favours likely winners.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from wordle_entropy.datasets.curve import Curve
from .base import register
from .entropy import EntropySolver


@register
class ExpectedScoreSolver(EntropySolver):
    id = "expected_score"
    name = "Expected Score (entropy + learned moves curve)"
    version = "1.0.0"

    def __init__(self, curve: Optional[Curve] = None):
        super().__init__()
        self.curve = curve or Curve()

    def _scores(self, counts: np.ndarray, candidates: np.ndarray) -> np.ndarray:
        m = candidates.size
        H = super()._scores(counts, candidates)

        p = np.zeros(H.shape[0], dtype=np.float64)
        p[self.lexicon.solution_rows[candidates]] = 1.0 / m

        left = np.maximum(np.log2(m) - H, 0.0)
        expected = 1.0 + (1.0 - p) * self.curve.expected_moves(left)
        # EntropySolver picks the maximum
        return -expected
