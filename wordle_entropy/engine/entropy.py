"""
Shannon entropy of the partition a guess induces on the candidate set.

For bucket sizes n_i out of N candidates, p_i = n_i / N and

    H = -sum_i p_i * log2(p_i)   (bits)

H is 0 when the guess cannot discriminate (one bucket) or when N <= 1.

Two code paths score guesses:
  - entropy_from_counts: scalar, canonical. Counts are summed in ascending
    order, so the value depends only on the multiset of bucket sizes and is
    bit-identical wherever it is computed.
  - pattern_counts + entropies: numpy, used to rank the whole allowed list
    at once. Only used for ranking; the chosen guess is re-scored with the
    canonical function before it is reported.
"""

from __future__ import annotations

from math import log2
from typing import Iterable, Sequence

import numpy as np

from .constraints import partition

# Max cells (guesses x candidates) materialised per block when counting patterns
BLOCK_CELLS = 4_000_000


def entropy_from_counts(counts: Iterable[int]) -> float:
    """Entropy in bits of a partition given its bucket sizes (zeros ignored)."""
    sizes = sorted(c for c in counts if c > 0)
    n = sum(sizes)
    if n <= 1 or len(sizes) == 1:
        return 0.0
    H = 0.0
    for c in sizes:
        p = c / n
        H += p * log2(1 / p)   # == -p*log2(p)
    return H


def entropy_of_guess(guess: str, candidates: Sequence[str]) -> float:
    """Partition `candidates` by feedback against `guess` and return H in bits."""
    if len(candidates) <= 1:
        return 0.0
    return entropy_from_counts(len(b) for b in partition(candidates, guess).values())


def pattern_counts(rows: np.ndarray, n_patterns: int) -> np.ndarray:
    """
    Bucket sizes for many guesses at once.

    Args:
      rows      : (G, m) patterns of G guesses against the m current candidates
      n_patterns: 3**N

    Returns:
      (G, n_patterns) int64 array; row g holds the bucket sizes of guess g.
    """
    G, m = rows.shape
    out = np.zeros((G, n_patterns), dtype=np.int64)
    if m == 0:
        return out
    step = max(1, BLOCK_CELLS // m)
    for start in range(0, G, step):
        block = rows[start:start + step].astype(np.int64)
        g = block.shape[0]
        # offset each row into its own range of bins, then count in one pass
        flat = (block + (np.arange(g, dtype=np.int64) * n_patterns)[:, None]).ravel()
        out[start:start + g] = np.bincount(flat, minlength=g * n_patterns).reshape(g, n_patterns)
    return out


def entropies(counts: np.ndarray) -> np.ndarray:
    """Vectorised entropy (bits) of every row of a bucket-size matrix."""
    counts = np.asarray(counts, dtype=np.float64)
    totals = counts.sum(axis=1, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        p = np.where(totals > 0, counts / totals, 0.0)
        terms = np.where(p > 0, -p * np.log2(np.where(p > 0, p, 1.0)), 0.0)
    return terms.sum(axis=1)
