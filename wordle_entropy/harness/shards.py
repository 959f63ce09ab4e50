"""
Static work partitioning for the harness.

- split_secrets:    deterministic train/test split of the solution list.
- partition_shards: cut a split into W disjoint, size-balanced slices.

Slices are dealt round-robin (word i goes to slice i % W), so sizes differ by
at most one and the union of all slices is exactly the input. Nothing here
depends on timing or worker count beyond W itself, which keeps reruns
reproducible.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .config import TEST, TRAIN


def split_secrets(
        solutions: Sequence[str],
        mode: str,
        *,
        test_fraction: float = 0.2,
        seed: int = 123,
        sample: Optional[int] = None,
) -> List[str]:
    """
    Return the secrets of the requested split, sorted.

    The solutions are shuffled with a seeded RNG and the first
    round(len * test_fraction) words form the test split; the rest train.
    `sample` keeps only the first K words of the split.
    """
    if mode not in (TRAIN, TEST):
        raise ValueError(f"mode must be '{TRAIN}' or '{TEST}'; got {mode!r}")

    pool = sorted(solutions)
    random.Random(seed).shuffle(pool)
    cut = round(len(pool) * test_fraction)
    chosen = sorted(pool[:cut] if mode == TEST else pool[cut:])
    if sample is not None:
        chosen = chosen[:sample]
    return chosen


def partition_shards(words: Sequence[str], workers: int) -> List[List[str]]:
    """
    Deal `words` into `workers` slices round-robin.

    Every slice exists even when empty, so shard ids are always 0..workers-1.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1; got {workers}")
    return [list(words[i::workers]) for i in range(workers)]
