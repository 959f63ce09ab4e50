"""
Expected-moves curve learned from training shards.

Each shard row records how many candidates were left before a guess and how
many more guesses the game then took. Bucketing rows by remaining uncertainty
(log2 of the candidate count) and averaging the guesses still needed gives a
curve f(bits) -> expected guesses, which the expected-score solver uses to
trade information gain against the chance of winning outright.

Rows:
  x = log2(candidates)        uncertainty before the guess
  y = moves_remaining + 1     guesses needed from that point, this one included
"""

from __future__ import annotations

import csv
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import numpy as np


@dataclass(frozen=True)
class Bucket:
    centre: float     # bucket midpoint (x axis)
    avg_moves: float  # average guesses still needed in this bucket


@dataclass(frozen=True)
class Curve:
    buckets: Tuple[Bucket, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.buckets)

    def expected_moves(self, bits):
        """
        Linear interpolation between bucket centres, flat beyond the ends.
        With no buckets, the uncertainty itself is used as a rough proxy.
        Accepts a float or a numpy array.
        """
        if not self.buckets:
            return bits
        xs = [b.centre for b in self.buckets]
        ys = [b.avg_moves for b in self.buckets]
        out = np.interp(bits, xs, ys)
        return float(out) if np.ndim(out) == 0 else out


def build_curve(paths: Iterable[Path | str], bucket_width: float = 0.2) -> Curve:
    """
    Bucket every data row of the given shard CSVs (header skipped).

    Raises ValueError on a non-positive width or a malformed row.
    """
    if bucket_width <= 0:
        raise ValueError(f"bucket_width must be positive; got {bucket_width}")

    sums: Dict[int, float] = {}
    counts: Dict[int, int] = {}
    for path in paths:
        with Path(path).open("r", newline="", encoding="utf-8") as f:
            for row in csv.DictReader(f):
                try:
                    bits = math.log2(int(row["candidates"]))
                    moves = int(row["moves_remaining"]) + 1
                except (KeyError, TypeError, ValueError) as e:
                    raise ValueError(f"{path}: malformed shard row {row!r}") from e
                idx = math.floor(bits / bucket_width)
                sums[idx] = sums.get(idx, 0.0) + moves
                counts[idx] = counts.get(idx, 0) + 1

    buckets: List[Bucket] = [
        Bucket(centre=(idx + 0.5) * bucket_width, avg_moves=sums[idx] / counts[idx])
        for idx in sorted(sums)
    ]
    return Curve(tuple(buckets))


def load_curve(pattern: str, bucket_width: float = 0.2) -> Curve:
    """Build a curve from every file matching a glob such as 'train/training_data.*.csv'."""
    p = Path(pattern)
    files = sorted(p.parent.glob(p.name))
    return build_curve(files, bucket_width) if files else Curve()
