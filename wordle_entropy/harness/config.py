from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core import WORDLE_MAX_TURNS

TRAIN = "train"
TEST = "test"
MODES = (TRAIN, TEST)

# mode -> shard file prefix; shards are <outdir>/<prefix>.<id>.csv
SHARD_PREFIX = {TRAIN: "training_data", TEST: "testing_data"}


@dataclass(frozen=True)
class HarnessConfig:
    """Everything a harness run needs; recorded verbatim in the run manifest."""
    mode: str = TRAIN
    solutions: str = "wordle_entropy/datasets/data/solutions_5.txt"
    allowed: Optional[str] = None
    N: int = 5
    max_turns: int = WORDLE_MAX_TURNS
    workers: int = 0                 # 0 -> one per CPU; capped at the CPU count
    outdir: Optional[str] = None     # default: ./train or ./test
    seed: int = 123                  # train/test split
    test_fraction: float = 0.2
    sample: Optional[int] = None     # only the first K secrets of the split
    solver: str = "entropy"
    curve: Optional[str] = None      # glob of training shards for expected_score
    backend: str = "process"         # "process" or "thread"
    progress: str = "off"            # "bar", "plain" or "off"

    def __post_init__(self):
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}; got {self.mode!r}")
        if self.backend not in ("process", "thread"):
            raise ValueError(f"backend must be 'process' or 'thread'; got {self.backend!r}")
        if self.max_turns < 1:
            raise ValueError(f"max_turns must be >= 1; got {self.max_turns}")
        if not 0.0 <= self.test_fraction <= 1.0:
            raise ValueError(f"test_fraction must be within [0, 1]; got {self.test_fraction}")
        if self.workers < 0:
            raise ValueError(f"workers must be >= 0; got {self.workers}")

    @property
    def shard_prefix(self) -> str:
        return SHARD_PREFIX[self.mode]

    @property
    def output_dir(self) -> Path:
        return Path(self.outdir) if self.outdir else Path(".") / self.mode

    def resolved_workers(self) -> int:
        logical = os.cpu_count() or 1
        return logical if self.workers == 0 else min(self.workers, logical)
