"""
I/O utilities for harness runs.

Responsibilities:
- ShardWriter:    append one CSV row per GuessEvent to a worker's shard file.
- shard_files:    list a mode's shard files in a directory.
- merge_shards:   concatenate shards into one dataset (header once).
- write_manifest: dump a JSON manifest with config, wordlist report and shard results.
- timestamp_id / git_commit_or_unknown: run metadata for reproducibility.

Shard schema (columns 2 and 3 are read positionally by the bucketing scripts):
  secret_idx, entropy, moves_remaining, turn, guess, candidates
"""

from __future__ import annotations

import csv
import datetime as dt
import json
import re
import subprocess
from pathlib import Path
from typing import Dict, List, Tuple

from wordle_entropy.errors import NoShardsFound
from .core import GameResult

SHARD_FIELDS = ["secret_idx", "entropy", "moves_remaining", "turn", "guess", "candidates"]


def shard_path(outdir: Path | str, prefix: str, shard_id: int) -> Path:
    """e.g. ('train', 'training_data', 3) -> train/training_data.3.csv"""
    return Path(outdir) / f"{prefix}.{shard_id}.csv"


def shard_files(outdir: Path | str, prefix: str) -> List[Path]:
    """Shard files of one prefix, ordered by shard id (the merged file is excluded)."""
    rx = re.compile(rf"^{re.escape(prefix)}\.(\d+)\.csv$")
    found = []
    for p in Path(outdir).glob(f"{prefix}.*.csv"):
        m = rx.match(p.name)
        if m:
            found.append((int(m.group(1)), p))
    return [p for _, p in sorted(found)]


class ShardWriter:
    """
    Write-only CSV sink owned by exactly one worker.

    The file is truncated on open and flushed after every game, so a crash
    leaves whole games only.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._f = self.path.open("w", newline="", encoding="utf-8")
        self._w = csv.writer(self._f)
        self._w.writerow(SHARD_FIELDS)
        self.rows = 0

    def write_game(self, secret_idx: int, result: GameResult) -> int:
        for e in result.events:
            self._w.writerow([secret_idx, repr(e.entropy), e.moves_remaining,
                              e.turn, e.guess, e.candidates])
        self._f.flush()
        self.rows += len(result.events)
        return len(result.events)

    def close(self) -> None:
        self._f.close()

    def __enter__(self) -> "ShardWriter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def merge_shards(outdir: Path | str, prefix: str, out_path: Path | str | None = None) -> Tuple[str, int]:
    """
    Concatenate every <prefix>.<id>.csv in `outdir` into <outdir>/<prefix>.csv:
    the header of the first shard, then the data rows of all shards.

    Returns:
      (path written, number of data rows)

    Raises:
      NoShardsFound if there is nothing to merge.
    """
    shards = shard_files(outdir, prefix)
    if not shards:
        raise NoShardsFound(f"no {prefix}.*.csv shard files in {outdir}")

    out = Path(out_path) if out_path else Path(outdir) / f"{prefix}.csv"
    rows = 0
    with out.open("w", newline="", encoding="utf-8") as dst:
        for i, p in enumerate(shards):
            with p.open("r", newline="", encoding="utf-8") as src:
                header = src.readline()
                if i == 0:
                    dst.write(header if header.endswith("\n") else header + "\n")
                for line in src:
                    if line.strip():
                        dst.write(line if line.endswith("\n") else line + "\n")
                        rows += 1
    return str(out), rows


def write_manifest(manifest: Dict, path: Path | str) -> str:
    """
    Write a JSON manifest with run configuration and results.

    Typical keys:
      - run_id, git_commit
      - config: HarnessConfig fields
      - wordlists: output of datasets.validate_wordlists(...)
      - opening: the precomputed turn-1 guess and its entropy
      - shards: per-shard games/rows
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
