"""
Parallel training / evaluation harness.

run_harness drives a whole run:
  1) load and validate the dictionaries once, build the pattern matrix
  2) pick the split's secrets and deal them into W shards
  3) compute the opening guess once (turn 1 is identical in every game)
  4) run one task per shard on a process (or thread) pool; each task plays
     every secret of its shard and writes its own CSV
  5) join on all tasks; the first failure aborts the run

Static fork-join: no work stealing, no retries. Workers share nothing
mutable; everything they read travels in a frozen WorkerContext. A failed
run removes its shard files so no partial dataset is mistaken for a result.
"""

from __future__ import annotations

import logging
import sys
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from wordle_entropy.datasets import Curve, load_curve, load_lexicon
from wordle_entropy.engine import Lexicon
from wordle_entropy.errors import WorkerFailure
from wordle_entropy.solvers import Choice, create_solver
from .config import HarnessConfig
from .core import simulate_game
from .io import ShardWriter, git_commit_or_unknown, shard_files, shard_path, timestamp_id, write_manifest
from .shards import partition_shards, split_secrets

log = logging.getLogger(__name__)

# seconds between plain-text progress lines per worker
PLAIN_PROGRESS_EVERY = 5.0


@dataclass(frozen=True)
class WorkerContext:
    """Read-only inputs shared by every shard task of a run."""
    lexicon: Lexicon
    solver_id: str
    opening: Optional[Choice]
    max_turns: int
    progress: str = "off"
    solver_kwargs: Dict = field(default_factory=dict)


@dataclass(frozen=True)
class ShardResult:
    shard_id: int
    path: str
    games: int
    solved: int
    rows: int


@dataclass(frozen=True)
class RunSummary:
    mode: str
    opening: Choice
    shards: Tuple[ShardResult, ...]
    manifest: str

    @property
    def games(self) -> int:
        return sum(s.games for s in self.shards)

    @property
    def rows(self) -> int:
        return sum(s.rows for s in self.shards)


def run_shard(ctx: WorkerContext, shard_id: int, secrets: Sequence[str], path: str) -> ShardResult:
    """
    Play every secret of one shard and write its events to `path`.

    Runs inside a pool worker. Any exception propagates to the parent, which
    treats it as a failure of the whole run.
    """
    solver = create_solver(ctx.solver_id, **ctx.solver_kwargs)
    solver.reset(lexicon=ctx.lexicon, opening=ctx.opening)

    iterator = secrets
    if ctx.progress == "bar":
        iterator = tqdm(secrets, ncols=80, desc=f"shard {shard_id}", unit="game",
                        position=shard_id, leave=False)

    games = solved = 0
    start = last_print = time.time()
    with ShardWriter(path) as writer:
        for secret in iterator:
            result = simulate_game(solver, secret, ctx.lexicon, max_turns=ctx.max_turns)
            writer.write_game(ctx.lexicon.column(secret), result)
            games += 1
            solved += result.solved

            if ctx.progress == "plain":
                now = time.time()
                if (now - last_print >= PLAIN_PROGRESS_EVERY) or (games == len(secrets)):
                    sys.stderr.write(
                        f"[shard {shard_id}] {games}/{len(secrets)} games | elapsed {now - start:6.1f}s\n"
                    )
                    sys.stderr.flush()
                    last_print = now

    return ShardResult(shard_id=shard_id, path=str(path), games=games, solved=solved, rows=writer.rows)


def _executor(backend: str, workers: int) -> Executor:
    if backend == "thread":
        return ThreadPoolExecutor(max_workers=workers)
    return ProcessPoolExecutor(max_workers=workers)


def run_shards(
        ctx: WorkerContext,
        slices: List[List[str]],
        paths: List[Path],
        *,
        backend: str = "process",
) -> List[ShardResult]:
    """
    Fork-join over the shards. Returns results ordered by shard id.

    Raises WorkerFailure (chained to the worker's exception) as soon as any
    shard fails; pending shards are cancelled.
    """
    results: Dict[int, ShardResult] = {}
    with _executor(backend, len(slices)) as ex:
        futures = {
            ex.submit(run_shard, ctx, sid, secrets, str(paths[sid])): sid
            for sid, secrets in enumerate(slices)
        }
        for fut in as_completed(futures):
            sid = futures[fut]
            try:
                res = fut.result()
            except Exception as e:
                ex.shutdown(wait=False, cancel_futures=True)
                raise WorkerFailure(sid, f"{type(e).__name__}: {e}") from e
            log.info("shard %d done: %d games, %d solved, %d rows", sid, res.games, res.solved, res.rows)
            results[sid] = res
    return [results[sid] for sid in sorted(results)]


def _solver_kwargs(config: HarnessConfig) -> Dict:
    if config.solver != "expected_score":
        return {}
    curve = load_curve(config.curve) if config.curve else Curve()
    if not curve:
        log.warning("no expected-moves curve loaded; expected_score falls back to raw uncertainty")
    return {"curve": curve}


def _discard_shards(outdir: Path, prefix: str) -> None:
    for p in shard_files(outdir, prefix):
        p.unlink()
        log.debug("removed %s", p)


def run_harness(config: HarnessConfig, *, lexicon: Optional[Lexicon] = None,
                report: Optional[Dict] = None) -> RunSummary:
    """
    Run the harness for one mode and block until every shard has finished.

    A prebuilt lexicon may be passed (tests, notebooks); otherwise the word
    lists named in the config are validated and loaded.

    Raises:
      DictionaryLoadError : the word lists are missing or malformed
      WorkerFailure       : any shard failed; its shard files are removed
    """
    if lexicon is None:
        lexicon, report = load_lexicon(config.N, config.solutions, config.allowed,
                                       progress=config.progress == "bar")

    secrets = split_secrets(lexicon.solutions, config.mode, test_fraction=config.test_fraction,
                            seed=config.seed, sample=config.sample)
    if not secrets:
        raise ValueError(f"the {config.mode} split is empty; check test_fraction/sample")

    workers = config.resolved_workers()
    slices = partition_shards(secrets, workers)

    solver_kwargs = _solver_kwargs(config)
    solver = create_solver(config.solver, **solver_kwargs)
    solver.reset(lexicon=lexicon)
    opening = solver.choose(lexicon.all_candidates(), turn=1)
    log.info("opening guess: %s (%.4f bits over %d solutions)",
             opening.guess, opening.entropy, len(lexicon.solutions))

    outdir = config.output_dir
    outdir.mkdir(parents=True, exist_ok=True)
    # stale shards from a run with more workers would leak into the merge
    _discard_shards(outdir, config.shard_prefix)
    paths = [shard_path(outdir, config.shard_prefix, sid) for sid in range(workers)]

    ctx = WorkerContext(lexicon=lexicon, solver_id=config.solver, opening=opening,
                        max_turns=config.max_turns, progress=config.progress,
                        solver_kwargs=solver_kwargs)

    log.info("running %d %s games on %d %s worker(s)", len(secrets), config.mode, workers, config.backend)
    t0 = time.time()
    try:
        shards = run_shards(ctx, slices, paths, backend=config.backend)
    except WorkerFailure:
        _discard_shards(outdir, config.shard_prefix)
        raise
    elapsed = time.time() - t0

    run_id = timestamp_id()
    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": asdict(config),
        "workers": workers,
        "wordlists": report,
        "opening": asdict(opening),
        "elapsed_s": round(elapsed, 3),
        "shards": [asdict(s) for s in shards],
    }
    manifest_path = write_manifest(manifest, outdir / f"run_{run_id}_manifest.json")
    return RunSummary(mode=config.mode, opening=opening, shards=tuple(shards), manifest=manifest_path)
