# apps/cli/run.py
"""
CLI entry point for entropy training / evaluation runs.

Subcommands:
  train  run the harness over the training split -> train/training_data.<id>.csv
  test   run the harness over the test split     -> test/testing_data.<id>.csv
  merge  concatenate a mode's shard files into one CSV (header once)

train/test:
  1) Validate the word lists (prints counts + SHA, checks solutions ⊆ allowed).
  2) Spawn the workers and block until all of them finish.
  3) Print the shard files and the JSON manifest written.

Exit status is 0 on success and 1 if anything failed (bad word lists, a
worker failure, no shards to merge).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from wordle_entropy.datasets import load_lexicon, pretty_summary
from wordle_entropy.errors import WordleEntropyError
from wordle_entropy.harness import HarnessConfig, merge_shards, run_harness
from wordle_entropy.harness.config import MODES, SHARD_PREFIX
from wordle_entropy.solvers import get_solver_ids

log = logging.getLogger("wordle_entropy")


def _add_run_args(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("-w", "--workers", type=int, default=0,
                    help="worker count (0 = one per CPU; capped at the CPU count)")
    sp.add_argument("--N", type=int, default=5, help="word length")
    sp.add_argument("--solutions", default="wordle_entropy/datasets/data/solutions_5.txt",
                    help="path to the list of possible secrets")
    sp.add_argument("--allowed", default=None,
                    help="path to allowed guesses (superset of solutions; default: the solutions)")
    sp.add_argument("--max-turns", type=int, default=6, help="turn budget per game")
    sp.add_argument("--outdir", help="shard directory (default: ./train or ./test)")
    sp.add_argument("--seed", type=int, default=123, help="seed of the train/test split")
    sp.add_argument("--test-fraction", type=float, default=0.2,
                    help="share of solutions held out for the test split")
    sp.add_argument("--sample", type=int, help="only the first K secrets of the split")
    sp.add_argument("--solver", default="entropy",
                    help=f"solver id (one of: {', '.join(get_solver_ids())})")
    sp.add_argument("--curve", default="train/training_data.*.csv",
                    help="glob of training shards for the expected_score solver's curve")
    sp.add_argument("--backend", choices=["process", "thread"], default="process",
                    help="worker pool type")
    sp.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show per-worker progress (auto=bar on a terminal, else plain text)."
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="wordle-entropy",
                                 description="entropy-maximising solver: training/evaluation harness")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="more logging (-vv for debug)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    for mode in MODES:
        sp = sub.add_parser(mode, help=f"simulate every {mode} secret and write shard CSVs")
        _add_run_args(sp)

    mp = sub.add_parser("merge", help="concatenate shard CSVs into one dataset")
    mp.add_argument("mode", choices=MODES)
    mp.add_argument("--outdir", help="shard directory (default: ./train or ./test)")
    return ap


def _config_from_args(args: argparse.Namespace) -> HarnessConfig:
    progress = args.progress
    if progress == "auto":
        progress = "bar" if sys.stderr.isatty() else "plain"
    return HarnessConfig(
        mode=args.cmd,
        solutions=args.solutions,
        allowed=args.allowed,
        N=args.N,
        max_turns=args.max_turns,
        workers=args.workers,
        outdir=args.outdir,
        seed=args.seed,
        test_fraction=args.test_fraction,
        sample=args.sample,
        solver=args.solver,
        curve=args.curve if args.solver == "expected_score" else None,
        backend=args.backend,
        progress=progress,
    )


def _run(args: argparse.Namespace) -> None:
    config = _config_from_args(args)

    # 1) Validate + load word lists; print a one-liner summary
    lexicon, report = load_lexicon(config.N, config.solutions, config.allowed,
                                   progress=config.progress == "bar")
    print(pretty_summary(report))

    # 2) Spawn workers and wait on the join barrier
    summary = run_harness(config, lexicon=lexicon, report=report)

    # 3) Report outputs
    print(f"Opening: {summary.opening.guess} ({summary.opening.entropy:.4f} bits)")
    for s in summary.shards:
        print(f"Wrote: {s.path} ({s.games} games, {s.rows} rows)")
    print(f"Wrote: {summary.manifest}")


def _merge(args: argparse.Namespace) -> None:
    outdir = args.outdir or f"./{args.mode}"
    path, rows = merge_shards(outdir, SHARD_PREFIX[args.mode])
    print(f"Wrote: {path} ({rows} data rows)")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse CLI args and dispatch. Returns the process exit code.
    """
    args = build_parser().parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        if args.cmd == "merge":
            _merge(args)
        else:
            _run(args)
    except (WordleEntropyError, ValueError, OSError) as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
