import csv
import json
from pathlib import Path

import pytest

from wordle_entropy.errors import NoShardsFound, WorkerFailure
from wordle_entropy.harness import HarnessConfig, merge_shards, run_harness, shard_files
from wordle_entropy.harness import runner


def _config(tmp_path, **kw):
    base = dict(mode="train", outdir=str(tmp_path / "train"), workers=3, backend="thread",
                test_fraction=0.0, progress="off")
    base.update(kw)
    return HarnessConfig(**base)


def _rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_thread_run_writes_one_shard_per_worker(tmp_path, lexicon):
    cfg = _config(tmp_path)
    summary = run_harness(cfg, lexicon=lexicon)

    files = shard_files(cfg.output_dir, "training_data")
    assert [Path(s.path) for s in summary.shards] == files
    assert summary.games == len(lexicon.solutions)

    secrets_seen = set()
    for s in summary.shards:
        rows = _rows(s.path)
        assert rows[0] == ["secret_idx", "entropy", "moves_remaining", "turn", "guess", "candidates"]
        assert len(rows) - 1 == s.rows
        for r in rows[1:]:
            float(r[1])
            assert int(r[2]) >= 0
            secrets_seen.add(int(r[0]))
    assert secrets_seen == set(range(len(lexicon.solutions)))

    manifest = json.loads(Path(summary.manifest).read_text(encoding="utf-8"))
    assert manifest["opening"]["guess"] == summary.opening.guess
    assert sum(s["rows"] for s in manifest["shards"]) == summary.rows

    path, rows = merge_shards(cfg.output_dir, "training_data")
    assert rows == summary.rows
    merged = _rows(path)
    assert len(merged) == summary.rows + 1
    assert sum(1 for r in merged if r[0] == "secret_idx") == 1


def test_runs_are_reproducible(tmp_path, lexicon):
    a = run_harness(_config(tmp_path / "a"), lexicon=lexicon)
    b = run_harness(_config(tmp_path / "b", workers=1), lexicon=lexicon)
    rows_a = sorted(r for s in a.shards for r in _rows(s.path)[1:])
    rows_b = sorted(r for s in b.shards for r in _rows(s.path)[1:])
    assert rows_a == rows_b


def test_process_backend(tmp_path, lexicon):
    cfg = _config(tmp_path, backend="process", workers=2, mode="test", outdir=str(tmp_path / "test"),
                  test_fraction=0.5)
    summary = run_harness(cfg, lexicon=lexicon)
    assert summary.games == 10
    assert all(Path(s.path).name.startswith("testing_data.") for s in summary.shards)


def test_stale_shards_are_removed(tmp_path, lexicon):
    cfg = _config(tmp_path, workers=1)
    cfg.output_dir.mkdir(parents=True)
    stale = cfg.output_dir / "training_data.9.csv"
    stale.write_text("secret_idx,entropy,moves_remaining\n1,2.0,3\n", encoding="utf-8")
    run_harness(cfg, lexicon=lexicon)
    assert not stale.exists()


def test_worker_failure_is_fatal(tmp_path, lexicon, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("simulated crash")

    monkeypatch.setattr(runner, "simulate_game", boom)
    cfg = _config(tmp_path)
    with pytest.raises(WorkerFailure) as exc:
        run_harness(cfg, lexicon=lexicon)
    assert isinstance(exc.value.__cause__, RuntimeError)
    assert shard_files(cfg.output_dir, "training_data") == []


@pytest.mark.parametrize("row_counts", [[3], [0, 2, 5], [4, 4, 1, 0, 7]])
def test_merge_row_count(tmp_path, row_counts):
    # write shards in reverse id order; merging must not care
    for sid in reversed(range(len(row_counts))):
        lines = ["secret_idx,entropy,moves_remaining"]
        lines += [f"{sid},{i * 0.5},{i}" for i in range(row_counts[sid])]
        (tmp_path / f"testing_data.{sid}.csv").write_text("\n".join(lines) + "\n", encoding="utf-8")

    path, rows = merge_shards(tmp_path, "testing_data")
    assert rows == sum(row_counts)
    merged = Path(path).read_text(encoding="utf-8").splitlines()
    assert merged[0] == "secret_idx,entropy,moves_remaining"
    assert len(merged) == sum(row_counts) + 1


def test_merge_without_shards(tmp_path):
    with pytest.raises(NoShardsFound):
        merge_shards(tmp_path, "training_data")


@pytest.mark.parametrize("shard0", [
    "secret_idx,entropy,moves_remaining\n0,1.0,2",
    "secret_idx,entropy,moves_remaining",
])
def test_merge_terminates_unterminated_lines(tmp_path, shard0):
    (tmp_path / "training_data.0.csv").write_text(shard0, encoding="utf-8")
    (tmp_path / "training_data.1.csv").write_text("secret_idx,entropy,moves_remaining\n1,0.5,1\n",
                                                  encoding="utf-8")
    path, rows = merge_shards(tmp_path, "training_data")
    merged = Path(path).read_text(encoding="utf-8").splitlines()
    assert merged[0] == "secret_idx,entropy,moves_remaining"
    assert merged[-1] == "1,0.5,1"
    assert len(merged) == rows + 1
