from .core import GameResult, GameState, GuessEvent, WORDLE_MAX_TURNS, simulate_game
from .config import HarnessConfig
from .shards import partition_shards, split_secrets
from .io import ShardWriter, merge_shards, shard_files, shard_path, write_manifest
from .runner import RunSummary, ShardResult, run_harness, run_shards

__all__ = [
    "GameResult", "GameState", "GuessEvent", "WORDLE_MAX_TURNS", "simulate_game",
    "HarnessConfig", "partition_shards", "split_secrets",
    "ShardWriter", "merge_shards", "shard_files", "shard_path", "write_manifest",
    "RunSummary", "ShardResult", "run_harness", "run_shards",
]
