import pytest

from wordle_entropy.harness import partition_shards, split_secrets

from conftest import SOLUTIONS


def test_partition_17_words_into_4():
    words = sorted(SOLUTIONS)[:17]
    slices = partition_shards(words, 4)
    sizes = [len(s) for s in slices]
    assert len(slices) == 4
    assert max(sizes) - min(sizes) <= 1
    merged = sorted(w for s in slices for w in s)
    assert merged == words
    assert len(set(merged)) == 17


def test_more_workers_than_words():
    slices = partition_shards(["crane", "trace"], 4)
    assert slices == [["crane"], ["trace"], [], []]


def test_partition_rejects_zero_workers():
    with pytest.raises(ValueError):
        partition_shards(["crane"], 0)


def test_split_is_complete_disjoint_and_deterministic():
    train = split_secrets(SOLUTIONS, "train", test_fraction=0.2, seed=7)
    test = split_secrets(SOLUTIONS, "test", test_fraction=0.2, seed=7)
    assert len(test) == 4 and len(train) == 16
    assert not set(train) & set(test)
    assert sorted(train + test) == sorted(SOLUTIONS)
    assert train == sorted(train)
    assert split_secrets(list(reversed(SOLUTIONS)), "train", test_fraction=0.2, seed=7) == train


def test_split_sample_and_mode():
    assert len(split_secrets(SOLUTIONS, "train", sample=5)) == 5
    assert split_secrets(SOLUTIONS, "train", test_fraction=0.0) == sorted(SOLUTIONS)
    with pytest.raises(ValueError):
        split_secrets(SOLUTIONS, "play")
