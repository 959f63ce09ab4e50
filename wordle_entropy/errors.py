"""
Error taxonomy shared by the engine, the datasets loader and the harness.

None of these are meant to be caught and retried: they surface to the CLI,
which reports them and exits non-zero, because a partial or corrupt dataset
would skew the entropy-vs-moves statistics downstream.
"""

from __future__ import annotations


class WordleEntropyError(Exception):
    """Base class for every error raised by this project."""


class InvalidLength(WordleEntropyError, ValueError):
    """Raised when a guess or secret does not have the configured word length."""

    def __init__(self, word: str, expected: int):
        self.word = word
        self.expected = expected
        super().__init__(f"'{word}' has length {len(word)}, expected {expected}")

    def __reduce__(self):
        return self.__class__, (self.word, self.expected)


class EmptyCandidateSet(WordleEntropyError, RuntimeError):
    """Raised when feedback narrows the candidate set to nothing (internal bug)."""

    def __init__(self, secret: str, turn: int):
        self.secret = secret
        self.turn = turn
        super().__init__(f"candidate set became empty at turn {turn} (secret={secret!r})")

    def __reduce__(self):
        return self.__class__, (self.secret, self.turn)


class DictionaryLoadError(WordleEntropyError):
    """Raised when a word list is missing or malformed."""


class WorkerFailure(WordleEntropyError):
    """Raised by the harness when any shard worker terminates abnormally."""

    def __init__(self, shard_id: int, reason: str):
        self.shard_id = shard_id
        self.reason = reason
        super().__init__(f"worker for shard {shard_id} failed: {reason}")

    def __reduce__(self):
        return self.__class__, (self.shard_id, self.reason)


class NoShardsFound(WordleEntropyError):
    """Raised by the merge step when a directory holds no shard files."""
