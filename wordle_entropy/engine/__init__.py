from .scoring import score, decode_pattern, encode_pattern, n_patterns, solved_pattern
from .constraints import partition, filter_candidates, bucket_of
from .entropy import entropy_from_counts, entropy_of_guess, pattern_counts, entropies
from .lexicon import Lexicon

__all__ = [
    "score", "decode_pattern", "encode_pattern", "n_patterns", "solved_pattern",
    "partition", "filter_candidates", "bucket_of",
    "entropy_from_counts", "entropy_of_guess", "pattern_counts", "entropies",
    "Lexicon",
]
