from .validator import validate_wordlists, pretty_summary
from .io import load_words, load_lexicon
from .curve import Bucket, Curve, build_curve, load_curve

__all__ = [
    "validate_wordlists", "pretty_summary", "load_words", "load_lexicon",
    "Bucket", "Curve", "build_curve", "load_curve",
]
