import numpy as np
import pytest

from wordle_entropy.engine import Lexicon, score
from wordle_entropy.engine.patterns import build_pattern_matrix, encode_words, pattern_dtype, pattern_row
from wordle_entropy.errors import DictionaryLoadError, InvalidLength

# heavy on repeated letters, where a naive rule would go wrong
WORDS = ["belle", "level", "lemon", "cools", "scoop", "speed", "erase", "geese",
         "eerie", "crane", "trace", "grape", "abbey", "babes", "kebab", "llama"]


def test_pattern_row_matches_scalar_score():
    codes = encode_words(WORDS, 5)
    for i, g in enumerate(WORDS):
        row = pattern_row(codes[i], codes)
        assert row.tolist() == [score(g, a) for a in WORDS]


def test_matrix_n6_matches_scalar_score():
    words = ["settle", "letter", "little", "planet", "palate", "kitten", "tinket"]
    mat = build_pattern_matrix(encode_words(words, 6), encode_words(words, 6))
    assert mat.dtype == np.uint16
    for gi, g in enumerate(words):
        for ai, a in enumerate(words):
            assert int(mat[gi, ai]) == score(g, a)


def test_pattern_dtype():
    assert pattern_dtype(5) == np.uint8
    assert pattern_dtype(6) == np.uint16
    assert pattern_dtype(11) == np.uint32


def test_encode_words_rejects_wrong_length():
    with pytest.raises(InvalidLength):
        encode_words(["crane", "cranes"], 5)


def test_lexicon_layout(lexicon):
    assert list(lexicon.allowed) == sorted(lexicon.allowed)
    assert list(lexicon.solutions) == sorted(lexicon.solutions)
    assert lexicon.matrix.shape == (len(lexicon.allowed), len(lexicon.solutions))
    for s, row in zip(lexicon.solutions, lexicon.solution_rows):
        assert lexicon.allowed[row] == s
    g = lexicon.row("salet")
    assert int(lexicon.matrix[g, lexicon.column("crane")]) == score("salet", "crane")
    assert not lexicon.matrix.flags.writeable


def test_lexicon_defaults_allowed_to_solutions():
    lex = Lexicon.build(["trace", "crane", "crane"], N=5)
    assert lex.allowed == lex.solutions == ("crane", "trace")


def test_lexicon_requires_subset():
    with pytest.raises(DictionaryLoadError):
        Lexicon.build(["crane", "trace"], ["crane"], N=5)
