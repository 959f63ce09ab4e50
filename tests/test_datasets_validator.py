from pathlib import Path

import pytest

from wordle_entropy.datasets import load_lexicon, load_words, pretty_summary, validate_wordlists
from wordle_entropy.errors import DictionaryLoadError

from conftest import write_words


def test_validate_wordlists_happy_path(tmp_path: Path):
    sol = write_words(tmp_path / "solutions_5.txt", ["crane", "raise", "stare"])
    allw = write_words(tmp_path / "allowed_5.txt", ["crane", "raise", "stare", "trace", "cared"])

    rep = validate_wordlists(5, sol, allw)
    assert rep["passed"] is True
    assert rep["solutions_subset_allowed"] is True
    s = pretty_summary(rep)
    assert "N=5" in s and "solutions⊆allowed=True" in s and s.endswith("OK")


def test_validate_without_allowed_list(tmp_path: Path):
    sol = write_words(tmp_path / "solutions_5.txt", ["crane", "raise"])
    rep = validate_wordlists(5, sol)
    assert rep["passed"] is True and rep["allowed"] is None
    assert "allowed=<solutions>" in pretty_summary(rep)


def test_validate_wordlists_flags_errors(tmp_path: Path):
    sol = tmp_path / "solutions_6.txt"
    allw = tmp_path / "allowed_6.txt"
    # 'crane' (len 5) invalid for N=6, '???' invalid chars, 'raiser' is fine
    sol.write_text("raiser\ncrane\n???\n", encoding="utf-8")
    allw.write_text("raiser\nplanet\npalate\n", encoding="utf-8")

    rep = validate_wordlists(6, str(sol), str(allw))
    assert rep["passed"] is False
    assert any("invalid" in msg for msg in rep["issues"])


def test_validate_wordlists_subset_violation(tmp_path: Path):
    sol = write_words(tmp_path / "solutions_5.txt", ["crane", "raise", "stare"])
    allw = write_words(tmp_path / "allowed_5.txt", ["crane", "stare"])  # missing 'raise'

    rep = validate_wordlists(5, sol, allw)
    assert rep["passed"] is False
    assert rep["solutions_subset_allowed"] is False
    assert any("subset" in msg for msg in rep["issues"])


def test_missing_file_fails(tmp_path: Path):
    rep = validate_wordlists(5, str(tmp_path / "nope.txt"))
    assert rep["passed"] is False
    assert any("not found" in msg for msg in rep["issues"])


def test_load_words_is_strict(tmp_path: Path):
    good = write_words(tmp_path / "good.txt", ["crane", "", "trace"])
    assert load_words(good, 5) == ["crane", "trace"]
    bad = write_words(tmp_path / "bad.txt", ["crane", "Trace"])
    with pytest.raises(DictionaryLoadError):
        load_words(bad, 5)
    with pytest.raises(DictionaryLoadError):
        load_words(tmp_path / "missing.txt", 5)


def test_load_lexicon(tmp_path: Path):
    sol = write_words(tmp_path / "solutions_5.txt", ["trace", "crane", "crane"])
    allw = write_words(tmp_path / "allowed_5.txt", ["crane", "trace", "salet"])
    lex, rep = load_lexicon(5, sol, allw)
    assert lex.solutions == ("crane", "trace")
    assert lex.allowed == ("crane", "salet", "trace")
    assert rep["passed"] is True

    with pytest.raises(DictionaryLoadError):
        load_lexicon(5, sol, write_words(tmp_path / "small.txt", ["crane"]))


def test_load_lexicon_unreadable_sources(tmp_path: Path):
    undecodable = tmp_path / "solutions_5.txt"
    undecodable.write_bytes(b"crane\n\xff\xfe\n")
    with pytest.raises(DictionaryLoadError):
        load_lexicon(5, str(undecodable))

    folder = tmp_path / "lists"
    folder.mkdir()
    with pytest.raises(DictionaryLoadError):
        load_lexicon(5, str(folder))
