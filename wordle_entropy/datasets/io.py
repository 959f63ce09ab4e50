from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from wordle_entropy.engine import Lexicon
from wordle_entropy.errors import DictionaryLoadError
from .validator import read_valid_words, validate_wordlists

log = logging.getLogger(__name__)


def load_words(p: Path | str, N: int) -> List[str]:
    """
    Read a word list strictly: every non-blank line must be a lowercase
    a-z word of length N.

    Raises DictionaryLoadError if the file is missing, unreadable, empty or
    holds an invalid line.
    """
    p = Path(p)
    if not p.is_file():
        raise DictionaryLoadError(f"word list not found: {p}")
    try:
        words, invalid = read_valid_words(p, N)
    except (OSError, UnicodeDecodeError) as e:
        raise DictionaryLoadError(f"cannot read word list {p}: {e}") from e
    if invalid:
        raise DictionaryLoadError(f"{p}: {invalid} line(s) are not {N}-letter lowercase words")
    if not words:
        raise DictionaryLoadError(f"{p}: no words")
    return words


def load_lexicon(
        N: int,
        solutions_path: str,
        allowed_path: Optional[str] = None,
        *,
        progress: bool = False,
) -> Tuple[Lexicon, Dict]:
    """
    Validate, load and index both lists. Returns (lexicon, validation report).

    Raises DictionaryLoadError on any validation issue except duplicates.
    """
    try:
        report = validate_wordlists(N, solutions_path, allowed_path)
    except (OSError, UnicodeDecodeError) as e:
        raise DictionaryLoadError(f"cannot read word lists: {e}") from e
    if not report["passed"]:
        raise DictionaryLoadError("; ".join(report["issues"]) or "word list validation failed")

    solutions = load_words(solutions_path, N)
    allowed = load_words(allowed_path, N) if allowed_path is not None else None
    lexicon = Lexicon.build(solutions, allowed, N=N, progress=progress)
    log.info("lexicon: %d solutions, %d allowed guesses, matrix %s",
             len(lexicon.solutions), len(lexicon.allowed), lexicon.matrix.shape)
    return lexicon, report
