"""
Dataset validator for the solution / allowed-guess word lists.

What this module does:
- Enforce formatting rules (lowercase, a-z only, exact length N, one per line).
- Detect duplicates and invalid lines; compute SHA-256 of the raw files.
- Check that solutions ⊆ allowed.
- Return a machine-readable dict (for the run manifest) and a one-line summary.

The allowed list is optional: without it the solutions double as the guess
universe, and the report says so.

Typical use:
    from wordle_entropy.datasets import validate_wordlists, pretty_summary
    rep = validate_wordlists(5, "data/solutions_5.txt", "data/allowed_5.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import hashlib


@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str
    exists: bool
    count: int           # valid words
    unique_count: int    # valid words after dedupe
    invalid_lines: int
    sha256: str          # of raw bytes; empty if missing


@dataclass
class ValidationReport:
    """Top-level validation result for the (solutions, allowed) pair."""
    N: int
    solutions: FileReport
    allowed: Optional[FileReport]
    solutions_subset_allowed: bool
    passed: bool
    issues: List[str]


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def read_valid_words(path: Path, N: int) -> Tuple[List[str], int]:
    """
    Read one token per line; keep lowercase ascii a-z words of length N.
    Blank lines are skipped; anything else that fails the rules is invalid.

    Returns:
      (valid_words, invalid_count)
    """
    valid: List[str] = []
    invalid = 0
    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            w = raw.strip()
            if not w:
                continue
            if w.isascii() and w.isalpha() and w.islower() and len(w) == N:
                valid.append(w)
            else:
                invalid += 1
    return valid, invalid


def _file_report(path: Path, N: int, label: str, issues: List[str]) -> Tuple[FileReport, set]:
    if not path.exists():
        issues.append(f"{label} file not found: {path}")
        return FileReport(str(path), False, 0, 0, 0, ""), set()

    words, invalid = read_valid_words(path, N)
    uniq = set(words)
    rep = FileReport(
        path=str(path),
        exists=True,
        count=len(words),
        unique_count=len(uniq),
        invalid_lines=invalid,
        sha256=_sha256_file(path),
    )
    if rep.count == 0:
        issues.append(f"{label} file contains 0 valid words")
    if invalid:
        issues.append(f"{label} has {invalid} invalid line(s)")
    if rep.count != rep.unique_count:
        issues.append(f"{label} contains duplicate lines")
    return rep, uniq


def validate_wordlists(N: int, solutions_path: str, allowed_path: Optional[str] = None) -> Dict:
    """
    Validate the solutions (and optional allowed) word lists for length N.

    Returns a JSON-serializable dict (ValidationReport schema). `passed`
    requires existing, non-empty files without invalid lines and
    solutions ⊆ allowed. Duplicates are reported but do not fail the check,
    since loading deduplicates.
    """
    issues: List[str] = []
    sol_rep, sol_words = _file_report(Path(solutions_path), N, "solutions", issues)

    all_rep: Optional[FileReport] = None
    subset_ok = sol_rep.exists
    if allowed_path is not None:
        all_rep, all_words = _file_report(Path(allowed_path), N, "allowed", issues)
        if sol_rep.exists and all_rep.exists:
            missing = sorted(sol_words - all_words)
            subset_ok = not missing
            if missing:
                issues.append(f"solutions not subset of allowed (e.g., {missing[:5]})")
        else:
            subset_ok = False

    reports = [r for r in (sol_rep, all_rep) if r is not None]
    passed = (
            subset_ok
            and all(r.exists and r.count > 0 and r.invalid_lines == 0 for r in reports)
    )
    rep = ValidationReport(
        N=N,
        solutions=sol_rep,
        allowed=all_rep,
        solutions_subset_allowed=subset_ok,
        passed=passed,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Compact one-liner for the console, e.g.:
        N=5 | solutions=2315 (uniq=2315, sha=abc123...) | allowed=12972 (uniq=12972, sha=def456...) | solutions⊆allowed=True | OK
    """
    s = report["solutions"]
    a = report["allowed"]
    status = "OK" if report["passed"] else "FAIL"
    allowed_part = (
        f"allowed={a['count']} (uniq={a['unique_count']}, sha={(a.get('sha256') or '')[:12]})"
        if a else "allowed=<solutions>"
    )
    return (
        f"N={report['N']} | solutions={s['count']} (uniq={s['unique_count']}, sha={(s.get('sha256') or '')[:12]}) "
        f"| {allowed_part} | solutions⊆allowed={report['solutions_subset_allowed']} | {status}"
    )
