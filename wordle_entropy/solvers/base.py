from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Type

import numpy as np

from wordle_entropy.engine import Lexicon

# ---- Global solver registry ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


@dataclass(frozen=True)
class Choice:
    """A selected guess and the entropy (bits) it had over the candidates it was chosen for."""
    guess: str
    entropy: float


# ---- Base class that solvers inherit ----
class BaseSolver:
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self):
        self.lexicon: Optional[Lexicon] = None
        self.opening: Optional[Choice] = None

    def reset(self, *, lexicon: Lexicon, opening: Optional[Choice] = None) -> None:
        """
        Attach the shared lexicon. `opening` is an optional precomputed turn-1
        choice (the candidate set is the full solution list on every game's
        first turn, so it only needs computing once per run).
        """
        self.lexicon = lexicon
        self.opening = opening

    def choose(self, candidates: np.ndarray, turn: int) -> Choice:
        raise NotImplementedError("Override in subclass")
