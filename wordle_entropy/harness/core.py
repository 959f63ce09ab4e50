"""
Game simulation primitives.

- simulate_game: play one game for a known secret with a given solver.
- GameState:     explicit per-game state (status, turn, candidate set).

A game is a small state machine:

    active(turn, candidates) --guess == secret--> solved(turn)
    active(turn, candidates) --turn > max_turns-> failed

Each turn the solver picks a guess, the engine scores it against the secret,
one GuessEvent is recorded, and the candidate set shrinks to the bucket that
matches the observed feedback. Turns are strictly sequential.

These functions are UI-agnostic so they can be reused by the parallel
harness, tests, or a notebook without changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Tuple

import numpy as np

from wordle_entropy.engine import Lexicon, bucket_of
from wordle_entropy.errors import EmptyCandidateSet

# Wordle's turn budget; the harness default.
WORDLE_MAX_TURNS = 6

ACTIVE = "active"
SOLVED = "solved"
FAILED = "failed"


@dataclass(frozen=True)
class GuessEvent:
    turn: int
    guess: str
    pattern: int
    entropy: float          # bits, at the time the guess was chosen
    candidates: int         # candidate set size before the guess
    moves_remaining: int    # turns still taken after this guess; 0 if it solved


@dataclass(frozen=True)
class GameResult:
    secret: str
    status: str             # SOLVED or FAILED
    turns: int              # guesses made
    events: Tuple[GuessEvent, ...]

    @property
    def solved(self) -> bool:
        return self.status == SOLVED


@dataclass(frozen=True)
class GameState:
    status: str
    turn: int
    candidates: np.ndarray = field(repr=False)

    @classmethod
    def start(cls, lexicon: Lexicon) -> "GameState":
        return cls(ACTIVE, 1, lexicon.all_candidates())

    @property
    def done(self) -> bool:
        return self.status != ACTIVE


def step(
        state: GameState,
        solver,
        secret: str,
        lexicon: Lexicon,
        max_turns: int,
) -> Tuple[GameState, GuessEvent]:
    """
    Advance an active game by one turn.

    Returns the next state and the turn's event. The event's moves_remaining
    is provisional (0); simulate_game fills it in once the game has ended.
    """
    choice = solver.choose(state.candidates, state.turn)
    row = lexicon.matrix[lexicon.row(choice.guess)]
    pattern = int(row[lexicon.column(secret)])
    event = GuessEvent(
        turn=state.turn,
        guess=choice.guess,
        pattern=pattern,
        entropy=choice.entropy,
        candidates=int(state.candidates.size),
        moves_remaining=0,
    )

    if choice.guess == secret:
        return replace(state, status=SOLVED), event

    remaining = bucket_of(row, state.candidates, pattern)
    if remaining.size == 0:
        raise EmptyCandidateSet(secret, state.turn)

    turn = state.turn + 1
    status = FAILED if turn > max_turns else ACTIVE
    return GameState(status, turn, remaining), event


def simulate_game(
        solver,
        secret: str,
        lexicon: Lexicon,
        *,
        max_turns: int = WORDLE_MAX_TURNS,
) -> GameResult:
    """
    Play one game until the solver finds `secret` or the turn budget runs out.

    Args:
        solver:    a BaseSolver already reset() with `lexicon`
        secret:    the hidden word; must be one of lexicon.solutions
        lexicon:   shared dictionaries and pattern matrix
        max_turns: turn budget (Wordle is 6)

    Returns:
        GameResult with one GuessEvent per guess. For a game solved on turn T,
        the event of turn t has moves_remaining = T - t; for a failed game it
        is max_turns - t.
    """
    if max_turns < 1:
        raise ValueError(f"max_turns must be >= 1; got {max_turns}")
    try:
        lexicon.column(secret)
    except KeyError:
        raise ValueError(f"secret {secret!r} is not in the solution list") from None

    state = GameState.start(lexicon)
    events: List[GuessEvent] = []
    while not state.done:
        state, event = step(state, solver, secret, lexicon, max_turns)
        events.append(event)

    last = events[-1].turn if state.status == SOLVED else max_turns
    events = [replace(e, moves_remaining=last - e.turn) for e in events]
    return GameResult(secret=secret, status=state.status, turns=len(events), events=tuple(events))
