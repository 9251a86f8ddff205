"""Phase transitions for a single game session.

Every operation takes the acting participant and returns a falsy value when
the actor or phase preconditions are not met. Rejected calls leave the
session untouched; callers treat them as no-ops.
"""

import random
from dataclasses import dataclass
from typing import Optional

from pitch.models import (
    CENTER,
    TOSS_MAX,
    TOSS_MIN,
    TOSS_PICKS,
    GameSession,
    Phase,
)
from .resolver import RoundOutcome, resolve_round


@dataclass(frozen=True)
class TossResult:
    number: int
    winner: str
    caller_won: bool


def caller_wins_toss(pick: str, number: int) -> bool:
    even = number % 2 == 0
    return (pick == 'even' and even) or (pick == 'odd' and not even)


def is_valid_move(value) -> bool:
    # Only equality matters, so any string or number will do; bool is an
    # int subclass and would compare equal to 0/1.
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def call_toss(session: GameSession, actor: str, pick, rng=random) -> Optional[TossResult]:
    if session.phase is not Phase.TOSS_CALL or actor != session.toss_caller:
        return None
    if pick not in TOSS_PICKS:
        return None

    number = rng.randint(TOSS_MIN, TOSS_MAX)
    caller_won = caller_wins_toss(pick, number)
    session.toss_winner = actor if caller_won else session.other(actor)
    session.phase = Phase.TOSS_WAIT_PROCEED
    session.set_message('{player} won the toss', session.toss_winner)
    return TossResult(number=number, winner=session.toss_winner, caller_won=caller_won)


def proceed_toss(session: GameSession, actor: str) -> bool:
    if session.phase is not Phase.TOSS_WAIT_PROCEED or actor != session.toss_winner:
        return False
    session.phase = Phase.TOSS_DECIDE
    session.set_message('')
    return True


def decide_toss(session: GameSession, actor: str, choice) -> bool:
    """Toss winner places the ball: ``center`` keeps it, anything else hands it over."""
    if session.phase is not Phase.TOSS_DECIDE or actor != session.toss_winner:
        return False
    label = CENTER if choice == CENTER else 'other'
    session.ball_holder = actor if label == CENTER else session.other(actor)
    session.pass_count = 0
    session.phase = Phase.PASS
    session.set_message('{player} chose ' + label, actor)
    return True


def submit_move(session: GameSession, actor: str, value) -> Optional[RoundOutcome]:
    """Record ``actor``'s move; resolve the round once both players have moved.

    Returns the round outcome when this move completed the round, otherwise
    None (move recorded and waiting, or rejected).
    """
    if session.is_over or not session.has_player(actor) or not is_valid_move(value):
        return None
    session.pending_moves[actor] = value
    if all(p in session.pending_moves for p in session.players):
        return resolve_round(session)
    return None
