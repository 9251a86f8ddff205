from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pitch.models import PASSES_FOR_GOAL, WINNING_SCORE, GameSession, Phase


class Outcome(str, Enum):
    PASSED = 'Pass ok'
    STOLEN = 'Ball stolen'
    SAVED = 'Saved'
    GOAL = 'GOAL'
    # Both moves arrived outside PASS/GOAL; the buffer is just cleared
    NONE = ''


@dataclass(frozen=True)
class RoundOutcome:
    outcome: Outcome
    phase: Phase
    scorer: Optional[str] = None


def resolve_round(session: GameSession) -> RoundOutcome:
    """Resolve a round once both players have a pending move.

    Only equality of the two moves matters. Matching moves flip possession
    (a steal in PASS, a save in GOAL). Differing moves extend the pass
    streak in PASS, or score for the ball holder in GOAL. The pending moves
    are cleared whatever the outcome.
    """
    p1, p2 = session.players
    matched = session.pending_moves[p1] == session.pending_moves[p2]
    session.pending_moves.clear()

    outcome = Outcome.NONE
    scorer = None

    if session.phase is Phase.PASS:
        if matched:
            session.ball_holder = session.other(session.ball_holder)
            session.pass_count = 0
            outcome = Outcome.STOLEN
        else:
            session.pass_count += 1
            outcome = Outcome.PASSED
            if session.pass_count >= PASSES_FOR_GOAL:
                session.phase = Phase.GOAL

    elif session.phase is Phase.GOAL:
        if matched:
            session.ball_holder = session.other(session.ball_holder)
            outcome = Outcome.SAVED
        else:
            scorer = session.ball_holder
            session.scores[scorer] += 1
            outcome = Outcome.GOAL
            if session.scores[scorer] >= WINNING_SCORE:
                session.phase = Phase.GAME_OVER
            else:
                session.ball_holder = session.other(scorer)
                session.phase = Phase.PASS
        session.pass_count = 0

    if outcome is not Outcome.NONE:
        session.set_message(outcome.value)
    return RoundOutcome(outcome=outcome, phase=session.phase, scorer=scorer)
