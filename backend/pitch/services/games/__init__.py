"""Game domain services: toss, move submission, round resolution and views.

This package contains pure domain logic that is imported by HTTP routes and
socket handlers, keeping transport concerns separated from core game
mechanics. Nothing in here emits events or knows about Socket.IO.
"""

from .resolver import Outcome, RoundOutcome, resolve_round
from .session import (
    TossResult,
    call_toss,
    decide_toss,
    is_valid_move,
    proceed_toss,
    submit_move,
)
from .view import project_view, public_room_listing, room_ready_payload

__all__ = [
    'Outcome',
    'RoundOutcome',
    'TossResult',
    'call_toss',
    'decide_toss',
    'is_valid_move',
    'proceed_toss',
    'project_view',
    'public_room_listing',
    'resolve_round',
    'room_ready_payload',
    'submit_move',
]
