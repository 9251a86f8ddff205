from typing import Any, Dict, Iterable, List

from pitch.identity import IdentityTable
from pitch.models import GameSession, Room


def _message(session: GameSession, identities: IdentityTable) -> str:
    if not session.message:
        return ''
    if session.message_subject is None:
        return session.message
    return session.message.format(player=identities.name_of(session.message_subject))


def project_view(session: GameSession, identities: IdentityTable) -> Dict[str, Any]:
    """Client-facing snapshot of a session.

    Participants appear by display name only; connection ids never leave
    this function.
    """
    names = [identities.name_of(p) for p in session.players]
    return {
        'players': names,
        'ball': identities.name_of(session.ball_holder),
        'passCount': session.pass_count,
        'state': session.phase.value,
        'scores': {identities.name_of(p): session.scores[p] for p in session.players},
        'scoreboard': [
            {'name': name, 'score': session.scores[p]}
            for name, p in zip(names, session.players)
        ],
        'msg': _message(session, identities),
        'tossWinner': identities.name_of(session.toss_winner),
    }


def room_ready_payload(room: Room, identities: IdentityTable) -> Dict[str, Any]:
    # callerId is the one raw id clients get: each compares it to its own sid
    caller = room.session.toss_caller
    return {
        'players': [identities.name_of(p) for p in room.participants],
        'caller': identities.name_of(caller),
        'callerId': caller,
    }


def public_room_listing(rooms: Iterable[Room], identities: IdentityTable) -> List[Dict[str, str]]:
    return [{'code': r.code, 'host': identities.name_of(r.host)} for r in rooms if r.is_open]
