from flask import current_app, request
from flask_socketio import close_room, emit, join_room
from typing import Optional, Tuple
import functools
import random
import threading

from pitch import socketio
from pitch.errors import RoomUnavailable
from pitch.identity import IdentityTable
from pitch.models import GameSession, Room, Visibility
from pitch.registry import RoomRegistry
from pitch.services.games import (
    call_toss,
    decide_toss,
    is_valid_move,
    proceed_toss,
    project_view,
    public_room_listing,
    room_ready_payload,
    submit_move,
)


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def room_channel(code: str) -> str:
    return f"room:{code}"


def serialized(handler):
    """Run a router handler while holding the router's lock."""
    @functools.wraps(handler)
    def _locked(self, *args, **kwargs):
        with self.lock:
            return handler(self, *args, **kwargs)
    return _locked


class SessionRouter:
    """Routes Socket.IO events to the session owning the sender.

    Holds the process-scoped identity table and room registry. Events that
    fail an actor or phase check are dropped without telling the sender.
    """

    def __init__(self, registry: RoomRegistry, identities: IdentityTable,
                 namespace: str = '/', rng=None):
        self.registry = registry
        self.identities = identities
        self.namespace = namespace
        self.rng = rng or random.Random()
        # Guards the registry and every session; held for a whole handler
        self.lock = threading.RLock()

    # ---- broadcasting helpers ----

    def broadcast_room_list(self) -> None:
        listing = public_room_listing(self.registry.list_public_open_rooms(), self.identities)
        socketio.emit('room_list', listing, namespace=self.namespace)

    def broadcast_game(self, room: Room) -> None:
        socketio.emit('game_update', project_view(room.session, self.identities),
                      to=room_channel(room.code), namespace=self.namespace)

    def _owned_session(self, sid: str) -> Tuple[Optional[Room], Optional[GameSession]]:
        room = self.registry.find_room_by_participant(sid)
        if room is None or room.session is None:
            return room, None
        return room, room.session

    def _ignored(self, event: str, sid: str, reason: str) -> None:
        current_app.logger.debug(f"[ignored] event={event} sid={sid} reason={reason}")

    # ---- handlers ----

    @serialized
    def handle_connect(self, auth=None):
        current_app.logger.debug(f"[connect] sid={_get_sid()}")

    @serialized
    def handle_disconnect(self, reason=None):
        sid = _get_sid()
        room = self.registry.release_participant(sid)
        self.identities.forget(sid)
        if room is None:
            return
        current_app.logger.info(f"[room-closed] code={room.code} sid={sid} cause=disconnect")
        self._close(room)

    def _close(self, room: Room) -> None:
        channel = room_channel(room.code)
        socketio.emit('session_ended', {'code': room.code}, to=channel, namespace=self.namespace)
        close_room(channel, namespace=self.namespace)
        self.broadcast_room_list()

    def _leave_current_room(self, sid: str) -> None:
        room = self.registry.release_participant(sid)
        if room is not None:
            current_app.logger.info(f"[room-closed] code={room.code} sid={sid} cause=moved")
            self._close(room)

    @serialized
    def handle_set_name(self, name=None):
        sid = _get_sid()
        display = self.identities.set_name(sid, name)
        current_app.logger.info(f"[set-name] sid={sid} name={display!r}")
        emit('room_list', public_room_listing(self.registry.list_public_open_rooms(), self.identities))

    @serialized
    def handle_create_room(self, is_public=False):
        sid = _get_sid()
        self._leave_current_room(sid)
        room = self.registry.create_room(sid, Visibility.from_flag(is_public))
        join_room(room_channel(room.code))
        current_app.logger.info(
            f"[room-created] code={room.code} host={sid} visibility={room.visibility.value}"
        )
        emit('room_created', room.code)
        self.broadcast_room_list()

    @serialized
    def handle_join_room(self, code=None):
        sid = _get_sid()
        try:
            target = self.registry.joinable(code, sid)
            if target is None:
                raise RoomUnavailable(code)
            # Close any room the joiner is leaving before taking the seat
            self._leave_current_room(sid)
            self.registry.join_room(target.code, sid)
        except RoomUnavailable as exc:
            current_app.logger.info(f"[join-error] code={code!r} sid={sid}")
            emit('join_error', str(exc))
            return
        join_room(room_channel(target.code))
        current_app.logger.info(f"[room-ready] code={target.code} players={target.participants}")
        socketio.emit('room_ready', room_ready_payload(target, self.identities),
                      to=room_channel(target.code), namespace=self.namespace)
        self.broadcast_room_list()

    @serialized
    def handle_toss_call(self, pick=None):
        sid = _get_sid()
        room, session = self._owned_session(sid)
        if session is None:
            return self._ignored('toss_call', sid, 'no session')
        result = call_toss(session, sid, pick, rng=self.rng)
        if result is None:
            return self._ignored('toss_call', sid, f"phase={session.phase.value} pick={pick!r}")
        current_app.logger.info(
            f"[toss] code={room.code} pick={pick} number={result.number} winner={result.winner}"
        )
        socketio.emit('toss_result', {
            'number': result.number,
            'winner': self.identities.name_of(result.winner),
        }, to=room_channel(room.code), namespace=self.namespace)
        self.broadcast_game(room)

    @serialized
    def handle_toss_proceed(self, *_):
        sid = _get_sid()
        room, session = self._owned_session(sid)
        if session is None:
            return self._ignored('toss_proceed', sid, 'no session')
        if not proceed_toss(session, sid):
            return self._ignored('toss_proceed', sid, f"phase={session.phase.value}")
        self.broadcast_game(room)

    @serialized
    def handle_toss_decide(self, choice=None):
        sid = _get_sid()
        room, session = self._owned_session(sid)
        if session is None:
            return self._ignored('toss_decide', sid, 'no session')
        if not decide_toss(session, sid, choice):
            return self._ignored('toss_decide', sid, f"phase={session.phase.value}")
        current_app.logger.info(f"[kickoff] code={room.code} ball={session.ball_holder}")
        self.broadcast_game(room)

    @serialized
    def handle_play(self, value=None):
        sid = _get_sid()
        room, session = self._owned_session(sid)
        if session is None:
            return self._ignored('play', sid, 'no session')
        if session.is_over:
            return self._ignored('play', sid, 'game over')
        if not is_valid_move(value):
            return self._ignored('play', sid, f"value={value!r}")
        outcome = submit_move(session, sid, value)
        if outcome is None:
            # waiting for the opponent
            return
        current_app.logger.info(
            f"[round] code={room.code} outcome={outcome.outcome.name} phase={outcome.phase.value} "
            f"pass_count={session.pass_count} scorer={outcome.scorer}"
        )
        self.broadcast_game(room)


def register_socketio_handlers(router: SessionRouter) -> None:
    """Register Socket.IO event handlers for ``router`` on its namespace."""
    ns = router.namespace
    socketio.on_event('connect', router.handle_connect, namespace=ns)
    socketio.on_event('disconnect', router.handle_disconnect, namespace=ns)
    socketio.on_event('set_name', router.handle_set_name, namespace=ns)
    socketio.on_event('create_room', router.handle_create_room, namespace=ns)
    socketio.on_event('join_room', router.handle_join_room, namespace=ns)
    socketio.on_event('toss_call', router.handle_toss_call, namespace=ns)
    socketio.on_event('toss_proceed', router.handle_toss_proceed, namespace=ns)
    socketio.on_event('toss_decide', router.handle_toss_decide, namespace=ns)
    socketio.on_event('play', router.handle_play, namespace=ns)
