from flask import Blueprint, current_app, jsonify

from pitch.services.games import project_view, public_room_listing

rooms = Blueprint('rooms', __name__)


def _router():
    return current_app.extensions['pitch']


@rooms.route('', methods=['GET'])
def list_rooms():
    """
    Returns the public rooms still waiting for a second player.
    """
    router = _router()
    return jsonify(public_room_listing(router.registry.list_public_open_rooms(), router.identities))


@rooms.route('/<string:code>', methods=['GET'])
def get_room(code):
    """
    Returns a room's lobby details and, once it is full, the game view.
    """
    router = _router()
    room = router.registry.get(code)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify({
        'code': room.code,
        'visibility': room.visibility.value,
        'players': [router.identities.name_of(p) for p in room.participants],
        'ready': room.session is not None,
        'game': project_view(room.session, router.identities) if room.session else None,
    })
