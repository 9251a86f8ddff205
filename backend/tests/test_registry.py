import random

import pytest

from pitch.errors import RoomUnavailable
from pitch.identity import IdentityTable
from pitch.models import Phase, Visibility, generate_room_code
from pitch.registry import RoomRegistry
from pitch.services.games import project_view, public_room_listing, room_ready_payload


@pytest.fixture()
def registry():
    return RoomRegistry(rng=random.Random(7))


def test_create_room_registers_single_host(registry):
    room = registry.create_room('sid-a', Visibility.PUBLIC)
    assert len(room.code) == 6
    assert room.participants == ['sid-a']
    assert room.session is None
    assert registry.get(room.code) is room
    assert registry.get(room.code.lower()) is room


def test_room_code_regenerates_on_collision():
    class Scripted:
        def __init__(self):
            self.codes = iter(['AAAAAA', 'AAAAAA', 'BBBBBB'])

        def choices(self, alphabet, k):
            return list(next(self.codes))

    assert generate_room_code({'AAAAAA'}, rng=Scripted()) == 'BBBBBB'


def test_join_creates_session_with_host_as_caller(registry):
    room = registry.create_room('sid-a', Visibility.PRIVATE)
    session = registry.join_room(room.code, 'sid-b')
    assert room.session is session
    assert session.players == ('sid-a', 'sid-b')
    assert session.toss_caller == 'sid-a'
    assert session.phase is Phase.TOSS_CALL
    assert registry.find_room_by_participant('sid-b') is room


@pytest.mark.parametrize('case', ['unknown', 'full', 'own'])
def test_join_failures_raise_and_leave_registry_untouched(registry, case):
    room = registry.create_room('sid-a', Visibility.PUBLIC)
    other = registry.create_room('sid-c', Visibility.PUBLIC)
    code, joiner = {
        'unknown': ('ZZZZZZ', 'sid-b'),
        'full': (room.code, 'sid-d'),
        'own': (room.code, 'sid-a'),
    }[case]
    if case == 'full':
        registry.join_room(room.code, 'sid-b')
    before = [(r.code, list(r.participants), r.session) for r in registry]

    with pytest.raises(RoomUnavailable):
        registry.join_room(code, joiner)
    assert [(r.code, list(r.participants), r.session) for r in registry] == before
    assert registry.get(other.code) is other


def test_join_with_non_string_code_is_unavailable(registry):
    with pytest.raises(RoomUnavailable):
        registry.join_room(None, 'sid-b')


def test_public_listing_only_has_open_public_rooms(registry):
    open_room = registry.create_room('sid-a', Visibility.PUBLIC)
    registry.create_room('sid-b', Visibility.PRIVATE)
    full = registry.create_room('sid-c', Visibility.PUBLIC)
    registry.join_room(full.code, 'sid-d')
    assert registry.list_public_open_rooms() == [open_room]


def test_creating_a_new_room_releases_the_old_one(registry):
    first = registry.create_room('sid-a', Visibility.PUBLIC)
    second = registry.create_room('sid-a', Visibility.PUBLIC)
    assert registry.get(first.code) is None
    assert registry.find_room_by_participant('sid-a') is second
    assert len(registry) == 1


def test_release_participant_tears_down_room(registry):
    room = registry.create_room('sid-a', Visibility.PUBLIC)
    registry.join_room(room.code, 'sid-b')
    assert registry.release_participant('sid-b') is room
    assert registry.get(room.code) is None
    assert registry.find_room_by_participant('sid-a') is None
    assert registry.release_participant('sid-a') is None


def test_identity_table_defaults():
    table = IdentityTable(default_name='Player')
    assert table.name_of('sid-x') == 'Player'
    assert table.set_name('sid-x', '  ') == 'Player'
    assert table.set_name('sid-x', 42) == 'Player'
    assert table.set_name('sid-x', 'Zoe') == 'Zoe'
    table.forget('sid-x')
    assert 'sid-x' not in table
    assert table.name_of(None) is None


def test_view_never_exposes_connection_ids(registry, identities):
    room = registry.create_room('sid-a', Visibility.PUBLIC)
    session = registry.join_room(room.code, 'sid-b')
    session.toss_winner = 'sid-b'
    session.ball_holder = 'sid-a'
    session.phase = Phase.PASS
    session.scores['sid-b'] = 2
    session.set_message('{player} chose center', 'sid-b')

    view = project_view(session, identities)
    assert view == {
        'players': ['Alice', 'Bob'],
        'ball': 'Alice',
        'passCount': 0,
        'state': 'PASS',
        'scores': {'Alice': 0, 'Bob': 2},
        'scoreboard': [{'name': 'Alice', 'score': 0}, {'name': 'Bob', 'score': 2}],
        'msg': 'Bob chose center',
        'tossWinner': 'Bob',
    }
    assert 'sid-' not in repr(view)


def test_view_before_toss_has_no_holder(registry, identities):
    room = registry.create_room('sid-a', Visibility.PUBLIC)
    session = registry.join_room(room.code, 'sid-b')
    view = project_view(session, identities)
    assert view['ball'] is None
    assert view['tossWinner'] is None
    assert view['msg'] == ''
    assert view['state'] == 'TOSS_CALL'


def test_room_ready_and_listing_payloads(registry, identities):
    lobby = registry.create_room('sid-c', Visibility.PUBLIC)
    room = registry.create_room('sid-a', Visibility.PUBLIC)
    registry.join_room(room.code, 'sid-b')
    assert room_ready_payload(room, identities) == {
        'players': ['Alice', 'Bob'],
        'caller': 'Alice',
        'callerId': 'sid-a',
    }
    assert public_room_listing(registry, identities) == [{'code': lobby.code, 'host': 'Player'}]
