import os
import sys
import pytest

# Ensure the backend root (containing the `pitch` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from pitch import create_app, socketio
from pitch.identity import IdentityTable
from pitch.models import GameSession, Phase


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    ROOM_CODE_LENGTH = 6
    DEFAULT_PLAYER_NAME = 'Player'
    LOG_LEVEL = 'DEBUG'


class FixedToss:
    """Stand-in for the toss RNG that always draws ``number``."""

    def __init__(self, number):
        self.number = number
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.number


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def router(flask_app):
    return flask_app.extensions['pitch']


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; disconnects them on teardown."""
    clients = []

    def _connect(name=None):
        sio = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        if name is not None:
            sio.emit('set_name', name)
        sio.get_received()
        clients.append(sio)
        return sio

    yield _connect
    for sio in clients:
        try:
            if sio.is_connected():
                sio.disconnect()
        except Exception:
            pass


@pytest.fixture()
def identities():
    table = IdentityTable()
    table.set_name('sid-a', 'Alice')
    table.set_name('sid-b', 'Bob')
    return table


@pytest.fixture()
def session():
    return GameSession.start('sid-a', 'sid-b')


@pytest.fixture()
def passing_session(session):
    """Session past the toss with Alice holding the ball."""
    session.toss_winner = 'sid-a'
    session.ball_holder = 'sid-a'
    session.phase = Phase.PASS
    return session


def events(received, name):
    return [pkt['args'][0] if pkt['args'] else None for pkt in received if pkt['name'] == name]
