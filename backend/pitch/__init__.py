from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

# One event at a time: game state is only touched from handlers
socketio = SocketIO(async_mode=None, async_handlers=False)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Process-scoped game state, owned by the router for the app's lifetime
    from pitch.identity import IdentityTable
    from pitch.registry import RoomRegistry
    from pitch.socketio_events import SessionRouter, register_socketio_handlers

    router = SessionRouter(
        registry=RoomRegistry(code_length=flask_app.config.get('ROOM_CODE_LENGTH', 6)),
        identities=IdentityTable(default_name=flask_app.config.get('DEFAULT_PLAYER_NAME', 'Player')),
        namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'),
    )
    flask_app.extensions['pitch'] = router

    from pitch.main import main
    flask_app.register_blueprint(main)

    from pitch.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    register_socketio_handlers(router)

    @click.command('serve')
    @click.option('--host', default=None, help='Interface to bind (defaults to HOST).')
    @click.option('--port', default=None, type=int, help='Port to listen on (defaults to PORT).')
    def serve_command(host, port):
        """Runs the Socket.IO game server."""
        run_server(flask_app, host=host, port=port)

    flask_app.cli.add_command(serve_command)

    return flask_app


def run_server(flask_app, host=None, port=None, debug=None):
    if debug is None:
        debug = bool(flask_app.config.get('DEBUG', False))
    host = host or flask_app.config.get('HOST', '0.0.0.0')
    port = port or flask_app.config.get('PORT', 3000)
    flask_app.logger.info(f"[listen] host={host} port={port}")
    socketio.run(
        flask_app,
        host=host,
        port=port,
        debug=debug,
        # Werkzeug is only allowed for local development
        allow_unsafe_werkzeug=debug,
    )
