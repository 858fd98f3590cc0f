from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(config):
    origins = config.get('CORS_ALLOWED_ORIGINS') or '*'
    if isinstance(origins, str):
        origins = [o.strip() for o in origins.split(',') if o.strip()]
    # engine.io only treats the bare string as a wildcard
    return '*' if '*' in origins else origins


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    # Service loggers live under this app's logger ('chessrelay.*')
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _allowed_origins(flask_app.config)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(
        flask_app,
        cors_allowed_origins=allowed_origins,
        async_handlers=flask_app.config.get('SOCKETIO_ASYNC_HANDLERS', False),
    )

    # One registry and room store per app; nothing is shared between apps
    from chessrelay.connections import ConnectionRegistry
    from chessrelay.services.rooms import RoomServices
    from chessrelay.services.rooms.transport import SocketIOTransport

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['chessrelay'] = {
        'connections': ConnectionRegistry(),
        'rooms': RoomServices(SocketIOTransport(socketio, namespace)),
    }

    from chessrelay.main import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    # Importing here ensures the handlers bind to the initialized socketio instance
    from chessrelay.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace)

    flask_app.logger.info(f"[startup] namespace={namespace}")
    return flask_app
