from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('ALLOWED_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from blindtest.main import main
    flask_app.register_blueprint(main)

    # One engine per app; handlers and the health route find it here
    from blindtest.services.matchmaking import (
        ManualScheduler,
        MatchEngine,
        MatchSettings,
        SocketIOBroadcaster,
        SocketIOScheduler,
    )
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/ws')
    if flask_app.config.get('SCHEDULER') == 'manual':
        scheduler = ManualScheduler()
    else:
        scheduler = SocketIOScheduler(socketio)
    flask_app.extensions['matchmaking'] = MatchEngine(
        MatchSettings.from_config(flask_app.config),
        scheduler=scheduler,
        broadcaster=SocketIOBroadcaster(socketio, namespace=namespace),
    )

    from blindtest.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
