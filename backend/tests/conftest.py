import os
import random
import sys
import pytest

# Ensure the backend root (containing the `blindtest` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from blindtest import create_app, socketio
from blindtest.services.matchmaking import ManualScheduler, MatchEngine, MatchSettings

NAMESPACE = '/ws'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = NAMESPACE
    SCHEDULER = 'manual'


class RecordingBroadcaster:
    """Keeps every event per recipient sid instead of sending it anywhere."""

    def __init__(self):
        self.rooms = {}
        self.closed = []
        self.log = []

    def to_player(self, sid, event, data=None):
        self.log.append((sid, event, data))

    def to_match(self, match_id, event, data=None):
        for sid in self.rooms.get(match_id, []):
            self.log.append((sid, event, data))

    def join(self, sid, match_id):
        self.rooms.setdefault(match_id, []).append(sid)

    def close(self, match_id):
        self.rooms.pop(match_id, None)
        self.closed.append(match_id)

    def events(self, sid, name=None):
        return [(e, d) for s, e, d in self.log if s == sid and (name is None or e == name)]

    def names(self, sid):
        return [e for s, e, _ in self.log if s == sid]

    def clear(self):
        self.log.clear()


@pytest.fixture()
def settings():
    return MatchSettings()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def engine(settings, scheduler, broadcaster):
    return MatchEngine(settings, scheduler=scheduler, broadcaster=broadcaster, rng=random.Random(1234))


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def app_engine(flask_app):
    return flask_app.extensions['matchmaking']


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace=NAMESPACE,
        )
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected(NAMESPACE):
                test_client.disconnect(namespace=NAMESPACE)
        except Exception:
            pass
