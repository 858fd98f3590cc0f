import os
import sys
from collections import defaultdict

import pytest

# Ensure the backend root (containing the `chessrelay` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from chessrelay import create_app, socketio
from chessrelay.connections import Connection
from chessrelay.services.rooms import RoomServices


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    SOCKETIO_ASYNC_HANDLERS = False
    LOG_LEVEL = 'DEBUG'


class RecordingTransport:
    """Stands in for Socket.IO in service tests; remembers every send."""

    def __init__(self):
        self.sent = []
        self.groups = defaultdict(set)
        self.failing = set()

    def send(self, handle, event, payload):
        if handle in self.failing:
            raise ConnectionError(f"{handle} is gone")
        self.sent.append((handle, event, payload))

    def attach(self, handle, room_id):
        self.groups[room_id].add(handle)

    def detach(self, handle, room_id):
        self.groups[room_id].discard(handle)
        if not self.groups[room_id]:
            del self.groups[room_id]

    def events_for(self, handle, event=None):
        return [
            payload for (h, e, payload) in self.sent
            if h == handle and (event is None or e == event)
        ]


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def services(transport):
    return RoomServices(transport)


@pytest.fixture()
def make_conn():
    def _make(handle, name=''):
        return Connection(handle, name)
    return _make


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for connected Socket.IO test clients, optionally named."""
    clients = []

    def _connect(name=None):
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
        )
        if name is not None:
            test_client.emit('username', {'name': name})
        test_client.get_received()
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()
