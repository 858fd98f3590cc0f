from typing import Any, Dict

from flask import current_app, request

from chessrelay import socketio
from chessrelay.connections import Connection
from chessrelay.errors import RoomError


def _get_sid() -> str:
    return request.sid  # type: ignore


def _services():
    ext = current_app.extensions['chessrelay']
    return ext['connections'], ext['rooms']


def _current_connection() -> Connection:
    connections, _ = _services()
    return connections.get_or_register(_get_sid())


def _room_id_from(data, key: str = 'roomId'):
    if isinstance(data, dict):
        return data.get(key)
    if isinstance(data, str):
        return data
    return None


def handle_connect(auth=None):
    connections, _ = _services()
    connections.register(_get_sid())
    current_app.logger.info(f"[connect] handle={_get_sid()}")


def handle_disconnect(reason=None):
    connections, rooms = _services()
    sid = _get_sid()
    conn = connections.unregister(sid) or Connection(sid)
    rooms.lifecycle.handle_disconnect(conn)
    current_app.logger.info(f"[disconnect] handle={sid} reason={reason}")


def handle_username(data=None):
    # Older clients send the bare name instead of {'name': ...}
    name = data.get('name') if isinstance(data, dict) else data
    connections, _ = _services()
    connections.set_display_name(_get_sid(), name)


def handle_create_room(data=None) -> str:
    _, rooms = _services()
    return rooms.lifecycle.create_room(_current_connection())


def handle_join_room(data=None) -> Dict[str, Any]:
    _, rooms = _services()
    try:
        room = rooms.lifecycle.join_room(_current_connection(), _room_id_from(data))
    except RoomError as exc:
        return exc.to_dict()
    return room.to_dict()


def handle_move(data=None):
    if not isinstance(data, dict):
        return
    _, rooms = _services()
    rooms.relay.relay(_current_connection(), data.get('room'), data.get('move'))


def handle_close_room(data=None):
    _, rooms = _services()
    rooms.lifecycle.close_room(_room_id_from(data), _current_connection())


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace.

    Event names match the browser client (camelCase). Handlers that return
    a value answer the client's ack callback; clients that emit without a
    callback just don't get one.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('username', handle_username, namespace=namespace)
    socketio.on_event('createRoom', handle_create_room, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('move', handle_move, namespace=namespace)
    socketio.on_event('closeRoom', handle_close_room, namespace=namespace)
