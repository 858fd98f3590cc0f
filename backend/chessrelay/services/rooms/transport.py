from flask_socketio import join_room, leave_room


class SocketIOTransport:
    """Delivers room events over Flask-SocketIO.

    `attach`/`detach` mirror room membership into Socket.IO rooms so the
    transport can clean up after itself; routing never depends on them.
    `attach` and `detach` use the Flask-SocketIO helpers and therefore need
    an app context, which every event handler has.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def send(self, handle: str, event: str, payload) -> None:
        self.socketio.emit(event, payload, to=handle, namespace=self.namespace)

    def attach(self, handle: str, room_id: str) -> None:
        join_room(room_id, sid=handle, namespace=self.namespace)

    def detach(self, handle: str, room_id: str) -> None:
        leave_room(room_id, sid=handle, namespace=self.namespace)
