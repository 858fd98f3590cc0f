"""Room services: store, lifecycle, relay and membership notifications.

Everything here is transport agnostic and takes its transport by
injection; Socket.IO handlers in `chessrelay.socketio_events` are the only
callers in the running server.
"""

from .lifecycle import RoomLifecycleManager
from .notifier import MembershipNotifier, fan_out
from .relay import ActionRelay
from .store import RoomStore, generate_room_id


class RoomServices:
    """One independent set of room services sharing a store and a lock."""

    def __init__(self, transport, store: RoomStore = None):
        self.transport = transport
        self.store = store if store is not None else RoomStore()
        self.notifier = MembershipNotifier(transport)
        self.lifecycle = RoomLifecycleManager(self.store, transport, notifier=self.notifier)
        self.relay = ActionRelay(self.store, transport, lock=self.lifecycle.lock)


__all__ = [
    'ActionRelay',
    'MembershipNotifier',
    'RoomLifecycleManager',
    'RoomServices',
    'RoomStore',
    'fan_out',
    'generate_room_id',
]
