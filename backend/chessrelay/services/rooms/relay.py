import logging
from typing import Any

from .notifier import fan_out

logger = logging.getLogger(__name__)


class ActionRelay:
    """Forwards opaque move payloads to the other side of a room.

    Payloads are not inspected; both clients run the rules engine themselves.
    """

    event = 'move'

    def __init__(self, store, transport, lock=None):
        self.store = store
        self.transport = transport
        self._lock = lock

    def relay(self, connection, room_id, payload: Any) -> int:
        if self._lock is None:
            return self._relay(connection, room_id, payload)
        with self._lock:
            return self._relay(connection, room_id, payload)

    def _relay(self, connection, room_id, payload: Any) -> int:
        room = self.store.get(room_id)
        if room is None:
            logger.debug(f"[relay-drop] room={room_id} handle={connection.handle} reason=no-room")
            return 0
        recipients = room.others(connection.handle)
        if not recipients:
            return 0
        delivered = fan_out(self.transport, recipients, self.event, payload)
        logger.debug(f"[relay] room={room_id} from={connection.handle} delivered={delivered}")
        return delivered
