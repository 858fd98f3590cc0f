import logging
import threading
from typing import Optional

from chessrelay.errors import AlreadyInRoom, RoomEmpty, RoomFull, RoomNotFound
from chessrelay.models import Participant, Room
from .notifier import MembershipNotifier
from .store import RoomStore

logger = logging.getLogger(__name__)


class RoomLifecycleManager:
    """Create / join / close / disconnect transitions for two-seat rooms.

    Room states: waiting (one participant) -> active (full) -> closed
    (deleted from the store). Every transition runs under one lock so a
    handler sees the complete result of the previous one, and the store is
    always updated before anyone is notified.

    The transport only needs ``send(handle, event, payload)``,
    ``attach(handle, room_id)`` and ``detach(handle, room_id)``. Group
    membership on the transport side is kept in step with the room but the
    store remains the source of truth.
    """

    def __init__(self, store: RoomStore, transport, notifier: Optional[MembershipNotifier] = None, lock=None):
        self.store = store
        self.transport = transport
        self.notifier = notifier or MembershipNotifier(transport)
        self.lock = lock or threading.RLock()

    # ---- transitions ----

    def create_room(self, connection) -> str:
        with self.lock:
            previous = self.store.find_by_handle(connection.handle)
            if previous is not None:
                # One room per connection: creating again ends the old session
                logger.info(f"[room-replace] room={previous.room_id} handle={connection.handle}")
                self._end_after_departure(previous, connection.handle)
            room = self.store.create(Participant.from_connection(connection))
            self._attach(connection.handle, room.room_id)
            logger.info(f"[room-create] room={room.room_id} handle={connection.handle}")
            return room.room_id

    def join_room(self, connection, room_id) -> Room:
        with self.lock:
            room = self.store.get(room_id)
            if room is None:
                logger.info(f"[join-reject] room={room_id} handle={connection.handle} reason=not-found")
                raise RoomNotFound(room_id)
            if room.is_empty:
                logger.warning(f"[join-reject] room={room_id} handle={connection.handle} reason=empty")
                raise RoomEmpty(room_id)
            if room.is_full:
                logger.info(f"[join-reject] room={room_id} handle={connection.handle} reason=full")
                raise RoomFull(room_id)
            if self.store.find_by_handle(connection.handle) is not None:
                logger.info(f"[join-reject] room={room_id} handle={connection.handle} reason=already-in-room")
                raise AlreadyInRoom(room_id)

            self.store.add_participant(room_id, Participant.from_connection(connection))
            self._attach(connection.handle, room_id)
            logger.info(f"[room-join] room={room_id} handle={connection.handle} players={len(room.participants)}")
            self.notifier.opponent_joined(room, joiner=connection.handle)
            return room

    def close_room(self, room_id, initiating_connection=None) -> bool:
        """Close a room and tell everyone else in it. Unknown ids are ignored."""
        with self.lock:
            room = self.store.get(room_id)
            if room is None:
                logger.debug(f"[room-close-skip] room={room_id} already closed")
                return False
            initiator = initiating_connection.handle if initiating_connection is not None else None
            self.notifier.room_closing(room, initiator=initiator)
            for handle in room.handles():
                self._detach(handle, room_id)
            self.store.delete(room_id)
            logger.info(f"[room-close] room={room_id} by={initiator}")
            return True

    def handle_disconnect(self, connection) -> Optional[Room]:
        """End whatever session the dropped connection was part of."""
        with self.lock:
            room = self.store.find_by_handle(connection.handle)
            if room is None:
                return None
            self._end_after_departure(room, connection.handle)
            logger.info(f"[room-disconnect] room={room.room_id} handle={connection.handle}")
            return room

    # ---- helpers ----

    def _end_after_departure(self, room: Room, handle: str) -> None:
        departed = self.store.remove_participant(room.room_id, handle)
        self._detach(handle, room.room_id)
        if room.room_id not in self.store:
            # Sole occupant left; the store already dropped the room
            return
        if departed is not None:
            self.notifier.player_disconnected(room, departed)
        for other in room.handles():
            self._detach(other, room.room_id)
        self.store.delete(room.room_id)

    def _attach(self, handle: str, room_id: str) -> None:
        try:
            self.transport.attach(handle, room_id)
        except Exception:
            logger.exception(f"[attach-failed] room={room_id} handle={handle}")

    def _detach(self, handle: str, room_id: str) -> None:
        try:
            self.transport.detach(handle, room_id)
        except Exception:
            logger.exception(f"[detach-failed] room={room_id} handle={handle}")

    # ---- queries ----

    def get_room(self, room_id) -> Optional[Room]:
        with self.lock:
            return self.store.get(room_id)
