import uuid
from typing import Callable, Dict, List, Optional, Set

from chessrelay.models import Participant, Room


def generate_room_id() -> str:
    return str(uuid.uuid4())


class RoomStore:
    """In-memory mapping of room id -> Room.

    The only place rooms are created or deleted. Ids handed out by
    `create` are remembered so an id is never issued twice, even after the
    room it named is gone. Nothing here is persisted.
    """

    def __init__(self, id_factory: Callable[[], str] = generate_room_id):
        self._id_factory = id_factory
        self._rooms: Dict[str, Room] = {}
        self._issued: Set[str] = set()

    def _new_room_id(self) -> str:
        while True:
            room_id = self._id_factory()
            if room_id not in self._issued and room_id not in self._rooms:
                self._issued.add(room_id)
                return room_id

    def create(self, creator: Participant) -> Room:
        room = Room(self._new_room_id())
        room.add(creator)
        self._rooms[room.room_id] = room
        return room

    def get(self, room_id) -> Optional[Room]:
        if not isinstance(room_id, str):
            return None
        return self._rooms.get(room_id)

    def add_participant(self, room_id: str, participant: Participant) -> Room:
        """Append to an existing room. Raises KeyError for unknown ids."""
        room = self._rooms[room_id]
        room.add(participant)
        return room

    def remove_participant(self, room_id: str, handle: str) -> Optional[Participant]:
        """Remove one participant; an emptied room is deleted in the same step."""
        room = self._rooms.get(room_id)
        if room is None:
            return None
        participant = room.remove(handle)
        if room.is_empty:
            del self._rooms[room_id]
        return participant

    def delete(self, room_id) -> Optional[Room]:
        return self._rooms.pop(room_id, None)

    def find_by_handle(self, handle: str) -> Optional[Room]:
        # Linear scan; a handle -> room_id index would replace this if room counts grow
        for room in self._rooms.values():
            if room.has(handle):
                return room
        return None

    def was_issued(self, room_id: str) -> bool:
        return room_id in self._issued

    def all(self) -> List[Room]:
        return list(self._rooms.values())

    def __contains__(self, room_id):
        return room_id in self._rooms

    def __len__(self):
        return len(self._rooms)
