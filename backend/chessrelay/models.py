from typing import Any, Dict, List, Optional

from chessrelay.errors import AlreadyInRoom, RoomFull

# Two-player rooms only
ROOM_CAPACITY = 2


class Participant:
    """Identity of one side of a room, copied from the connection at join time."""

    __slots__ = ('handle', 'display_name')

    def __init__(self, handle: str, display_name: str = ''):
        self.handle = handle
        self.display_name = display_name or ''

    @classmethod
    def from_connection(cls, connection) -> 'Participant':
        return cls(connection.handle, connection.display_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'handle': self.handle,
            'displayName': self.display_name,
        }

    def __repr__(self):
        return f"<Participant {self.handle} {self.display_name!r}>"


class Room:
    """A bounded session; participants are kept in join order."""

    capacity = ROOM_CAPACITY

    def __init__(self, room_id: str):
        self.room_id = room_id
        self.participants: List[Participant] = []

    @property
    def status(self) -> str:
        if not self.participants:
            return 'empty'
        if self.is_full:
            return 'active'
        return 'waiting'

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= self.capacity

    @property
    def is_empty(self) -> bool:
        return not self.participants

    def handles(self) -> List[str]:
        return [p.handle for p in self.participants]

    def has(self, handle: str) -> bool:
        return any(p.handle == handle for p in self.participants)

    def get(self, handle: str) -> Optional[Participant]:
        for p in self.participants:
            if p.handle == handle:
                return p
        return None

    def others(self, handle: Optional[str]) -> List[Participant]:
        return [p for p in self.participants if p.handle != handle]

    def add(self, participant: Participant) -> None:
        if self.has(participant.handle):
            raise AlreadyInRoom(self.room_id)
        if self.is_full:
            raise RoomFull(self.room_id)
        self.participants.append(participant)

    def remove(self, handle: str) -> Optional[Participant]:
        participant = self.get(handle)
        if participant is not None:
            self.participants.remove(participant)
        return participant

    def to_dict(self) -> Dict[str, Any]:
        return {
            'roomId': self.room_id,
            'players': [p.to_dict() for p in self.participants],
        }

    def __repr__(self):
        return f"<Room {self.room_id} {self.status} {self.handles()}>"
