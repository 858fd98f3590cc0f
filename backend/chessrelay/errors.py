from typing import Any, Dict, Optional


class RoomError(Exception):
    """Base class for join/create rejections that are reported back to the client."""

    message = 'room error'

    def __init__(self, room_id: Optional[str] = None, message: Optional[str] = None):
        self.room_id = room_id
        if message is not None:
            self.message = message
        super().__init__(f"{self.message} (room={room_id})")

    def to_dict(self) -> Dict[str, Any]:
        return {'error': True, 'message': self.message}


class RoomNotFound(RoomError):
    message = 'room does not exist'


class RoomEmpty(RoomError):
    # Not reachable while rooms are deleted as soon as they empty
    message = 'room is empty'


class RoomFull(RoomError):
    message = 'room is full'


class AlreadyInRoom(RoomError):
    message = 'already in a room'
