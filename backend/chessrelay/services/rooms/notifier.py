import logging
from typing import Any, Iterable, Optional

from chessrelay.models import Participant, Room

logger = logging.getLogger(__name__)


def fan_out(transport, recipients: Iterable[Participant], event: str, payload: Any) -> int:
    """Send `event` to each recipient. A failing send is logged and skipped.

    Returns the number of successful deliveries.
    """
    delivered = 0
    for participant in recipients:
        try:
            transport.send(participant.handle, event, payload)
            delivered += 1
        except Exception:
            logger.exception(f"[deliver-failed] event={event} handle={participant.handle}")
    return delivered


class MembershipNotifier:
    """Tells the rest of a room about joins, departures and closure."""

    def __init__(self, transport):
        self.transport = transport

    def broadcast(self, room: Room, event: str, payload: Any, exclude: Optional[str] = None) -> int:
        return fan_out(self.transport, room.others(exclude), event, payload)

    def opponent_joined(self, room: Room, joiner: str) -> int:
        return self.broadcast(room, 'opponentJoined', room.to_dict(), exclude=joiner)

    def player_disconnected(self, room: Room, departed: Participant) -> int:
        return self.broadcast(room, 'playerDisconnected', departed.to_dict(), exclude=departed.handle)

    def room_closing(self, room: Room, initiator: Optional[str] = None) -> int:
        return self.broadcast(room, 'closeRoom', {'roomId': room.room_id}, exclude=initiator)
