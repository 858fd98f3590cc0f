import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class Connection:
    """A live Socket.IO client. `handle` is the sid and never changes."""

    __slots__ = ('handle', 'display_name')

    def __init__(self, handle: str, display_name: str = ''):
        self.handle = handle
        self.display_name = display_name

    def __repr__(self):
        return f"<Connection {self.handle} {self.display_name!r}>"


def handle_of(connection: Connection) -> str:
    return connection.handle


class ConnectionRegistry:
    """Tracks connected clients by handle. Knows nothing about rooms."""

    def __init__(self):
        self._connections: Dict[str, Connection] = {}

    def register(self, handle: str) -> Connection:
        conn = self._connections.get(handle)
        if conn is None:
            conn = Connection(handle)
            self._connections[handle] = conn
        return conn

    def unregister(self, handle: str) -> Optional[Connection]:
        return self._connections.pop(handle, None)

    def get(self, handle: str) -> Optional[Connection]:
        return self._connections.get(handle)

    def get_or_register(self, handle: str) -> Connection:
        return self.get(handle) or self.register(handle)

    def set_display_name(self, handle: str, name) -> Connection:
        """Store the client-supplied name. Last write wins, nothing is validated."""
        conn = self.get_or_register(handle)
        conn.display_name = '' if name is None else str(name)
        logger.debug(f"[username] handle={handle} name={conn.display_name!r}")
        return conn

    def handle_of(self, connection: Connection) -> str:
        return handle_of(connection)

    def __len__(self):
        return len(self._connections)

    def __contains__(self, handle):
        return handle in self._connections
