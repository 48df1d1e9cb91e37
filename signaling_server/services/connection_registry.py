from typing import Optional, Protocol


class Connection(Protocol):
    """Transport-owned bidirectional channel. The broker only keeps references to it."""

    @property
    def is_open(self) -> bool: ...

    def send(self, message: str) -> None: ...


def deliver(connection: Optional[Connection], message: str) -> bool:
    """Best-effort send. Returns False when there is no open connection to send to."""
    if connection is None or not connection.is_open:
        return False
    connection.send(message)
    return True


class ConnectionRegistry:
    """
    Holds at most one viewer and one streamer connection.

    Registering a role replaces the previous holder without touching it.
    A connection never occupies both slots at once.
    """

    def __init__(self):
        self._viewer: Optional[Connection] = None
        self._streamer: Optional[Connection] = None

    def set_viewer(self, connection: Connection) -> None:
        if self._streamer is connection:
            self._streamer = None
        self._viewer = connection

    def set_streamer(self, connection: Connection) -> None:
        if self._viewer is connection:
            self._viewer = None
        self._streamer = connection

    def clear_if_viewer(self, connection: Connection) -> bool:
        if connection is not None and self._viewer is connection:
            self._viewer = None
            return True
        return False

    def clear_if_streamer(self, connection: Connection) -> bool:
        if connection is not None and self._streamer is connection:
            self._streamer = None
            return True
        return False

    def current_viewer(self) -> Optional[Connection]:
        return self._viewer

    def current_streamer(self) -> Optional[Connection]:
        return self._streamer

    def open_viewer(self) -> Optional[Connection]:
        viewer = self._viewer
        return viewer if viewer is not None and viewer.is_open else None

    def open_streamer(self) -> Optional[Connection]:
        streamer = self._streamer
        return streamer if streamer is not None and streamer.is_open else None

    def is_viewer(self, connection: Connection) -> bool:
        return self._viewer is not None and self._viewer is connection

    def is_streamer(self, connection: Connection) -> bool:
        return self._streamer is not None and self._streamer is connection
