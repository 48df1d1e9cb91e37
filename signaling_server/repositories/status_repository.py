from typing import Optional

from signaling_server.models import CommandRecord, RobotStatus, RobotStatusUpdate

# Fields that never accept null, even if the robot sends one explicitly.
_NON_NULLABLE = frozenset({"connected", "streaming"})


class RobotStatusStore:
    """Holds the single robot status record and applies partial updates to it."""

    def __init__(self, status: Optional[RobotStatus] = None):
        self._status = status or RobotStatus()

    def snapshot(self) -> RobotStatus:
        return self._status.model_copy(deep=True)

    def set_connected(self, connected: bool) -> None:
        self._status.connected = connected

    def set_streaming(self, streaming: bool) -> None:
        self._status.streaming = streaming

    def record_command(self, record: CommandRecord) -> None:
        self._status.last_command = record
        self._status.command_count += 1

    def merge(self, update: RobotStatusUpdate) -> RobotStatus:
        """
        Overwrite only the fields that were present in the update payload.
        Absent fields keep their previous value.
        """
        for field in update.model_fields_set:
            value = getattr(update, field)
            if value is None and field in _NON_NULLABLE:
                continue
            setattr(self._status, field, value)
        return self.snapshot()
