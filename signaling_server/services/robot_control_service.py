import logging
import time
from typing import Any, Dict, List, Optional

from signaling_server.models import (
    ROBOT_NOT_CONNECTED,
    CommandRecord,
    CommandSource,
    RobotCommandEnvelope,
    RobotStatus,
    encode,
    now_ms,
)
from signaling_server.services.broker_state import BrokerState
from signaling_server.services.connection_registry import deliver

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_RECENT_COMMANDS = 5
EMERGENCY_STOP_COMMAND = "emergency_stop"


class RobotControlService:
    """Read operations and command injection used by the HTTP endpoints."""

    def __init__(self, state: BrokerState):
        self.state = state
        self._started_at = time.monotonic()

    def uptime(self) -> float:
        return time.monotonic() - self._started_at

    def get_robot_status(self) -> RobotStatus:
        return self.state.status.snapshot()

    def get_command_history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> List[CommandRecord]:
        return self.state.commands.recent(limit)

    def get_recent_commands(self, n: int = DEFAULT_RECENT_COMMANDS) -> List[CommandRecord]:
        return self.state.commands.recent(n)

    def total_commands(self) -> int:
        return len(self.state.commands)

    def get_connection_summary(self) -> Dict[str, bool]:
        registry = self.state.registry
        return {
            "viewerConnected": registry.open_viewer() is not None,
            "streamerConnected": registry.open_streamer() is not None,
        }

    def get_command_stats(self, since_ms: int) -> Dict[str, int]:
        return self.state.commands.count_by_command(since_ms)

    def inject_command(
        self,
        command: str,
        params: Optional[Any] = None,
        source: CommandSource = "api",
    ) -> Dict[str, Any]:
        """
        Log a command issued outside any WebSocket and forward it to the robot.

        The viewer is never notified from this path; the caller gets the
        outcome as ``{"success": bool, "message" | "error": str}``.
        """
        if source not in ("api", "api_emergency"):
            raise ValueError(f"unsupported command source: {source}")
        params = {} if params is None else params
        emergency = source == "api_emergency"
        issued_at = now_ms()

        self.state.commands.insert(
            CommandRecord(command=command, params=params, timestamp=issued_at, source=source)
        )
        envelope = RobotCommandEnvelope(
            command=command,
            params=params,
            timestamp=issued_at,
            priority="emergency" if emergency else None,
            source=None if emergency else "api",
        )
        if not deliver(self.state.registry.open_streamer(), encode(envelope, exclude_none=True)):
            logger.warning(f"Cannot send {command!r}: no robot connected")
            return {"success": False, "error": ROBOT_NOT_CONNECTED}

        logger.info(f"Injected command {command!r} (source={source})")
        if emergency:
            return {"success": True, "message": "Emergency stop command sent to robot"}
        return {"success": True, "message": f'Command "{command}" sent to robot'}

    def emergency_stop(self) -> Dict[str, Any]:
        return self.inject_command(EMERGENCY_STOP_COMMAND, {}, source="api_emergency")
