from .health_handler import HealthHandler, StatsHandler
from .docs_handler import DocsHandler
from .robot_handlers import (
    CommandHistoryHandler,
    EmergencyStopHandler,
    RobotCommandHandler,
    RobotStatusHandler,
)
from .signaling_ws_handler import SignalingWebSocketHandler

__all__ = [
    "HealthHandler",
    "StatsHandler",
    "DocsHandler",
    "CommandHistoryHandler",
    "EmergencyStopHandler",
    "RobotCommandHandler",
    "RobotStatusHandler",
    "SignalingWebSocketHandler",
]
