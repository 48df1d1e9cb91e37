from .command_repository import COMMAND_LOG_CAPACITY, CommandLog
from .status_repository import RobotStatusStore

__all__ = [
    "COMMAND_LOG_CAPACITY",
    "CommandLog",
    "RobotStatusStore",
]
