from .broker_state import BrokerState
from .connection_registry import Connection, ConnectionRegistry, deliver
from .message_router import MessageRouter
from .robot_control_service import RobotControlService
from .session_handler import SessionLifecycleHandler

__all__ = [
    "BrokerState",
    "Connection",
    "ConnectionRegistry",
    "deliver",
    "MessageRouter",
    "RobotControlService",
    "SessionLifecycleHandler",
]
