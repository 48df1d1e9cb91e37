"""Pydantic models for broker state and WebSocket message schemas."""

from .messages import (
    CommandRecord,
    CommandSource,
    RobotStatus,
    SignalEnvelope,
    RobotCommandMessage,
    RobotStatusUpdate,
    RobotStatusUpdateMessage,
    RobotStatusMessage,
    CommandHistoryMessage,
    PongMessage,
    ConnectionEstablishedMessage,
    RobotResponseMessage,
    RobotCommandEnvelope,
    CommandRequest,
    SchemaDocument,
    PeerSignal,
    ROBOT_NOT_CONNECTED,
    encode,
    now_ms,
)

__all__ = [
    "CommandRecord",
    "CommandSource",
    "RobotStatus",
    "SignalEnvelope",
    "RobotCommandMessage",
    "RobotStatusUpdate",
    "RobotStatusUpdateMessage",
    "RobotStatusMessage",
    "CommandHistoryMessage",
    "PongMessage",
    "ConnectionEstablishedMessage",
    "RobotResponseMessage",
    "RobotCommandEnvelope",
    "CommandRequest",
    "SchemaDocument",
    "PeerSignal",
    "ROBOT_NOT_CONNECTED",
    "encode",
    "now_ms",
]
