import time
from typing import Any, Dict, List, Optional, Literal, Union

from pydantic import BaseModel, Field, ConfigDict


CommandSource = Literal["viewer", "api", "api_emergency"]


def now_ms() -> int:
    return int(time.time() * 1000)


class CommandRecord(BaseModel):
    """Immutable log entry describing one command issued to the robot."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(..., description="Command name, e.g. 'forward' or 'emergency_stop'.")
    params: Any = Field(default=None, description="Arbitrary command parameters.")
    timestamp: int = Field(default_factory=now_ms, description="Milliseconds since epoch.")
    source: CommandSource = Field(..., description="Who issued the command.")


class RobotStatus(BaseModel):
    """Authoritative cached robot status, serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    connected: bool = Field(default=False, description="A streamer is attached to the broker.")
    streaming: bool = Field(default=False, description="The streamer has issued a WebRTC offer.")
    position: Optional[Any] = Field(default=None, description="Robot-reported position.")
    battery: Optional[Union[int, float]] = Field(default=None, description="Battery level in percent.")
    last_command: Optional[CommandRecord] = Field(default=None, alias="lastCommand")
    command_count: int = Field(default=0, ge=0, alias="commandCount")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class SignalEnvelope(BaseModel):
    """Minimal shape every inbound WebSocket message must have."""

    model_config = ConfigDict(extra="allow")

    type: str


class RobotCommandMessage(BaseModel):
    """Inbound command from viewer -> robot."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: Literal["robot_command"] = "robot_command"
    command: str = Field(..., description="Command name.")
    params: Any = Field(default_factory=dict, description="Command parameters.")
    timestamp: Optional[Any] = Field(default=None, description="Client timestamp (ms since epoch); ignored when not numeric.")
    command_id: Optional[Any] = Field(
        default=None, alias="commandId", description="Echoed back in error responses."
    )


class RobotStatusUpdate(BaseModel):
    """Partial status reported by the robot. Only keys that are present are merged."""

    model_config = ConfigDict(extra="ignore")

    connected: Optional[bool] = None
    streaming: Optional[bool] = None
    position: Optional[Any] = None
    battery: Optional[Union[int, float]] = None


class RobotStatusUpdateMessage(BaseModel):
    """Inbound telemetry from robot -> broker."""

    model_config = ConfigDict(extra="allow")

    type: Literal["robot_status_update"] = "robot_status_update"
    status: RobotStatusUpdate = Field(default_factory=RobotStatusUpdate)


class RobotStatusMessage(BaseModel):
    type: Literal["robot_status"] = "robot_status"
    status: RobotStatus


class CommandHistoryMessage(BaseModel):
    type: Literal["command_history"] = "command_history"
    commands: List[CommandRecord] = Field(default_factory=list)


class PongMessage(BaseModel):
    type: Literal["pong"] = "pong"
    timestamp: int = Field(default_factory=now_ms)


class ConnectionEstablishedMessage(BaseModel):
    """Sent to every WebSocket as soon as it is opened."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["connection_established"] = "connection_established"
    timestamp: int = Field(default_factory=now_ms)
    server_version: str = Field(default="2.0.0", alias="serverVersion")


class RobotResponseMessage(BaseModel):
    """Outbound robot_response generated by the broker itself."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["robot_response"] = "robot_response"
    success: bool
    error: Optional[str] = None
    command_id: Optional[Any] = Field(default=None, alias="commandId")


class RobotCommandEnvelope(BaseModel):
    """robot_command sent to the streamer on behalf of the HTTP API."""

    type: Literal["robot_command"] = "robot_command"
    command: str
    params: Any = Field(default_factory=dict)
    timestamp: int = Field(default_factory=now_ms)
    priority: Optional[Literal["emergency"]] = None
    source: Optional[Literal["api"]] = None


class CommandRequest(BaseModel):
    """Body of POST /robot/command."""

    command: str = Field(..., min_length=1)
    params: Any = Field(default_factory=dict)


class SchemaDocument(BaseModel):
    """Documentation payload served at /docs for quick reference."""

    websocket_endpoints: Dict[str, str]
    inbound_messages: Dict[str, Dict[str, Any]]
    outbound_messages: Dict[str, Dict[str, Any]]
    relay_rules: Dict[str, str] = Field(default_factory=dict)
    notes: List[str] = []


class PeerSignal(BaseModel):
    """Bare notification sent to one peer about the other peer's presence."""

    type: Literal["viewer-ready", "streamer-ready", "viewer-disconnected", "streamer-disconnected"]


ROBOT_NOT_CONNECTED = "Robot not connected"


def encode(message: BaseModel, exclude_none: bool = False) -> str:
    return message.model_dump_json(by_alias=True, exclude_none=exclude_none)
