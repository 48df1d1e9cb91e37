from dataclasses import dataclass, field

from signaling_server.repositories import CommandLog, RobotStatusStore
from signaling_server.services.connection_registry import ConnectionRegistry


@dataclass
class BrokerState:
    """Shared state owned by one application instance and injected into every handler."""

    status: RobotStatusStore = field(default_factory=RobotStatusStore)
    commands: CommandLog = field(default_factory=CommandLog)
    registry: ConnectionRegistry = field(default_factory=ConnectionRegistry)
