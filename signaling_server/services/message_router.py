import json
import logging
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from signaling_server.models import (
    ROBOT_NOT_CONNECTED,
    CommandHistoryMessage,
    CommandRecord,
    PeerSignal,
    PongMessage,
    RobotCommandMessage,
    RobotResponseMessage,
    RobotStatusMessage,
    RobotStatusUpdateMessage,
    SignalEnvelope,
    encode,
    now_ms,
)
from signaling_server.services.broker_state import BrokerState
from signaling_server.services.connection_registry import Connection, deliver

logger = logging.getLogger(__name__)

HISTORY_REPLY_LIMIT = 20

Handler = Callable[[Connection, Dict[str, Any]], None]


def _client_timestamp(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


class MessageRouter:
    """
    Dispatches inbound WebSocket messages by their ``type`` tag.

    Every handler runs synchronously on the IOLoop, so reads and writes of the
    broker state never interleave between two messages. Outbound sends are
    fire-and-forget.
    """

    def __init__(self, state: BrokerState):
        self.state = state
        self._handlers: Dict[str, Handler] = {
            "viewer": self._handle_viewer,
            "streamer": self._handle_streamer,
            "offer": self._handle_offer,
            "answer": self._handle_answer,
            "candidate": self._handle_candidate,
            "robot_command": self._handle_robot_command,
            "robot_response": self._handle_robot_response,
            "robot_status_update": self._handle_status_update,
            "ping": self._handle_ping,
            "get_robot_status": self._handle_get_robot_status,
            "get_command_history": self._handle_get_command_history,
        }

    def handle_message(self, sender: Connection, message: str | bytes) -> None:
        payload = self._parse_message(message)
        if payload is None:
            return

        msg_type = payload["type"]
        handler = self._handlers.get(msg_type)
        if handler is None:
            logger.info(f"Unknown message type: {msg_type}")
            return
        logger.debug(f"Received: {msg_type}")
        handler(sender, payload)

    def _parse_message(self, message: str | bytes) -> Optional[Dict[str, Any]]:
        try:
            payload = json.loads(message)
        # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting raises RecursionError.
        except (ValueError, RecursionError) as exc:
            logger.warning(f"Error parsing message: {exc}")
            return None

        if not isinstance(payload, dict):
            logger.warning(f"Dropping non-object message: {message[:200]!r}")
            return None
        try:
            SignalEnvelope.model_validate(payload)
        except ValidationError:
            logger.warning(f"Dropping message without a type: {message[:200]!r}")
            return None
        return payload

    def _send_status(self, connection: Optional[Connection]) -> bool:
        status = self.state.status.snapshot()
        return deliver(connection, encode(RobotStatusMessage(status=status)))

    def _handle_viewer(self, sender: Connection, payload: Dict[str, Any]) -> None:
        registry = self.state.registry
        registry.set_viewer(sender)
        logger.info("Viewer connected")
        self._send_status(sender)

        if deliver(registry.open_streamer(), encode(PeerSignal(type="viewer-ready"))):
            self.state.status.set_connected(True)

    def _handle_streamer(self, sender: Connection, payload: Dict[str, Any]) -> None:
        registry = self.state.registry
        registry.set_streamer(sender)
        logger.info("Streamer (robot) connected")
        self.state.status.set_connected(True)
        self.state.status.set_streaming(False)

        deliver(registry.open_viewer(), encode(PeerSignal(type="streamer-ready")))

    def _handle_offer(self, sender: Connection, payload: Dict[str, Any]) -> None:
        self.state.status.set_streaming(True)
        if not deliver(self.state.registry.open_viewer(), json.dumps(payload)):
            logger.warning("No viewer available to receive offer")

    def _handle_answer(self, sender: Connection, payload: Dict[str, Any]) -> None:
        if not deliver(self.state.registry.open_streamer(), json.dumps(payload)):
            logger.warning("No streamer available to receive answer")

    def _handle_candidate(self, sender: Connection, payload: Dict[str, Any]) -> None:
        registry = self.state.registry
        if registry.is_viewer(sender):
            target = registry.open_streamer()
        elif registry.is_streamer(sender):
            target = registry.open_viewer()
        else:
            logger.warning("Dropping ICE candidate from a connection without a role")
            return
        deliver(target, json.dumps(payload))

    def _handle_robot_command(self, sender: Connection, payload: Dict[str, Any]) -> None:
        try:
            command = RobotCommandMessage.model_validate(payload)
        except ValidationError as exc:
            logger.warning(f"Invalid robot_command: {exc}")
            return

        logger.info(f"Robot command received: {command.command}")
        received_at = now_ms()
        self.state.commands.insert(
            CommandRecord(
                command=command.command,
                params=command.params,
                timestamp=received_at,
                source="viewer",
            )
        )
        self.state.status.record_command(
            CommandRecord(
                command=command.command,
                params=command.params,
                timestamp=_client_timestamp(command.timestamp) or received_at,
                source="viewer",
            )
        )

        if deliver(self.state.registry.open_streamer(), json.dumps(payload)):
            return
        logger.warning("No robot available to receive command")
        response = RobotResponseMessage(
            success=False,
            error=ROBOT_NOT_CONNECTED,
            command_id=command.command_id,
        )
        deliver(sender, encode(response, exclude_none=True))

    def _handle_robot_response(self, sender: Connection, payload: Dict[str, Any]) -> None:
        deliver(self.state.registry.open_viewer(), json.dumps(payload))

    def _handle_status_update(self, sender: Connection, payload: Dict[str, Any]) -> None:
        try:
            update = RobotStatusUpdateMessage.model_validate(payload)
        except ValidationError as exc:
            logger.warning(f"Invalid robot_status_update: {exc}")
            return

        self.state.status.merge(update.status)
        self._send_status(self.state.registry.open_viewer())

    def _handle_ping(self, sender: Connection, payload: Dict[str, Any]) -> None:
        deliver(sender, encode(PongMessage()))

    def _handle_get_robot_status(self, sender: Connection, payload: Dict[str, Any]) -> None:
        self._send_status(sender)

    def _handle_get_command_history(self, sender: Connection, payload: Dict[str, Any]) -> None:
        history = CommandHistoryMessage(commands=self.state.commands.recent(HISTORY_REPLY_LIMIT))
        deliver(sender, encode(history))
