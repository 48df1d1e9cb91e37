import tornado.web

from signaling_server.models import (
    CommandHistoryMessage,
    ConnectionEstablishedMessage,
    PeerSignal,
    PongMessage,
    RobotCommandEnvelope,
    RobotCommandMessage,
    RobotResponseMessage,
    RobotStatusMessage,
    RobotStatusUpdateMessage,
    SchemaDocument,
    SignalEnvelope,
)


class DocsHandler(tornado.web.RequestHandler):
    def get(self):
        schema = SchemaDocument(
            websocket_endpoints={
                "signaling": "/ws",
            },
            inbound_messages={
                "SignalEnvelope": SignalEnvelope.model_json_schema(),
                "RobotCommandMessage": RobotCommandMessage.model_json_schema(by_alias=True),
                "RobotStatusUpdateMessage": RobotStatusUpdateMessage.model_json_schema(),
            },
            outbound_messages={
                "ConnectionEstablishedMessage": ConnectionEstablishedMessage.model_json_schema(by_alias=True),
                "RobotStatusMessage": RobotStatusMessage.model_json_schema(by_alias=True),
                "CommandHistoryMessage": CommandHistoryMessage.model_json_schema(),
                "PongMessage": PongMessage.model_json_schema(),
                "RobotResponseMessage": RobotResponseMessage.model_json_schema(by_alias=True),
                "RobotCommandEnvelope": RobotCommandEnvelope.model_json_schema(),
                "PeerSignal": PeerSignal.model_json_schema(),
            },
            relay_rules={
                "viewer": "register sender as viewer; reply robot_status; send viewer-ready to streamer",
                "streamer": "register sender as streamer; send streamer-ready to viewer",
                "offer": "streamer -> viewer",
                "answer": "viewer -> streamer",
                "candidate": "to the peer of the sender's role",
                "robot_command": "viewer -> streamer, or robot_response error back to sender",
                "robot_response": "streamer -> viewer",
                "robot_status_update": "merged into robot status, robot_status sent to viewer",
                "ping": "pong to sender",
                "get_robot_status": "robot_status to sender",
                "get_command_history": "last 20 commands to sender",
            },
            notes=[
                "All WebSocket messages are JSON objects with a 'type' field.",
                "Only one viewer and one streamer are tracked; a new announcement replaces the previous one.",
                "Relays are best effort: messages with no open target are dropped.",
                "Unknown message types and malformed JSON are ignored; the socket stays open.",
            ],
        )
        self.set_header("Content-Type", "application/json")
        self.write(schema.model_dump(mode="json"))
