import json
from datetime import datetime, timezone

from pydantic import ValidationError

from signaling_server.handlers.base_handler import JSONRequestHandler
from signaling_server.models import CommandRequest
from signaling_server.services.robot_control_service import DEFAULT_HISTORY_LIMIT


def _parse_limit(raw: str | None) -> int:
    try:
        limit = int(raw) if raw is not None else DEFAULT_HISTORY_LIMIT
    except ValueError:
        return DEFAULT_HISTORY_LIMIT
    return limit if limit > 0 else DEFAULT_HISTORY_LIMIT


class RobotStatusHandler(JSONRequestHandler):
    def get(self):
        self.write_json(
            {
                "status": self.control.get_robot_status().to_json(),
                "lastUpdate": datetime.now(timezone.utc).isoformat(),
            }
        )


class CommandHistoryHandler(JSONRequestHandler):
    def get(self):
        limit = _parse_limit(self.get_argument("limit", default=None))
        commands = self.control.get_command_history(limit)
        self.write_json(
            {
                "commands": [record.model_dump(mode="json") for record in commands],
                "total": self.control.total_commands(),
            }
        )


class EmergencyStopHandler(JSONRequestHandler):
    def post(self):
        result = self.control.emergency_stop()
        self.write_json(result, status=200 if result["success"] else 503)


class RobotCommandHandler(JSONRequestHandler):
    """Send a command to the robot on behalf of an external integration."""

    def post(self):
        try:
            body = json.loads(self.request.body or b"{}")
        except ValueError:
            self.write_json({"success": False, "error": "Invalid JSON body"}, status=400)
            return
        try:
            request = CommandRequest.model_validate(body)
        except ValidationError:
            self.write_json({"success": False, "error": "Command is required"}, status=400)
            return

        result = self.control.inject_command(request.command, request.params, source="api")
        self.write_json(result, status=200 if result["success"] else 503)
