from datetime import datetime, timezone

from signaling_server.handlers.base_handler import JSONRequestHandler
from signaling_server.models import now_ms

STATS_WINDOW_MS = 60 * 60 * 1000


def _label(connected: bool) -> str:
    return "connected" if connected else "disconnected"


class HealthHandler(JSONRequestHandler):
    def get(self):
        summary = self.control.get_connection_summary()
        self.write_json(
            {
                "status": "ok",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "connections": {
                    "viewer": _label(summary["viewerConnected"]),
                    "streamer": _label(summary["streamerConnected"]),
                },
                "robotStatus": self.control.get_robot_status().to_json(),
                "recentCommands": [
                    record.model_dump(mode="json") for record in self.control.get_recent_commands()
                ],
                "uptime": self.control.uptime(),
            }
        )


class StatsHandler(JSONRequestHandler):
    """Command usage over the last hour."""

    def get(self):
        breakdown = self.control.get_command_stats(now_ms() - STATS_WINDOW_MS)
        summary = self.control.get_connection_summary()
        self.write_json(
            {
                "totalCommands": self.control.total_commands(),
                "commandsLastHour": sum(breakdown.values()),
                "commandBreakdown": breakdown,
                "currentStatus": self.control.get_robot_status().to_json(),
                "serverUptime": self.control.uptime(),
                "connections": {
                    "viewer": summary["viewerConnected"],
                    "streamer": summary["streamerConnected"],
                },
            }
        )
