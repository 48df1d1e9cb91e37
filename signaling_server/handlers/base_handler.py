import logging
from typing import Any, Dict

import tornado.web

from signaling_server.services import RobotControlService

logger = logging.getLogger(__name__)


class JSONRequestHandler(tornado.web.RequestHandler):
    """Base for the HTTP endpoints. Errors are rendered as JSON, never as HTML."""

    def initialize(self, control: RobotControlService):
        self.control = control

    def write_json(self, payload: Dict[str, Any], status: int = 200) -> None:
        self.set_status(status)
        self.set_header("Content-Type", "application/json")
        self.finish(payload)

    def write_error(self, status_code: int, **kwargs: Any) -> None:
        message = self._reason
        exc_info = kwargs.get("exc_info")
        if exc_info is not None:
            exc = exc_info[1]
            if isinstance(exc, tornado.web.HTTPError):
                message = exc.log_message or self._reason
            else:
                logger.error(f"Request error: {exc!r}")
                message = str(exc)
        error = "Internal server error" if status_code >= 500 else self._reason
        self.set_header("Content-Type", "application/json")
        self.finish({"error": error, "message": message})
