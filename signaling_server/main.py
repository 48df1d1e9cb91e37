import logging
import os
from pathlib import Path
from typing import Optional

import tornado.ioloop
import tornado.web

from signaling_server.handlers import (
    CommandHistoryHandler,
    DocsHandler,
    EmergencyStopHandler,
    HealthHandler,
    RobotCommandHandler,
    RobotStatusHandler,
    SignalingWebSocketHandler,
    StatsHandler,
)
from signaling_server.services import (
    BrokerState,
    MessageRouter,
    RobotControlService,
    SessionLifecycleHandler,
)

DEFAULT_STATIC_PATH = Path(__file__).resolve().parents[1] / "public"


def make_app(state: Optional[BrokerState] = None, static_path: Optional[str] = None) -> tornado.web.Application:
    state = state or BrokerState()
    router = MessageRouter(state)
    lifecycle = SessionLifecycleHandler(state)
    control = RobotControlService(state)
    api = dict(control=control)

    routes = [
        (r"/health", HealthHandler, api),
        (r"/stats", StatsHandler, api),
        (r"/docs", DocsHandler),
        (r"/robot/status", RobotStatusHandler, api),
        (r"/robot/commands", CommandHistoryHandler, api),
        (r"/robot/emergency-stop", EmergencyStopHandler, api),
        (r"/robot/command", RobotCommandHandler, api),
        (
            r"/ws",
            SignalingWebSocketHandler,
            dict(router=router, lifecycle=lifecycle),
        ),
    ]

    static_dir = static_path or os.environ.get("STATIC_PATH") or str(DEFAULT_STATIC_PATH)
    if os.path.isdir(static_dir):
        routes.append(
            (r"/(.*)", tornado.web.StaticFileHandler, dict(path=static_dir, default_filename="index.html"))
        )

    return tornado.web.Application(routes)


def setup_logger(name):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
    return logger


def main() -> None:
    # Package-level logger so every module logger inherits the handler.
    logger = setup_logger("signaling_server")
    logger.info(f"Started server process {os.getpid()}")
    port = int(os.environ.get("PORT", "3000"))
    address = os.environ.get("ADDRESS", "0.0.0.0")
    app = make_app()
    logger.info(f"Waiting for application startup...")
    app.listen(port=port, address=address)
    logger.info(f"Application startup complete.")
    logger.info(f"Signaling server running on http://{address}:{port} (Press Ctrl+C to quit)")
    logger.info(f"WebSocket endpoint: ws://{address}:{port}/ws")
    try:
        tornado.ioloop.IOLoop.current().start()
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    main()
