import logging
from asyncio import Future

import tornado.websocket

from signaling_server.models import ConnectionEstablishedMessage, encode
from signaling_server.services import MessageRouter, SessionLifecycleHandler

logger = logging.getLogger(__name__)


def _log_failed_write(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.warning(f"Dropped outbound message: {exc!r}")


class SignalingWebSocketHandler(tornado.websocket.WebSocketHandler):
    """One viewer or streamer socket. Role is decided by the first announcement it sends."""

    def initialize(self, router: MessageRouter, lifecycle: SessionLifecycleHandler):
        self.router = router
        self.lifecycle = lifecycle

    def check_origin(self, origin: str) -> bool:
        # Allow cross-origin WebSocket connections (lock down in production).
        return True

    @property
    def is_open(self) -> bool:
        return self.ws_connection is not None and not self.ws_connection.is_closing()

    def send(self, message: str) -> None:
        # Never awaited: a slow or dead peer must not hold up the IOLoop.
        try:
            future = self.write_message(message)
        except tornado.websocket.WebSocketClosedError:
            logger.warning("Dropped outbound message: socket already closed")
            return
        future.add_done_callback(_log_failed_write)

    def open(self):
        logger.info(f"New WebSocket connection from: {self.request.remote_ip}")
        self.send(encode(ConnectionEstablishedMessage()))

    def on_message(self, message: str | bytes):
        self.router.handle_message(self, message)

    def on_close(self):
        logger.info(f"WebSocket connection closed: {self.close_code} - {self.close_reason}")
        self.lifecycle.handle_close(self)
