import logging

from signaling_server.models import PeerSignal, encode
from signaling_server.services.broker_state import BrokerState
from signaling_server.services.connection_registry import Connection, deliver

logger = logging.getLogger(__name__)


class SessionLifecycleHandler:
    """Clears role slots when their connection closes and tells the surviving peer."""

    def __init__(self, state: BrokerState):
        self.state = state

    def handle_close(self, connection: Connection) -> None:
        registry = self.state.registry
        status = self.state.status

        if registry.clear_if_viewer(connection):
            status.set_connected(False)
            logger.info("Viewer disconnected")
            deliver(registry.open_streamer(), encode(PeerSignal(type="viewer-disconnected")))

        if registry.clear_if_streamer(connection):
            status.set_connected(False)
            status.set_streaming(False)
            logger.info("Streamer (robot) disconnected")
            deliver(registry.open_viewer(), encode(PeerSignal(type="streamer-disconnected")))
