import json
import sys
from pathlib import Path

import pytest

# Ensure repository root is importable for `import signaling_server`
ROOT = Path(__file__).resolve().parent
REPO_ROOT = ROOT.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class FakeConnection:
    """In-memory stand-in for a WebSocket handler."""

    def __init__(self, name: str = "conn", is_open: bool = True):
        self.name = name
        self.is_open = is_open
        self.sent = []

    def send(self, message: str) -> None:
        self.sent.append(json.loads(message))

    def types(self):
        return [message["type"] for message in self.sent]

    def __repr__(self):
        return f"FakeConnection({self.name!r})"


@pytest.fixture
def state():
    from signaling_server.services import BrokerState

    return BrokerState()


@pytest.fixture
def router(state):
    from signaling_server.services import MessageRouter

    return MessageRouter(state)


@pytest.fixture
def lifecycle(state):
    from signaling_server.services import SessionLifecycleHandler

    return SessionLifecycleHandler(state)


@pytest.fixture
def control(state):
    from signaling_server.services import RobotControlService

    return RobotControlService(state)


@pytest.fixture
def make_connection():
    def _make(name: str = "conn", is_open: bool = True) -> FakeConnection:
        return FakeConnection(name, is_open)

    return _make
