"""Pytest configuration and fixtures."""

import math
import sys
import threading
import time
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class CaptureAgent:
    """Test agent recording every message it receives, in order."""

    def __init__(self, agent_id: str = "CaptureAgent"):
        self._agent_id = agent_id
        self.received = []  # (topic, message)
        self.closed_count = 0
        self.cleared = []
        self.reset_count = 0
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "CaptureAgent"

    @property
    def agent_id(self) -> str:
        return self._agent_id

    def reset(self) -> None:
        self.reset_count += 1

    def callback(self, topic, message) -> None:
        with self._lock:
            self.received.append((topic, message))

    def on_clear_input(self, topic: str) -> None:
        self.cleared.append(topic)

    def close(self) -> None:
        self.closed_count += 1

    @property
    def numbers(self) -> list[float]:
        with self._lock:
            return [m.number for _, m in self.received]

    @property
    def last_number(self) -> float:
        numbers = self.numbers
        return numbers[-1] if numbers else math.nan


def _wait_for(predicate, timeout: float = 2.0, interval: float = 0.01) -> bool:
    """Poll ``predicate`` until it holds or ``timeout`` expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def wait_for():
    """Polling helper for asynchronous agent delivery."""
    return _wait_for


@pytest.fixture
def registry():
    """Fresh topic registry per test."""
    from topicflow.topics import TopicRegistry

    return TopicRegistry()


@pytest.fixture
def capture(registry):
    """Factory subscribing a CaptureAgent to a topic."""

    def _capture(topic_name: str, agent_id: str = "CaptureAgent") -> CaptureAgent:
        agent = CaptureAgent(agent_id)
        registry.get_topic(topic_name).subscribe(agent)
        return agent

    return _capture


@pytest.fixture
def event_bus():
    """Create an event bus with the default ring size."""
    from topicflow.event_bus import FlowEventBus

    return FlowEventBus()


@pytest.fixture
def application(registry, event_bus):
    """Started Application on a fresh registry."""
    from topicflow.app import Application

    app = Application(
        registry=registry,
        event_bus=event_bus,
        mailbox_capacity=100,
        close_grace=2.0,
        record_agent_publishes=False,
    )
    app.start()
    yield app
    app.stop()


@pytest.fixture
def client(application):
    """TestClient for the HTTP surface, lifespan included."""
    from fastapi.testclient import TestClient

    from topicflow.api import create_fastapi_app

    with TestClient(create_fastapi_app(application)) as test_client:
        yield test_client
