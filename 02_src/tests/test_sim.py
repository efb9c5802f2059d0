"""Tests for the SIM traffic generator."""

import asyncio
import json

import httpx
import pytest

from sim import DEMO_CONFIG, Sim


class RecordingTransport:
    """Mock API recording every request the SIM makes."""

    def __init__(self, load_ok: bool = True):
        self.requests = []
        self._load_ok = load_ok

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else {}
        self.requests.append((request.url.path, body))
        if request.url.path == "/api/config/load":
            if self._load_ok:
                return httpx.Response(200, json={"ok": True, "topics": ["A", "B"]})
            return httpx.Response(200, json={"ok": False, "error": "bad config"})
        return httpx.Response(200, json={"ok": True})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def publishes(self) -> list[tuple[str, dict]]:
        return [r for r in self.requests if r[0].endswith("/publish")]


async def _wait_until(predicate, timeout: float = 2.0) -> bool:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while loop.time() < deadline:
        if predicate():
            return True
        await asyncio.sleep(0.01)
    return predicate()


@pytest.mark.asyncio
async def test_loads_config_then_publishes():
    """Test that the SIM loads its config before publishing inputs."""
    recorder = RecordingTransport()
    sim = Sim(api_url="http://test", interval=0.01, transport=recorder.transport)

    await sim.start()
    assert sim.running
    assert await _wait_until(lambda: len(recorder.publishes()) >= 4)
    await sim.stop()

    path, body = recorder.requests[0]
    assert path == "/api/config/load"
    assert body == {"configText": DEMO_CONFIG}
    topics = {p.split("/")[3] for p, _ in recorder.publishes()}
    assert topics == {"A", "B"}
    assert sim.sent >= 4


@pytest.mark.asyncio
async def test_sends_text_probes():
    """Test that text probes go out every few rounds."""
    recorder = RecordingTransport()
    sim = Sim(api_url="http://test", interval=0.001, transport=recorder.transport)

    await sim.start()
    assert await _wait_until(
        lambda: any(b["type"] == "text" for _, b in recorder.publishes())
    )
    await sim.stop()

    probe = next(b for _, b in recorder.publishes() if b["type"] == "text")
    assert probe == {"type": "text", "value": "probe"}
    doubles = [b for _, b in recorder.publishes() if b["type"] == "double"]
    assert all(-10 <= float(b["value"]) <= 10 for b in doubles)


@pytest.mark.asyncio
async def test_rejected_config_stops_scenario():
    """Test that nothing is published when the config is rejected."""
    recorder = RecordingTransport(load_ok=False)
    sim = Sim(api_url="http://test", interval=0.01, transport=recorder.transport)

    await sim.start()
    await asyncio.sleep(0.1)
    await sim.stop()

    assert [p for p, _ in recorder.requests] == ["/api/config/load"]
    assert sim.sent == 0


@pytest.mark.asyncio
async def test_stop_is_idempotent():
    """Test start/stop bookkeeping."""
    recorder = RecordingTransport()
    sim = Sim(api_url="http://test", interval=0.01, transport=recorder.transport)

    await sim.stop()
    await sim.start()
    await sim.start()
    await sim.stop()
    await sim.stop()
    assert not sim.running
