"""SIM implementation - demo traffic through the HTTP API."""

import asyncio
import random
from typing import Protocol

import httpx

from topicflow.config import DEFAULT_SIM_INTERVAL
from topicflow.logging_config import get_logger

logger = get_logger(__name__)

DEMO_CONFIG = """\
PlusAgent
A,B
C
IncAgent
C
D
MultiplyAgent
C,D
E
"""

DEMO_INPUTS = ("A", "B")


class ISim(Protocol):
    """Generate demo traffic against a running API."""

    async def start(self) -> None:
        """Load the demo config and start publishing."""
        ...

    async def stop(self) -> None:
        """Stop publishing."""
        ...


class Sim:
    """Loads a demo graph and feeds random inputs plus text probes."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        interval: float = DEFAULT_SIM_INTERVAL,
        config_text: str = DEMO_CONFIG,
        inputs: tuple[str, ...] = DEMO_INPUTS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_url = api_url
        self._interval = interval
        self._config_text = config_text
        self._inputs = inputs
        self._transport = transport
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None
        self.sent = 0

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Load the demo config and start publishing."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(base_url=self._api_url, transport=self._transport)

        # Start background task
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop publishing."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def _run_scenario(self) -> None:
        """Load the config, then publish until stopped."""
        try:
            if not await self._load_config():
                return

            rounds = 0
            while self._running:
                for topic in self._inputs:
                    value = round(random.uniform(-10, 10), 2)
                    await self._publish(topic, "double", str(value))

                # Every few rounds, check that text passes through harmlessly
                rounds += 1
                if rounds % 5 == 0:
                    await self._publish(self._inputs[0], "text", "probe")

                await asyncio.sleep(self._interval)

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)

    async def _load_config(self) -> bool:
        if not self._client:
            return False

        try:
            response = await self._client.post(
                "/api/config/load",
                json={"configText": self._config_text},
                timeout=10.0,
            )
            data = response.json()
            if response.status_code == 200 and data.get("ok"):
                logger.info("SIM: config loaded, topics %s", data.get("topics"))
                return True
            logger.error("SIM: config rejected: %s", data.get("error", response.status_code))

        except Exception as e:
            logger.error("SIM: Failed to load config: %s", e)
        return False

    async def _publish(self, topic: str, value_type: str, value: str) -> None:
        """Publish one input via HTTP API."""
        if not self._client:
            return

        try:
            response = await self._client.post(
                f"/api/topics/{topic}/publish",
                json={"type": value_type, "value": value},
                timeout=10.0,
            )

            if response.status_code == 200:
                self.sent += 1
                logger.debug("SIM: %s <- %s", topic, value)
            else:
                logger.error(
                    "SIM: Error publishing to %s: %s",
                    topic,
                    response.status_code,
                )

        except Exception as e:
            logger.error("SIM: Failed to publish: %s", e)
