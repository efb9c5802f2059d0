"""Built-in example graph: R3 = (B - A) * (B + A)."""

import operator

from ..agents import BinOpAgent, SerializedAgent
from ..config import DEFAULT_MAILBOX_CAPACITY
from ..logging_config import get_logger
from ..topics import TopicRegistry, get_registry

logger = get_logger(__name__)


class MathExampleConfig:
    """Wires A, B through plus/minus into mul, publishing on R3."""

    def __init__(
        self,
        registry: TopicRegistry | None = None,
        capacity: int = DEFAULT_MAILBOX_CAPACITY,
    ):
        self._registry = registry if registry is not None else get_registry()
        self._capacity = capacity
        self._running_agents: list[SerializedAgent] = []

    @property
    def name(self) -> str:
        return "Math Example"

    @property
    def version(self) -> int:
        return 1

    @property
    def agents(self) -> list[SerializedAgent]:
        return list(self._running_agents)

    def create(self) -> None:
        if self._running_agents:
            raise RuntimeError("Config already created; close() it first")

        agents = [
            BinOpAgent("plus", "A", "B", "R2", operator.add, self._registry),
            BinOpAgent("minus", "B", "A", "R1", operator.sub, self._registry),
            BinOpAgent("mul", "R1", "R2", "R3", operator.mul, self._registry),
        ]
        for agent in agents:
            wrapper = SerializedAgent(agent, self._capacity)
            self._registry.rebind(agent, wrapper)
            self._running_agents.append(wrapper)

        logger.info("%s created %s agent(s)", self.name, len(agents))

    def close(self) -> None:
        for wrapper in self._running_agents:
            wrapper.close()
        self._running_agents.clear()
