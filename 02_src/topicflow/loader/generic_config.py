"""GenericConfig: instantiate and run agents declared in config text."""

from pathlib import Path

from ..agents import AgentCatalog, IAgent, SerializedAgent, default_catalog
from ..config import DEFAULT_CLOSE_GRACE_SECONDS, DEFAULT_MAILBOX_CAPACITY
from ..errors import ConfigError
from ..logging_config import get_logger
from ..topics import TopicRegistry, get_registry
from .parser import parse_config

logger = get_logger(__name__)


class GenericConfig:
    """Loads agents from config text and owns their wrappers.

    ``create()`` constructs every declared agent (which wires itself into the
    registry), moves that wiring onto a SerializedAgent wrapper and keeps the
    wrapper. On failure part-way the config is left half-built; callers are
    expected to ``close()`` it. ``close()`` is idempotent.
    """

    def __init__(
        self,
        text: str,
        registry: TopicRegistry | None = None,
        catalog: AgentCatalog | None = None,
        capacity: int = DEFAULT_MAILBOX_CAPACITY,
        close_grace: float = DEFAULT_CLOSE_GRACE_SECONDS,
    ):
        self._text = text
        self._registry = registry if registry is not None else get_registry()
        self._catalog = catalog if catalog is not None else default_catalog()
        self._capacity = capacity
        self._close_grace = close_grace
        self._running_agents: list[SerializedAgent] = []
        self._created = False

    @classmethod
    def from_file(cls, path: str | Path, **kwargs) -> "GenericConfig":
        """Read UTF-8 config text from ``path``."""
        return cls(Path(path).read_text(encoding="utf-8"), **kwargs)

    @property
    def name(self) -> str:
        return "Generic Config"

    @property
    def version(self) -> int:
        return 1

    @property
    def agents(self) -> list[SerializedAgent]:
        """Running wrappers, in declaration order."""
        return list(self._running_agents)

    def create(self) -> None:
        if self._created:
            raise RuntimeError("Config already created; close() it first")
        self._created = True

        specs = parse_config(self._text)
        seen_ids: set[str] = set()
        for spec in specs:
            factory = self._catalog.resolve(spec.class_name)
            try:
                agent: IAgent = factory(list(spec.inputs), list(spec.outputs), self._registry)
            except Exception as e:
                raise ConfigError(f"Cannot create {spec.class_name}: {e}") from e

            wrapper = SerializedAgent(agent, self._capacity, close_grace=self._close_grace)
            self._registry.rebind(agent, wrapper)
            self._running_agents.append(wrapper)
            if agent.agent_id in seen_ids:
                raise ConfigError(f"Duplicate agent: {agent.agent_id}")
            seen_ids.add(agent.agent_id)

        logger.info("%s created %s agent(s)", self.name, len(self._running_agents))

    def close(self) -> None:
        for wrapper in self._running_agents:
            try:
                wrapper.close()
            except Exception:
                logger.exception("Failed to close %s", wrapper.agent_id)
        if self._running_agents:
            logger.info("%s closed %s agent(s)", self.name, len(self._running_agents))
        self._running_agents.clear()
        self._created = False
