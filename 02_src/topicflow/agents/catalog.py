"""AgentCatalog: explicit agent-kind -> factory table used by config loading."""

import threading
from typing import Callable, Sequence

from ..errors import ConfigError
from ..topics import TopicRegistry
from .base import IAgent
from .numeric import DecrementAgent, IncAgent, MultiplyAgent, PlusAgent

AgentFactory = Callable[[Sequence[str], Sequence[str], TopicRegistry], IAgent]


class AgentCatalog:
    """Maps the class names written in configs to agent constructors."""

    def __init__(self):
        self._lock = threading.Lock()
        self._factories: dict[str, AgentFactory] = {}

    def register(self, kind: str, factory: AgentFactory) -> None:
        """Register (or replace) the factory for ``kind``."""
        if not kind or not kind.strip():
            raise ValueError("Agent kind must be a non-empty string")
        with self._lock:
            self._factories[kind.strip()] = factory

    def resolve(self, kind: str) -> AgentFactory:
        """Find the factory for ``kind``.

        Qualified names such as ``configs.PlusAgent`` fall back to their last
        dotted segment.
        """
        kind = kind.strip()
        with self._lock:
            factory = self._factories.get(kind)
            if factory is None and "." in kind:
                factory = self._factories.get(kind.rsplit(".", 1)[-1])
        if factory is None:
            raise ConfigError(f"Unknown agent class: {kind}")
        return factory

    def kinds(self) -> list[str]:
        with self._lock:
            return sorted(self._factories)

    def __contains__(self, kind: object) -> bool:
        if not isinstance(kind, str):
            return False
        try:
            self.resolve(kind)
        except ConfigError:
            return False
        return True


def default_catalog() -> AgentCatalog:
    """Catalog with the built-in numeric agents."""
    catalog = AgentCatalog()
    for agent_cls in (IncAgent, DecrementAgent, PlusAgent, MultiplyAgent):
        catalog.register(agent_cls.__name__, agent_cls)
    return catalog
