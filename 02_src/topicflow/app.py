"""Application bootstrap and lifecycle management."""

import os
import threading
from typing import Literal, Protocol

from .agents import AgentCatalog, default_catalog
from .config import (
    DEFAULT_CLOSE_GRACE_SECONDS,
    DEFAULT_EVENT_BUFFER_SIZE,
    DEFAULT_MAILBOX_CAPACITY,
    resolve_flag,
    resolve_float,
    resolve_int,
)
from .errors import ConfigError
from .event_bus import FlowEventBus, TopicEventRecorder
from .graph import Graph, topic_node_id
from .loader import GenericConfig
from .logging_config import get_logger
from .models import FlowEvent, FlowEventType, Message
from .topics import TopicRegistry, get_registry

logger = get_logger(__name__)

ValueType = Literal["double", "text"]


class IApplication(Protocol):
    """Runtime facade used by the HTTP layer."""

    def start(self) -> None:
        """Wire the event recorder into the registry."""
        ...

    def stop(self) -> None:
        """Unload the active config."""
        ...

    def reset(self) -> None:
        """Unload the active config and forget recorded events."""
        ...

    def load_config(self, config_text: str) -> list[str]:
        """Replace the active config; return sorted topic names."""
        ...

    def unload_config(self) -> None:
        """Close the active config and clear the registry."""
        ...

    def publish(self, topic: str, value: str, value_type: ValueType = "text") -> FlowEvent:
        """Publish a UI input on a topic."""
        ...

    def topic_names(self) -> list[str]:
        ...

    def build_graph(self) -> Graph:
        ...

    def events(self, limit: int) -> list[FlowEvent]:
        ...

    @property
    def event_bus(self) -> FlowEventBus:
        ...


class Application:
    """Owns the registry, the event bus and the active config."""

    def __init__(
        self,
        registry: TopicRegistry | None = None,
        event_bus: FlowEventBus | None = None,
        catalog: AgentCatalog | None = None,
        mailbox_capacity: int | None = None,
        close_grace: float | None = None,
        record_agent_publishes: bool | None = None,
    ):
        if mailbox_capacity is None:
            mailbox_capacity = resolve_int(os.getenv("MAILBOX_CAPACITY"), DEFAULT_MAILBOX_CAPACITY)
        if close_grace is None:
            close_grace = resolve_float(os.getenv("CLOSE_GRACE_SECONDS"), DEFAULT_CLOSE_GRACE_SECONDS)
        if record_agent_publishes is None:
            record_agent_publishes = resolve_flag(os.getenv("RECORD_AGENT_PUBLISHES"))
        if event_bus is None:
            event_bus = FlowEventBus(
                resolve_int(os.getenv("EVENT_BUFFER_SIZE"), DEFAULT_EVENT_BUFFER_SIZE)
            )

        self._registry = registry if registry is not None else get_registry()
        self._event_bus = event_bus
        self._catalog = catalog if catalog is not None else default_catalog()
        self._mailbox_capacity = mailbox_capacity
        self._close_grace = close_grace
        self._recorder = TopicEventRecorder(event_bus, record_agent_publishes)
        self._active_config: GenericConfig | None = None
        self._lock = threading.RLock()

    def start(self) -> None:
        """Wire the event recorder into the registry."""
        logger.info("Starting application")
        self._registry.set_listener(self._recorder)

    def stop(self) -> None:
        """Unload the active config and detach the recorder."""
        self.unload_config()
        self._registry.set_listener(None)
        logger.info("Application stopped")

    def reset(self) -> None:
        """Unload the active config and forget recorded events."""
        with self._lock:
            self.unload_config()
            self._event_bus.clear()
        logger.info("Reset complete")

    def load_config(self, config_text: str) -> list[str]:
        """Close any active config, clear the registry, then load ``config_text``.

        Raises ConfigError with the registry left empty when loading fails.
        """
        with self._lock:
            self.unload_config()

            config = GenericConfig(
                config_text,
                registry=self._registry,
                catalog=self._catalog,
                capacity=self._mailbox_capacity,
                close_grace=self._close_grace,
            )
            try:
                config.create()
            except Exception as e:
                config.close()
                self._registry.clear()
                logger.warning("Config load failed: %s", e)
                if isinstance(e, ConfigError):
                    raise
                raise ConfigError(str(e)) from e

            self._active_config = config
            topics = self._registry.topic_names()
            logger.info("Config loaded: %s agent(s), topics %s", len(config.agents), topics)
            return topics

    def unload_config(self) -> None:
        """Close every agent first, then clear the registry."""
        with self._lock:
            if self._active_config is not None:
                self._active_config.close()
                self._active_config = None
                logger.info("Config unloaded")
            self._registry.clear()

    def publish(self, topic: str, value: str, value_type: ValueType = "text") -> FlowEvent:
        """Publish a UI input and record it as INPUT_PUBLISH.

        Raises ValueError when ``value_type`` is "double" and ``value`` does
        not parse.
        """
        event_value: float | None = None
        if value_type == "double":
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid double value: {value!r}") from None
            message = Message(number)
            event_value = number
        else:
            message = Message(value)

        # Loads swap raw agents for wrappers; never dispatch mid-load
        with self._lock:
            self._registry.get_topic(topic).publish(message)
        event = FlowEvent(FlowEventType.INPUT_PUBLISH, topic_node_id(topic), event_value)
        self._event_bus.emit(event)
        return event

    def topic_names(self) -> list[str]:
        return self._registry.topic_names()

    def build_graph(self) -> Graph:
        return Graph.from_registry(self._registry)

    def events(self, limit: int) -> list[FlowEvent]:
        return self._event_bus.snapshot(limit)

    @property
    def registry(self) -> TopicRegistry:
        return self._registry

    @property
    def event_bus(self) -> FlowEventBus:
        return self._event_bus

    @property
    def catalog(self) -> AgentCatalog:
        return self._catalog

    @property
    def active_config(self) -> GenericConfig | None:
        return self._active_config
