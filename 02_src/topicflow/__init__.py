"""topicflow: agents computing over named topics."""

from .agents import (
    AgentCatalog,
    BinOpAgent,
    DecrementAgent,
    IAgent,
    IncAgent,
    MultiplyAgent,
    PlusAgent,
    SerializedAgent,
    default_catalog,
)
from .app import Application, IApplication
from .errors import ConfigError
from .event_bus import FlowEventBus, StreamSubscriber, TopicEventRecorder
from .graph import Graph, Node, NodeKind
from .loader import GenericConfig, MathExampleConfig, parse_config
from .models import FlowEvent, FlowEventType, Message
from .topics import ITopicEventListener, Topic, TopicRegistry, get_registry

__all__ = [
    # Application
    "Application",
    "IApplication",
    "ConfigError",
    # Models
    "Message",
    "FlowEvent",
    "FlowEventType",
    # Topics
    "Topic",
    "TopicRegistry",
    "ITopicEventListener",
    "get_registry",
    # Agents
    "IAgent",
    "SerializedAgent",
    "AgentCatalog",
    "default_catalog",
    "IncAgent",
    "DecrementAgent",
    "BinOpAgent",
    "PlusAgent",
    "MultiplyAgent",
    # Config loading
    "GenericConfig",
    "MathExampleConfig",
    "parse_config",
    # Graph
    "Graph",
    "Node",
    "NodeKind",
    # Events
    "FlowEventBus",
    "StreamSubscriber",
    "TopicEventRecorder",
]
