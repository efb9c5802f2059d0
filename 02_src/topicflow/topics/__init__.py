"""Topics module."""

from .registry import TopicRegistry, get_registry
from .topic import ITopicEventListener, Topic

__all__ = ["ITopicEventListener", "Topic", "TopicRegistry", "get_registry"]
