"""Process-wide name -> Topic table."""

import threading
from typing import TYPE_CHECKING

from ..logging_config import get_logger
from .topic import ITopicEventListener, Topic

if TYPE_CHECKING:
    from ..agents.base import IAgent

logger = get_logger(__name__)


class TopicRegistry:
    """Owns every Topic; topics are created lazily on first lookup."""

    def __init__(self, listener: ITopicEventListener | None = None):
        self._lock = threading.Lock()
        self._topics: dict[str, Topic] = {}
        self._listener = listener

    @property
    def listener(self) -> ITopicEventListener | None:
        return self._listener

    def set_listener(self, listener: ITopicEventListener | None) -> None:
        """Install the event listener on existing and future topics."""
        with self._lock:
            self._listener = listener
            for topic in self._topics.values():
                topic.listener = listener

    def get_topic(self, name: str) -> Topic:
        """Get or create the topic called ``name``."""
        with self._lock:
            topic = self._topics.get(name)
            if topic is None:
                topic = Topic(name, listener=self._listener)
                self._topics[name] = topic
            return topic

    def get_topics(self) -> list[Topic]:
        """Snapshot of all topics."""
        with self._lock:
            return list(self._topics.values())

    def topic_names(self) -> list[str]:
        """Sorted names of all topics."""
        with self._lock:
            return sorted(self._topics)

    def rebind(self, old: "IAgent", new: "IAgent") -> None:
        """Swap ``old`` for ``new`` wherever it subscribes or publishes."""
        for topic in self.get_topics():
            topic.rebind(old, new)

    def clear(self) -> None:
        """Drop all topics and their wiring.

        Agents are never closed here; that belongs to the config lifecycle.
        """
        with self._lock:
            dropped = list(self._topics)
            self._topics.clear()
            listener = self._listener

        if listener is not None:
            for name in dropped:
                listener.on_clear(name)
        if dropped:
            logger.debug("Registry cleared (%s topics)", len(dropped))

    def __len__(self) -> int:
        with self._lock:
            return len(self._topics)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._topics


_registry: TopicRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> TopicRegistry:
    """Get the process-wide registry instance."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = TopicRegistry()
        return _registry
