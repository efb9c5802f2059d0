"""Topic: a named fan-out point."""

import threading
from typing import TYPE_CHECKING, Protocol

from ..models import Message

if TYPE_CHECKING:
    from ..agents.base import IAgent


class ITopicEventListener(Protocol):
    """Observer notified about topic activity."""

    def on_publish(self, topic_name: str, message: Message) -> None:
        """Any publish on a topic, before dispatch."""
        ...

    def on_clear(self, topic_name: str) -> None:
        """Topic dropped from the registry."""
        ...

    def on_agent_publish(self, agent_id: str, topic_name: str, message: Message) -> None:
        """Publish tagged with the emitting agent."""
        ...


class Topic:
    """Named fan-out point with ordered subscribers and declared publishers.

    The subscriber and publisher lists are immutable tuples swapped under a
    lock, so ``publish`` always iterates a consistent snapshot.
    """

    def __init__(self, name: str, listener: ITopicEventListener | None = None):
        self._name = name
        self._lock = threading.Lock()
        self._subs: tuple["IAgent", ...] = ()
        self._pubs: tuple["IAgent", ...] = ()
        self.listener = listener

    @property
    def name(self) -> str:
        return self._name

    @property
    def subs(self) -> tuple["IAgent", ...]:
        """Snapshot of subscribed agents, in subscription order."""
        return self._subs

    @property
    def pubs(self) -> tuple["IAgent", ...]:
        """Snapshot of declared publishers, in declaration order."""
        return self._pubs

    def subscribe(self, agent: "IAgent") -> None:
        """Add a subscriber. Idempotent; closed agents are ignored."""
        if getattr(agent, "closed", False):
            return
        with self._lock:
            if agent not in self._subs:
                self._subs = self._subs + (agent,)

    def unsubscribe(self, agent: "IAgent") -> None:
        with self._lock:
            self._subs = tuple(a for a in self._subs if a is not agent)

    def add_publisher(self, agent: "IAgent") -> None:
        """Declare an agent as publisher. Idempotent."""
        with self._lock:
            if agent not in self._pubs:
                self._pubs = self._pubs + (agent,)

    def remove_publisher(self, agent: "IAgent") -> None:
        with self._lock:
            self._pubs = tuple(a for a in self._pubs if a is not agent)

    def rebind(self, old: "IAgent", new: "IAgent") -> None:
        """Replace ``old`` with ``new`` in both lists, keeping its position."""
        with self._lock:
            self._subs = self._replace(self._subs, old, new)
            self._pubs = self._replace(self._pubs, old, new)

    @staticmethod
    def _replace(agents: tuple, old, new) -> tuple:
        if old not in agents:
            return agents
        replaced = []
        for agent in agents:
            candidate = new if agent is old else agent
            if candidate not in replaced:
                replaced.append(candidate)
        return tuple(replaced)

    def publish(self, message: Message, origin_agent_id: str | None = None) -> None:
        """Deliver ``message`` to every subscriber, in subscription order.

        Runs on the caller's thread. A wrapped subscriber only enqueues, but
        may block while its mailbox is full.
        """
        listener = self.listener
        if listener is not None:
            listener.on_publish(self._name, message)
            if origin_agent_id is not None:
                listener.on_agent_publish(origin_agent_id, self._name, message)

        for agent in self._subs:
            agent.callback(self._name, message)

    def __repr__(self) -> str:
        return f"Topic({self._name!r}, subs={len(self._subs)}, pubs={len(self._pubs)})"
