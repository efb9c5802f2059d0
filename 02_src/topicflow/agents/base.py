"""Agent contract."""

from typing import Protocol

from ..models import Message


class IAgent(Protocol):
    """A unit of computation wired to topics by name.

    ``callback`` is the only ingress. Raw agents may assume single-threaded
    access to their state; concurrency safety comes from SerializedAgent.
    """

    @property
    def name(self) -> str:
        """Human-readable class-like label."""
        ...

    @property
    def agent_id(self) -> str:
        """Unique, stable identity used as the graph node key."""
        ...

    def reset(self) -> None:
        """Clear agent-private state. Idempotent."""
        ...

    def callback(self, topic: str, message: Message) -> None:
        """Handle a message published on ``topic``."""
        ...

    def on_clear_input(self, topic: str) -> None:
        """Forget that input arrived on ``topic`` (keeps the captured value)."""
        ...

    def close(self) -> None:
        """Release workers and resources. Safe to call more than once."""
        ...
