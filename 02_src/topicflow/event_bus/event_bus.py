"""FlowEventBus: bounded ring of UI events plus live stream fan-out."""

import queue
import threading
from collections import deque
from typing import Protocol

from ..config import DEFAULT_EVENT_BUFFER_SIZE
from ..logging_config import get_logger
from ..models import FlowEvent, FlowEventType, Message

logger = get_logger(__name__)


class IEventSubscriber(Protocol):
    """Live stream consumer."""

    def push(self, event: FlowEvent) -> None:
        """Deliver one event. Raising removes the subscriber."""
        ...


class IEventBus(Protocol):
    """Records FlowEvents and streams them to live subscribers."""

    def emit(self, event: FlowEvent) -> None:
        """Append to the ring buffer and push to every subscriber."""
        ...

    def snapshot(self, limit: int) -> list[FlowEvent]:
        """Most recent ``limit`` events, oldest first."""
        ...


class SubscriberClosedError(RuntimeError):
    """Push on a stream subscriber that went away."""


class StreamSubscriber:
    """Thread-safe hand-off between ``emit`` callers and one stream reader."""

    def __init__(self, max_pending: int = 256):
        self._queue: queue.Queue[FlowEvent] = queue.Queue(maxsize=max_pending)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, event: FlowEvent) -> None:
        if self._closed:
            raise SubscriberClosedError("stream subscriber closed")
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            # Reader stopped draining; end its stream
            self._closed = True
            raise

    def get(self, timeout: float | None = None) -> FlowEvent | None:
        """Next event, or None if nothing arrived within ``timeout``."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        self._closed = True


class FlowEventBus:
    """In-memory event ring with copy-on-write subscriber list."""

    def __init__(self, max_events: int = DEFAULT_EVENT_BUFFER_SIZE):
        if max_events <= 0:
            raise ValueError(f"max_events must be positive, got {max_events}")
        self._lock = threading.Lock()
        self._events: deque[FlowEvent] = deque(maxlen=max_events)
        self._subscribers: tuple[IEventSubscriber, ...] = ()

    @property
    def max_events(self) -> int:
        return self._events.maxlen or 0

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, subscriber: IEventSubscriber) -> None:
        with self._lock:
            if subscriber not in self._subscribers:
                self._subscribers = self._subscribers + (subscriber,)

    def unsubscribe(self, subscriber: IEventSubscriber) -> None:
        with self._lock:
            self._subscribers = tuple(s for s in self._subscribers if s is not subscriber)

    def emit(self, event: FlowEvent) -> None:
        """Append (evicting the oldest) and push to every live subscriber."""
        with self._lock:
            self._events.append(event)
            subscribers = self._subscribers

        for subscriber in subscribers:
            try:
                subscriber.push(event)
            except Exception as e:
                logger.info("Dropping stream subscriber: %s", e or type(e).__name__)
                self.unsubscribe(subscriber)
                close = getattr(subscriber, "close", None)
                if close is not None:
                    close()

    def snapshot(self, limit: int) -> list[FlowEvent]:
        if limit <= 0:
            return []
        with self._lock:
            events = list(self._events)
        return events[-limit:]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


class TopicEventRecorder:
    """Topic listener that mirrors agent publishes onto the event bus."""

    def __init__(self, event_bus: IEventBus, record_agent_publishes: bool = False):
        self._event_bus = event_bus
        self.record_agent_publishes = record_agent_publishes

    def on_publish(self, topic_name: str, message: Message) -> None:
        # Input publishes are recorded by the caller, which knows the value type
        pass

    def on_agent_publish(self, agent_id: str, topic_name: str, message: Message) -> None:
        if not self.record_agent_publishes:
            return
        value = message.number if message.is_numeric else None
        self._event_bus.emit(FlowEvent(FlowEventType.AGENT_PUBLISH, agent_id, value))

    def on_clear(self, topic_name: str) -> None:
        logger.debug("Topic %s cleared", topic_name)
