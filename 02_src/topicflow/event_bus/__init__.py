"""EventBus module."""

from .event_bus import (
    FlowEventBus,
    IEventBus,
    IEventSubscriber,
    StreamSubscriber,
    SubscriberClosedError,
    TopicEventRecorder,
)

__all__ = [
    "FlowEventBus",
    "IEventBus",
    "IEventSubscriber",
    "StreamSubscriber",
    "SubscriberClosedError",
    "TopicEventRecorder",
]
