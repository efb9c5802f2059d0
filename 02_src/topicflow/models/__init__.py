"""Core data models for topicflow."""

from .events import FlowEvent, FlowEventType
from .message import Message

__all__ = [
    # Payloads
    "Message",
    # Control plane
    "FlowEvent",
    "FlowEventType",
]
