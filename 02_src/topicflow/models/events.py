"""Control-plane event models for the UI."""

import math
import time
from dataclasses import dataclass, field
from enum import Enum


class FlowEventType(str, Enum):
    """Kinds of user-visible dataflow occurrences."""

    INPUT_PUBLISH = "INPUT_PUBLISH"  # UI-initiated publish on a topic
    AGENT_PUBLISH = "AGENT_PUBLISH"  # agent emitted a result


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class FlowEvent:
    """A single dataflow event shown in the UI."""

    type: FlowEventType
    origin: str  # graph node id: "T<topic>" or an agent id
    value: float | None = None
    ts: int = field(default_factory=now_ms)  # epoch millis

    def to_dict(self) -> dict:
        """JSON shape consumed by the UI."""
        value = self.value
        if value is not None and (math.isnan(value) or math.isinf(value)):
            value = None
        return {
            "ts": self.ts,
            "type": self.type.value,
            "from": self.origin,
            "value": value,
        }
