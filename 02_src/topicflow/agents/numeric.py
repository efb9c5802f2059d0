"""Reference numeric agents.

Every agent here ignores messages whose number view is NaN, which lets text
probes travel through a numeric graph without side effects.
"""

import math
import operator
from typing import Callable, Sequence

from ..models import Message
from ..topics import TopicRegistry, get_registry

BinaryOp = Callable[[float, float], float]


def structural_id(name: str, inputs: Sequence[str], outputs: Sequence[str]) -> str:
    """Identity derived from the wiring, e.g. ``PlusAgent[A,B->C]``."""
    return f"{name}[{','.join(inputs)}->{','.join(outputs)}]"


def _require(name: str, kind: str, topics: Sequence[str], count: int) -> None:
    if len(topics) < count:
        raise ValueError(f"{name} requires {count} {kind} topic(s), got {len(topics)}")


class UnaryAgent:
    """Stateless agent publishing ``apply(x)`` for each numeric input."""

    def __init__(
        self,
        inputs: Sequence[str],
        outputs: Sequence[str],
        registry: TopicRegistry | None = None,
    ):
        _require(self.name, "input", inputs, 1)
        _require(self.name, "output", outputs, 1)
        self._inputs = tuple(inputs)
        self._outputs = tuple(outputs)
        self._registry = registry if registry is not None else get_registry()
        self._agent_id = structural_id(self.name, self._inputs, self._outputs)

        self._registry.get_topic(self._inputs[0]).subscribe(self)
        self._registry.get_topic(self._outputs[0]).add_publisher(self)

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def agent_id(self) -> str:
        return self._agent_id

    def apply(self, value: float) -> float:
        raise NotImplementedError

    def reset(self) -> None:
        pass

    def callback(self, topic: str, message: Message) -> None:
        if math.isnan(message.number):
            return
        result = self.apply(message.number)
        self._registry.get_topic(self._outputs[0]).publish(Message(result), self.agent_id)

    def on_clear_input(self, topic: str) -> None:
        # Stateless: nothing latched
        pass

    def close(self) -> None:
        pass


class IncAgent(UnaryAgent):
    """Publishes x + 1."""

    def apply(self, value: float) -> float:
        return value + 1


class DecrementAgent(UnaryAgent):
    """Publishes x - 1."""

    def apply(self, value: float) -> float:
        return value - 1


class BinOpAgent:
    """Generic binary operator over two input topics.

    Holds the latest value per input slot plus a "have I got one?" latch and
    publishes ``op(x, y)`` whenever a numeric input arrives while both latches
    are set.
    """

    def __init__(
        self,
        name: str,
        in1_topic: str,
        in2_topic: str,
        out_topic: str,
        op: BinaryOp,
        registry: TopicRegistry | None = None,
    ):
        self._name = name
        self._in1 = in1_topic
        self._in2 = in2_topic
        self._out = out_topic
        self._op = op
        self._registry = registry if registry is not None else get_registry()
        self._x = 0.0
        self._y = 0.0
        self._has_x = False
        self._has_y = False

        self._registry.get_topic(in1_topic).subscribe(self)
        self._registry.get_topic(in2_topic).subscribe(self)
        self._registry.get_topic(out_topic).add_publisher(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def agent_id(self) -> str:
        return "A" + self._name

    def reset(self) -> None:
        self._x = 0.0
        self._y = 0.0
        self._has_x = False
        self._has_y = False

    def callback(self, topic: str, message: Message) -> None:
        if math.isnan(message.number):
            return
        if topic == self._in1:
            self._x = message.number
            self._has_x = True
        elif topic == self._in2:
            self._y = message.number
            self._has_y = True

        if self._has_x and self._has_y:
            result = self._op(self._x, self._y)
            self._registry.get_topic(self._out).publish(Message(result), self.agent_id)

    def on_clear_input(self, topic: str) -> None:
        if topic == self._in1:
            self._has_x = False
        elif topic == self._in2:
            self._has_y = False

    def close(self) -> None:
        pass


class _ConfiguredBinOpAgent(BinOpAgent):
    """Binary agent built from config topic lists: inputs[0..1] -> outputs[0]."""

    op: BinaryOp

    def __init__(
        self,
        inputs: Sequence[str],
        outputs: Sequence[str],
        registry: TopicRegistry | None = None,
    ):
        name = type(self).__name__
        _require(name, "input", inputs, 2)
        _require(name, "output", outputs, 1)
        self._agent_id = structural_id(name, inputs, outputs)
        super().__init__(name, inputs[0], inputs[1], outputs[0], type(self).op, registry)

    @property
    def agent_id(self) -> str:
        return self._agent_id


class PlusAgent(_ConfiguredBinOpAgent):
    """Publishes x + y once both inputs have arrived."""

    op = operator.add


class MultiplyAgent(_ConfiguredBinOpAgent):
    """Publishes x * y once both inputs have arrived."""

    op = operator.mul
