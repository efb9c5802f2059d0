"""Message payload flowing through topics."""

import math
from datetime import datetime, timezone


def _parse_number(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return math.nan


class Message:
    """
    Immutable payload with three consistent views.

    A message is built from exactly one of bytes, text or a number; the other
    two views are derived once at construction:

    - ``data``: UTF-8 bytes (a private copy when built from a buffer)
    - ``text``: decoded bytes, the text itself, or the canonical decimal form
    - ``number``: ``float(text)``, NaN when the text is not a number

    An empty message has empty bytes, empty text and NaN.
    """

    __slots__ = ("data", "text", "number", "timestamp")

    data: bytes
    text: str
    number: float
    timestamp: datetime

    def __init__(self, payload: bytes | bytearray | memoryview | str | int | float | None = None):
        if isinstance(payload, (bytes, bytearray, memoryview)):
            data = bytes(payload)
            text = data.decode("utf-8", errors="replace")
            number = _parse_number(text)
        elif isinstance(payload, str):
            text = payload
            data = text.encode("utf-8")
            number = _parse_number(text)
        elif isinstance(payload, (int, float)) and not isinstance(payload, bool):
            number = float(payload)
            text = repr(number)
            data = text.encode("utf-8")
        elif payload is None:
            data = b""
            text = ""
            number = math.nan
        else:
            raise TypeError(
                f"Message payload must be bytes, str or a number, got {type(payload).__name__}"
            )

        object.__setattr__(self, "data", data)
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "number", number)
        object.__setattr__(self, "timestamp", datetime.now(timezone.utc))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "Message":
        return cls(bytes(data))

    @classmethod
    def from_text(cls, text: str) -> "Message":
        return cls(str(text))

    @classmethod
    def from_number(cls, value: float) -> "Message":
        return cls(float(value))

    @property
    def is_numeric(self) -> bool:
        """True when the number view holds an actual value."""
        return not math.isnan(self.number)

    def __setattr__(self, name, value):
        raise AttributeError(f"Message is immutable; cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Message is immutable; cannot delete {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Message(text={self.text!r}, number={self.number!r})"
