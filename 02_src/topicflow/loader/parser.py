"""Line-oriented config format.

Non-blank lines come in triples::

    <agent class name>
    <comma-separated input topics>
    <comma-separated output topics>
"""

from dataclasses import dataclass

from ..errors import ConfigError

TRIPLE_COUNT_ERROR = "Config file lines must be divisible by 3"


@dataclass(frozen=True)
class AgentSpec:
    """One agent declaration from a config."""

    class_name: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...]


def parse_topics(line: str) -> tuple[str, ...]:
    parts = (part.strip() for part in line.split(","))
    return tuple(part for part in parts if part)


def parse_config(text: str) -> list[AgentSpec]:
    """Parse config text into agent declarations."""
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if len(lines) % 3 != 0:
        raise ConfigError(TRIPLE_COUNT_ERROR)

    return [
        AgentSpec(
            class_name=lines[i],
            inputs=parse_topics(lines[i + 1]),
            outputs=parse_topics(lines[i + 2]),
        )
        for i in range(0, len(lines), 3)
    ]
