"""Config loading module."""

from .generic_config import GenericConfig
from .math_example import MathExampleConfig
from .parser import TRIPLE_COUNT_ERROR, AgentSpec, parse_config, parse_topics

__all__ = [
    "AgentSpec",
    "GenericConfig",
    "MathExampleConfig",
    "TRIPLE_COUNT_ERROR",
    "parse_config",
    "parse_topics",
]
