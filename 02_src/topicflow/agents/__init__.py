"""Agents module."""

from .base import IAgent
from .catalog import AgentCatalog, AgentFactory, default_catalog
from .numeric import (
    BinOpAgent,
    DecrementAgent,
    IncAgent,
    MultiplyAgent,
    PlusAgent,
    UnaryAgent,
    structural_id,
)
from .serialized import SerializedAgent

__all__ = [
    "IAgent",
    "SerializedAgent",
    # Catalog
    "AgentCatalog",
    "AgentFactory",
    "default_catalog",
    # Reference agents
    "UnaryAgent",
    "IncAgent",
    "DecrementAgent",
    "BinOpAgent",
    "PlusAgent",
    "MultiplyAgent",
    "structural_id",
]
