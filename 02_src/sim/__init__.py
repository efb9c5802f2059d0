"""Demo traffic driver."""

from .sim import DEMO_CONFIG, ISim, Sim

__all__ = ["DEMO_CONFIG", "ISim", "Sim"]
