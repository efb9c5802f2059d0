"""Runtime error types."""


class ConfigError(ValueError):
    """Config text could not be turned into running agents."""
