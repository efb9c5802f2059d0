"""Project-level configuration and path helpers."""

from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_MAILBOX_CAPACITY = 100
DEFAULT_CLOSE_GRACE_SECONDS = 2.0
DEFAULT_EVENT_BUFFER_SIZE = 500
DEFAULT_EVENTS_LIMIT = 50
DEFAULT_SIM_INTERVAL = 1.0


PathLike = Union[str, Path]


def resolve_log_path(env_value: PathLike | None = None) -> Path:
    """Resolve LOG_FILE to an absolute path."""
    if not env_value:
        return DEFAULT_LOG_PATH

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def resolve_int(env_value: str | None, default: int, minimum: int = 1) -> int:
    """Parse a positive integer setting, falling back to default."""
    if env_value is None or not str(env_value).strip():
        return default

    value = int(env_value)
    if value < minimum:
        raise ValueError(f"Expected a value >= {minimum}, got {value}")
    return value


def resolve_float(env_value: str | None, default: float) -> float:
    """Parse a non-negative float setting, falling back to default."""
    if env_value is None or not str(env_value).strip():
        return default

    value = float(env_value)
    if value < 0:
        raise ValueError(f"Expected a non-negative value, got {value}")
    return value


def resolve_flag(env_value: str | None, default: bool = False) -> bool:
    """Interpret common truthy strings ("1", "true", "yes", "on")."""
    if env_value is None or not str(env_value).strip():
        return default
    return str(env_value).strip().lower() in {"1", "true", "yes", "on"}
