"""Settings for task-tracker, read from environment variables.

With no variables set, the store is ``tasks.json`` in the current working
directory and only warnings are logged.
"""

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASK_TRACKER"

DEFAULT_DB_PATH = Path("tasks.json")
DEFAULT_LOG_LEVEL = "WARNING"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        db_path: Location of the JSON task store
        log_level: Name of the level for the stderr log handler
    """

    db_path: Path = DEFAULT_DB_PATH
    log_level: str = DEFAULT_LOG_LEVEL


def get_settings() -> Settings:
    """Build Settings from ``TASK_TRACKER_*`` environment variables."""
    return Settings(
        db_path=_env_path(_k("DB_PATH"), DEFAULT_DB_PATH),
        log_level=_env(_k("LOG_LEVEL"), DEFAULT_LOG_LEVEL).upper(),
    )
