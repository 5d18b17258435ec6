"""Configuration resolved from environment variables.

TERMINALTASK_CONFIG_DIR   directory for tasks and logs
                          (default: $XDG_CONFIG_HOME/terminaltask or ~/.config/terminaltask)
TERMINALTASK_TASKS_FILE   task file (default: <config dir>/tasks.json)
TERMINALTASK_LOG_LEVEL    log level name (default: INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

ENV_PREFIX = "TERMINALTASK"
APP_DIR_NAME = "terminaltask"
TASKS_FILE_NAME = "tasks.json"
LOG_FILE_NAME = "terminaltask.log"


class ConfigError(Exception):
    """Raised when no usable configuration directory can be set up."""


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_path(env: Mapping[str, str], name: str) -> Path | None:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


def _env_level(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


def default_config_dir(env: Mapping[str, str]) -> Path:
    xdg = _env_path(env, "XDG_CONFIG_HOME")
    base = xdg if xdg is not None else Path.home() / ".config"
    return base / APP_DIR_NAME


@dataclass(frozen=True)
class Config:
    config_dir: Path
    tasks_file: Path
    log_file: Path
    log_level: int = logging.INFO


def load_config(env: Mapping[str, str] | None = None) -> Config:
    """Build a Config from the environment and make sure its directory exists."""
    if env is None:
        env = os.environ

    config_dir = _env_path(env, _k("CONFIG_DIR")) or default_config_dir(env)
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"cannot create config dir {config_dir}: {e}") from e

    tasks_file = _env_path(env, _k("TASKS_FILE")) or config_dir / TASKS_FILE_NAME

    return Config(
        config_dir=config_dir,
        tasks_file=tasks_file,
        log_file=config_dir / LOG_FILE_NAME,
        log_level=_env_level(env, _k("LOG_LEVEL"), logging.INFO),
    )
