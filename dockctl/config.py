"""
Settings for dockctl.

Values are layered: built-in defaults, then a YAML settings file, then
DOCKCTL_* environment variables.
"""

import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from dockctl.errors import ConfigError

DEFAULT_SOCKET_URL = "unix:///var/run/docker.sock"
DEFAULT_CONFIG_PATH = os.path.expanduser("~/.dockctl/config.yaml")

ENV_CONFIG = "DOCKCTL_CONFIG"
ENV_OVERRIDES = {
    "DOCKCTL_DOCKER_HOST": "base_url",
    "DOCKCTL_TIMEOUT": "timeout",
    "DOCKCTL_LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Connection and logging settings for one dockctl invocation."""
    model_config = ConfigDict(extra="forbid")

    base_url: str = DEFAULT_SOCKET_URL
    timeout: int = 60
    log_level: str = "WARNING"

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level '{value}'")
        return value


def _read_settings_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in settings file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")
    return data


def load_settings(config_path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> Settings:
    """
    Builds Settings from defaults, a settings file and the environment.

    Args:
        config_path: Explicit YAML file. When None, DOCKCTL_CONFIG is used, then
                     ~/.dockctl/config.yaml if it exists.
        environ: Environment mapping, os.environ by default.

    Raises:
        ConfigError: If the file is unreadable or any value is invalid.
    """
    env = os.environ if environ is None else environ

    values: Dict[str, Any] = {"base_url": env.get("DOCKER_HOST") or DEFAULT_SOCKET_URL}

    path = config_path or env.get(ENV_CONFIG)
    if path:
        values.update(_read_settings_file(path))
    elif os.path.exists(DEFAULT_CONFIG_PATH):
        values.update(_read_settings_file(DEFAULT_CONFIG_PATH))

    for var, key in ENV_OVERRIDES.items():
        if env.get(var):
            values[key] = env[var]

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
