"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import BlogConfig, ConfigModel

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "wpfeed" / "config.yaml"

# Points at a config file when --config is not given
CONFIG_PATH_ENV = "WPFEED_CONFIG"


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    """Pick the config file: explicit path, then $WPFEED_CONFIG, then the default."""
    if config_path is not None:
        return Path(config_path).expanduser()
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


class Config:
    """Lazily loaded wpfeed settings."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = resolve_config_path(config_path)
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Settings from ``config_path``, read on first access."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def blog(self) -> BlogConfig:
        """Settings for the post queries."""
        return self.config.blog

    def get_db_config(self) -> Dict[str, Any]:
        """Connection settings with the password taken from ``password_env`` when set."""
        postgres = self.config.postgres
        password = postgres.password
        if postgres.password_env:
            password = os.environ.get(postgres.password_env) or password

        return postgres.model_copy(update={"password": password}).model_dump()


def load_config(config_path: Path) -> ConfigModel:
    """Read and validate a YAML config file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML is malformed or a setting is invalid
    """
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        config_data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}") from e

    if not isinstance(config_data, dict):
        raise ValueError(f"Invalid configuration: expected a mapping in {config_path}")

    try:
        return ConfigModel.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Write ``config`` as YAML, dates as ISO strings."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        yaml.safe_dump(config.model_dump(mode="json"), default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
