"""Configuration loading from YAML files and environment variables."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ...domain.exceptions import ConfigurationError
from .config_models import StreambyterConfig

ENV_PREFIX = "STREAMBYTER_"

# Environment variable suffix -> (section, key)
ENV_OVERRIDES = {
    "CHUNK_SIZE": ("reader", "chunk_size"),
    "ENCODING": ("reader", "encoding"),
    "MAX_CONCURRENCY": ("fan_out", "max_concurrency"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "file"),
    "OUTPUT_FORMAT": ("output", "default_format"),
}


class ConfigLoader:
    """
    Loads streambyter configuration.

    Precedence, lowest to highest: built-in defaults, the first config file
    found, ``STREAMBYTER_*`` environment variables.
    """

    @staticmethod
    def default_paths() -> List[Path]:
        return [
            Path.cwd() / "streambyter.yaml",
            Path.home() / ".streambyter" / "config.yaml",
        ]

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> StreambyterConfig:
        """
        Load configuration.

        Args:
            config_path: Explicit config file; must exist when given

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If the file is unreadable or invalid
        """
        data: Dict[str, Any] = {}

        if config_path:
            path = Path(config_path)
            if not path.is_file():
                raise ConfigurationError(f"Config file not found: {path}")
            data = cls._read_yaml(path)
        else:
            for candidate in cls.default_paths():
                if candidate.is_file():
                    data = cls._read_yaml(candidate)
                    break

        cls._apply_env_overrides(data)

        try:
            return StreambyterConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping at the top level")
        return data

    @staticmethod
    def _apply_env_overrides(data: Dict[str, Any]):
        for suffix, (section, key) in ENV_OVERRIDES.items():
            value = os.environ.get(ENV_PREFIX + suffix)
            if value is None:
                continue
            section_data = data.setdefault(section, {})
            if not isinstance(section_data, dict):
                raise ConfigurationError(f"Config section '{section}' must be a mapping")
            section_data[key] = value

    @classmethod
    def create_default_config(cls, path: Optional[str] = None) -> Path:
        """
        Write the default configuration as YAML.

        Args:
            path: Target file (defaults to the per-user location)

        Returns:
            Path of the written file
        """
        target = Path(path) if path else cls.default_paths()[-1]
        if target.exists():
            raise ConfigurationError(f"Config file already exists: {target}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(StreambyterConfig().to_yaml(), encoding="utf-8")
        return target

    @classmethod
    def get_config_info(cls) -> Dict[str, Any]:
        """Describe where configuration comes from."""
        return {
            "default_paths": [str(p) for p in cls.default_paths()],
            "existing_configs": [str(p) for p in cls.default_paths() if p.is_file()],
            "env_overrides": [
                ENV_PREFIX + suffix for suffix in ENV_OVERRIDES
                if ENV_PREFIX + suffix in os.environ
            ],
        }
