"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Config")


class ConfigSource(Enum):
    """Configuration sources."""

    FILE = auto()
    ENV = auto()
    DICT = auto()
    DEFAULT = auto()


@dataclass
class Config:
    """Router configuration."""

    # Routing
    router_prefix: str = ""
    views_directory: str = ""

    # Server settings (wsgiref development server)
    host: str = "127.0.0.1"
    port: int = 8080

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    # CORS
    cors_enabled: bool = False
    cors_origin: str = "*"
    cors_methods: List[str] = field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    cors_headers: List[str] = field(
        default_factory=lambda: ["Content-Type", "Authorization"]
    )
    cors_max_age: int = 86400

    source: ConfigSource = field(default=ConfigSource.DEFAULT, compare=False)

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        filtered.setdefault("source", ConfigSource.DICT)
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        data["source"] = ConfigSource.FILE
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for YAML config (pip install funcrouter[yaml])")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        data["source"] = ConfigSource.FILE
        return cls.from_dict(data)

    @classmethod
    def from_env(cls: Type[T], prefix: str = "FUNCROUTER_") -> T:
        """Load config from environment variables.

        Only variables that are set end up in ``to_dict(explicit=True)``.
        """
        defaults = cls()
        data: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            config_key = key[len(prefix):].lower()
            if config_key == "source" or not hasattr(defaults, config_key):
                continue

            data[config_key] = _convert_env(key, value, getattr(defaults, config_key))

        config = cls.from_dict(data)
        config.source = ConfigSource.ENV
        config._explicit = set(data)
        return config

    def to_dict(self, explicit: bool = False) -> Dict[str, Any]:
        """Convert to dictionary.

        With explicit=True only fields read from the environment are
        returned (for configs built by from_env).
        """
        names = [name for name in self.__dataclass_fields__ if name != "source"]
        if explicit:
            chosen = getattr(self, "_explicit", None)
            if chosen is not None:
                names = [name for name in names if name in chosen]
        return {name: getattr(self, name) for name in names}

    def merge(self, other: "Config") -> "Config":
        """Merge with another config (other's explicit values take precedence)."""
        data = self.to_dict()
        data.update(other.to_dict(explicit=True))
        data["source"] = other.source
        return type(self).from_dict(data)


def _convert_env(name: str, value: str, default: Any) -> Any:
    """Convert an env string to the type of the field's default.

    Raises:
        ValueError: The value does not fit the field type
    """
    # bool before int: bool is an int subclass
    if isinstance(default, bool):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"{name}: expected a boolean, got {value!r}")
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{name}: expected an integer, got {value!r}") from None
    if isinstance(default, float):
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{name}: expected a number, got {value!r}") from None
    if isinstance(default, list):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "FUNCROUTER_",
) -> Config:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = Config()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path.endswith(".json"):
                config = Config.from_json(path)
            elif path.endswith((".yaml", ".yml")):
                config = Config.from_yaml(path)
            else:
                logger.warning(f"Unknown config format: {path}")
        else:
            logger.warning(f"Config file not found: {path}")

    # Override with environment variables
    env_config = Config.from_env(env_prefix)
    config = config.merge(env_config)

    return config


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """Install a stderr handler on the funcrouter_core logger.

    Args:
        level: Level name (DEBUG, INFO, ...)
        fmt: "text" or "json"
    """
    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    package_logger = logging.getLogger("funcrouter_core")
    package_logger.setLevel(level.upper())
    package_logger.addHandler(handler)
    return handler


__all__ = [
    "Config",
    "ConfigSource",
    "load_config",
    "configure_logging",
    "JSONFormatter",
]
