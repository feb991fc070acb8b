"""
Runtime Configuration

Central configuration for tree construction, logging and output.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkle_core.schemas.errors import ConfigException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "MERKLE_"

OUTPUT_FORMATS = ("human", "json")

DEFAULT_CONFIG_PATHS = (
    Path("merkle.yaml"),
    Path("merkle.json"),
    Path.home() / ".config" / "merkle-allowlist" / "config.yaml",
)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class TreeConfig:
    """Configuration for tree construction."""
    sort_leaves: bool = False
    lowercase: bool = True  # lower-case domain values before hashing


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    output_format: str = "human"
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigException(
                f"Unknown output format: {self.output_format}",
                details={"allowed": list(OUTPUT_FORMATS)},
            )

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_SORT_LEAVES: Sort leaf hashes before building (true/false)
        - MERKLE_LOWERCASE: Lower-case values before hashing (true/false)
        - MERKLE_LOG_LEVEL: Log level
        - MERKLE_LOG_FILE: Optional log file path
        - MERKLE_OUTPUT_FORMAT: human or json
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}SORT_LEAVES"):
            overrides.setdefault("tree", {})["sort_leaves"] = _env_bool(
                f"{ENV_PREFIX}SORT_LEAVES", False
            )
        if os.getenv(f"{ENV_PREFIX}LOWERCASE"):
            overrides.setdefault("tree", {})["lowercase"] = _env_bool(
                f"{ENV_PREFIX}LOWERCASE", True
            )
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
            overrides["output_format"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML or JSON file."""
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigException(
                f"Config file must contain a mapping: {path}",
                details={"path": str(path)},
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {}) or {}
        try:
            tree = TreeConfig(**tree_data)
        except TypeError as e:
            raise ConfigException(f"Invalid tree configuration: {e}") from e

        return cls(
            tree=tree,
            log_level=str(data.get("log_level", "INFO")).upper(),
            log_file=data.get("log_file"),
            output_format=data.get("output_format", "human"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "tree" in overrides:
            for key, value in overrides["tree"].items():
                setattr(new_config.tree, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"].upper()
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]
        if "output_format" in overrides:
            new_config.output_format = overrides["output_format"]
            new_config.__post_init__()

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "sort_leaves": self.tree.sort_leaves,
                "lowercase": self.tree.lowercase,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "output_format": self.output_format,
            "extra": self.extra,
        }


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. When no path is given,
    the default locations are searched and the first existing file wins.
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """# merkle-allowlist configuration
tree:
  sort_leaves: false
  lowercase: true
log_level: INFO
log_file: null
output_format: human
"""
