"""
Runtime Configuration Module

Provides configuration loading and management for tree construction and the CLI.
"""

from .runtime import (
    RuntimeConfig,
    TreeConfig,
    load_config,
    get_default_config_template,
)

__all__ = [
    "RuntimeConfig",
    "TreeConfig",
    "load_config",
    "get_default_config_template",
]
