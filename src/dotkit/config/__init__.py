"""Configuration management for dotkit."""

from dotkit.config.config import (
    DEFAULTS,
    PACKAGE_BASE_DIR,
    Config,
    debug_requested,
    load_config,
)

__all__ = [
    "DEFAULTS",
    "PACKAGE_BASE_DIR",
    "Config",
    "debug_requested",
    "load_config",
]
