"""
Configuration for dotkit.

The dispatcher works from an explicit Config built once at startup. Paths come
from the environment (DOTKIT_PATH, DOTFILES_PATH); the discovery conventions
can be tuned through an optional JSON file at ~/.dotkit/config.json.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from dotkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Bundled framework tree, used as base path when DOTKIT_PATH is unset
PACKAGE_BASE_DIR = Path(__file__).resolve().parent.parent / "builtins"

CONFIG_DIR = Path.home() / ".dotkit"
CONFIG_FILE = CONFIG_DIR / "config.json"

BASE_PATH_ENV = "DOTKIT_PATH"
OVERLAY_PATH_ENV = "DOTFILES_PATH"
CONFIG_FILE_ENV = "DOTKIT_CONFIG"
DEBUG_ENV = "DOTKIT_DEBUG"

# Default values - single source of truth
DEFAULTS = {
    "command_roots": ["scripts"],
    "script_extensions": [".sh"],
    "script_markers": ["#!/usr/bin/env bash"],
    "hidden_contexts": ["core"],
    "source_dirs": ["bin", "scripts", "shell"],
    "base_source_dirs": ["dotfiles_template"],
    "marker_only_source_dirs": ["installer", "restorer"],
}


class Config(BaseModel):
    """Root paths and discovery conventions for the dispatcher.

    The same command_roots apply to the base and the overlay tree.
    """

    model_config = {"extra": "ignore"}  # Ignore unknown fields like _comment

    base_path: Path = Field(description="Framework installation tree")
    overlay_path: Optional[Path] = Field(
        default=None,
        description="User dotfiles tree that extends or shadows the base tree"
    )
    command_roots: list[str] = Field(
        default_factory=lambda: list(DEFAULTS["command_roots"]),
        description="Top-level directories scanned for contexts"
    )
    script_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULTS["script_extensions"]),
        description="Extensions stripped from script names"
    )
    script_markers: list[str] = Field(
        default_factory=lambda: list(DEFAULTS["script_markers"]),
        description="First-line interpreter declarations that mark a script"
    )
    hidden_contexts: list[str] = Field(
        default_factory=lambda: list(DEFAULTS["hidden_contexts"]),
        description="Contexts left out of listings and completion"
    )
    source_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULTS["source_dirs"]),
        description="Directories searched for script sources in both trees"
    )
    base_source_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULTS["base_source_dirs"]),
        description="Extra directories searched for script sources in the base tree"
    )
    marker_only_source_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULTS["marker_only_source_dirs"]),
        description="Base-tree directories where only the script marker identifies sources"
    )

    def overlay_root(self) -> Path | None:
        """Return the overlay path if it is configured and exists right now."""
        if self.overlay_path is not None and self.overlay_path.is_dir():
            return self.overlay_path
        return None

    def roots(self) -> list[Path]:
        """Existing roots in resolution order: overlay first, then base."""
        overlay = self.overlay_root()
        if overlay is None:
            return [self.base_path]
        return [overlay, self.base_path]

    def command_dirs(self, root: Path) -> list[Path]:
        """Command root directories under a root, in configured order."""
        return [root / name for name in self.command_roots]


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read the JSON config file, returning {} when missing or invalid."""
    if not path.exists():
        return {}

    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Invalid config file {path} ({e}), using defaults")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Invalid config file {path} (expected an object), using defaults")
        return {}
    return data


def debug_requested(environ: Mapping[str, str] | None = None) -> bool:
    """Check whether DOTKIT_DEBUG asks for debug logging.

    Read separately from load_config so logging can be set up before the
    config file is parsed.
    """
    environ = os.environ if environ is None else environ
    return environ.get(DEBUG_ENV, "").lower() in ("1", "true", "yes")


def load_config(
    environ: Mapping[str, str] | None = None,
    config_file: Path | None = None,
) -> Config:
    """Build the Config used for a whole dispatch or completion request.

    Settings come from the JSON config file; root paths come from the
    environment and override anything in the file.

    Args:
        environ: Environment mapping (default: os.environ)
        config_file: Config file path (default: $DOTKIT_CONFIG or ~/.dotkit/config.json)

    Returns:
        Validated Config.

    Raises:
        ConfigError: If the base path is missing or a setting is invalid.
    """
    environ = os.environ if environ is None else environ

    if config_file is None:
        env_file = environ.get(CONFIG_FILE_ENV)
        config_file = Path(env_file).expanduser() if env_file else CONFIG_FILE

    data = _read_config_file(config_file)
    # Paths are never taken from the file
    data.pop("base_path", None)
    data.pop("overlay_path", None)

    base = environ.get(BASE_PATH_ENV)
    data["base_path"] = Path(base).expanduser() if base else PACKAGE_BASE_DIR

    overlay = environ.get(OVERLAY_PATH_ENV)
    data["overlay_path"] = Path(overlay).expanduser() if overlay else None

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    if not config.base_path.is_dir():
        raise ConfigError(f"Base path is not a directory: {config.base_path}")

    if config.overlay_path is not None and config.overlay_root() is None:
        logger.debug(f"Overlay path {config.overlay_path} does not exist, skipping")

    return config
