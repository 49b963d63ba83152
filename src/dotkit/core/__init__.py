"""
Core module for the dotkit package.

Provides command discovery, classification and resolution over the base and
overlay script trees.
"""

from dotkit.core.classifier import is_command, is_script_source
from dotkit.core.datamodels import Found, NotFound, NotFoundKind, Resolution, ScriptEntry
from dotkit.core.discovery import (
    list_contexts,
    list_script_entries,
    list_script_files,
    list_scripts,
)
from dotkit.core.exceptions import ConfigError, DotkitError
from dotkit.core.resolver import context_exists, is_group, resolve

__all__ = [
    # Classification
    "is_command",
    "is_script_source",
    # Discovery
    "list_contexts",
    "list_scripts",
    "list_script_entries",
    "list_script_files",
    # Resolution
    "resolve",
    "is_group",
    "context_exists",
    # Models
    "Found",
    "NotFound",
    "NotFoundKind",
    "Resolution",
    "ScriptEntry",
    # Exceptions
    "DotkitError",
    "ConfigError",
]
