"""
Exception classes for dotkit.

Command lookup failures are not exceptions; see NotFound in datamodels.
"""


class DotkitError(Exception):
    """Base exception for dotkit errors."""


class ConfigError(DotkitError):
    """Configuration is invalid or the base path is missing."""
