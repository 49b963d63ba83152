"""
CLI module for the dotkit package.

Provides the dot dispatcher and the dot-completion helper.
"""

from dotkit.cli.completion import complete
from dotkit.cli.dispatch import dispatch, main

__all__ = [
    "complete",
    "dispatch",
    "main",
]
