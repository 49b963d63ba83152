"""
Command resolver - maps a typed command line to one executable file.

Roots are tried overlay first, then base; within a root each command root is
tried in configured order, and the last path segment is tried bare and then
with each known extension. The first candidate the classifier accepts wins, so
a user's dotfiles can shadow any built-in command by name.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Sequence

from dotkit.core.classifier import is_command
from dotkit.core.datamodels import Found, NotFound, NotFoundKind, Resolution

if TYPE_CHECKING:
    from dotkit.config import Config

logger = logging.getLogger(__name__)


def is_valid_name(name: str) -> bool:
    """Check that a context or script name is a single path segment."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\0" not in name


def candidate_paths(target: Path, extensions: Iterable[str]) -> list[Path]:
    """Bare path followed by each extension variant of its last segment."""
    return [target, *(target.with_name(target.name + ext) for ext in extensions)]


def context_dirs(config: Config, context: str) -> list[Path]:
    """Existing directories for a context, in resolution order."""
    if not is_valid_name(context):
        return []
    return [
        command_dir / context
        for root in config.roots()
        for command_dir in config.command_dirs(root)
        if (command_dir / context).is_dir()
    ]


def context_exists(config: Config, context: str) -> bool:
    """Check whether any root defines the context (hidden ones included)."""
    return bool(context_dirs(config, context))


def resolve(
    config: Config,
    context: str,
    script: str,
    extra_segments: Sequence[str] = (),
) -> Resolution:
    """
    Resolve a command to the file that should be executed.

    Args:
        config: Active configuration
        context: Context name (first word)
        script: Script name (second word)
        extra_segments: Deeper path segments for nested scripts

    Returns:
        Found with the winning path, or NotFound describing why.
    """
    segments = tuple(extra_segments)
    names = (script, *segments)

    if not is_valid_name(context):
        return NotFound(NotFoundKind.UNKNOWN_CONTEXT, context, script, segments)
    if not all(is_valid_name(name) for name in names):
        return NotFound(NotFoundKind.UNKNOWN_SCRIPT, context, script, segments)

    saw_file = False
    for root in config.roots():
        for command_dir in config.command_dirs(root):
            target = command_dir.joinpath(context, *names)
            for candidate in candidate_paths(target, config.script_extensions):
                if is_command(candidate, config):
                    logger.debug(f"Resolved '{' '.join((context, *names))}' to {candidate}")
                    return Found(candidate, context, script, segments)
                if candidate.is_file():
                    logger.debug(f"Skipping {candidate}: not a command")
                    saw_file = True

    if not context_exists(config, context):
        kind = NotFoundKind.UNKNOWN_CONTEXT
    elif saw_file:
        kind = NotFoundKind.NOT_EXECUTABLE
    else:
        kind = NotFoundKind.UNKNOWN_SCRIPT
    return NotFound(kind, context, script, segments)


def is_group(config: Config, context: str, segments: Sequence[str]) -> bool:
    """
    Check whether a command path names a directory of nested scripts.

    A path that resolves to a command in any root is never a group, so the
    dispatcher always runs what resolve() picks and passes the remaining
    words through as arguments.

    Args:
        config: Active configuration
        context: Context name
        segments: Script name followed by any nested segments

    Returns:
        True if the path should be descended into.
    """
    if not segments or not is_valid_name(context):
        return False
    if not all(is_valid_name(name) for name in segments):
        return False

    if isinstance(resolve(config, context, segments[0], segments[1:]), Found):
        return False

    return any(
        command_dir.joinpath(context, *segments).is_dir()
        for root in config.roots()
        for command_dir in config.command_dirs(root)
    )
