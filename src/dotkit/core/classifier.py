"""
File classifier - decides which files are dispatchable command scripts.

A file is a command when it has an executable bit or its first line carries a
recognized interpreter declaration (e.g. "#!/usr/bin/env bash"). The second
rule keeps scripts checked in without the executable bit discoverable.
"""

from __future__ import annotations

import stat
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from dotkit.config import Config

# Enough to hold any sane shebang line
_MARKER_READ_BYTES = 256


def read_first_line(path: Path) -> str:
    """Return the first line of a file, or "" if it cannot be read."""
    try:
        with path.open("rb") as f:
            head = f.read(_MARKER_READ_BYTES)
    except OSError:
        return ""
    return head.split(b"\n", 1)[0].decode("utf-8", errors="replace").rstrip("\r")


def has_script_marker(path: Path, markers: Iterable[str]) -> bool:
    """Check whether the file's first line starts with one of the markers."""
    first_line = read_first_line(path)
    if not first_line:
        return False
    return any(first_line.startswith(marker) for marker in markers)


def is_executable(path: Path) -> bool:
    """Check for any executable bit on a regular file."""
    try:
        mode = path.stat().st_mode
    except OSError:
        return False
    if not stat.S_ISREG(mode):
        return False
    return bool(mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def is_command(path: Path, config: Config) -> bool:
    """
    Check whether a path is a dispatchable command.

    Missing paths and directories are not commands; this never raises.

    Args:
        path: Candidate file
        config: Active configuration (for script markers)

    Returns:
        True if the file is executable or carries a script marker.
    """
    if not path.is_file():
        return False
    return is_executable(path) or has_script_marker(path, config.script_markers)


def contains_script_marker(path: Path, markers: Iterable[str]) -> bool:
    """Check whether any line of the file contains one of the markers."""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    return any(marker in text for marker in markers)


def is_script_source(path: Path, config: Config, match_extension: bool = True) -> bool:
    """
    Check whether a file is script source, for tooling such as linters.

    Unlike is_command, the marker may appear on any line and the executable
    bit is ignored.

    Args:
        path: Candidate file
        config: Active configuration
        match_extension: Also accept files with a known script extension

    Returns:
        True if the file looks like script source.
    """
    if not path.is_file():
        return False
    if match_extension and path.suffix in config.script_extensions:
        return True
    return contains_script_marker(path, config.script_markers)


def interpreter_argv(path: Path) -> list[str]:
    """
    Build the argv prefix needed to run a script.

    Executable files run directly. Files without an executable bit run through
    the interpreter named on their shebang line.

    Args:
        path: Resolved command file

    Returns:
        argv prefix ending with the script path.
    """
    if is_executable(path):
        return [str(path)]

    first_line = read_first_line(path)
    if first_line.startswith("#!"):
        interpreter = first_line[2:].split()
        if interpreter:
            return [*interpreter, str(path)]
    return [str(path)]
