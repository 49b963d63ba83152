"""
Context and script discovery.

Everything is re-derived from the filesystem on every call so that scripts
added or edited in the dotfiles tree show up on the next invocation. Results
are sorted, which keeps completion output stable.

Layout scanned for each root (base and, if present, overlay):

    <root>/<command_root>/<context>/<script>[.sh]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from dotkit.core.classifier import is_command, is_script_source
from dotkit.core.datamodels import Found, ScriptEntry
from dotkit.core.resolver import context_dirs, is_valid_name, resolve

if TYPE_CHECKING:
    from dotkit.config import Config

logger = logging.getLogger(__name__)


def _entries(directory: Path) -> list[Path]:
    """List a directory's visible entries, or [] if it cannot be read."""
    if not directory.is_dir():
        return []
    try:
        return [p for p in directory.iterdir() if not p.name.startswith(".")]
    except OSError as e:
        logger.warning(f"Cannot read {directory}: {e}")
        return []


def script_name(filename: str, extensions: list[str]) -> str:
    """Strip a known script extension from a file name."""
    for ext in extensions:
        if filename.endswith(ext) and len(filename) > len(ext):
            return filename[: -len(ext)]
    return filename


def list_contexts(config: Config) -> list[str]:
    """
    List context names across the base and overlay roots.

    Args:
        config: Active configuration

    Returns:
        Sorted, de-duplicated context names, hidden contexts excluded.
    """
    names: set[str] = set()
    for root in config.roots():
        for command_dir in config.command_dirs(root):
            names.update(p.name for p in _entries(command_dir) if p.is_dir())

    return sorted(name for name in names if name not in config.hidden_contexts)


def list_script_entries(config: Config, context: str) -> list[ScriptEntry]:
    """
    List the scripts of a context with the file each name resolves to.

    Names are merged across roots; a name defined in both keeps only the
    entry the resolver picks, so listing and dispatch always agree.

    Args:
        config: Active configuration
        context: Context name

    Returns:
        Entries sorted by name. Unknown contexts give [].
    """
    names: set[str] = set()
    for directory in context_dirs(config, context):
        for path in _entries(directory):
            if is_command(path, config):
                names.add(script_name(path.name, config.script_extensions))

    entries = []
    for name in sorted(names):
        if not is_valid_name(name):
            continue
        resolution = resolve(config, context, name)
        if isinstance(resolution, Found):
            entries.append(ScriptEntry(name=name, context=context, path=resolution.path))
        else:
            logger.debug(f"Skipping {context}/{name}: {resolution.kind.value}")
    return entries


def list_scripts(config: Config, context: str) -> list[str]:
    """List script names available in a context."""
    return [entry.name for entry in list_script_entries(config, context)]


def list_script_files(config: Config) -> list[Path]:
    """
    List every script source file in both trees, for tooling such as linters.

    A file qualifies when it contains a script marker on any line. In the
    source dirs (plus base_source_dirs in the base tree) a known extension
    also qualifies; marker_only_source_dirs are scanned for markers only.
    The executable bit is ignored.

    Args:
        config: Active configuration

    Returns:
        Sorted, de-duplicated file paths.
    """
    # (directory, match_extension)
    search_dirs = [
        (config.base_path / name, True)
        for name in [*config.source_dirs, *config.base_source_dirs]
    ]
    search_dirs.extend(
        (config.base_path / name, False) for name in config.marker_only_source_dirs
    )
    overlay = config.overlay_root()
    if overlay is not None:
        search_dirs.extend((overlay / name, True) for name in config.source_dirs)

    found: set[Path] = set()
    for directory, match_extension in search_dirs:
        if not directory.is_dir():
            continue
        for path in directory.rglob("*"):
            if is_script_source(path, config, match_extension):
                found.add(path)

    return sorted(found)
