#!/usr/bin/env python3
"""
CLI entry point for running user scripts (dot command).

    dot <context> <script> [args...]

Scripts live in <root>/scripts/<context>/<script> under the dotkit tree
(DOTKIT_PATH) and the user's dotfiles tree (DOTFILES_PATH). A script in the
dotfiles tree shadows a built-in script with the same name.
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from typing import TYPE_CHECKING, Sequence

from dotkit import __version__
from dotkit.config import debug_requested, load_config
from dotkit.core import (
    ConfigError,
    Found,
    context_exists,
    is_group,
    list_contexts,
    list_script_entries,
    list_script_files,
    resolve,
)
from dotkit.core.classifier import interpreter_argv
from dotkit.logging import configure_logging

if TYPE_CHECKING:
    from dotkit.config import Config

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_CANNOT_EXECUTE = 126
EXIT_NOT_FOUND = 127


def split_command(config: Config, words: Sequence[str]) -> tuple[str, str, list[str], list[str]]:
    """
    Split command words into context, script, nested segments and arguments.

    Words after the script name are taken as nested segments for as long as
    the path so far is a directory of scripts.

    Args:
        config: Active configuration
        words: Command words, starting with the context

    Returns:
        Tuple of (context, script, segments, args)
    """
    context, script = words[0], words[1]
    rest = list(words[2:])
    segments: list[str] = []

    while rest and is_group(config, context, [script, *segments]):
        segments.append(rest.pop(0))

    return context, script, segments, rest


def run_script(found: Found, args: Sequence[str]) -> int:
    """
    Run a resolved script and return its exit status unchanged.

    stdin, stdout and stderr are inherited; nothing is captured.

    Args:
        found: Resolution result
        args: Arguments passed through verbatim

    Returns:
        Script exit code, or 128 + signal number if it was killed.
    """
    argv = [*interpreter_argv(found.path), *args]
    logger.debug(f"Executing {argv}")

    try:
        completed = subprocess.run(argv)
    except OSError as e:
        print(f"dot: cannot execute {found.path}: {e}", file=sys.stderr)
        return EXIT_CANNOT_EXECUTE

    if completed.returncode < 0:
        return 128 - completed.returncode
    return completed.returncode


def dispatch(config: Config, words: Sequence[str]) -> int:
    """
    Resolve and run `<context> <script> [args...]`.

    Args:
        config: Active configuration
        words: At least two command words

    Returns:
        Process exit code.
    """
    context, script, segments, args = split_command(config, words)
    resolution = resolve(config, context, script, segments)

    if not isinstance(resolution, Found):
        logger.debug(f"Resolution failed: {resolution.kind.value}")
        print(f"dot: {resolution.message()}", file=sys.stderr)
        return EXIT_NOT_FOUND

    return run_script(resolution, args)


def print_context(config: Config, context: str) -> int:
    """Print the scripts of one context."""
    if not context_exists(config, context):
        print(f"dot: Unknown context '{context}'", file=sys.stderr)
        return EXIT_NOT_FOUND

    entries = list_script_entries(config, context)
    if not entries:
        print(f"No scripts in context '{context}'")
        return EXIT_OK

    print(f"\n{context}:")
    for entry in entries:
        print(f"  - {entry.name}")
    print()
    return EXIT_OK


def print_all(config: Config) -> int:
    """Print every context with its scripts."""
    contexts = list_contexts(config)
    if not contexts:
        print("No scripts found.")
        for command_dir in config.command_dirs(config.overlay_root() or config.base_path):
            print(f"Add scripts under {command_dir}/<context>/")
        return EXIT_OK

    print("\nAvailable commands:")
    for context in contexts:
        names = [entry.name for entry in list_script_entries(config, context)]
        print(f"  {context}: {', '.join(names) if names else '(empty)'}")
    print()
    return EXIT_OK


def split_options(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Separate dot's own leading options from the command words."""
    for i, arg in enumerate(argv):
        if arg == "--":
            return list(argv[:i]), list(argv[i + 1:])
        if not arg.startswith("-"):
            return list(argv[:i]), list(argv[i:])
    return list(argv), []


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for dot's own options."""
    parser = argparse.ArgumentParser(
        prog="dot",
        usage="dot [options] [<context> [<script> [args...]]]",
        description="Run scripts from your dotfiles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    dot                       List (or interactively pick) available commands
    dot git                   List scripts in the git context
    dot git status --short    Run scripts/git/status with '--short'
    dot --list-script-files   Print every script source file (for linting)

Scripts in $DOTFILES_PATH/scripts/ override built-ins with the same name.
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log discovery and resolution to stderr")
    parser.add_argument("--list-script-files", action="store_true",
                        help="Print all script source files in both trees")
    parser.add_argument("--version", action="version", version=f"dot {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the dot CLI."""
    argv = sys.argv[1:] if argv is None else list(argv)
    options, words = split_options(argv)

    args = build_parser().parse_args(options)
    configure_logging(args.verbose or debug_requested())

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.list_script_files:
        for path in list_script_files(config):
            print(path)
        return EXIT_OK

    if not words:
        if sys.stdin.isatty() and sys.stdout.isatty():
            from dotkit.cli.picker import pick_command

            picked = pick_command(config)
            if not picked:
                return EXIT_OK
            words = picked
        else:
            return print_all(config)

    if len(words) == 1:
        return print_context(config, words[0])

    return dispatch(config, words)


if __name__ == "__main__":
    sys.exit(main())
