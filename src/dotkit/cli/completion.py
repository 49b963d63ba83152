#!/usr/bin/env python3
"""
Shell completion for the dot command (dot-completion command).

Usage:
    # Generate and source bash completion
    source <(dot-completion bash)

    # Add to .bashrc for persistent completion
    echo 'source <(dot-completion bash)' >> ~/.bashrc

The generated shell functions call back into `dot-completion complete`, so
candidates always come from the same discovery code the dispatcher uses.
"""

from __future__ import annotations

import argparse
import signal
import sys
from typing import TYPE_CHECKING, Sequence

from dotkit.cli.dispatch import split_options
from dotkit.config import debug_requested, load_config
from dotkit.core import ConfigError, list_contexts, list_scripts
from dotkit.logging import configure_logging

if TYPE_CHECKING:
    from dotkit.config import Config

# Command word positions, counted after dot's own leading options
CONTEXT_WORD = 1
SCRIPT_WORD = 2

BASH_COMPLETION = r'''
# dot bash completion
_dot_completions() {
    local cur
    COMPREPLY=()
    cur="${COMP_WORDS[COMP_CWORD]}"

    # Contexts, then scripts, after dot's own options; nothing deeper
    local candidates
    candidates=$(dot-completion complete "$COMP_CWORD" "${COMP_WORDS[@]}" 2>/dev/null)
    if [[ -n "$candidates" ]]; then
        COMPREPLY=($(compgen -W "$candidates" -- "$cur"))
    fi
}

# Register completions
complete -o default -F _dot_completions dot
'''

ZSH_COMPLETION = r'''
# dot zsh completion
_dot() {
    local -a candidates

    # $words is 1-indexed in zsh; shift to bash COMP_CWORD numbering
    candidates=(${=$(dot-completion complete $((CURRENT - 1)) "${words[@]}" 2>/dev/null)})

    if (( ${#candidates} )); then
        compadd -a candidates
    else
        _files
    fi
}

compdef _dot dot
'''


def complete(config: Config, words: Sequence[str], cword: int) -> list[str]:
    """
    Completion candidates for the word under the cursor.

    Args:
        config: Active configuration
        words: Command line words, words[0] being the command name
        cword: Index of the word being completed

    Returns:
        Matching context names (first command word), script names (second), or [].
    """
    if cword < CONTEXT_WORD:
        return []
    prefix = words[cword] if cword < len(words) else ""

    # dot's own leading options (e.g. -v) do not count as command words
    _, typed = split_options(words[1:cword])
    position = len(typed) + 1

    if position == CONTEXT_WORD:
        candidates = list_contexts(config)
    elif position == SCRIPT_WORD:
        candidates = list_scripts(config, typed[0])
    else:
        # Nested scripts resolve but are not completed
        return []

    return [c for c in candidates if c.startswith(prefix)]


def format_candidates(candidates: Sequence[str]) -> str:
    """Join candidates into the word list consumed by compgen -W."""
    return " ".join(candidates)


def cmd_complete(args) -> int:
    """Print completion candidates for a partial command line."""
    config = load_config()
    print(format_candidates(complete(config, args.words, args.cword)))
    return 0


def cmd_contexts(args) -> int:
    """Print all contexts, one per line."""
    for context in list_contexts(load_config()):
        print(context)
    return 0


def cmd_scripts(args) -> int:
    """Print the scripts of a context, one per line."""
    for script in list_scripts(load_config(), args.context):
        print(script)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Generate shell completion scripts."""
    # Handle broken pipe gracefully (e.g., when used with process substitution)
    if hasattr(signal, "SIGPIPE"):
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)

    parser = argparse.ArgumentParser(
        prog="dot-completion",
        description="Generate shell completion scripts for dot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Usage:
    # Source bash completion
    source <(dot-completion bash)

    # Source zsh completion
    source <(dot-completion zsh)

    # List contexts / scripts (for custom completion)
    dot-completion contexts
    dot-completion scripts git
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("bash", help="Print bash completion script")
    subparsers.add_parser("zsh", help="Print zsh completion script")

    contexts_parser = subparsers.add_parser("contexts", help="List available contexts")
    contexts_parser.set_defaults(func=cmd_contexts)

    scripts_parser = subparsers.add_parser("scripts", help="List scripts in a context")
    scripts_parser.add_argument("context", help="Context name")
    scripts_parser.set_defaults(func=cmd_scripts)

    complete_parser = subparsers.add_parser(
        "complete", help="Print candidates for a partial command line"
    )
    complete_parser.add_argument("cword", type=int, help="Index of the word being completed")
    complete_parser.add_argument(
        "words", nargs=argparse.REMAINDER, help="Command line words, starting with 'dot'"
    )
    complete_parser.set_defaults(func=cmd_complete)

    args = parser.parse_args(argv)
    configure_logging(args.verbose or debug_requested())

    if args.command is None:
        parser.print_help()
        return 2
    if args.command == "bash":
        print(BASH_COMPLETION)
        return 0
    if args.command == "zsh":
        print(ZSH_COMPLETION)
        return 0

    try:
        return args.func(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
