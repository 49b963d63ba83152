"""
Interactive command picker for `dot` without arguments, using prompt_toolkit.

Suggestions come from the same completion code used by the shell, so the
picker offers exactly what tab-completion would.
"""

from __future__ import annotations

import shlex
import sys
from typing import TYPE_CHECKING

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.formatted_text import HTML

from dotkit.cli.completion import complete

if TYPE_CHECKING:
    from dotkit.config import Config


def command_words(text: str) -> list[str]:
    """Split typed text into COMP_WORDS-style words ('dot' prepended)."""
    parts = text.split()
    if not text or text[-1].isspace():
        parts.append("")
    return ["dot", *parts]


class CommandCompleter(Completer):
    """Completer for '<context> <script>' backed by dot's completion."""

    def __init__(self, config: Config):
        self.config = config

    def get_completions(self, document, complete_event):
        words = command_words(document.text_before_cursor)
        cword = len(words) - 1
        prefix = words[cword]

        for candidate in complete(self.config, words, cword):
            yield Completion(
                candidate,
                start_position=-len(prefix),
                display_meta="context" if cword == 1 else "script",
            )


def pick_command(config: Config) -> list[str]:
    """
    Prompt for a command line.

    Args:
        config: Active configuration

    Returns:
        Command words, or [] if the user entered nothing or cancelled.
    """
    session = PromptSession(
        completer=CommandCompleter(config),
        complete_while_typing=True,
    )
    try:
        text = session.prompt(HTML("<b>dot</b> "))
    except (EOFError, KeyboardInterrupt):
        return []

    try:
        return shlex.split(text)
    except ValueError as e:
        print(f"dot: {e}", file=sys.stderr)
        return []
