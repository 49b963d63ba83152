"""
Result types for command resolution and listing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union


class NotFoundKind(str, Enum):
    """Why a command line did not resolve to an executable."""

    UNKNOWN_CONTEXT = "unknown_context"
    UNKNOWN_SCRIPT = "unknown_script"
    NOT_EXECUTABLE = "not_executable"


@dataclass(frozen=True)
class Found:
    """A command resolved to a single file."""

    path: Path
    context: str
    script: str
    segments: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NotFound:
    """A command that did not resolve."""

    kind: NotFoundKind
    context: str
    script: str
    segments: tuple[str, ...] = field(default_factory=tuple)

    @property
    def command(self) -> str:
        """The command as the user typed it, e.g. 'git status'."""
        return " ".join((self.context, self.script, *self.segments))

    def message(self) -> str:
        """User-facing description of the failure."""
        if self.kind is NotFoundKind.UNKNOWN_CONTEXT:
            return f"Unknown context '{self.context}'"
        # Non-executable files are reported like missing ones
        return f"Unknown command '{self.command}'"


Resolution = Union[Found, NotFound]


@dataclass(frozen=True)
class ScriptEntry:
    """A listed script and the file it resolves to."""

    name: str
    context: str
    path: Path
