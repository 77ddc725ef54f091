"""Console output for composer-updater.

All user-facing text goes through :func:`message`, which filters on the
configured verbosity and decorates the text with colour or GitHub Actions
workflow commands where appropriate.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum, IntEnum


class MessageType(Enum):
    """Kind of message, used for colouring and stream selection."""

    NORMAL = "normal"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    DEBUG = "debug"


class VerbosityLevel(IntEnum):
    """Minimum ``-v`` count required for a message to be shown."""

    ALWAYS = 0
    VERBOSE = 1
    EXTRA_VERBOSE = 2
    DEBUG = 3


_COLORS = {
    MessageType.INFO: "\033[36m",
    MessageType.SUCCESS: "\033[32m",
    MessageType.WARNING: "\033[33m",
    MessageType.ERROR: "\033[31m",
    MessageType.DEBUG: "\033[90m",
}
_RESET = "\033[0m"

# Workflow command prefixes understood by the GitHub Actions runner
_ANNOTATIONS = {
    MessageType.WARNING: "::warning::",
    MessageType.ERROR: "::error::",
    MessageType.DEBUG: "::debug::",
}


class OutputManager:
    """Holds process-wide output settings."""

    def __init__(self, verbosity: int = 0, use_color: bool = False):
        self.verbosity = verbosity
        self.use_color = use_color
        self.in_actions = os.environ.get("GITHUB_ACTIONS") == "true"

    def should_show(self, level: VerbosityLevel) -> bool:
        # Actions logs keep debug lines behind the runner's own switch
        if self.in_actions and level == VerbosityLevel.DEBUG:
            return True
        return self.verbosity >= level

    def format(self, text: str, msg_type: MessageType) -> str:
        if self.in_actions and msg_type in _ANNOTATIONS:
            return f"{_ANNOTATIONS[msg_type]}{text}"
        if self.use_color and msg_type in _COLORS:
            return f"{_COLORS[msg_type]}{text}{_RESET}"
        return text

    def emit(self, text: str, msg_type: MessageType, level: VerbosityLevel) -> None:
        if not self.should_show(level):
            return
        stream = sys.stderr if msg_type in (MessageType.WARNING, MessageType.ERROR) else sys.stdout
        print(self.format(text, msg_type), file=stream)


_output = OutputManager()


def get_output() -> OutputManager:
    """Return the shared :class:`OutputManager`."""
    return _output


def message(
    text: str,
    msg_type: MessageType = MessageType.NORMAL,
    level: VerbosityLevel = VerbosityLevel.ALWAYS,
) -> None:
    """Print *text* if the current verbosity allows it.

    Args:
        text: Message to print
        msg_type: Kind of message (controls colour and stream)
        level: Minimum verbosity needed to show the message
    """
    _output.emit(text, msg_type, level)


@contextmanager
def group(title: str) -> Iterator[None]:
    """Fold the enclosed output into a collapsible group on Actions runners.

    Outside GitHub Actions the title is printed as a plain info line.
    """
    if _output.in_actions:
        print(f"::group::{title}")
        try:
            yield
        finally:
            print("::endgroup::")
    else:
        message(title, MessageType.INFO, VerbosityLevel.ALWAYS)
        yield
