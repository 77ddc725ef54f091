"""CLI command extensions for composer-updater."""

from .local_commands import LocalCommands
from .run_commands import RunCommands

__all__ = [
    "LocalCommands",
    "RunCommands",
]
