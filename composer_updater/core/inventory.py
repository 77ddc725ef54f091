"""Plugin directory inventory for a WordPress repository."""

from __future__ import annotations

from pathlib import Path

from composer_updater.core.errors import NotFoundError
from composer_updater.output import MessageType, VerbosityLevel, message

CONTENT_DIR = "wp-content"
PLUGINS_DIR = "plugins"


def plugins_path(root_dir: Path) -> Path:
    """Return the plugins folder for a WordPress root directory."""
    return root_dir / CONTENT_DIR / PLUGINS_DIR


def verify_project_layout(root_dir: Path) -> None:
    """Make sure *root_dir* looks like a WordPress repository.

    Args:
        root_dir: Repository root

    Raises:
        NotFoundError: If ``wp-content`` or ``wp-content/plugins`` is missing
    """
    if not (root_dir / CONTENT_DIR).is_dir():
        raise NotFoundError(f"Missing folder: {CONTENT_DIR}")
    if not plugins_path(root_dir).is_dir():
        raise NotFoundError(f"Missing folder: {CONTENT_DIR}/{PLUGINS_DIR}")


def list_plugins(root_dir: Path) -> list[str]:
    """List all plugins in ``<root_dir>/wp-content/plugins``.

    Plugin names are the folder names. Loose files (such as ``index.php``)
    are skipped. The order follows the directory listing.

    Args:
        root_dir: WordPress root directory

    Returns:
        Plugin names

    Raises:
        OSError: If the plugins folder is missing or unreadable
    """
    path = plugins_path(root_dir)
    plugins = [entry.name for entry in path.iterdir() if entry.is_dir()]
    message(
        f"Found {len(plugins)} plugin(s) in {path}",
        MessageType.DEBUG,
        VerbosityLevel.DEBUG,
    )
    return plugins
