"""Reading and writing ``composer.json``."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from composer_updater.core.errors import NotFoundError, ParseError
from composer_updater.output import MessageType, VerbosityLevel, message

COMPOSER_FILE = "composer.json"


def composer_path(directory: Path) -> Path:
    """Return the path of ``composer.json`` inside *directory*."""
    return directory / COMPOSER_FILE


def composer_exists(directory: Path) -> bool:
    """Return ``True`` if *directory* already has a ``composer.json``."""
    return composer_path(directory).is_file()


def load(directory: Path) -> dict[str, Any]:
    """Read ``composer.json`` from *directory*.

    Args:
        directory: Repository root

    Returns:
        Parsed manifest

    Raises:
        NotFoundError: If the file does not exist
        ParseError: If the file is not a JSON object
    """
    path = composer_path(directory)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise NotFoundError(f"Missing file: {COMPOSER_FILE}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"{COMPOSER_FILE} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"{COMPOSER_FILE} must contain a JSON object, got {type(data).__name__}")
    return data


def dumps(manifest: dict[str, Any]) -> str:
    """Serialise *manifest* the way it is stored on disk."""
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


def store(directory: Path, manifest: dict[str, Any]) -> None:
    """Write *manifest* to ``composer.json`` in *directory*.

    The file is written next to the target and moved into place, so a
    reader never sees a half-written manifest.

    Args:
        directory: Repository root
        manifest: Manifest to write
    """
    path = composer_path(directory)
    fd, tmp_name = tempfile.mkstemp(prefix=".composer-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(dumps(manifest))
        # mkstemp creates 0600 files
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    message(f"Composer file written to {path}", MessageType.DEBUG, VerbosityLevel.DEBUG)
