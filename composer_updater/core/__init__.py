"""Core logic for composer-updater."""

from .classifier import Classification, Classifier, GitHubWordPressProbe, RegistryProbe, classify
from .composer import (
    BuildResult,
    add_internal_plugin,
    add_public_plugin,
    composer_skeleton,
    fold,
    generate,
    is_plugin_ignored,
    is_plugin_in_composer,
    update,
)
from .errors import ComposerUpdaterError, NotFoundError, ParseError, ProbeError, PublishError
from .inventory import list_plugins, verify_project_layout

__all__ = [
    "BuildResult",
    "Classification",
    "Classifier",
    "ComposerUpdaterError",
    "GitHubWordPressProbe",
    "NotFoundError",
    "ParseError",
    "ProbeError",
    "PublishError",
    "RegistryProbe",
    "add_internal_plugin",
    "add_public_plugin",
    "classify",
    "composer_skeleton",
    "fold",
    "generate",
    "is_plugin_ignored",
    "is_plugin_in_composer",
    "list_plugins",
    "update",
    "verify_project_layout",
]
