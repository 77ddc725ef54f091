"""Builds and merges the ``composer.json`` manifest.

The manifest is a plain dictionary mirroring ``composer.json``. Both
:func:`generate` and :func:`update` are a single fold over the plugin
inventory: every plugin is looked at once and either added to ``require``,
skipped, or reported as failed. The input manifest is never mutated.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from composer_updater.core.classifier import DEFAULT_ORGANIZATION, Classification
from composer_updater.output import MessageType, VerbosityLevel, message

WPACKAGIST_URL = "https://wpackagist.org"
WPACKAGIST_NAMESPACE = "wpackagist-plugin"
SKELETON_DESCRIPTION = "A Design Container Website"

INSTALLER_PATHS = {
    "wp-content/mu-plugins/{$name}/": ["type:wordpress-muplugin"],
    "wp-content/plugins/{$name}/": ["type:wordpress-plugin"],
}


@dataclass
class BuildResult:
    """Outcome of one pass over the inventory."""

    manifest: dict[str, Any]
    failed: list[str] = field(default_factory=list)


# ------------------------------------------------------------------
# Skeleton
# ------------------------------------------------------------------
def composer_skeleton(name: str) -> dict[str, Any]:
    """Return a fresh manifest for the project *name* (``owner/repo``)."""
    return {
        "name": name,
        "description": SKELETON_DESCRIPTION,
        "repositories": [
            {"type": "composer", "url": WPACKAGIST_URL},
        ],
        "require": {
            "composer/installers": "v1.11.0",
        },
        "extra": {
            "ignore": [],
            "installer-paths": copy.deepcopy(INSTALLER_PATHS),
        },
    }


# ------------------------------------------------------------------
# Lookup helpers
# ------------------------------------------------------------------
def is_plugin_ignored(manifest: dict[str, Any], plugin: str) -> bool:
    """Return ``True`` if *plugin* is listed in ``extra.ignore``.

    Anything other than a list of names counts as an empty ignore list.
    """
    extra = manifest.get("extra")
    if not isinstance(extra, dict):
        return False
    ignore = extra.get("ignore")
    if not isinstance(ignore, list):
        return False
    return plugin in ignore


def is_plugin_in_composer(manifest: dict[str, Any], plugin: str) -> bool:
    """Return ``True`` if any ``require`` key is ``<namespace>/<plugin>``.

    The namespace is not checked, so a plugin required from any source
    counts as present.
    """
    for package in manifest.get("require") or {}:
        _, sep, package_name = package.partition("/")
        if sep and package_name == plugin:
            return True
    return False


def repository_entries(manifest: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the ``repositories`` entries as a list.

    Composer accepts ``repositories`` either as a list or as an object
    keyed by repository name.
    """
    repositories = manifest.get("repositories") or []
    if isinstance(repositories, dict):
        repositories = list(repositories.values())
    return [repo for repo in repositories if isinstance(repo, dict)]


def has_repository(manifest: dict[str, Any], url: str) -> bool:
    """Return ``True`` if ``repositories`` has an entry for *url*."""
    return any(repo.get("url") == url for repo in repository_entries(manifest))


# ------------------------------------------------------------------
# Update helpers
# ------------------------------------------------------------------
def _ensure_sections(manifest: dict[str, Any]) -> None:
    # PHP's json_encode writes empty objects as []
    if not manifest.get("repositories"):
        manifest["repositories"] = []
    if not manifest.get("require"):
        manifest["require"] = {}


def _add_repository(manifest: dict[str, Any], name: str, entry: dict[str, Any]) -> None:
    """Append *entry*, or store it under *name* when repositories are keyed."""
    repositories = manifest["repositories"]
    if isinstance(repositories, dict):
        key = name
        suffix = 2
        while key in repositories:
            key = f"{name}-{suffix}"
            suffix += 1
        repositories[key] = entry
    else:
        repositories.append(entry)


def add_public_plugin(manifest: dict[str, Any], plugin: str) -> None:
    """Require *plugin* from wpackagist.

    The wpackagist repository is added once and shared by all public
    plugins.

    Args:
        manifest: Manifest dictionary (modified in place)
        plugin: Plugin slug
    """
    _ensure_sections(manifest)
    if not has_repository(manifest, WPACKAGIST_URL):
        _add_repository(manifest, "wpackagist", {"type": "composer", "url": WPACKAGIST_URL})
    manifest["require"][f"{WPACKAGIST_NAMESPACE}/{plugin}"] = "*"


def add_internal_plugin(
    manifest: dict[str, Any],
    plugin: str,
    organization: str = DEFAULT_ORGANIZATION,
) -> None:
    """Require *plugin* from its own GitHub repository.

    Every internal plugin gets its own ``vcs`` repository entry.

    Args:
        manifest: Manifest dictionary (modified in place)
        plugin: Plugin slug, also the repository name
        organization: GitHub organisation hosting the plugin
    """
    _ensure_sections(manifest)
    _add_repository(manifest, plugin, {
        "type": "vcs",
        "url": f"https://github.com/{organization}/{plugin}",
    })
    manifest["require"][f"{organization}/{plugin}"] = "*"


# ------------------------------------------------------------------
# Fold
# ------------------------------------------------------------------
def fold(
    initial: dict[str, Any],
    plugins: Iterable[str],
    classify: Callable[[str], Classification],
    *,
    skip_existing: bool = True,
    organization: str = DEFAULT_ORGANIZATION,
) -> BuildResult:
    """Apply every plugin in *plugins* to a copy of *initial*.

    Args:
        initial: Starting manifest (left untouched)
        plugins: Plugin inventory, processed in order
        classify: Callable returning the :class:`Classification` of a plugin
        skip_existing: Skip ignored plugins and plugins already required
            before classifying them
        organization: GitHub organisation for internal plugins

    Returns:
        The new manifest and the plugins that could not be classified
    """
    manifest = copy.deepcopy(initial)
    failed: list[str] = []

    for plugin in plugins:
        if skip_existing:
            if is_plugin_ignored(manifest, plugin):
                message(f"Plugin is ignored: {plugin}", MessageType.INFO, VerbosityLevel.VERBOSE)
                continue
            if is_plugin_in_composer(manifest, plugin):
                message(f"Plugin already exists in Composer: {plugin}", MessageType.INFO, VerbosityLevel.VERBOSE)
                continue

        kind = classify(plugin)
        if kind is Classification.INTERNAL:
            add_internal_plugin(manifest, plugin, organization)
        elif kind is Classification.PUBLIC:
            add_public_plugin(manifest, plugin)
        else:
            failed.append(plugin)

    return BuildResult(manifest=manifest, failed=failed)


def generate(
    name: str,
    plugins: Iterable[str],
    classify: Callable[[str], Classification],
    organization: str = DEFAULT_ORGANIZATION,
) -> BuildResult:
    """Build a new manifest for *name* from the plugin inventory."""
    return fold(
        composer_skeleton(name),
        plugins,
        classify,
        skip_existing=False,
        organization=organization,
    )


def update(
    existing: dict[str, Any],
    plugins: Iterable[str],
    classify: Callable[[str], Classification],
    organization: str = DEFAULT_ORGANIZATION,
) -> BuildResult:
    """Add newly found plugins to an existing manifest.

    Ignored plugins and plugins that are already required are left alone, so
    running this twice on the same inventory gives the same manifest.
    """
    return fold(existing, plugins, classify, skip_existing=True, organization=organization)
