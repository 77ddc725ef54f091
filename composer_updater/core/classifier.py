"""Plugin origin classification.

A plugin is *internal* when the organisation has a GitHub repository of the
same name, *public* when wordpress.org serves a plugin page for it, and
*unresolved* otherwise. The internal registry is always probed first, so a
plugin present in both places is internal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

import requests

from composer_updater.core.errors import ProbeError
from composer_updater.output import MessageType, VerbosityLevel, message

DEFAULT_ORGANIZATION = "designcontainer"
GITHUB_API_URL = "https://api.github.com"
WORDPRESS_PLUGINS_URL = "https://wordpress.org/plugins"


class Classification(Enum):
    """Where a plugin can be installed from."""

    INTERNAL = "internal"
    PUBLIC = "public"
    UNRESOLVED = "unresolved"


class RegistryProbe(ABC):
    """Existence checks against the private and public registries."""

    @abstractmethod
    def probe_internal(self, plugin: str) -> bool:
        """Return True if the organisation hosts a repository for *plugin*.

        Must not raise; a failed request counts as "not found".
        """

    @abstractmethod
    def probe_public(self, plugin: str) -> bool:
        """Return True if the public registry has a page for *plugin*.

        Raises:
            ProbeError: If the registry could not be reached
        """


class GitHubWordPressProbe(RegistryProbe):
    """Probes GitHub for internal plugins and wordpress.org for public ones."""

    def __init__(
        self,
        token: str,
        organization: str = DEFAULT_ORGANIZATION,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.token = token
        self.organization = organization
        self.timeout = timeout
        self.session = session or requests.Session()

    def probe_internal(self, plugin: str) -> bool:
        url = f"{GITHUB_API_URL}/repos/{self.organization}/{plugin}"
        try:
            response = self.session.get(
                url,
                headers={"Authorization": f"Bearer {self.token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            message(f"Internal probe for '{plugin}' failed: {e}", MessageType.DEBUG, VerbosityLevel.DEBUG)
            return False
        return response.ok

    def probe_public(self, plugin: str) -> bool:
        url = f"{WORDPRESS_PLUGINS_URL}/{plugin}/"
        try:
            response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise ProbeError(plugin, str(e)) from e

        # wordpress.org redirects unknown plugin slugs to its search page
        if response.history:
            return False
        if not response.ok:
            raise ProbeError(plugin, f"unexpected HTTP {response.status_code} from {url}")
        return True


class Classifier:
    """Classifies plugins and remembers which ones hit a probe error.

    Instances are callable so they can be handed straight to
    :func:`composer_updater.core.composer.fold`.
    """

    def __init__(self, probe: RegistryProbe):
        self.probe = probe
        self.probe_errors: dict[str, str] = {}

    def __call__(self, plugin: str) -> Classification:
        return self.classify(plugin)

    def classify(self, plugin: str) -> Classification:
        """Classify *plugin* as internal, public or unresolved.

        A :class:`ProbeError` from the public registry degrades to
        ``UNRESOLVED`` and is recorded in :attr:`probe_errors`.
        """
        if self.probe.probe_internal(plugin):
            message(f"Internal plugin: {plugin}", MessageType.DEBUG, VerbosityLevel.VERBOSE)
            return Classification.INTERNAL

        try:
            found = self.probe.probe_public(plugin)
        except ProbeError as e:
            self.probe_errors[plugin] = e.reason
            message(str(e), MessageType.WARNING, VerbosityLevel.ALWAYS)
            return Classification.UNRESOLVED

        if found:
            message(f"Public plugin: {plugin}", MessageType.DEBUG, VerbosityLevel.VERBOSE)
            return Classification.PUBLIC

        message(f"Unresolved plugin: {plugin}", MessageType.DEBUG, VerbosityLevel.VERBOSE)
        return Classification.UNRESOLVED


def classify(plugin: str, probe: RegistryProbe) -> Classification:
    """Classify a single plugin with *probe*."""
    return Classifier(probe).classify(plugin)
