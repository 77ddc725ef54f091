"""Exception hierarchy for composer-updater."""


class ComposerUpdaterError(Exception):
    """Base class for errors that abort a run."""


class NotFoundError(ComposerUpdaterError):
    """An expected file or folder is missing from the project."""


class ParseError(ComposerUpdaterError):
    """``composer.json`` exists but cannot be parsed."""


class ProbeError(ComposerUpdaterError):
    """A registry could not be reached while classifying a plugin."""

    def __init__(self, plugin: str, reason: str):
        self.plugin = plugin
        self.reason = reason
        super().__init__(f"Probe failed for '{plugin}': {reason}")


class PublishError(ComposerUpdaterError):
    """A version control or hosting API call failed."""

    def __init__(self, action: str, detail: str, status: int | None = None):
        self.action = action
        self.detail = detail
        self.status = status
        prefix = f"{action} failed"
        if status is not None:
            prefix += f" (HTTP {status})"
        super().__init__(f"{prefix}: {detail}")
